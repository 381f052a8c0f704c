"""Fixture package whose import fails."""

raise RuntimeError("failing package import")
