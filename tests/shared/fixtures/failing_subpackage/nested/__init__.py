"""Fixture subpackage whose import fails."""

raise RuntimeError("failing subpackage import")
