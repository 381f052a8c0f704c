"""Fixture package containing a subpackage whose import fails."""
