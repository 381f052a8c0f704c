"""Nested fixture package."""
