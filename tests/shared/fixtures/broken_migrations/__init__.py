"""Fixture package with a module that fails on import."""
