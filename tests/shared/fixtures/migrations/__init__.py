"""Fixture migrations discovered by package-scanner tests."""
