"""Fixture package holding a migration without a recognized name."""
