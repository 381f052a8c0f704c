"""Fixture: dotted version written with underscores."""

from __future__ import annotations

from sqlalchemy import Connection, insert

from packages.strata_core import PythonMigration

from .v1_init_schema import USERS


class V1_1__Seed_users(PythonMigration):
    def migrate(self, connection: Connection) -> None:
        connection.execute(insert(USERS).values(name="operator"))
