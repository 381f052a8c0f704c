"""Fixture: repeatable migration."""

from __future__ import annotations

from sqlalchemy import Connection, text

from packages.strata_core import PythonMigration


class R__Refresh_user_view(PythonMigration):
    def migrate(self, connection: Connection) -> None:
        connection.execute(text("DROP VIEW IF EXISTS user_names"))
        connection.execute(text("CREATE VIEW user_names AS SELECT name FROM users"))


class RowCounter:
    """Not a migration; scanners must ignore it."""
