"""Executors binding a live migration to its later execution."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import Engine

from .contracts import PythonMigration


@dataclass(frozen=True, slots=True)
class MigrationExecutor:
    """Apply one bound migration instance against a caller-supplied engine.

    Binding never runs the migration; the execution engine calls
    :meth:`execute` when it decides the migration is due. ``schema`` is the
    configured target schema, used when ``execute`` is not given one.
    """

    migration: PythonMigration
    schema: str | None = None

    @property
    def execute_in_transaction(self) -> bool:
        """Return True; Python migrations always run inside one transaction."""
        return True

    def execute(self, engine: Engine, schema: str | None = None) -> None:
        """Run the migration in a transaction, targeting ``schema`` or the bound one.

        Unqualified tables in SQLAlchemy constructs are routed to ``schema``
        through ``schema_translate_map``; raw SQL text is passed through as is.
        """
        target = schema if schema is not None else self.schema
        with engine.begin() as connection:
            if target is not None:
                connection = connection.execution_options(
                    schema_translate_map={None: target}
                )
            self.migration.migrate(connection)
