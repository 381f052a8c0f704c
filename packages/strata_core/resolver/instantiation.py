"""Instantiation and settings injection for discovered migration classes."""

from __future__ import annotations

import inspect

from packages.strata_shared.config import StrataSettings

from .contracts import PythonMigration, SettingsAware
from .errors import MigrationInstantiationError
from .extractor import migration_script


def instantiate_migration(migration_class: type) -> PythonMigration:
    """Construct one migration through its zero-argument constructor."""
    script = migration_script(migration_class)
    if not (
        isinstance(migration_class, type) and issubclass(migration_class, PythonMigration)
    ):
        raise MigrationInstantiationError(
            f"Unable to instantiate migration {script}: not a PythonMigration subclass"
        )
    if inspect.isabstract(migration_class):
        raise MigrationInstantiationError(
            f"Unable to instantiate migration {script}: class is abstract"
        )
    try:
        return migration_class()
    except Exception as exc:
        raise MigrationInstantiationError(
            f"Unable to instantiate migration {script}: {exc}"
        ) from exc


def inject_settings(migration: PythonMigration, settings: StrataSettings) -> None:
    """Hand ``settings`` to migrations that opted into receiving them."""
    if isinstance(migration, SettingsAware):
        migration.set_settings(settings)
