"""Metadata extraction for live migration instances."""

from __future__ import annotations

from .contracts import MigrationChecksumProvider, MigrationInfoProvider, PythonMigration
from .errors import MissingDescriptionError
from .naming import (
    NAME_SEPARATOR,
    REPEATABLE_PREFIX,
    VERSIONED_PREFIX,
    parse_migration_name,
)
from .resolved import MigrationInfo
from .version import MigrationVersion


def migration_script(migration_class: type) -> str:
    """Return the fully-qualified name identifying a migration class."""
    return f"{migration_class.__module__}.{migration_class.__qualname__}"


def extract_migration_info(migration: PythonMigration) -> MigrationInfo:
    """Return version, description and checksum for one migration.

    Self-reported values win over the class name. The checksum is queried
    independently of how version and description were obtained.
    """
    migration_class = type(migration)
    script = migration_script(migration_class)

    checksum: int | None = None
    if isinstance(migration, MigrationChecksumProvider):
        checksum = migration.get_checksum()

    version: MigrationVersion | None
    if isinstance(migration, MigrationInfoProvider):
        raw_version = migration.get_version()
        version = None if raw_version is None else MigrationVersion.coerce(raw_version)
        description = migration.get_description()
        if description is None or not str(description).strip():
            raise MissingDescriptionError(
                version if version is not None else "(repeatable)"
            )
        description = str(description)
    else:
        parsed = parse_migration_name(
            migration_class.__name__,
            versioned_prefix=VERSIONED_PREFIX,
            repeatable_prefix=REPEATABLE_PREFIX,
            separator=NAME_SEPARATOR,
            display_name=script,
        )
        version = parsed.version
        description = parsed.description

    return MigrationInfo(
        version=version,
        description=description,
        script=script,
        checksum=checksum,
    )
