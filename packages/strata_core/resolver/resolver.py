"""Resolution of Python migrations from one location.

Migration classes must be named like ``V1``, ``V1_1_3``, ``V1__Description``
or ``R__Description``, or implement ``MigrationInfoProvider``.
"""

from __future__ import annotations

import inspect

from packages.strata_shared.config import StrataSettings
from packages.strata_shared.logging import fields, get_logger, log_context

from .comparator import sort_migrations
from .contracts import MigrationScanner, PythonMigration
from .errors import MigrationResolutionError
from .executor import MigrationExecutor
from .extractor import extract_migration_info, migration_script
from .instantiation import inject_settings, instantiate_migration
from .location import Location
from .resolved import MigrationType, ResolvedMigration

_LOGGER = get_logger(__name__)


class PythonMigrationResolver:
    """Resolve Python migration classes found by a scanner into descriptors."""

    def __init__(
        self,
        *,
        scanner: MigrationScanner,
        location: Location | str,
        settings: StrataSettings,
    ) -> None:
        self._scanner = scanner
        self._location = Location.coerce(location)
        self._settings = settings

    @property
    def location(self) -> Location:
        """Return the location this resolver reads from."""
        return self._location

    def resolve_migrations(self) -> tuple[ResolvedMigration, ...]:
        """Return all migrations at the location in canonical order.

        Non-package locations resolve to an empty tuple without consulting the
        scanner. Any failure aborts the whole call with one
        ``MigrationResolutionError``; partial results are never returned.
        """
        location = self._location
        with log_context({fields.LOCATION: location}):
            if not location.is_package:
                _LOGGER.debug(
                    "skipping non-package migration location",
                    extra={fields.EVENT: fields.LOCATION_SKIPPED_EVENT},
                )
                return tuple()

            resolved: list[ResolvedMigration] = []
            script: str | None = None
            try:
                classes = self._scanner.scan_for_classes(location, PythonMigration)
                for migration_class in classes:
                    script = migration_script(migration_class)
                    resolved.append(self._resolve_one(migration_class))
                    script = None
            except Exception as exc:
                error = MigrationResolutionError(location, script=script)
                _LOGGER.error(
                    "migration resolution failed: %s",
                    exc,
                    extra={
                        fields.EVENT: fields.RESOLUTION_FAILED_EVENT,
                        fields.MIGRATION_SCRIPT: script,
                        fields.ERROR_CODE: error.code,
                    },
                )
                raise error from exc

            ordered = sort_migrations(resolved)
            _LOGGER.info(
                "resolved %d python migrations",
                len(ordered),
                extra={
                    fields.EVENT: fields.RESOLUTION_COMPLETED_EVENT,
                    fields.MIGRATION_COUNT: len(ordered),
                },
            )
            return ordered

    def _resolve_one(self, migration_class: type) -> ResolvedMigration:
        """Instantiate, configure, describe and bind one migration class."""
        migration = instantiate_migration(migration_class)
        inject_settings(migration, self._settings)
        info = extract_migration_info(migration)
        _LOGGER.debug(
            "resolved migration %s",
            info.script,
            extra={
                fields.EVENT: fields.MIGRATION_RESOLVED_EVENT,
                fields.MIGRATION_SCRIPT: info.script,
                fields.MIGRATION_VERSION: info.version,
            },
        )
        return ResolvedMigration(
            version=info.version,
            description=info.description,
            script=info.script,
            checksum=info.checksum,
            type=MigrationType.PYTHON,
            physical_location=physical_location(migration_class),
            executor=MigrationExecutor(
                migration=migration,
                schema=self._settings.resolver.target_schema,
            ),
        )


def physical_location(migration_class: type) -> str:
    """Return the source file of a migration class, or its module name."""
    try:
        source_file = inspect.getsourcefile(migration_class)
    except TypeError:
        source_file = None
    return source_file or migration_class.__module__
