"""Settings-driven resolution across every configured location."""

from __future__ import annotations

from packages.strata_shared.config import StrataSettings
from packages.strata_shared.logging import fields, get_logger, log_context

from .discovery import PackageScanner, RegistryScanner
from .resolver import (
    Location,
    MigrationScanner,
    PythonMigrationResolver,
    ResolvedMigration,
    sort_migrations,
)
from .resolver.errors import DuplicateMigrationError

_LOGGER = get_logger(__name__)


def build_scanner(settings: StrataSettings) -> MigrationScanner:
    """Return the scanner selected by ``resolver.scanner``."""
    if settings.resolver.scanner == "registry":
        return RegistryScanner()
    return PackageScanner()


def resolve_locations(
    settings: StrataSettings,
    *,
    scanner: MigrationScanner | None = None,
    locations: tuple[str, ...] | None = None,
) -> tuple[ResolvedMigration, ...]:
    """Resolve all locations and return one canonically ordered tuple.

    The same class reached through overlapping locations is kept once. Two
    different classes with the same version, or two repeatables with the same
    description, raise ``DuplicateMigrationError``.
    """
    active_scanner = scanner if scanner is not None else build_scanner(settings)
    raw_locations = locations or settings.resolver.locations
    by_script: dict[str, ResolvedMigration] = {}
    with log_context({fields.SCANNER: type(active_scanner).__name__}):
        for raw_location in raw_locations:
            resolver = PythonMigrationResolver(
                scanner=active_scanner,
                location=Location.parse(raw_location),
                settings=settings,
            )
            for migration in resolver.resolve_migrations():
                by_script.setdefault(migration.script, migration)

        ordered = sort_migrations(by_script.values())
        check_for_duplicates(ordered)
        _LOGGER.info(
            "resolved %d migrations across %d locations",
            len(ordered),
            len(raw_locations),
            extra={fields.MIGRATION_COUNT: len(ordered)},
        )
    return ordered


def check_for_duplicates(migrations: tuple[ResolvedMigration, ...]) -> None:
    """Reject neighbouring migrations that claim the same version or description.

    ``migrations`` must already be in canonical order.
    """
    for previous, current in zip(migrations, migrations[1:]):
        if previous.version is not None and previous.version == current.version:
            raise DuplicateMigrationError(
                f"Found more than one migration with version {current.version}: "
                f"{previous.script} and {current.script}",
                scripts=(previous.script, current.script),
            )
        if (
            previous.version is None
            and current.version is None
            and previous.description == current.description
        ):
            raise DuplicateMigrationError(
                "Found more than one repeatable migration with description "
                f"'{current.description}': {previous.script} and {current.script}",
                scripts=(previous.script, current.script),
            )
