"""Public API for Strata migration resolution."""

from packages.strata_core.discovery import (
    MigrationRegistry,
    PackageScanner,
    RegistryScanner,
    get_registry,
    register_migration,
)
from packages.strata_core.resolver import (
    Location,
    MigrationChecksumProvider,
    MigrationError,
    MigrationExecutor,
    MigrationInfoProvider,
    MigrationResolutionError,
    MigrationType,
    MigrationVersion,
    PythonMigration,
    PythonMigrationResolver,
    ResolvedMigration,
    SettingsAware,
    SourceChecksumMixin,
    sort_migrations,
)
from packages.strata_core.resolution import (
    build_scanner,
    check_for_duplicates,
    resolve_locations,
)

__all__ = [
    "Location",
    "MigrationChecksumProvider",
    "MigrationError",
    "MigrationExecutor",
    "MigrationInfoProvider",
    "MigrationRegistry",
    "MigrationResolutionError",
    "MigrationType",
    "MigrationVersion",
    "PackageScanner",
    "PythonMigration",
    "PythonMigrationResolver",
    "RegistryScanner",
    "ResolvedMigration",
    "SettingsAware",
    "SourceChecksumMixin",
    "build_scanner",
    "check_for_duplicates",
    "get_registry",
    "register_migration",
    "resolve_locations",
    "sort_migrations",
]
