"""Python migration resolution: naming, extraction, ordering and binding."""

from .checksum import SourceChecksumMixin, source_checksum
from .comparator import compare_migrations, migration_sort_key, sort_migrations
from .contracts import (
    MigrationChecksumProvider,
    MigrationInfoProvider,
    MigrationScanner,
    PythonMigration,
    SettingsAware,
)
from .errors import (
    DuplicateMigrationError,
    MalformedVersionError,
    MigrationDiscoveryError,
    MigrationError,
    MigrationInstantiationError,
    MigrationRegistrationError,
    MigrationResolutionError,
    MissingDescriptionError,
    UnrecognizedNamingConventionError,
)
from .executor import MigrationExecutor
from .extractor import extract_migration_info, migration_script
from .instantiation import inject_settings, instantiate_migration
from .location import Location
from .naming import (
    NAME_SEPARATOR,
    REPEATABLE_PREFIX,
    VERSIONED_PREFIX,
    MigrationName,
    normalize_description,
    parse_migration_name,
)
from .resolved import MigrationInfo, MigrationType, ResolvedMigration
from .resolver import PythonMigrationResolver, physical_location
from .version import MigrationVersion

__all__ = [
    "NAME_SEPARATOR",
    "REPEATABLE_PREFIX",
    "VERSIONED_PREFIX",
    "DuplicateMigrationError",
    "Location",
    "MalformedVersionError",
    "MigrationChecksumProvider",
    "MigrationDiscoveryError",
    "MigrationError",
    "MigrationExecutor",
    "MigrationInfo",
    "MigrationInfoProvider",
    "MigrationInstantiationError",
    "MigrationName",
    "MigrationRegistrationError",
    "MigrationResolutionError",
    "MigrationScanner",
    "MigrationType",
    "MigrationVersion",
    "MissingDescriptionError",
    "PythonMigration",
    "PythonMigrationResolver",
    "ResolvedMigration",
    "SettingsAware",
    "SourceChecksumMixin",
    "UnrecognizedNamingConventionError",
    "compare_migrations",
    "extract_migration_info",
    "inject_settings",
    "instantiate_migration",
    "migration_script",
    "migration_sort_key",
    "normalize_description",
    "parse_migration_name",
    "physical_location",
    "sort_migrations",
    "source_checksum",
]
