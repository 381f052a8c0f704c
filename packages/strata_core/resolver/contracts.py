"""Contracts implemented by Python migration classes.

``PythonMigration`` is the marker every discoverable migration derives from.
The remaining base classes are optional capabilities a migration opts into by
subclassing them; the resolver checks for each one before using it.
``MigrationScanner`` is the protocol discovery collaborators satisfy.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Protocol, TypeVar, Union

from sqlalchemy import Connection

if TYPE_CHECKING:
    from packages.strata_shared.config import StrataSettings

    from .location import Location
    from .version import MigrationVersion

VersionLike = Union["MigrationVersion", str, int, tuple[int, ...]]
TMarker = TypeVar("TMarker")


class PythonMigration(ABC):
    """A migration applied through a SQLAlchemy connection."""

    @abstractmethod
    def migrate(self, connection: Connection) -> None:
        """Apply this migration using ``connection``."""


class MigrationInfoProvider(ABC):
    """Capability for migrations that report their own version and description.

    Implementing it bypasses name-convention parsing entirely. A ``None``
    version marks the migration as repeatable.
    """

    @abstractmethod
    def get_version(self) -> VersionLike | None:
        """Return the migration version, or ``None`` for repeatable migrations."""

    @abstractmethod
    def get_description(self) -> str:
        """Return a non-blank description."""


class MigrationChecksumProvider(ABC):
    """Capability for migrations that supply a checksum."""

    @abstractmethod
    def get_checksum(self) -> int | None:
        """Return the checksum, or ``None`` when it cannot be computed."""


class SettingsAware(ABC):
    """Capability for migrations that receive the shared runtime settings."""

    @abstractmethod
    def set_settings(self, settings: StrataSettings) -> None:
        """Receive the shared, read-only settings before metadata extraction."""


class MigrationScanner(Protocol):
    """Discovery collaborator that enumerates migration classes."""

    def scan_for_classes(
        self, location: Location, marker: type[TMarker]
    ) -> tuple[type[TMarker], ...]:
        """Return classes under ``location`` that derive from ``marker``."""
