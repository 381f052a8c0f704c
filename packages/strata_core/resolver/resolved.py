"""Resolved migration descriptors."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from .version import MigrationVersion

if TYPE_CHECKING:
    from .executor import MigrationExecutor


class MigrationType(str, Enum):
    """Technology family a resolved migration belongs to."""

    PYTHON = "python"


@dataclass(frozen=True, slots=True)
class MigrationInfo:
    """Metadata extracted from one live migration instance."""

    version: MigrationVersion | None
    description: str
    script: str
    checksum: int | None = None


@dataclass(frozen=True, slots=True)
class ResolvedMigration:
    """Immutable descriptor for one migration, ready for an execution engine."""

    version: MigrationVersion | None
    description: str
    script: str
    checksum: int | None
    type: MigrationType
    physical_location: str
    executor: MigrationExecutor

    @property
    def is_repeatable(self) -> bool:
        """Return True for migrations without a version."""
        return self.version is None

    def __str__(self) -> str:
        label = "R" if self.version is None else f"V{self.version}"
        return f"{label} {self.description} ({self.script})"
