"""Migration version model.

Version text uses ``.`` between parts; ``_`` is accepted as an alias so that
class names such as ``V1_2_3__Seed`` can carry dotted versions. Comparison
treats missing trailing parts as zero, so ``1.2`` and ``1.2.0`` are equal.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import total_ordering
from typing import Final

from .errors import MalformedVersionError

VERSION_PART_SEPARATOR: Final[str] = "."
_VERSION_PART_ALIASES: Final[tuple[str, ...]] = ("_",)
_VERSION_RE: Final[re.Pattern[str]] = re.compile(r"^[0-9]+(\.[0-9]+)*$")


@total_ordering
@dataclass(frozen=True, slots=True, eq=False)
class MigrationVersion:
    """Ordered tuple of non-negative integer version parts."""

    parts: tuple[int, ...]

    def __post_init__(self) -> None:
        """Validate part count and signs."""
        if len(self.parts) == 0:
            raise MalformedVersionError("Migration version must have at least one part")
        for part in self.parts:
            if not isinstance(part, int) or isinstance(part, bool) or part < 0:
                raise MalformedVersionError(
                    f"Invalid migration version part {part!r} in {self.parts!r}"
                )

    @classmethod
    def parse(cls, text: str) -> MigrationVersion:
        """Parse version text such as ``1``, ``1.2`` or ``1_2_3``."""
        normalized = text.strip()
        for alias in _VERSION_PART_ALIASES:
            normalized = normalized.replace(alias, VERSION_PART_SEPARATOR)
        if not _VERSION_RE.match(normalized):
            raise MalformedVersionError(
                f"Invalid migration version {text!r}: expected digits separated "
                f"by '{VERSION_PART_SEPARATOR}' or '_'"
            )
        return cls(
            parts=tuple(int(part) for part in normalized.split(VERSION_PART_SEPARATOR))
        )

    @classmethod
    def coerce(cls, value: object) -> MigrationVersion:
        """Return ``value`` as a version, accepting text, ints and int tuples."""
        if isinstance(value, MigrationVersion):
            return value
        if isinstance(value, str):
            return cls.parse(value)
        if isinstance(value, int) and not isinstance(value, bool):
            return cls(parts=(value,))
        if isinstance(value, (tuple, list)):
            return cls(parts=tuple(value))
        raise MalformedVersionError(f"Unsupported migration version value: {value!r}")

    def _comparable(self) -> tuple[int, ...]:
        """Return parts without trailing zeros."""
        parts = list(self.parts)
        while len(parts) > 1 and parts[-1] == 0:
            parts.pop()
        return tuple(parts)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MigrationVersion):
            return NotImplemented
        return self._comparable() == other._comparable()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, MigrationVersion):
            return NotImplemented
        return self._comparable() < other._comparable()

    def __hash__(self) -> int:
        return hash(self._comparable())

    def __str__(self) -> str:
        return VERSION_PART_SEPARATOR.join(str(part) for part in self.parts)
