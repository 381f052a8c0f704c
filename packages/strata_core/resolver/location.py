"""Migration location parsing."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final, Literal

Scheme = Literal["package", "filesystem"]

PACKAGE_SCHEME: Final[Scheme] = "package"
FILESYSTEM_SCHEME: Final[Scheme] = "filesystem"
_SCHEMES: Final[tuple[Scheme, ...]] = (PACKAGE_SCHEME, FILESYSTEM_SCHEME)
_PACKAGE_RE: Final[re.Pattern[str]] = re.compile(
    r"^[a-zA-Z_][a-zA-Z0-9_]*(\.[a-zA-Z_][a-zA-Z0-9_]*)*$"
)


@dataclass(frozen=True, slots=True)
class Location:
    """Where migrations are looked up: an importable package or a directory."""

    scheme: Scheme
    path: str

    @classmethod
    def parse(cls, text: str) -> Location:
        """Parse ``package:a.b``, bare ``a.b`` or ``filesystem:/some/dir``."""
        raw = text.strip()
        scheme, separator, path = raw.partition(":")
        if not separator:
            scheme, path = PACKAGE_SCHEME, raw
        if scheme not in _SCHEMES:
            raise ValueError(
                f"Unknown location scheme '{scheme}' in '{text}'; "
                f"expected one of {', '.join(_SCHEMES)}"
            )
        if scheme == PACKAGE_SCHEME:
            path = path.strip("/").replace("/", ".")
            if not _PACKAGE_RE.match(path):
                raise ValueError(f"Invalid package location: '{text}'")
        elif path == "":
            raise ValueError(f"Empty filesystem location: '{text}'")
        return cls(scheme=scheme, path=path)  # type: ignore[arg-type]

    @classmethod
    def coerce(cls, value: Location | str) -> Location:
        """Return ``value`` as a ``Location``."""
        if isinstance(value, Location):
            return value
        return cls.parse(value)

    @property
    def is_package(self) -> bool:
        """Return True for importable package locations."""
        return self.scheme == PACKAGE_SCHEME

    @property
    def is_filesystem(self) -> bool:
        """Return True for directory locations."""
        return self.scheme == FILESYSTEM_SCHEME

    def contains_module(self, module_name: str) -> bool:
        """Return True when ``module_name`` is this package or lives below it."""
        if not self.is_package:
            return False
        return module_name == self.path or module_name.startswith(f"{self.path}.")

    def __str__(self) -> str:
        return f"{self.scheme}:{self.path}"
