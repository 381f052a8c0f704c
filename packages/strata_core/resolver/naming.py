"""Name-convention parsing for migration identifiers.

A migration name has the shape ``<Prefix><VersionText>[__<DescriptionText>]``.
``V`` marks a versioned migration and ``R`` a repeatable one; for repeatable
migrations the version text is ignored.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .errors import MalformedVersionError, UnrecognizedNamingConventionError
from .version import MigrationVersion

VERSIONED_PREFIX: Final[str] = "V"
REPEATABLE_PREFIX: Final[str] = "R"
NAME_SEPARATOR: Final[str] = "__"


@dataclass(frozen=True, slots=True)
class MigrationName:
    """Version and description parsed from one migration name."""

    version: MigrationVersion | None
    description: str

    @property
    def is_repeatable(self) -> bool:
        """Return True when the name carried the repeatable prefix."""
        return self.version is None


def parse_migration_name(
    name: str,
    *,
    versioned_prefix: str = VERSIONED_PREFIX,
    repeatable_prefix: str = REPEATABLE_PREFIX,
    separator: str = NAME_SEPARATOR,
    display_name: str | None = None,
) -> MigrationName:
    """Split a migration name into version and description.

    ``display_name`` is used in error messages when it differs from ``name``,
    for example the fully-qualified class name of a migration.
    """
    shown = display_name or name
    if name.startswith(repeatable_prefix):
        prefix = repeatable_prefix
    elif name.startswith(versioned_prefix):
        prefix = versioned_prefix
    else:
        raise UnrecognizedNamingConventionError(
            shown, prefixes=(versioned_prefix, repeatable_prefix)
        )

    remainder = name[len(prefix) :]
    version_text, _, description_text = remainder.partition(separator)
    description = normalize_description(description_text)

    if prefix == repeatable_prefix:
        return MigrationName(version=None, description=description)

    if version_text == "":
        raise MalformedVersionError(
            f"Wrong versioned migration name format: {shown} (it must contain a "
            f"version and should look like this: "
            f"{versioned_prefix}1.2{separator}Description)"
        )
    try:
        version = MigrationVersion.parse(version_text)
    except MalformedVersionError as exc:
        raise MalformedVersionError(
            f"Invalid version in migration name {shown}: {exc}"
        ) from exc
    return MigrationName(version=version, description=description)


def normalize_description(text: str) -> str:
    """Turn a name's description segment into display text.

    Underscores become spaces and surrounding whitespace is dropped, so
    ``Add_user_table`` reads ``Add user table``.
    """
    return text.replace("_", " ").strip()
