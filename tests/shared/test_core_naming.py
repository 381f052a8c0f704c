"""Tests for migration name-convention parsing."""

from __future__ import annotations

import pytest

from packages.strata_core.resolver import (
    MalformedVersionError,
    MigrationVersion,
    UnrecognizedNamingConventionError,
    parse_migration_name,
)


@pytest.mark.parametrize(
    ("name", "parts", "description"),
    [
        ("V1__InitSchema", (1,), "InitSchema"),
        ("V1_1_3__Add_user_table", (1, 1, 3), "Add user table"),
        ("V12", (12,), ""),
        ("V2_5", (2, 5), ""),
        ("V3__", (3,), ""),
    ],
)
def test_versioned_names_parse_version_and_description(
    name: str, parts: tuple[int, ...], description: str
) -> None:
    """Versioned names should yield integer parts and a normalized description."""
    parsed = parse_migration_name(name)

    assert parsed.version == MigrationVersion(parts=parts)
    assert parsed.version is not None and parsed.version.parts == parts
    assert parsed.description == description
    assert parsed.is_repeatable is False


@pytest.mark.parametrize(
    ("name", "description"),
    [
        ("R__Reindex", "Reindex"),
        ("R1_2__Refresh_views", "Refresh views"),
        ("Rnot_a_version__Rebuild", "Rebuild"),
        ("R", ""),
    ],
)
def test_repeatable_names_discard_version_text(name: str, description: str) -> None:
    """The repeatable prefix should force an absent version."""
    parsed = parse_migration_name(name)

    assert parsed.version is None
    assert parsed.is_repeatable is True
    assert parsed.description == description


def test_only_first_separator_splits_description() -> None:
    """Later separators belong to the description."""
    parsed = parse_migration_name("V4__Split__here")

    assert parsed.version == MigrationVersion(parts=(4,))
    assert parsed.description == "Split  here"


@pytest.mark.parametrize("name", ["BadName", "v1__lowercase", "M1__Other", ""])
def test_unrecognized_prefix_fails_with_guidance(name: str) -> None:
    """Names without V or R should fail and point at the escape hatch."""
    with pytest.raises(UnrecognizedNamingConventionError) as exc_info:
        parse_migration_name(name, display_name=f"pkg.{name}")

    message = str(exc_info.value)
    assert f"pkg.{name}" in message
    assert "V or R" in message
    assert "MigrationInfoProvider" in message


@pytest.mark.parametrize("name", ["V__Missing_version", "V", "Vabc__Letters", "V1.x__Mixed"])
def test_malformed_versioned_names_fail(name: str) -> None:
    """Versioned names need non-empty numeric version text."""
    with pytest.raises(MalformedVersionError) as exc_info:
        parse_migration_name(name)

    assert name in str(exc_info.value)


def test_custom_prefixes_and_separator() -> None:
    """Callers may parse names that use a different convention."""
    parsed = parse_migration_name(
        "M2_3--Backfill_rows", versioned_prefix="M", separator="--"
    )

    assert parsed.version == MigrationVersion(parts=(2, 3))
    assert parsed.description == "Backfill rows"
