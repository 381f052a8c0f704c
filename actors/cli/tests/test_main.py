"""CLI tests for the Strata Typer commands."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from actors.cli.main import (
    CONFIGURATION_ERROR_EXIT_CODE,
    MIGRATION_ERROR_EXIT_CODE,
    SUCCESS_EXIT_CODE,
    app,
)
from packages.strata_shared.errors import codes

_FIXTURES = "package:tests.shared.fixtures"

runner = CliRunner()


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Iterator[None]:
    """Keep CLI logging configuration from leaking into other tests."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def _invoke(tmp_path: Path, *args: str) -> Any:
    """Run the CLI with an isolated config file and quiet logging."""
    return runner.invoke(
        app,
        ["--config", str(tmp_path / "strata.yaml"), "--log-level", "ERROR", *args],
    )


def test_info_prints_migrations_as_json(tmp_path: Path) -> None:
    """``info --json`` lists migrations in execution order."""
    result = _invoke(tmp_path, "--json", "info", "-l", f"{_FIXTURES}.migrations")

    assert result.exit_code == SUCCESS_EXIT_CODE
    payload = json.loads(result.stdout)
    assert [item["version"] for item in payload] == ["1", "1.1", "2", None]
    assert [item["description"] for item in payload] == [
        "Init schema",
        "Seed users",
        "Add reports table",
        "Refresh user view",
    ]
    assert payload[-1]["repeatable"] is True
    assert all(item["type"] == "python" for item in payload)
    assert payload[2]["checksum"] is not None


def test_info_renders_table(tmp_path: Path) -> None:
    """The default output is an aligned table."""
    result = _invoke(tmp_path, "info", "-l", f"{_FIXTURES}.migrations")

    assert result.exit_code == SUCCESS_EXIT_CODE
    lines = result.stdout.splitlines()
    assert lines[0].startswith("Version")
    assert lines[1].startswith("---")
    assert lines[2].startswith("1 ")
    assert lines[-1].startswith("<< Repeatable >>")
    assert "Refresh user view" in lines[-1]


def test_info_reads_locations_from_config(tmp_path: Path) -> None:
    """Locations fall back to ``strata.yaml`` when not passed."""
    (tmp_path / "strata.yaml").write_text(
        "\n".join(
            [
                "resolver:",
                "  locations:",
                f"    - {_FIXTURES}.migrations.reporting",
            ]
        ),
        encoding="utf-8",
    )

    result = _invoke(tmp_path, "--json", "info")

    assert result.exit_code == SUCCESS_EXIT_CODE
    assert [item["description"] for item in json.loads(result.stdout)] == [
        "Add reports table"
    ]


def test_info_reports_empty_result(tmp_path: Path) -> None:
    """Non-package locations resolve to nothing."""
    result = _invoke(tmp_path, "info", "-l", "filesystem:/srv/migrations")

    assert result.exit_code == SUCCESS_EXIT_CODE
    assert result.stdout.strip() == "No migrations found."


def test_info_fails_on_unrecognized_name(tmp_path: Path) -> None:
    """A misnamed migration aborts with the migration error exit code."""
    result = _invoke(tmp_path, "info", "-l", f"{_FIXTURES}.misnamed_migrations")

    assert result.exit_code == MIGRATION_ERROR_EXIT_CODE
    assert "Unable to resolve Python migrations" in result.output
    assert "caused by: Invalid migration class name" in result.output
    assert "bad_name.BadName" in result.output


def test_info_emits_json_errors(tmp_path: Path) -> None:
    """With ``--json`` errors are structured."""
    result = _invoke(
        tmp_path, "--json", "info", "-l", f"{_FIXTURES}.misnamed_migrations"
    )

    assert result.exit_code == MIGRATION_ERROR_EXIT_CODE
    error_line = next(
        line for line in result.output.splitlines() if line.startswith('{"error"')
    )
    error = json.loads(error_line)["error"]
    assert error["code"] == codes.RESOLUTION_FAILURE
    assert error["metadata"]["cause_code"] == codes.UNRECOGNIZED_NAMING_CONVENTION


def test_info_rejects_bad_location(tmp_path: Path) -> None:
    """Unparseable locations are configuration errors."""
    result = _invoke(tmp_path, "info", "-l", "classpath:db/migration")

    assert result.exit_code == CONFIGURATION_ERROR_EXIT_CODE
    assert "Unknown location scheme" in result.output


def test_info_rejects_unknown_scanner(tmp_path: Path) -> None:
    """Scanner names are validated by settings."""
    result = _invoke(tmp_path, "info", "--scanner", "classpath")

    assert result.exit_code == CONFIGURATION_ERROR_EXIT_CODE
