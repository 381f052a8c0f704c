"""Strata CLI actor implemented with Typer."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import typer
from pydantic import ValidationError

from packages.strata_core import (
    MigrationError,
    ResolvedMigration,
    build_scanner,
    resolve_locations,
)
from packages.strata_shared.config import StrataSettings, load_settings
from packages.strata_shared.errors import exception_to_error
from packages.strata_shared.logging import configure_logging

SUCCESS_EXIT_CODE = 0
MIGRATION_ERROR_EXIT_CODE = 3
CONFIGURATION_ERROR_EXIT_CODE = 4


@dataclass(frozen=True)
class CliConfig:
    """Global CLI runtime options."""

    config_path: Path | None
    as_json: bool
    log_level: str | None


def _serialize_migration(migration: ResolvedMigration) -> dict[str, Any]:
    """Convert one resolved migration into a JSON-serializable mapping."""
    return {
        "version": None if migration.version is None else str(migration.version),
        "description": migration.description,
        "script": migration.script,
        "checksum": migration.checksum,
        "type": migration.type.value,
        "physical_location": migration.physical_location,
        "repeatable": migration.is_repeatable,
    }


def _render_migrations(migrations: tuple[ResolvedMigration, ...]) -> str:
    """Render resolved migrations as an aligned text table."""
    if len(migrations) == 0:
        return "No migrations found."
    rows = [("Version", "Description", "Type", "Checksum", "Script")]
    for migration in migrations:
        rows.append(
            (
                "<< Repeatable >>" if migration.version is None else str(migration.version),
                migration.description,
                migration.type.value,
                "" if migration.checksum is None else str(migration.checksum),
                migration.script,
            )
        )
    widths = [max(len(row[index]) for row in rows) for index in range(len(rows[0]))]
    lines = [
        " | ".join(cell.ljust(width) for cell, width in zip(row, widths)).rstrip()
        for row in rows
    ]
    lines.insert(1, "-+-".join("-" * width for width in widths))
    return "\n".join(lines)


def _emit_error(exc: BaseException, as_json: bool) -> None:
    """Render one error to stderr."""
    if as_json:
        typer.echo(json.dumps({"error": exception_to_error(exc).as_dict()}), err=True)
        return
    cause = exc.__cause__
    message = f"error: {exc}"
    if cause is not None:
        message = f"{message}\ncaused by: {cause}"
    typer.echo(message, err=True)


def _require_config(ctx: typer.Context) -> CliConfig:
    """Return required CLI config from Typer context."""
    config = ctx.obj
    if not isinstance(config, CliConfig):
        raise RuntimeError("CLI configuration not initialized")
    return config


def _load(cfg: CliConfig, resolver_overrides: dict[str, Any]) -> StrataSettings:
    """Load settings with CLI overrides and configure logging from them."""
    cli_params: dict[str, Any] = {}
    if resolver_overrides:
        cli_params["resolver"] = resolver_overrides
    if cfg.log_level is not None:
        cli_params["logging"] = {"level": cfg.log_level.upper()}
    settings = load_settings(cli_params=cli_params, config_path=cfg.config_path)
    configure_logging(
        level=settings.logging.level,
        json_output=settings.logging.json_output,
        service=settings.logging.service,
        environment=settings.logging.environment,
        stream=typer.get_text_stream("stderr"),
    )
    return settings


app = typer.Typer(no_args_is_help=True, help="Strata migration resolver")


@app.callback()
def main(
    ctx: typer.Context,
    config: Path | None = typer.Option(
        None,
        "--config",
        envvar="STRATA_CONFIG_PATH",
        help="Path to strata.yaml",
    ),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON output"),
    log_level: str | None = typer.Option(None, help="Override logging level"),
) -> None:
    """Store global options for all commands."""
    ctx.obj = CliConfig(config_path=config, as_json=as_json, log_level=log_level)


@app.command("info")
def info_command(
    ctx: typer.Context,
    location: list[str] | None = typer.Option(
        None,
        "--location",
        "-l",
        help="Migration location, for example package:db.migration (repeatable)",
    ),
    scanner: str | None = typer.Option(None, help="Scanner: package or registry"),
) -> None:
    """Resolve migrations and print them in execution order."""
    cfg = _require_config(ctx)
    overrides: dict[str, Any] = {}
    if location:
        overrides["locations"] = tuple(location)
    if scanner is not None:
        overrides["scanner"] = scanner

    try:
        settings = _load(cfg, overrides)
        migrations = resolve_locations(settings, scanner=build_scanner(settings))
    except MigrationError as exc:
        _emit_error(exc, cfg.as_json)
        raise typer.Exit(code=MIGRATION_ERROR_EXIT_CODE) from exc
    except (ValidationError, ValueError) as exc:
        _emit_error(exc, cfg.as_json)
        raise typer.Exit(code=CONFIGURATION_ERROR_EXIT_CODE) from exc

    if cfg.as_json:
        typer.echo(
            json.dumps(
                [_serialize_migration(migration) for migration in migrations],
                sort_keys=True,
                separators=(",", ":"),
            )
        )
    else:
        typer.echo(_render_migrations(migrations))
    raise typer.Exit(code=SUCCESS_EXIT_CODE)


if __name__ == "__main__":
    app()
