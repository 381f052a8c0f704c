"""Typed configuration models for Strata runtime settings."""

from __future__ import annotations

from collections.abc import Mapping
from contextvars import ContextVar
from pathlib import Path
from types import MappingProxyType
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "strata" / "strata.yaml"

_ACTIVE_CONFIG_PATH: ContextVar[Path] = ContextVar(
    "strata_config_path", default=DEFAULT_CONFIG_PATH
)


class LoggingSettings(BaseModel):
    """Structured logging configuration."""

    model_config = ConfigDict(frozen=True)

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    json_output: bool = True
    service: str = "strata"
    environment: str = "dev"


class ResolverSettings(BaseModel):
    """Settings consumed by the migration resolver and handed to migrations."""

    model_config = ConfigDict(frozen=True)

    locations: tuple[str, ...] = ("package:db.migration",)
    scanner: Literal["package", "registry"] = "package"
    target_schema: str | None = None
    placeholders: Mapping[str, str] = Field(
        default_factory=lambda: MappingProxyType({})
    )

    @field_validator("locations", mode="before")
    @classmethod
    def _split_location_string(cls, value: object) -> object:
        """Accept a comma-separated string as well as a sequence."""
        if isinstance(value, str):
            return tuple(part.strip() for part in value.split(",") if part.strip())
        return value

    @field_validator("locations")
    @classmethod
    def _require_locations(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        """Reject an empty location list."""
        if len(value) == 0:
            raise ValueError("resolver.locations must not be empty")
        return value

    @field_validator("placeholders")
    @classmethod
    def _freeze_placeholders(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        """Return the placeholders as a read-only mapping."""
        return MappingProxyType(dict(value))

    @field_serializer("placeholders")
    def _dump_placeholders(self, value: Mapping[str, str]) -> dict[str, str]:
        """Serialize the read-only view as a plain dict."""
        return dict(value)


class StrataSettings(BaseSettings):
    """Root runtime settings resolved from init/env/yaml/defaults sources.

    Instances are frozen: the same object is shared with every migration that
    asks for settings, and none of them may change it.
    """

    model_config = SettingsConfigDict(
        env_prefix="STRATA_",
        env_nested_delimiter="__",
        extra="ignore",
        frozen=True,
        nested_model_default_partial_update=True,
    )

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    resolver: ResolverSettings = Field(default_factory=ResolverSettings)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Apply Strata precedence: init > env > yaml > model defaults."""
        return (
            init_settings,
            env_settings,
            YamlConfigSettingsSource(
                settings_cls,
                yaml_file=_ACTIVE_CONFIG_PATH.get(),
                yaml_file_encoding="utf-8",
            ),
        )
