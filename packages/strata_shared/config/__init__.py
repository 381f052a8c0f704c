"""Public API for shared Strata configuration utilities."""

from .loader import load_settings
from .models import (
    DEFAULT_CONFIG_PATH,
    LoggingSettings,
    ResolverSettings,
    StrataSettings,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "LoggingSettings",
    "ResolverSettings",
    "StrataSettings",
    "load_settings",
]
