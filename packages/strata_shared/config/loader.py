"""Settings loading with deterministic precedence.

The cascade is always:
1) CLI params
2) Environment variables
3) ``~/.config/strata/strata.yaml`` (or an explicit ``config_path``)
4) Built-in model defaults

Environment variable format:
- Prefix: ``STRATA_``
- Nested keys: ``__`` separator
- Example: ``STRATA_LOGGING__LEVEL=DEBUG`` -> ``logging.level = "DEBUG"``
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from .models import DEFAULT_CONFIG_PATH, _ACTIVE_CONFIG_PATH, StrataSettings


def load_settings(
    *,
    cli_params: Mapping[str, Any] | None = None,
    config_path: str | Path | None = None,
) -> StrataSettings:
    """Load settings by applying the standard Strata precedence cascade."""
    resolved = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH
    overrides = {
        key: value for key, value in (cli_params or {}).items() if value is not None
    }
    token = _ACTIVE_CONFIG_PATH.set(resolved)
    try:
        return StrataSettings(**overrides)
    finally:
        _ACTIVE_CONFIG_PATH.reset(token)
