"""crux_gateway.config.env
=======================

Environment variable names and helpers for gateway credentials and settings.

Design Notes
------------
- ``ENV_FIELD_MAP`` maps config fields to the ``OPENROUTER_*`` variables.
- Helpers never raise on unset variables; callers decide how to proceed.
"""

from __future__ import annotations

import os
from typing import Dict, Optional

ENV_PREFIX = "OPENROUTER"

ENV_FIELD_MAP: Dict[str, str] = {
    "api_key": "API_KEY",  # pragma: allowlist secret - env suffix name, not a secret
    "model": "MODEL",
    "base_url": "BASE_URL",
    "app_name": "APP_NAME",
    "app_url": "APP_URL",
}

CONFIG_FILE_ENV = "GATEWAY_CONFIG_FILE"


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the provided string looks like a placeholder/test value.

    Heuristics: contains 'placeholder', 'changeme', 'example', or starts with
    'test_'. The check is case-insensitive and ignores surrounding spaces.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return (
        "placeholder" in v
        or "changeme" in v
        or "example" in v
        or v.startswith("test_")
    )


def env_var_name(field: str) -> Optional[str]:
    """Return the environment variable backing a config ``field``."""
    suffix = ENV_FIELD_MAP.get(field)
    return f"{ENV_PREFIX}_{suffix}" if suffix else None


def env_overrides() -> Dict[str, str]:
    """Collect the set, non-empty ``OPENROUTER_*`` variables as config fields."""
    out: Dict[str, str] = {}
    for field in ENV_FIELD_MAP:
        val = os.getenv(env_var_name(field) or "")
        if val:
            out[field] = val
    return out


__all__ = [
    "ENV_PREFIX",
    "ENV_FIELD_MAP",
    "CONFIG_FILE_ENV",
    "is_placeholder",
    "env_var_name",
    "env_overrides",
]
