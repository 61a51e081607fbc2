"""Unified configuration layer for the gateway client.

Merges sources in a predictable order (later wins):
    1. Built-in defaults
    2. Optional config file pointed to by ``GATEWAY_CONFIG_FILE``
       (JSON first, then YAML), section ``openrouter``
    3. Environment variables (``OPENROUTER_API_KEY``, ``OPENROUTER_MODEL``,
       ``OPENROUTER_BASE_URL``, ``OPENROUTER_APP_NAME``, ``OPENROUTER_APP_URL``)
    4. In-code overrides passed to :func:`get_client_config`

Example file::

    openrouter:
      model: anthropic/claude-3.5-sonnet
      base_url: https://openrouter.ai/api/v1
      app_name: my-tool

Public API
----------
* get_client_config(overrides: dict | None = None) -> dict
* reset_config_cache() -> None
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .defaults import OPENROUTER_DEFAULT_BASE_URL, OPENROUTER_DEFAULT_MODEL
from .env import CONFIG_FILE_ENV, env_overrides, is_placeholder

CONFIG_SECTION = "openrouter"

DEFAULTS: Dict[str, Any] = {
    "model": OPENROUTER_DEFAULT_MODEL,
    "base_url": OPENROUTER_DEFAULT_BASE_URL,
}

_FILE_CACHE: Optional[Dict[str, Any]] = None
_FILE_CACHE_PATH: Optional[str] = None


def _parse_config_text(text: str) -> Dict[str, Any]:
    """Parse config text as JSON, falling back to YAML; non-mappings are empty."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError:
            data = None
    return data if isinstance(data, dict) else {}


def _load_external_config() -> Dict[str, Any]:
    global _FILE_CACHE, _FILE_CACHE_PATH
    path = os.getenv(CONFIG_FILE_ENV)
    if _FILE_CACHE is not None and _FILE_CACHE_PATH == path:
        return _FILE_CACHE
    data: Dict[str, Any] = {}
    if path and Path(path).is_file():
        data = _parse_config_text(Path(path).read_text(encoding="utf-8"))
    _FILE_CACHE, _FILE_CACHE_PATH = data, path
    return data


def reset_config_cache() -> None:
    """Forget the parsed config file (tests and long-lived processes)."""
    global _FILE_CACHE, _FILE_CACHE_PATH
    _FILE_CACHE = None
    _FILE_CACHE_PATH = None


def get_client_config(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged client configuration.

    Merge order (later wins): defaults -> config file -> env vars -> overrides.
    ``None`` values in ``overrides`` are ignored so constructor arguments can
    be passed through unconditionally. Placeholder API keys are dropped.
    """
    cfg: Dict[str, Any] = dict(DEFAULTS)

    file_cfg = _load_external_config().get(CONFIG_SECTION)
    if isinstance(file_cfg, dict):
        cfg |= file_cfg

    cfg |= env_overrides()

    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}

    if is_placeholder(cfg.get("api_key")):
        cfg.pop("api_key", None)
    return cfg


__all__ = ["CONFIG_SECTION", "DEFAULTS", "get_client_config", "reset_config_cache"]
