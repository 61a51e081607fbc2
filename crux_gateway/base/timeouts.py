"""Unified timeout configuration for the gateway client.

Centralizes the timeout values used by the HTTP transport and the streaming
decoder so no call site carries ad-hoc numeric literals.

Key Components
--------------
TimeoutConfig
    Dataclass capturing normalized timeout values in seconds.

get_timeout_config()
    Returns a process-cached configuration, parsing environment overrides
    when they change. Supported environment variables (all optional):
        GATEWAY_TIMEOUT_CONNECT_SECONDS
        GATEWAY_TIMEOUT_HTTP_SECONDS
        GATEWAY_TIMEOUT_STREAM_IDLE_SECONDS

Failure Modes
-------------
Malformed or non-positive overrides are ignored in favour of the defaults.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

import httpx

from ..config.defaults import (
    DEFAULT_CONNECT_TIMEOUT_SECONDS,
    DEFAULT_HTTP_TIMEOUT_SECONDS,
    DEFAULT_STREAM_IDLE_TIMEOUT_SECONDS,
)

_ENV_NAMES = (
    "GATEWAY_TIMEOUT_CONNECT_SECONDS",
    "GATEWAY_TIMEOUT_HTTP_SECONDS",
    "GATEWAY_TIMEOUT_STREAM_IDLE_SECONDS",
)


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        connect_timeout_seconds: Bound on establishing the TCP/TLS connection.
        http_timeout_seconds: Read/write/pool bound for one HTTP exchange.
        stream_idle_timeout_seconds: Maximum wait for the next SSE frame once
            a stream is open. ``None`` disables the idle guard.
    """

    connect_timeout_seconds: float = DEFAULT_CONNECT_TIMEOUT_SECONDS
    http_timeout_seconds: float = DEFAULT_HTTP_TIMEOUT_SECONDS
    stream_idle_timeout_seconds: Optional[float] = DEFAULT_STREAM_IDLE_TIMEOUT_SECONDS

    def to_httpx_timeout(self) -> httpx.Timeout:
        """Build the ``httpx.Timeout`` used by the pooled async client."""
        return httpx.Timeout(self.http_timeout_seconds, connect=self.connect_timeout_seconds)


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float) -> float:
    """Read ``name`` as a positive float, else return ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached `TimeoutConfig`, refreshed on env changes."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(os.getenv(name, "") for name in _ENV_NAMES)
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    _CACHED = TimeoutConfig(
        connect_timeout_seconds=_parse_env_float(_ENV_NAMES[0], DEFAULT_CONNECT_TIMEOUT_SECONDS),
        http_timeout_seconds=_parse_env_float(_ENV_NAMES[1], DEFAULT_HTTP_TIMEOUT_SECONDS),
        stream_idle_timeout_seconds=_parse_env_float(_ENV_NAMES[2], DEFAULT_STREAM_IDLE_TIMEOUT_SECONDS),
    )
    _ENV_GUARD = guard
    return _CACHED


__all__ = ["TimeoutConfig", "get_timeout_config"]
