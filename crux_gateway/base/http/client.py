"""Async HTTP client construction for the gateway executor.

Purpose:
    Build the ``httpx.AsyncClient`` used by ``OpenRouterClient`` with
    timeouts derived from :func:`get_timeout_config`, so no call site
    carries numeric timeout literals.

Lifecycle:
    The client is owned by the executor that created it and closed through
    its ``aclose``/``async with``. Connection pooling, TLS and DNS are
    delegated to ``httpx``; tests pass an ``httpx.MockTransport``.
"""

from __future__ import annotations

from typing import Dict, Optional

import httpx

from ..timeouts import TimeoutConfig, get_timeout_config


def create_async_client(
    base_url: str,
    *,
    headers: Optional[Dict[str, str]] = None,
    timeouts: Optional[TimeoutConfig] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """Return a new ``httpx.AsyncClient`` bound to ``base_url``.

    Parameters:
        base_url: API root; requests use paths relative to it.
        headers: Default headers sent with every request.
        timeouts: Timeout values; process defaults when omitted.
        transport: Custom transport (``httpx.MockTransport`` in tests).
    """
    cfg = timeouts or get_timeout_config()
    return httpx.AsyncClient(
        base_url=base_url.rstrip("/"),
        headers=headers or {},
        timeout=cfg.to_httpx_timeout(),
        transport=transport,
    )


__all__ = ["create_async_client"]
