"""Pytest configuration for the gateway test suite.

Isolates every test from the developer's environment (``OPENROUTER_*`` and
``GATEWAY_*`` variables, cached config file) and provides factories for
clients backed by ``httpx.MockTransport`` so no test touches the network.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterator, List

import httpx
import pytest

from crux_gateway.base.logging import BASE_LOGGER_NAME, get_logger
from crux_gateway.base.resilience.retry import RetryConfig
from crux_gateway.config import reset_config_cache
from crux_gateway.openrouter import OpenRouterClient

from .helpers import TEST_API_KEY

_ISOLATED_ENV = (
    "OPENROUTER_API_KEY",
    "OPENROUTER_MODEL",
    "OPENROUTER_BASE_URL",
    "OPENROUTER_APP_NAME",
    "OPENROUTER_APP_URL",
    "GATEWAY_CONFIG_FILE",
    "GATEWAY_LOG_LEVEL",
    "GATEWAY_TIMEOUT_CONNECT_SECONDS",
    "GATEWAY_TIMEOUT_HTTP_SECONDS",
    "GATEWAY_TIMEOUT_STREAM_IDLE_SECONDS",
)

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Clear gateway variables and the config file cache around each test."""
    for name in _ISOLATED_ENV:
        monkeypatch.delenv(name, raising=False)
    reset_config_cache()
    yield
    reset_config_cache()


@pytest.fixture()
def fast_retry() -> RetryConfig:
    """Retry policy without jitter and with tiny delays."""
    return RetryConfig(max_retries=2, initial_delay=0.001, max_delay=0.002, use_jitter=False)


@pytest.fixture()
def make_client(fast_retry: RetryConfig) -> Callable[..., OpenRouterClient]:
    """Return a factory building clients over ``httpx.MockTransport(handler)``."""

    def _factory(handler: Handler, **kwargs) -> OpenRouterClient:
        kwargs.setdefault("api_key", TEST_API_KEY)
        kwargs.setdefault("retry_config", fast_retry)
        return OpenRouterClient(transport=httpx.MockTransport(handler), **kwargs)

    return _factory


class _ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.records: List[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


@pytest.fixture()
def log_records(monkeypatch: pytest.MonkeyPatch) -> Iterator[List[logging.LogRecord]]:
    """Capture records of the ``gateway`` logger tree at DEBUG level.

    The base logger does not propagate to root, so ``caplog`` cannot see it.
    ``GATEWAY_LOG_LEVEL`` is pinned so later ``get_logger`` calls keep DEBUG.
    """
    monkeypatch.setenv("GATEWAY_LOG_LEVEL", "DEBUG")
    logger = get_logger(BASE_LOGGER_NAME)
    handler = _ListHandler()
    previous = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    yield handler.records
    logger.removeHandler(handler)
    logger.setLevel(previous)
