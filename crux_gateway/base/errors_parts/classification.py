"""
Error classification helpers mapping exceptions to normalized error kinds.

Transport exceptions raised by ``httpx`` and decode failures raised by
``json``/``pydantic`` are translated into the typed taxonomy so the executor
and the retry driver only ever deal with :class:`ProviderError`.
"""
from __future__ import annotations

import asyncio
import json
from typing import Optional

import httpx
from pydantic import ValidationError

from .error_code import ErrorCode
from .provider_error import ProviderError
from .variants import NetworkError, ParseError, RequestTimeoutError


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. ProviderError passthrough.
        2. Timeout exceptions (httpx, builtin, asyncio).
        3. Other httpx transport failures.
        4. JSON / validation failures.
        5. ``UNKNOWN`` fallback.
    """
    if isinstance(exc, ProviderError):
        return exc.code
    if isinstance(exc, (httpx.TimeoutException, TimeoutError, asyncio.TimeoutError)):
        return ErrorCode.TIMEOUT
    if isinstance(exc, httpx.TransportError):
        return ErrorCode.NETWORK
    if isinstance(exc, (json.JSONDecodeError, ValidationError)):
        return ErrorCode.PARSE
    return ErrorCode.UNKNOWN


def to_provider_error(
    exc: BaseException,
    *,
    provider: str = "openrouter",
    model: Optional[str] = None,
) -> ProviderError:
    """Wrap ``exc`` into the matching typed error (identity for ProviderError)."""
    if isinstance(exc, ProviderError):
        return exc
    code = classify_exception(exc)
    message = str(exc) or exc.__class__.__name__
    if code is ErrorCode.TIMEOUT:
        return RequestTimeoutError(message, provider=provider, model=model, raw=exc)
    if code is ErrorCode.NETWORK:
        return NetworkError(message, provider=provider, model=model, raw=exc)
    if code is ErrorCode.PARSE:
        return ParseError(message, provider=provider, model=model, raw=exc)
    return ProviderError(code=code, message=message, provider=provider, model=model, raw=exc)


def parse_retry_after(value: Optional[str]) -> Optional[float]:
    """Parse a ``Retry-After`` header carrying an integer count of seconds.

    HTTP-date forms and garbage are ignored (``None``), letting the retry
    policy fall back to its backoff curve.
    """
    if value is None:
        return None
    text = value.strip()
    if not text.isdigit():
        return None
    return float(int(text))


__all__ = [
    "classify_exception",
    "to_provider_error",
    "parse_retry_after",
]
