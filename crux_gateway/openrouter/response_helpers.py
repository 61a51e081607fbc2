"""HTTP status interpretation for gateway responses.

Single source of the status-code rules shared by the single-shot, streaming
and model-listing paths:

- 200: decode the body (caller-supplied DTO) or ``ParseError``;
- 401: ``AuthError``;
- 429: ``RateLimitError`` with the integer ``Retry-After`` seconds, if any;
- anything else: the ``{"error": {"code", "message"}}`` envelope becomes
  ``ApiError``. Without that shape (or without JSON at all) a 5xx becomes a
  retryable ``HttpError``; any other status becomes ``ParseError`` carrying
  the raw body.
"""

from __future__ import annotations

import json
from typing import Any, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..base.constants import HEADER_RETRY_AFTER
from ..base.errors import (
    ApiError,
    AuthError,
    HttpError,
    ParseError,
    ProviderError,
    RateLimitError,
    parse_retry_after,
)

M = TypeVar("M", bound=BaseModel)

# Raw bodies quoted in errors are truncated to keep logs bounded.
MAX_BODY_IN_ERROR = 2000


def decode_body(model_cls: Type[M], body: str, *, model: Optional[str] = None) -> M:
    """Decode a 200 body into ``model_cls`` or raise ``ParseError``."""
    try:
        return model_cls.model_validate(json.loads(body))
    except ValidationError as e:
        raise ParseError(f"unexpected response shape: {e.error_count()} error(s)", model=model, raw=e) from e
    except (ValueError, RecursionError) as e:
        # JSONDecodeError, integer digit limits and nesting depth all land here.
        raise ParseError(f"invalid JSON body: {e}", model=model, raw=e) from e


def _error_envelope(body: str) -> Optional[Mapping[str, Any]]:
    try:
        data = json.loads(body)
    except (ValueError, RecursionError):
        return None
    if not isinstance(data, dict):
        return None
    error = data.get("error")
    if not isinstance(error, dict) or "message" not in error:
        return None
    return error


def error_from_response(
    status: int,
    body: str,
    headers: Mapping[str, str],
    *,
    model: Optional[str] = None,
) -> ProviderError:
    """Map a non-200 response to the matching ``ProviderError``."""
    if status == 401:
        envelope = _error_envelope(body)
        message = str(envelope["message"]) if envelope else "unauthorized"
        return AuthError(message, model=model)
    if status == 429:
        envelope = _error_envelope(body)
        return RateLimitError(
            retry_after=parse_retry_after(headers.get(HEADER_RETRY_AFTER)),
            message=str(envelope["message"]) if envelope else "rate limited",
            model=model,
        )
    envelope = _error_envelope(body)
    if envelope is not None:
        return ApiError(str(envelope.get("code", status)), str(envelope["message"]), model=model)
    if status >= 500:
        return HttpError(status, f"HTTP {status}: {body[:MAX_BODY_IN_ERROR]}", model=model)
    return ParseError(f"HTTP {status}: {body[:MAX_BODY_IN_ERROR]}", model=model)


__all__ = ["decode_body", "error_from_response", "MAX_BODY_IN_ERROR"]
