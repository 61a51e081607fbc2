"""
Concrete error kinds raised by the request executor and stream decoder.

Each kind fixes its :class:`ErrorCode` and its ``is_retryable`` answer so the
retry driver never has to inspect messages or context:

- ``RateLimitError``, ``NetworkError``, ``RequestTimeoutError``: always
  retryable.
- ``HttpError``: retryable iff ``status >= 500``.
- ``AuthError``, ``ApiError``, ``ParseError``: never retryable.
"""
from __future__ import annotations

from typing import Any, Optional

from .error_code import ErrorCode
from .provider_error import ProviderError


class HttpError(ProviderError):
    """Unmapped HTTP status without a decodable error envelope."""

    def __init__(self, status: int, message: str, **kwargs: Any) -> None:
        super().__init__(code=ErrorCode.HTTP, message=message, **kwargs)
        self.status = status

    @property
    def is_retryable(self) -> bool:
        return self.status >= 500


class ParseError(ProviderError):
    """JSON or shape failure while decoding a gateway payload."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(code=ErrorCode.PARSE, message=message, **kwargs)

    @property
    def is_retryable(self) -> bool:
        return False


class NetworkError(ProviderError):
    """Connection-level failure (DNS, TLS, refused or reset connection)."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(code=ErrorCode.NETWORK, message=message, **kwargs)

    @property
    def is_retryable(self) -> bool:
        return True


class AuthError(ProviderError):
    """Missing or rejected credentials (HTTP 401)."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(code=ErrorCode.AUTH, message=message, **kwargs)

    @property
    def is_retryable(self) -> bool:
        return False


class RateLimitError(ProviderError):
    """HTTP 429; ``retry_after`` holds the server hint in seconds."""

    def __init__(
        self,
        retry_after: Optional[float] = None,
        message: str = "rate limited",
        **kwargs: Any,
    ) -> None:
        super().__init__(code=ErrorCode.RATE_LIMIT, message=message, **kwargs)
        self.retry_after = retry_after

    @property
    def is_retryable(self) -> bool:
        return True


class ApiError(ProviderError):
    """Decoded ``{"error": {"code", "message"}}`` envelope from the gateway."""

    def __init__(self, api_code: str, message: str, **kwargs: Any) -> None:
        super().__init__(code=ErrorCode.API, message=message, **kwargs)
        self.api_code = api_code

    @property
    def is_retryable(self) -> bool:
        return False


class RequestTimeoutError(ProviderError):
    """Connect, read or stream-idle timeout."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(code=ErrorCode.TIMEOUT, message=message, **kwargs)

    @property
    def is_retryable(self) -> bool:
        return True


__all__ = [
    "HttpError",
    "ParseError",
    "NetworkError",
    "AuthError",
    "RateLimitError",
    "ApiError",
    "RequestTimeoutError",
]
