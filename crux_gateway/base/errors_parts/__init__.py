"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `crux_gateway.base.errors` for the stable surface.
"""

from .error_code import ErrorCode, RETRYABLE_CODES
from .provider_error import ProviderError
from .variants import (
    ApiError,
    AuthError,
    HttpError,
    NetworkError,
    ParseError,
    RateLimitError,
    RequestTimeoutError,
)
from .classification import classify_exception, parse_retry_after, to_provider_error

__all__ = [
    "ErrorCode",
    "RETRYABLE_CODES",
    "ProviderError",
    "ApiError",
    "AuthError",
    "HttpError",
    "NetworkError",
    "ParseError",
    "RateLimitError",
    "RequestTimeoutError",
    "classify_exception",
    "parse_retry_after",
    "to_provider_error",
]
