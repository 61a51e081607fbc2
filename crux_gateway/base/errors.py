"""Unified gateway error taxonomy public surface.

This module re-exports the implementations under
``crux_gateway.base.errors_parts`` to keep a stable import path.
"""

from .errors_parts.error_code import ErrorCode, RETRYABLE_CODES
from .errors_parts.provider_error import ProviderError
from .errors_parts.variants import (
    ApiError,
    AuthError,
    HttpError,
    NetworkError,
    ParseError,
    RateLimitError,
    RequestTimeoutError,
)
from .errors_parts.classification import (
    classify_exception,
    parse_retry_after,
    to_provider_error,
)

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
