"""
Normalized gateway error codes (taxonomy).

Defines the `ErrorCode` enumeration used across the executor, the retry
policy and structured logging. Values are lowercase snake_case and are
considered a stable public contract for logging and analytics.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    NETWORK = "network"
    HTTP = "http"
    API = "api"
    PARSE = "parse"
    CANCELLED = "cancelled"
    UNKNOWN = "unknown"


# Codes a bare ``ProviderError`` is retried on.
RETRYABLE_CODES = (ErrorCode.RATE_LIMIT, ErrorCode.NETWORK, ErrorCode.TIMEOUT)


__all__ = ["ErrorCode", "RETRYABLE_CODES"]
