"""Resilience helpers (retry with exponential backoff)."""

from .retry import (
    DEFAULT_RETRY_CONFIG,
    NO_RETRY,
    RetryConfig,
    RetryResult,
    delay_for_attempt,
    retry,
    with_retry,
)

__all__ = [
    "DEFAULT_RETRY_CONFIG",
    "NO_RETRY",
    "RetryConfig",
    "RetryResult",
    "delay_for_attempt",
    "retry",
    "with_retry",
]
