"""Retry policy with exponential backoff for gateway calls.

- ``delay_for_attempt`` is the pure backoff curve.
- ``with_retry`` drives a coroutine function until success, a
  non-retryable ``ProviderError`` or exhaustion, and reports the outcome as
  a :class:`RetryResult` value.
- ``retry`` is the decorator form; it re-raises the final error.

Only ``ProviderError`` failures take part in the policy. Any other exception
propagates unchanged from the attempt that raised it.
"""
from __future__ import annotations

import asyncio
import functools
import random
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, Optional, Protocol, TypeVar

from ...config.defaults import (
    DEFAULT_BACKOFF_MULTIPLIER,
    DEFAULT_INITIAL_DELAY_SECONDS,
    DEFAULT_MAX_DELAY_SECONDS,
    DEFAULT_MAX_RETRIES,
    DEFAULT_USE_JITTER,
    JITTER_HIGH,
    JITTER_LOW,
)
from ..errors import ProviderError, RateLimitError
from ..logging import LogContext, get_logger, normalized_log_event

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[object]]

_logger = get_logger("retry")


class AttemptLogger(Protocol):  # pragma: no cover - structural protocol
    def __call__(
        self,
        *,
        attempt: int,
        max_attempts: int,
        delay: float | None,
        error: ProviderError | None,
    ) -> None: ...


@dataclass(frozen=True)
class RetryConfig:
    """Backoff policy parameters (durations in seconds).

    ``max_retries`` counts retries, not attempts: 0 means exactly one try.
    """

    max_retries: int = DEFAULT_MAX_RETRIES
    initial_delay: float = DEFAULT_INITIAL_DELAY_SECONDS
    max_delay: float = DEFAULT_MAX_DELAY_SECONDS
    backoff_multiplier: float = DEFAULT_BACKOFF_MULTIPLIER
    use_jitter: bool = DEFAULT_USE_JITTER
    attempt_logger: AttemptLogger | None = None

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if self.initial_delay < 0 or self.max_delay < 0:
            raise ValueError("delays must be >= 0")
        if self.backoff_multiplier < 1.0:
            raise ValueError("backoff_multiplier must be >= 1.0")

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1


DEFAULT_RETRY_CONFIG = RetryConfig()
NO_RETRY = RetryConfig(max_retries=0)


@dataclass
class RetryResult(Generic[T]):
    """Outcome of a retried operation plus attempt telemetry.

    Attributes:
        value: Result of the successful attempt.
        error: Last error when every permitted attempt failed.
        attempts: Number of invocations performed (>= 1).
        total_delay: Seconds actually slept between attempts.
    """

    value: Optional[T] = None
    error: Optional[ProviderError] = None
    attempts: int = 1
    total_delay: float = 0.0

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return ``value`` or raise the final error."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


def delay_for_attempt(config: RetryConfig, attempt: int) -> float:
    """Backoff before retry ``attempt`` (0 = wait before the second try)."""
    return min(config.initial_delay * config.backoff_multiplier**attempt, config.max_delay)


def _jitter(delay: float) -> float:
    if delay <= 0:
        return 0.0
    return random.uniform(delay * JITTER_LOW, delay * JITTER_HIGH)  # nosec B311 - not security sensitive


def wait_before_retry(config: RetryConfig, error: ProviderError, attempts: int) -> float:
    """Seconds to wait after ``attempts`` failed tries ended with ``error``.

    A rate-limit ``retry_after`` hint wins over the configured curve.
    """
    if isinstance(error, RateLimitError) and error.retry_after is not None:
        return float(error.retry_after)
    delay = delay_for_attempt(config, attempts - 1)
    return _jitter(delay) if config.use_jitter else delay


async def with_retry(
    config: RetryConfig,
    action: Callable[[], Awaitable[T]],
    *,
    sleep: Sleep = asyncio.sleep,
    ctx: LogContext | None = None,
) -> RetryResult[T]:
    """Run ``action`` under ``config`` and return the outcome as a value.

    Parameters:
        config: Backoff policy.
        action: Zero-argument coroutine function; failures are raised
            ``ProviderError`` instances.
        sleep: Suspension primitive (injectable for tests).
        ctx: Log context for ``retry.attempt`` events.

    Returns:
        ``RetryResult`` with the value, or the last error once it was not
        retryable or ``max_retries`` retries were spent.
    """
    attempts = 0
    total_delay = 0.0
    while True:
        attempts += 1
        try:
            value = await action()
        except ProviderError as e:
            final = not e.is_retryable or attempts > config.max_retries
            delay = None if final else wait_before_retry(config, e, attempts)
            _report(config, ctx, attempt=attempts, delay=delay, error=e)
            if final:
                return RetryResult(error=e, attempts=attempts, total_delay=total_delay)
            await sleep(delay)
            total_delay += delay
            continue
        _report(config, ctx, attempt=attempts, delay=None, error=None)
        return RetryResult(value=value, attempts=attempts, total_delay=total_delay)


def _report(
    config: RetryConfig,
    ctx: LogContext | None,
    *,
    attempt: int,
    delay: float | None,
    error: ProviderError | None,
) -> None:
    if config.attempt_logger:
        config.attempt_logger(attempt=attempt, max_attempts=config.max_attempts, delay=delay, error=error)
    normalized_log_event(
        _logger,
        "retry.attempt",
        ctx,
        phase="retry",
        attempt=attempt,
        error_code=error.code.value if error else None,
        emitted=None,
        tokens=None,
        max_attempts=config.max_attempts,
        delay_s=delay,
        retryable=error.is_retryable if error else None,
    )


def retry(config: RetryConfig = DEFAULT_RETRY_CONFIG, *, sleep: Sleep = asyncio.sleep):
    """Return a decorator applying the retry policy to a coroutine function.

    The wrapped function returns the successful value or raises the final
    ``ProviderError``.
    """

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs) -> T:
            result = await with_retry(config, lambda: func(*args, **kwargs), sleep=sleep)
            return result.unwrap()

        return wrapper

    return decorator


__all__ = [
    "AttemptLogger",
    "RetryConfig",
    "RetryResult",
    "DEFAULT_RETRY_CONFIG",
    "NO_RETRY",
    "delay_for_attempt",
    "wait_before_retry",
    "with_retry",
    "retry",
]
