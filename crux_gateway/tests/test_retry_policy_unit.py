from __future__ import annotations

import pytest

from crux_gateway.base.errors import (
    AuthError,
    ErrorCode,
    HttpError,
    NetworkError,
    ProviderError,
    RateLimitError,
)
from crux_gateway.base.resilience.retry import (
    NO_RETRY,
    RetryConfig,
    RetryResult,
    delay_for_attempt,
    retry,
    wait_before_retry,
    with_retry,
)


class _Flaky:
    """Coroutine function failing ``fail_times`` times with ``error``."""

    def __init__(self, fail_times: int, error: ProviderError):
        self.calls = 0
        self.fail_times = fail_times
        self.error = error

    async def __call__(self):
        self.calls += 1
        if self.calls <= self.fail_times:
            raise self.error
        return "ok"


class _Sleeps:
    def __init__(self):
        self.delays = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


def test_delay_for_attempt_is_monotonic_and_capped():
    cfg = RetryConfig(initial_delay=1.0, backoff_multiplier=2.0, max_delay=3.0)
    assert [delay_for_attempt(cfg, n) for n in range(4)] == [1.0, 2.0, 3.0, 3.0]  # nosec B101 - asserts are appropriate in unit tests


def test_jitter_stays_inside_band():
    cfg = RetryConfig(initial_delay=2.0, max_delay=10.0, use_jitter=True)
    err = NetworkError("reset")
    for _ in range(200):
        delay = wait_before_retry(cfg, err, attempts=1)
        assert 1.5 <= delay <= 2.5  # nosec B101 - asserts are appropriate in unit tests


def test_zero_delay_stays_zero_with_jitter():
    cfg = RetryConfig(initial_delay=0.0, use_jitter=True)
    assert wait_before_retry(cfg, NetworkError("x"), attempts=3) == 0.0  # nosec B101 - asserts are appropriate in unit tests


@pytest.mark.asyncio
async def test_non_retryable_error_stops_after_one_attempt():
    flaky = _Flaky(fail_times=99, error=AuthError("bad key"))
    sleeps = _Sleeps()
    result = await with_retry(RetryConfig(max_retries=5), flaky, sleep=sleeps)
    assert flaky.calls == 1  # nosec B101 - asserts are appropriate in unit tests
    assert result.attempts == 1  # nosec B101 - asserts are appropriate in unit tests
    assert isinstance(result.error, AuthError)  # nosec B101 - asserts are appropriate in unit tests
    assert sleeps.delays == []  # nosec B101 - asserts are appropriate in unit tests


@pytest.mark.asyncio
async def test_retryable_error_exhausts_max_retries_plus_one():
    err = NetworkError("connection reset")
    flaky = _Flaky(fail_times=99, error=err)
    sleeps = _Sleeps()
    cfg = RetryConfig(max_retries=3, initial_delay=1.0, backoff_multiplier=2.0, max_delay=30.0, use_jitter=False)
    result = await with_retry(cfg, flaky, sleep=sleeps)
    assert flaky.calls == 4  # nosec B101 - asserts are appropriate in unit tests
    assert result.attempts == 4  # nosec B101 - asserts are appropriate in unit tests
    assert result.error is err  # nosec B101 - asserts are appropriate in unit tests
    assert not result.ok  # nosec B101 - asserts are appropriate in unit tests
    assert sleeps.delays == [1.0, 2.0, 4.0]  # nosec B101 - asserts are appropriate in unit tests
    assert result.total_delay == pytest.approx(7.0)  # nosec B101 - asserts are appropriate in unit tests


@pytest.mark.asyncio
async def test_rate_limit_retry_after_overrides_backoff():
    flaky = _Flaky(fail_times=1, error=RateLimitError(retry_after=2.0))
    sleeps = _Sleeps()
    cfg = RetryConfig(max_retries=3, initial_delay=0.1, max_delay=0.1, use_jitter=True)
    result = await with_retry(cfg, flaky, sleep=sleeps)
    assert result.ok and result.value == "ok"  # nosec B101 - asserts are appropriate in unit tests
    assert sleeps.delays == [2.0]  # nosec B101 - asserts are appropriate in unit tests
    assert result.attempts == 2  # nosec B101 - asserts are appropriate in unit tests


@pytest.mark.asyncio
async def test_rate_limit_without_hint_uses_backoff():
    flaky = _Flaky(fail_times=1, error=RateLimitError())
    sleeps = _Sleeps()
    cfg = RetryConfig(initial_delay=0.5, use_jitter=False)
    await with_retry(cfg, flaky, sleep=sleeps)
    assert sleeps.delays == [0.5]  # nosec B101 - asserts are appropriate in unit tests


@pytest.mark.asyncio
async def test_http_error_retryability_depends_on_status():
    server = _Flaky(fail_times=1, error=HttpError(503, "unavailable"))
    client = _Flaky(fail_times=1, error=HttpError(418, "teapot"))
    cfg = RetryConfig(max_retries=2, initial_delay=0.0, use_jitter=False)
    assert (await with_retry(cfg, server, sleep=_Sleeps())).ok  # nosec B101 - asserts are appropriate in unit tests
    failed = await with_retry(cfg, client, sleep=_Sleeps())
    assert failed.attempts == 1 and not failed.ok  # nosec B101 - asserts are appropriate in unit tests


@pytest.mark.asyncio
async def test_no_retry_config_performs_single_attempt():
    flaky = _Flaky(fail_times=99, error=NetworkError("down"))
    result = await with_retry(NO_RETRY, flaky, sleep=_Sleeps())
    assert flaky.calls == 1 and result.attempts == 1  # nosec B101 - asserts are appropriate in unit tests


@pytest.mark.asyncio
async def test_attempt_logger_receives_every_attempt():
    attempt_log = []

    def attempt_logger(**kw):
        attempt_log.append(kw)

    cfg = RetryConfig(max_retries=3, initial_delay=0.0, use_jitter=False, attempt_logger=attempt_logger)
    flaky = _Flaky(fail_times=2, error=NetworkError("blip"))
    result = await with_retry(cfg, flaky, sleep=_Sleeps())
    assert result.value == "ok"  # nosec B101 - asserts are appropriate in unit tests
    assert [e["attempt"] for e in attempt_log] == [1, 2, 3]  # nosec B101 - asserts are appropriate in unit tests
    assert attempt_log[-1]["error"] is None  # nosec B101 - asserts are appropriate in unit tests
    assert all(e["max_attempts"] == 4 for e in attempt_log)  # nosec B101 - asserts are appropriate in unit tests


@pytest.mark.asyncio
async def test_foreign_exceptions_propagate_unchanged():
    async def boom():
        raise KeyError("not a provider error")

    with pytest.raises(KeyError):
        await with_retry(RetryConfig(), boom, sleep=_Sleeps())


@pytest.mark.asyncio
async def test_retry_decorator_unwraps_value_and_raises_final_error():
    flaky = _Flaky(fail_times=2, error=NetworkError("blip"))
    cfg = RetryConfig(max_retries=1, initial_delay=0.0, use_jitter=False)

    @retry(cfg, sleep=_Sleeps())
    async def run():
        return await flaky()

    with pytest.raises(ProviderError) as ei:
        await run()
    assert ei.value.code is ErrorCode.NETWORK  # nosec B101 - asserts are appropriate in unit tests
    assert flaky.calls == 2  # nosec B101 - asserts are appropriate in unit tests
    # Third call succeeds on the next decorated invocation.
    assert await run() == "ok"  # nosec B101 - asserts are appropriate in unit tests


def test_result_unwrap_raises_error():
    with pytest.raises(AuthError):
        RetryResult(error=AuthError("nope")).unwrap()
    assert RetryResult(value=3).unwrap() == 3  # nosec B101 - asserts are appropriate in unit tests


@pytest.mark.parametrize(
    "kwargs",
    [{"max_retries": -1}, {"initial_delay": -0.5}, {"max_delay": -1.0}, {"backoff_multiplier": 0.5}],
)
def test_invalid_config_is_rejected(kwargs):
    with pytest.raises(ValueError):
        RetryConfig(**kwargs)
