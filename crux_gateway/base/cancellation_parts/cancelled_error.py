"""Cancellation error type.

Defines the public ``CancelledError`` used to signal cooperative cancellation
of a stream consumer.
"""

from __future__ import annotations

from typing import Any

from ..errors_parts.error_code import ErrorCode
from ..errors_parts.provider_error import ProviderError


class CancelledError(ProviderError):
    """Raised when an operation observes a cooperative cancellation request.

    Never retryable: a cancelled consumer must not be restarted by the retry
    driver.
    """

    def __init__(self, message: str = "operation cancelled", **kwargs: Any) -> None:
        super().__init__(code=ErrorCode.CANCELLED, message=message, **kwargs)

    @property
    def is_retryable(self) -> bool:
        return False


__all__ = ["CancelledError"]
