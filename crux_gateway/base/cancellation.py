"""Cooperative cancellation primitives (public API facade).

``CancellationToken`` is the checked flag consulted by the stream controller
between chunks; ``CancelledError`` is raised by code that observes it.
Implementations live under ``cancellation_parts``.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]
