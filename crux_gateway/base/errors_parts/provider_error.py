"""
Structured provider error exception type.

Base of the gateway error taxonomy. Carries a normalized `ErrorCode` for
consistent handling, retry decisions and structured logging.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode, RETRYABLE_CODES


@dataclass
class ProviderError(Exception):
    """Represents a structured gateway error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        provider: Provider key where the error originated.
        model: Optional model name associated with the failure.
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    provider: str = "openrouter"
    model: Optional[str] = None
    raw: Optional[Exception] = None

    @property
    def is_retryable(self) -> bool:
        """Structural retry classification; subclasses refine it."""
        return self.code in RETRYABLE_CODES

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining provider, model, code, and message."""
        return f"{self.provider}:{self.model or '-'} {self.code.value}: {self.message}"


__all__ = ["ProviderError"]
