"""Cooperative cancellation token implementation.

A stream consumer polls the token between chunks. Cancelling only flips the
flag; it never touches the underlying transport connection, which the owner
of the stream still has to close.
"""

from __future__ import annotations

from threading import Lock
from typing import List, Optional

from .cancelled_error import CancelledError


class CancellationToken:
    """Checked boolean cancel flag with cascading to child tokens.

    Safe to cancel from another thread or task. Cancelling twice keeps the
    first reason.
    """

    def __init__(self, *, parent: "CancellationToken | None" = None) -> None:
        self._cancelled = False
        self._reason: Optional[str] = None
        self._lock = Lock()
        self._children: List[CancellationToken] = []
        if parent is not None:
            parent._adopt(self)

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def reason(self) -> str | None:
        return self._reason

    def cancel(self, reason: str | None = None) -> None:
        """Set the flag and cascade to children."""
        with self._lock:
            if self._cancelled:
                return
            self._cancelled = True
            self._reason = reason
            children = list(self._children)
        for child in children:
            child.cancel(reason)

    def _adopt(self, token: "CancellationToken") -> None:
        with self._lock:
            self._children.append(token)
            cancelled, reason = self._cancelled, self._reason
        if cancelled:
            token.cancel(reason)

    def child(self) -> "CancellationToken":
        """Create a token cancelled whenever this one is."""
        return CancellationToken(parent=self)

    def raise_if_cancelled(self) -> None:
        """Raise ``CancelledError`` if the flag is set."""
        if self._cancelled:
            raise CancelledError(self._reason or "operation cancelled")

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"CancellationToken(cancelled={self._cancelled}, reason={self._reason!r})"


__all__ = ["CancellationToken"]
