"""Per-request context attached to every gateway log event.

One :class:`LogContext` is created per executor call and threaded through the
executor, the chunk decoder and the retry driver so that ``chat.*``,
``stream.*`` and ``retry.attempt`` events of the same request share their
identifying fields.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Identifying fields for the events of one gateway request.

    Attributes:
        provider: Gateway key (``"openrouter"``).
        model: Model slug the request was sent for.
        request_id: Caller-supplied correlation id.
        response_id: Gateway generation id, once known.
        stream: Whether the request asked for a streamed response.
        extra: Free-form metadata flattened into the event.
    """

    provider: Optional[str] = None
    model: Optional[str] = None
    request_id: Optional[str] = None
    response_id: Optional[str] = None
    stream: Optional[bool] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def bind(self, **extra: Any) -> "LogContext":
        """Return a copy whose ``extra`` also carries ``extra``."""
        return replace(self, extra={**self.extra, **extra})

    def to_dict(self) -> Dict[str, Any]:
        """Flatten into event fields; ``None`` values are dropped."""
        data: Dict[str, Any] = {
            "provider": self.provider,
            "model": self.model,
            "request_id": self.request_id,
            "response_id": self.response_id,
            "stream": self.stream,
        }
        data.update(self.extra)
        return {k: v for k, v in data.items() if v is not None}


__all__ = ["LogContext"]
