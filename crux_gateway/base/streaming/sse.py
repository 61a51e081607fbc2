"""Server-Sent-Events framing over transport text lines.

Turns the line iterator of an ``httpx`` streaming response
(``Response.aiter_lines()``) into :class:`ServerSentEvent` frames following
the ``text/event-stream`` rules:

- lines starting with ``:`` are comments (gateway keep-alives) and dropped;
- ``field: value`` lines fill ``event``, ``data``, ``id`` and ``retry``;
  repeated ``data`` lines are joined with ``\\n``;
- a blank line dispatches the pending frame; a frame with no fields set is
  not dispatched;
- a pending frame at end of input is dispatched as well, since gateways
  sometimes close without the trailing blank line.

This module performs no JSON work; payload decoding belongs to the chunk
decoder.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import AsyncIterable, AsyncIterator, List, Optional

DEFAULT_EVENT = "message"


@dataclass
class ServerSentEvent:
    """One dispatched SSE frame."""

    event: str = DEFAULT_EVENT
    data: str = ""
    id: Optional[str] = None
    retry: Optional[int] = None


@dataclass
class _FrameBuilder:
    event: Optional[str] = None
    data: List[str] = field(default_factory=list)
    id: Optional[str] = None
    retry: Optional[int] = None

    def feed(self, line: str) -> None:
        name, sep, value = line.partition(":")
        if not sep:
            value = ""
        elif value.startswith(" "):
            value = value[1:]
        if name == "event":
            self.event = value
        elif name == "data":
            self.data.append(value)
        elif name == "id":
            self.id = value
        elif name == "retry" and value.isdigit():
            self.retry = int(value)

    def pending(self) -> bool:
        return bool(self.data) or self.event is not None or self.id is not None or self.retry is not None

    def build(self) -> ServerSentEvent:
        return ServerSentEvent(
            event=self.event or DEFAULT_EVENT,
            data="\n".join(self.data),
            id=self.id,
            retry=self.retry,
        )


async def aiter_sse_events(lines: AsyncIterable[str]) -> AsyncIterator[ServerSentEvent]:
    """Yield SSE frames parsed from an async iterable of text lines."""
    builder = _FrameBuilder()
    async for raw in lines:
        line = raw.rstrip("\r\n")
        if not line:
            if builder.pending():
                yield builder.build()
            builder = _FrameBuilder()
            continue
        if line.startswith(":"):
            continue
        builder.feed(line)
    if builder.pending():
        yield builder.build()


__all__ = ["DEFAULT_EVENT", "ServerSentEvent", "aiter_sse_events"]
