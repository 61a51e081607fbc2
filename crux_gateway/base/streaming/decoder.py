"""SSE chunk decoder: the pull-based state machine behind every stream.

``ChunkStream`` turns :class:`ServerSentEvent` frames into
:class:`DeltaChunk` values, one per :meth:`ChunkStream.receive` call.

States are ``active`` and ``finished``. The only transition,
``active -> finished``, happens inside ``receive`` when the transport is
exhausted, the ``[DONE]`` sentinel arrives, the idle timeout expires, the
transport fails, or the stream is closed. It is irreversible: a finished
stream answers every later ``receive`` with ``None``.

Frames whose data is empty (keep-alives) or does not decode into a chunk
(bad JSON, oversized integers, pathological nesting, wrong shape) are
skipped silently, so one corrupt chunk never ends an otherwise healthy
stream. Skips are logged at debug level only.
"""
from __future__ import annotations

import asyncio
import inspect
import json
import logging
from typing import (
    AsyncIterator,
    Awaitable,
    Callable,
    List,
    Optional,
    Union,
)

import httpx
from ..constants import DONE_SENTINEL
from ..dto.chat_completion import Usage
from ..dto.delta import DeltaChunk
from ..errors import RequestTimeoutError, to_provider_error
from ..logging import LogContext, get_logger, log_event
from .accumulator import StreamState
from .sse import ServerSentEvent

ChunkCallback = Callable[[DeltaChunk], Union[None, Awaitable[None]]]


class ChunkStream:
    """Lazy, finite sequence of decoded chunks over one SSE response.

    Parameters:
        events: Async iterator of SSE frames from the transport.
        idle_timeout: Maximum seconds to wait for the next frame; ``None``
            waits forever.
        on_close: Coroutine function releasing the transport response.
        logger: Logger for skip/close events.
        ctx: Log context of the owning request.

    The stream is an async iterator and an async context manager. Leaving
    the context (or calling :meth:`aclose`) releases the connection.
    """

    def __init__(
        self,
        events: AsyncIterator[ServerSentEvent],
        *,
        idle_timeout: Optional[float] = None,
        on_close: Optional[Callable[[], Awaitable[None]]] = None,
        logger: Optional[logging.Logger] = None,
        ctx: Optional[LogContext] = None,
    ) -> None:
        self._events = events
        self._idle_timeout = idle_timeout
        self._on_close = on_close
        self._logger = logger or get_logger("streaming")
        self._ctx = ctx
        self._finished = False
        self._closed = False
        self.usage: Optional[Usage] = None
        self.received = 0
        self.skipped = 0

    @property
    def finished(self) -> bool:
        return self._finished

    async def receive(self) -> Optional[DeltaChunk]:
        """Return the next decoded chunk, or ``None`` at end of stream.

        Raises:
            RequestTimeoutError: no frame arrived within ``idle_timeout``.
            NetworkError: the transport failed mid-stream.
        """
        while not self._finished:
            frame = await self._next_frame()
            if frame is None:
                self._finished = True
                break
            data = frame.data.strip()
            if data == DONE_SENTINEL:
                self._finished = True
                break
            if not data:
                continue
            chunk = self._decode(data)
            if chunk is None:
                continue
            self.received += 1
            if chunk.usage is not None:
                self.usage = chunk.usage
            return chunk
        return None

    async def _next_frame(self) -> Optional[ServerSentEvent]:
        try:
            if self._idle_timeout is None:
                return await self._events.__anext__()
            return await asyncio.wait_for(self._events.__anext__(), self._idle_timeout)
        except StopAsyncIteration:
            return None
        except asyncio.TimeoutError as e:
            self._finished = True
            raise RequestTimeoutError(
                f"no stream event within {self._idle_timeout}s",
                model=self._ctx.model if self._ctx else None,
                raw=e,
            ) from e
        except httpx.TransportError as e:
            self._finished = True
            raise to_provider_error(e, model=self._ctx.model if self._ctx else None) from e

    def _decode(self, data: str) -> Optional[DeltaChunk]:
        try:
            return DeltaChunk.model_validate(json.loads(data))
        except (ValueError, RecursionError) as e:
            self.skipped += 1
            log_event(
                self._logger,
                "stream.decode_skip",
                self._ctx,
                level=logging.DEBUG,
                error=e.__class__.__name__,
                data_preview=data[:120],
            )
            return None

    # ---- iteration protocol -------------------------------------------
    def __aiter__(self) -> "ChunkStream":
        return self

    async def __anext__(self) -> DeltaChunk:
        chunk = await self.receive()
        if chunk is None:
            raise StopAsyncIteration
        return chunk

    # ---- derived operations -------------------------------------------
    async def for_each(self, callback: ChunkCallback) -> int:
        """Invoke ``callback`` for every remaining chunk; returns the count."""
        count = 0
        async for chunk in self:
            result = callback(chunk)
            if inspect.isawaitable(result):
                await result
            count += 1
        return count

    async def collect_text(self) -> str:
        """Concatenate the text fragments of every remaining chunk."""
        parts: List[str] = []
        async for chunk in self:
            choice = chunk.first_choice()
            if choice is not None and choice.delta.content:
                parts.append(choice.delta.content)
        return "".join(parts)

    async def collect_chunks(self) -> List[DeltaChunk]:
        return [chunk async for chunk in self]

    async def collect_state(self, state: Optional[StreamState] = None) -> StreamState:
        """Fold every remaining chunk into a :class:`StreamState`."""
        result = state if state is not None else StreamState()
        async for chunk in self:
            result.apply(chunk)
        return result

    # ---- lifecycle ----------------------------------------------------
    async def aclose(self) -> None:
        """Finish the stream and release the transport (idempotent)."""
        self._finished = True
        if self._closed:
            return
        self._closed = True
        aclose = getattr(self._events, "aclose", None)
        if aclose is not None:
            await aclose()
        if self._on_close is not None:
            await self._on_close()
        log_event(
            self._logger,
            "stream.end",
            self._ctx,
            level=logging.DEBUG,
            received=self.received,
            skipped=self.skipped,
        )

    async def __aenter__(self) -> "ChunkStream":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


__all__ = ["ChunkStream", "ChunkCallback"]
