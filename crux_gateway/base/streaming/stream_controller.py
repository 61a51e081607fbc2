"""Push-based pump around a ``ChunkStream`` with cooperative cancellation.

The decoder itself is pull-based. ``StreamController`` is the boundary
wrapper that drains it, folds every chunk into its own
:class:`StreamState` and pushes updates to a callback, optionally from a
background ``asyncio`` task.

Cancellation is a checked flag (:class:`CancellationToken`). It is polled
before each chunk is applied, so once a cancel is observed the state is
never mutated again. Cancelling does not close the transport; whoever owns
the stream still closes it (``async with stream`` or ``aclose()``).
"""
from __future__ import annotations

import asyncio
import inspect
from typing import Awaitable, Callable, Optional, Union

from ..cancellation import CancellationToken
from ..dto.delta import DeltaChunk
from .accumulator import StreamState
from .decoder import ChunkStream

UpdateCallback = Callable[[DeltaChunk, StreamState], Union[None, Awaitable[None]]]


class StreamController:
    """Drain one stream into a state, honouring a cancel flag.

    Responsibilities:
      * Apply chunks to ``state`` in arrival order.
      * Push ``(chunk, state)`` to an optional update callback.
      * Stop without further mutation once cancellation is observed.
    """

    def __init__(self, stream: ChunkStream, token: CancellationToken | None = None) -> None:
        self._stream = stream
        self._token = token or CancellationToken()
        self._state = StreamState()
        self._task: Optional[asyncio.Task] = None

    @property
    def state(self) -> StreamState:
        return self._state

    @property
    def token(self) -> CancellationToken:
        return self._token

    @property
    def cancelled(self) -> bool:
        return self._token.cancelled

    @property
    def finished(self) -> bool:
        """Whether the stream reached its end (sentinel, exhaustion or finish reason)."""
        return self._state.finished or self._stream.finished

    def cancel(self, reason: str | None = None) -> None:
        """Request cooperative cancellation; safe to call repeatedly."""
        self._token.cancel(reason)

    async def run(self, on_update: Optional[UpdateCallback] = None) -> StreamState:
        """Pump the stream until it ends or cancellation is observed."""
        while not self._token.cancelled:
            chunk = await self._stream.receive()
            if chunk is None or self._token.cancelled:
                break
            self._state.apply(chunk)
            if on_update is not None:
                result = on_update(chunk, self._state)
                if inspect.isawaitable(result):
                    await result
        return self._state

    def start(self, on_update: Optional[UpdateCallback] = None) -> asyncio.Task:
        """Launch :meth:`run` as a background task (one per stream)."""
        if self._task is None:
            self._task = asyncio.ensure_future(self.run(on_update))
        return self._task


__all__ = ["StreamController", "UpdateCallback"]
