"""Streaming package for the gateway client.

Exposes SSE framing, the chunk decoder, the delta accumulator and the
stream controller under a single namespace.
"""

from .sse import ServerSentEvent, aiter_sse_events
from .accumulator import (
    StreamState,
    ToolCallAccumulator,
    completed_tool_calls,
    fold_chunks,
    merge_chunk,
)
from .decoder import ChunkStream
from .stream_controller import StreamController

__all__ = [
    "ServerSentEvent",
    "aiter_sse_events",
    "StreamState",
    "ToolCallAccumulator",
    "completed_tool_calls",
    "fold_chunks",
    "merge_chunk",
    "ChunkStream",
    "StreamController",
]
