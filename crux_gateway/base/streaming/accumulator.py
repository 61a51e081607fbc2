"""Delta accumulation for streamed chat completions.

Folds decoded :class:`DeltaChunk` values into a :class:`StreamState`: text
fragments are concatenated in arrival order and tool-call fragments are
merged into per-index accumulators until they form complete tool calls.

Merge rules (per chunk):

1. ``chunk_count`` is incremented.
2. A chunk without choices changes nothing else.
3. Only ``choices[0]`` is read.
4. ``delta.content`` is appended to ``content``.
5. Each tool-call delta is merged into the accumulator at its ``index``.
   Missing positions up to that index are back-filled with empty
   accumulators so the list stays dense and positionally stable.
   Deltas whose index exceeds ``MAX_TOOL_CALL_INDEX`` are dropped.
   ``id``/``type``/``name`` overwrite; ``arguments`` fragments append.
6. A ``finish_reason`` marks the state finished. A finished state is
   terminal: further chunks leave it untouched.

Argument fragments only form valid JSON once fully concatenated; an invalid
prefix is expected mid-stream and is never an error. Accumulators that never
received both an ``id`` and a function name are left out of
:func:`completed_tool_calls` without complaint.
"""
from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from ...config.defaults import MAX_TOOL_CALL_INDEX
from ..dto.delta import DeltaChunk, ToolCallDelta
from ..dto.tool_call import DEFAULT_TOOL_TYPE, FunctionCall, ToolCall
from ..logging import get_logger, log_event
from ..models_parts.message import Message


@dataclass
class ToolCallAccumulator:
    """Partial tool call collected from deltas sharing one ``index``."""

    index: int
    id: Optional[str] = None
    type: Optional[str] = None
    function_name: Optional[str] = None
    function_arguments: str = ""

    @property
    def is_complete(self) -> bool:
        return bool(self.id) and bool(self.function_name)

    def merge(self, delta: ToolCallDelta) -> None:
        if delta.id is not None:
            self.id = delta.id
        if delta.type is not None:
            self.type = delta.type
        if delta.function is not None:
            if delta.function.name is not None:
                self.function_name = delta.function.name
            if delta.function.arguments is not None:
                self.function_arguments += delta.function.arguments

    def to_tool_call(self) -> Optional[ToolCall]:
        """Return the finished ``ToolCall`` or ``None`` while incomplete."""
        if not self.is_complete:
            return None
        return ToolCall(
            id=self.id,
            type=self.type or DEFAULT_TOOL_TYPE,
            function=FunctionCall(name=self.function_name, arguments=self.function_arguments),
        )


@dataclass
class StreamState:
    """Running merge of every chunk seen on one stream.

    Owned by the single consumer draining that stream; never shared.
    """

    content: str = ""
    chunk_count: int = 0
    tool_calls: List[ToolCallAccumulator] = field(default_factory=list)
    finished: bool = False
    finish_reason: Optional[str] = None
    role: Optional[str] = None
    id: Optional[str] = None
    model: Optional[str] = None

    def apply(self, chunk: DeltaChunk) -> "StreamState":
        """Merge ``chunk`` into this state in place and return ``self``."""
        if self.finished:
            return self
        self.chunk_count += 1
        if self.id is None:
            self.id = chunk.id
        if self.model is None and chunk.model:
            self.model = chunk.model
        choice = chunk.first_choice()
        if choice is None:
            return self
        delta = choice.delta
        if delta.role is not None and self.role is None:
            self.role = delta.role
        if delta.content is not None:
            self.content += delta.content
        for tc_delta in delta.tool_calls or ():
            if tc_delta.index > MAX_TOOL_CALL_INDEX:
                log_event(
                    get_logger("streaming"),
                    "stream.tool_index_skip",
                    level=logging.DEBUG,
                    index=tc_delta.index,
                    limit=MAX_TOOL_CALL_INDEX,
                )
                continue
            self._accumulator_at(tc_delta.index).merge(tc_delta)
        if choice.finish_reason is not None:
            self.finished = True
            self.finish_reason = choice.finish_reason
        return self

    def _accumulator_at(self, index: int) -> ToolCallAccumulator:
        while len(self.tool_calls) <= index:
            self.tool_calls.append(ToolCallAccumulator(index=len(self.tool_calls)))
        return self.tool_calls[index]

    def completed_tool_calls(self) -> List[ToolCall]:
        return completed_tool_calls(self)

    def to_message(self) -> Message:
        """Assistant message for the conversation history of the next turn."""
        return Message.assistant(
            content=self.content or None,
            tool_calls=self.completed_tool_calls() or None,
        )


def merge_chunk(state: StreamState, chunk: DeltaChunk) -> StreamState:
    """Return a new state with ``chunk`` merged; ``state`` is not modified."""
    return copy.deepcopy(state).apply(chunk)


def completed_tool_calls(state: StreamState) -> List[ToolCall]:
    """Tool calls whose ``id`` and function name have both arrived, by index."""
    calls: List[ToolCall] = []
    for acc in state.tool_calls:
        tool_call = acc.to_tool_call()
        if tool_call is not None:
            calls.append(tool_call)
    return calls


def fold_chunks(chunks: Iterable[DeltaChunk], state: Optional[StreamState] = None) -> StreamState:
    """Fold ``chunks`` left to right into ``state`` (a fresh one by default)."""
    result = state if state is not None else StreamState()
    for chunk in chunks:
        result.apply(chunk)
    return result


__all__ = [
    "ToolCallAccumulator",
    "StreamState",
    "merge_chunk",
    "completed_tool_calls",
    "fold_chunks",
]
