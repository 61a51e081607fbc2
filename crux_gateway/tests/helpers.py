"""Builders for wire payloads used across the gateway test suite.

Chunks, completions and SSE bodies are produced as plain dicts/bytes so the
tests exercise the real decoding path instead of constructing DTOs by hand.
"""
from __future__ import annotations

import json
from typing import Any, AsyncIterator, Dict, List, Optional, Union

from crux_gateway.base.dto.delta import DeltaChunk
from crux_gateway.base.streaming.sse import ServerSentEvent

TEST_API_KEY = "sk-or-unit-key"  # pragma: allowlist secret - fake key


def chunk_payload(
    content: Optional[str] = None,
    *,
    id: str = "gen-1",
    model: str = "openai/gpt-4o",
    role: Optional[str] = None,
    tool_calls: Optional[List[Dict[str, Any]]] = None,
    finish_reason: Optional[str] = None,
    usage: Optional[Dict[str, int]] = None,
    choices: bool = True,
) -> Dict[str, Any]:
    """Return one ``chat.completion.chunk`` object as sent by the gateway."""
    body: Dict[str, Any] = {"id": id, "object": "chat.completion.chunk", "model": model, "choices": []}
    if choices:
        delta: Dict[str, Any] = {}
        if role is not None:
            delta["role"] = role
        if content is not None:
            delta["content"] = content
        if tool_calls is not None:
            delta["tool_calls"] = tool_calls
        body["choices"].append({"index": 0, "delta": delta, "finish_reason": finish_reason})
    if usage is not None:
        body["usage"] = usage
    return body


def delta_chunk(content: Optional[str] = None, **kwargs: Any) -> DeltaChunk:
    return DeltaChunk.model_validate(chunk_payload(content, **kwargs))


def tool_delta(
    index: int,
    *,
    id: Optional[str] = None,
    name: Optional[str] = None,
    arguments: Optional[str] = None,
    type: Optional[str] = None,
) -> Dict[str, Any]:
    fragment: Dict[str, Any] = {"index": index}
    if id is not None:
        fragment["id"] = id
    if type is not None:
        fragment["type"] = type
    function: Dict[str, Any] = {}
    if name is not None:
        function["name"] = name
    if arguments is not None:
        function["arguments"] = arguments
    if function:
        fragment["function"] = function
    return fragment


def sse_body(*frames: Union[str, Dict[str, Any]], done: bool = True) -> bytes:
    """Encode frames as a ``text/event-stream`` body.

    Dicts are JSON encoded; strings are sent verbatim as ``data``.
    """
    lines: List[str] = []
    for frame in frames:
        data = json.dumps(frame) if isinstance(frame, dict) else frame
        lines.append(f"data: {data}\n\n")
    if done:
        lines.append("data: [DONE]\n\n")
    return "".join(lines).encode("utf-8")


async def events_from(*datas: str) -> AsyncIterator[ServerSentEvent]:
    """Yield one SSE frame per ``data`` string."""
    for data in datas:
        yield ServerSentEvent(data=data)


def completion_payload(
    text: Optional[str] = "hello",
    *,
    id: str = "gen-42",
    finish_reason: str = "stop",
    tool_calls: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    message: Dict[str, Any] = {"role": "assistant", "content": text}
    if tool_calls is not None:
        message["tool_calls"] = tool_calls
    return {
        "id": id,
        "object": "chat.completion",
        "model": "openai/gpt-4o",
        "choices": [{"index": 0, "message": message, "finish_reason": finish_reason}],
        "usage": {"prompt_tokens": 5, "completion_tokens": 2, "total_tokens": 7},
    }
