"""Framing tests for ``aiter_sse_events`` over raw text lines."""
from __future__ import annotations

from typing import AsyncIterator, List

import pytest

from crux_gateway.base.streaming.sse import ServerSentEvent, aiter_sse_events


async def _lines(*lines: str) -> AsyncIterator[str]:
    for line in lines:
        yield line


async def _collect(*lines: str) -> List[ServerSentEvent]:
    return [event async for event in aiter_sse_events(_lines(*lines))]


@pytest.mark.asyncio
async def test_blank_line_dispatches_frames():
    events = await _collect("data: one", "", "data: two", "")
    assert [e.data for e in events] == ["one", "two"]  # nosec B101 - asserts are fine in tests
    assert all(e.event == "message" for e in events)  # nosec B101 - asserts are fine in tests


@pytest.mark.asyncio
async def test_comment_lines_are_dropped():
    events = await _collect(": OPENROUTER PROCESSING", "", "data: x", "")
    assert [e.data for e in events] == ["x"]  # nosec B101 - asserts are fine in tests


@pytest.mark.asyncio
async def test_multiple_data_lines_join_with_newline():
    events = await _collect("data: {\"a\":", "data: 1}", "")
    assert events[0].data == "{\"a\":\n1}"  # nosec B101 - asserts are fine in tests


@pytest.mark.asyncio
async def test_event_id_and_retry_fields():
    events = await _collect("event: ping", "id: 7", "retry: 1500", "retry: soon", "data:", "")
    assert events == [ServerSentEvent(event="ping", data="", id="7", retry=1500)]  # nosec B101 - asserts are fine in tests


@pytest.mark.asyncio
async def test_pending_frame_dispatched_at_end_of_input():
    events = await _collect("data: a", "", "data: tail")
    assert [e.data for e in events] == ["a", "tail"]  # nosec B101 - asserts are fine in tests


@pytest.mark.asyncio
async def test_crlf_and_missing_space_are_tolerated():
    events = await _collect("data:{\"k\":1}\r\n", "\r\n")
    assert events[0].data == "{\"k\":1}"  # nosec B101 - asserts are fine in tests


@pytest.mark.asyncio
async def test_blank_lines_without_fields_dispatch_nothing():
    assert await _collect("", "", ": keep-alive", "") == []  # nosec B101 - asserts are fine in tests
