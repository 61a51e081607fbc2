"""Merge-rule tests for ``StreamState`` and ``merge_chunk``."""
from __future__ import annotations

import json

from crux_gateway.base.streaming import (
    StreamState,
    completed_tool_calls,
    fold_chunks,
    merge_chunk,
)
from crux_gateway.config.defaults import MAX_TOOL_CALL_INDEX

from ..helpers import delta_chunk, tool_delta


def _fold(*fragments: str) -> str:
    return fold_chunks(delta_chunk(f) for f in fragments).content


def test_text_fragments_concatenate_in_arrival_order():
    assert _fold("Hel", "lo", " world") == "Hello world"  # nosec B101 - asserts are fine in tests
    # Reordering the same fragments changes the result.
    assert _fold("lo", "Hel", " world") != _fold("Hel", "lo", " world")  # nosec B101 - asserts are fine in tests


def test_tool_call_fragments_reassemble():
    state = fold_chunks(
        [
            delta_chunk(tool_calls=[tool_delta(0, id="call_1", name="search", arguments='{"q":"')]),
            delta_chunk(tool_calls=[tool_delta(0, arguments='hi"}')]),
        ]
    )
    calls = completed_tool_calls(state)
    assert len(calls) == 1  # nosec B101 - asserts are fine in tests
    assert calls[0].id == "call_1"  # nosec B101 - asserts are fine in tests
    assert calls[0].type == "function"  # nosec B101 - asserts are fine in tests
    assert calls[0].function.name == "search"  # nosec B101 - asserts are fine in tests
    assert calls[0].function.arguments == '{"q":"hi"}'  # nosec B101 - asserts are fine in tests
    assert calls[0].function.parsed_arguments() == {"q": "hi"}  # nosec B101 - asserts are fine in tests


def test_arguments_only_accumulator_is_never_completed():
    state = fold_chunks(
        [
            delta_chunk(tool_calls=[tool_delta(0, arguments='{"a"')]),
            delta_chunk(tool_calls=[tool_delta(0, arguments=": 1}")]),
        ]
    )
    assert state.tool_calls[0].function_arguments == '{"a": 1}'  # nosec B101 - asserts are fine in tests
    assert completed_tool_calls(state) == []  # nosec B101 - asserts are fine in tests


def test_name_without_id_is_incomplete():
    state = fold_chunks([delta_chunk(tool_calls=[tool_delta(0, name="lookup")])])
    assert not state.tool_calls[0].is_complete  # nosec B101 - asserts are fine in tests
    assert state.completed_tool_calls() == []  # nosec B101 - asserts are fine in tests


def test_sparse_index_back_fills_incomplete_accumulators():
    state = fold_chunks([delta_chunk(tool_calls=[tool_delta(2, id="call_c", name="c", arguments="{}")])])
    assert len(state.tool_calls) == 3  # nosec B101 - asserts are fine in tests
    assert [acc.index for acc in state.tool_calls] == [0, 1, 2]  # nosec B101 - asserts are fine in tests
    assert not state.tool_calls[0].is_complete  # nosec B101 - asserts are fine in tests
    assert not state.tool_calls[1].is_complete  # nosec B101 - asserts are fine in tests
    assert [c.id for c in completed_tool_calls(state)] == ["call_c"]  # nosec B101 - asserts are fine in tests


def test_out_of_range_tool_index_is_dropped():
    state = fold_chunks(
        [
            delta_chunk(tool_calls=[tool_delta(3_000_000, id="call_x", name="x", arguments="{}")]),
            delta_chunk(tool_calls=[tool_delta(MAX_TOOL_CALL_INDEX + 1, arguments="{}")]),
            delta_chunk(tool_calls=[tool_delta(0, id="call_a", name="a", arguments="{}")]),
        ]
    )
    assert len(state.tool_calls) == 1  # nosec B101 - asserts are fine in tests
    assert state.chunk_count == 3  # nosec B101 - asserts are fine in tests
    assert [c.id for c in completed_tool_calls(state)] == ["call_a"]  # nosec B101 - asserts are fine in tests


def test_highest_allowed_tool_index_is_merged():
    state = fold_chunks([delta_chunk(tool_calls=[tool_delta(MAX_TOOL_CALL_INDEX, id="call_z", name="z")])])
    assert len(state.tool_calls) == MAX_TOOL_CALL_INDEX + 1  # nosec B101 - asserts are fine in tests
    assert [c.id for c in completed_tool_calls(state)] == ["call_z"]  # nosec B101 - asserts are fine in tests


def test_dropped_tool_index_is_logged_at_debug(log_records):
    fold_chunks([delta_chunk(tool_calls=[tool_delta(MAX_TOOL_CALL_INDEX + 5, arguments="x")])])
    skips = [json.loads(r.getMessage()) for r in log_records if "stream.tool_index_skip" in r.getMessage()]
    assert len(skips) == 1  # nosec B101 - asserts are fine in tests
    assert skips[0]["index"] == MAX_TOOL_CALL_INDEX + 5  # nosec B101 - asserts are fine in tests
    assert skips[0]["limit"] == MAX_TOOL_CALL_INDEX  # nosec B101 - asserts are fine in tests


def test_parallel_tool_calls_keep_positions():
    state = fold_chunks(
        [
            delta_chunk(tool_calls=[tool_delta(0, id="a", name="f", arguments="{"), tool_delta(1, id="b", name="g")]),
            delta_chunk(tool_calls=[tool_delta(1, arguments="{}"), tool_delta(0, arguments="}")]),
        ]
    )
    calls = completed_tool_calls(state)
    assert [(c.id, c.function.arguments) for c in calls] == [("a", "{}"), ("b", "{}")]  # nosec B101


def test_explicit_type_is_kept():
    state = fold_chunks([delta_chunk(tool_calls=[tool_delta(0, id="x", name="n", type="custom")])])
    assert completed_tool_calls(state)[0].type == "custom"  # nosec B101 - asserts are fine in tests


def test_merge_chunk_does_not_mutate_input():
    original = fold_chunks([delta_chunk("a", tool_calls=[tool_delta(0, id="c", name="n", arguments="{")])])
    snapshot = json.dumps(
        [original.content, original.chunk_count, [acc.function_arguments for acc in original.tool_calls]]
    )
    merged = merge_chunk(original, delta_chunk("b", tool_calls=[tool_delta(0, arguments="}")]))
    assert merged is not original  # nosec B101 - asserts are fine in tests
    assert merged.content == "ab" and merged.tool_calls[0].function_arguments == "{}"  # nosec B101
    assert json.dumps(
        [original.content, original.chunk_count, [acc.function_arguments for acc in original.tool_calls]]
    ) == snapshot  # nosec B101 - asserts are fine in tests


def test_empty_choices_only_count_the_chunk():
    state = merge_chunk(StreamState(), delta_chunk(choices=False))
    assert state.chunk_count == 1  # nosec B101 - asserts are fine in tests
    assert state.content == "" and state.tool_calls == [] and not state.finished  # nosec B101


def test_finish_reason_makes_state_terminal():
    state = fold_chunks(
        [
            delta_chunk("done", role="assistant"),
            delta_chunk(finish_reason="stop"),
            delta_chunk("ignored"),
        ]
    )
    assert state.finished and state.finish_reason == "stop"  # nosec B101 - asserts are fine in tests
    assert state.content == "done"  # nosec B101 - asserts are fine in tests
    assert state.chunk_count == 2  # nosec B101 - asserts are fine in tests
    assert state.role == "assistant"  # nosec B101 - asserts are fine in tests


def test_first_chunk_sets_identity():
    state = fold_chunks([delta_chunk("a", id="gen-9", model="m1"), delta_chunk("b", id="gen-10", model="m2")])
    assert state.id == "gen-9" and state.model == "m1"  # nosec B101 - asserts are fine in tests


def test_to_message_carries_content_and_completed_calls():
    state = fold_chunks(
        [
            delta_chunk("Let me check."),
            delta_chunk(tool_calls=[tool_delta(0, id="call_1", name="search", arguments='{"q":"x"}')]),
            delta_chunk(tool_calls=[tool_delta(1, arguments="{}")]),
            delta_chunk(finish_reason="tool_calls"),
        ]
    )
    message = state.to_message()
    assert message.role == "assistant"  # nosec B101 - asserts are fine in tests
    assert message.content == "Let me check."  # nosec B101 - asserts are fine in tests
    assert [c.id for c in message.tool_calls] == ["call_1"]  # nosec B101 - asserts are fine in tests
    assert message.to_dict()["tool_calls"][0]["function"]["name"] == "search"  # nosec B101


def test_to_message_without_content_or_calls():
    message = StreamState().to_message()
    assert message.content is None and message.tool_calls is None  # nosec B101 - asserts are fine in tests
