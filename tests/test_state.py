import pytest
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage, ToolMessage

from minsky.application.agent.state import (
    append_turns,
    is_status_turn,
    latest_human_query,
    pending_invocation_ids,
    status_turn,
)


def _tool_request(*ids):
    return AIMessage(
        content="",
        tool_calls=[{"name": "search_perplexity", "args": {}, "id": i, "type": "tool_call"} for i in ids],
    )


def test_append_concatenates_in_emission_order():
    first = HumanMessage(content="q1")
    merged = append_turns([first], [status_turn("a"), status_turn("b")])
    assert [m.content for m in merged] == ["q1", "a", "b"]


def test_append_never_deduplicates_by_id():
    turn = AIMessage(content="same", id="fixed-id")
    merged = append_turns([turn], [AIMessage(content="same", id="fixed-id")])
    assert len(merged) == 2


def test_append_accepts_a_single_turn_and_leaves_existing_untouched():
    existing = [HumanMessage(content="q")]
    merged = append_turns(existing, AIMessage(content="a"))
    assert len(merged) == 2
    assert len(existing) == 1


def test_append_converts_role_dicts():
    merged = append_turns([], [{"role": "user", "content": "hello"}])
    assert isinstance(merged[0], HumanMessage)


def test_append_rejects_unsupported_roles():
    with pytest.raises(TypeError):
        append_turns([], [SystemMessage(content="nope")])


def test_tool_result_must_answer_a_pending_invocation():
    history = [HumanMessage(content="q"), _tool_request("call_1")]
    merged = append_turns(history, [ToolMessage(content="{}", tool_call_id="call_1")])
    assert pending_invocation_ids(merged) == []

    with pytest.raises(ValueError):
        append_turns(history, [ToolMessage(content="{}", tool_call_id="call_9")])
    with pytest.raises(ValueError):
        append_turns(merged, [ToolMessage(content="{}", tool_call_id="call_1")])


def test_pending_ids_keep_request_order():
    history = [_tool_request("b", "a"), ToolMessage(content="{}", tool_call_id="b")]
    assert pending_invocation_ids(history) == ["a"]


def test_latest_human_query_scans_backwards():
    messages = [
        HumanMessage(content="first"),
        AIMessage(content="answer"),
        HumanMessage(content="second"),
        _tool_request("call_1"),
        status_turn("Researching"),
    ]
    assert latest_human_query(messages) == "second"


def test_latest_human_query_without_human_turn():
    assert latest_human_query([]) == ""
    assert latest_human_query([AIMessage(content="hi")]) == ""


def test_latest_human_query_encodes_structured_content():
    message = HumanMessage(content=[{"type": "text", "text": "hello"}])
    assert latest_human_query([message]) == '[{"type": "text", "text": "hello"}]'


def test_status_turns_are_named_assistant_turns():
    turn = status_turn("Researching")
    assert isinstance(turn, AIMessage)
    assert is_status_turn(turn)
    assert not is_status_turn(AIMessage(content="Researching"))
