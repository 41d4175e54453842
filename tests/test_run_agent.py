import pytest

from fakes import ScriptedReasoningClient, search_request
from minsky.application.agent.prompts import ABOUT_RESPONSE, RESEARCHING_STATUS
from minsky.application.use_cases.run_agent import RunAgentUseCase
from minsky.domain.entities.assistant_output import FinalAnswer, ToolRequests
from minsky.infrastructure.observability.langfuse_adapter import NoopObservabilityHandler


async def _collect(use_case, query, session_id=None):
    return [event async for event in use_case.execute(query, session_id=session_id)]


async def test_streams_session_then_turns(make_graph):
    client = ScriptedReasoningClient(
        [ToolRequests((search_request("NVIDIA tail risks", "finance", "call_1"),)), FinalAnswer("Concentration risk.")]
    )
    use_case = RunAgentUseCase(make_graph(client), NoopObservabilityHandler())

    events = await _collect(use_case, "What are NVIDIA's tail risks?", session_id="abc")

    assert events[0] == {"node": "session", "content": "abc", "type": "session"}
    assert [e["node"] for e in events[1:]] == ["reasoning", "announce", "dispatch", "observe", "reasoning"]
    assert events[1]["tool_calls"] == ["search_perplexity"]
    assert events[2]["content"] == RESEARCHING_STATUS
    assert events[3]["type"] == "ToolMessage"
    assert events[-1] == {"node": "reasoning", "content": "Concentration risk.", "type": "AIMessage"}


async def test_generates_session_id_when_missing(make_graph):
    use_case = RunAgentUseCase(make_graph(ScriptedReasoningClient([])), NoopObservabilityHandler())
    events = await _collect(use_case, "hello")

    assert events[0]["type"] == "session" and events[0]["content"]
    assert events[1] == {"node": "canned", "content": ABOUT_RESPONSE, "type": "AIMessage"}


async def test_history_replays_every_turn(make_graph):
    client = ScriptedReasoningClient([ToolRequests((search_request("BTC", "news", "call_1"),)), FinalAnswer("BTC answer")])
    use_case = RunAgentUseCase(make_graph(client), NoopObservabilityHandler())
    await _collect(use_case, "BTC news?", session_id="s1")

    history = use_case.history("s1")

    assert [turn["role"] for turn in history] == ["human", "assistant", "status", "tool", "status", "assistant"]
    assert history[1]["tool_calls"][0]["id"] == "call_1"
    assert history[3]["tool_call_id"] == "call_1" and history[3]["status"] == "success"
    assert use_case.history("unknown") == []


async def test_blank_query_is_rejected(make_graph):
    use_case = RunAgentUseCase(make_graph(ScriptedReasoningClient([])), NoopObservabilityHandler())
    with pytest.raises(ValueError):
        await _collect(use_case, "   ")
