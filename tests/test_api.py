import json

from fastapi.testclient import TestClient

from fakes import ScriptedReasoningClient
from minsky.application.agent.prompts import ABOUT_RESPONSE
from minsky.application.use_cases.run_agent import RunAgentUseCase
from minsky.domain.entities.assistant_output import FinalAnswer
from minsky.domain.errors import ReasoningCallError
from minsky.infrastructure.entrypoints.fastapi_app import create_app
from minsky.infrastructure.observability.langfuse_adapter import NoopObservabilityHandler


def _client(make_graph, outputs):
    use_case = RunAgentUseCase(make_graph(ScriptedReasoningClient(outputs)), NoopObservabilityHandler())
    return TestClient(create_app(use_case))


def _events(response):
    lines = [line[len("data: "):] for line in response.text.splitlines() if line.startswith("data: ")]
    assert lines[-1] == "[DONE]"
    return [json.loads(line) for line in lines[:-1]]


def test_health(make_graph):
    assert _client(make_graph, []).get("/health").json() == {"status": "ok"}


def test_query_streams_events(make_graph):
    client = _client(make_graph, [FinalAnswer("Gold is not a perfect hedge.")])
    response = client.post("/query", json={"prompt": "Is gold a hedge?", "session_id": "s1"})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/event-stream")
    events = _events(response)
    assert events[0]["content"] == "s1"
    assert events[-1]["content"] == "Gold is not a perfect hedge."


def test_reasoning_failure_becomes_error_event(make_graph):
    client = _client(make_graph, [ReasoningCallError("backend down")])
    events = _events(client.post("/query", json={"prompt": "Is gold a hedge?"}))
    assert events[-1] == {"node": "error", "content": "backend down", "type": "error"}


def test_blank_prompt_is_rejected(make_graph):
    client = _client(make_graph, [])
    assert client.post("/query", json={"prompt": ""}).status_code == 422
    assert client.post("/query", json={"prompt": "   "}).status_code == 422


def test_session_messages(make_graph):
    client = _client(make_graph, [])
    client.post("/query", json={"prompt": "hi", "session_id": "greet"})

    body = client.get("/sessions/greet/messages").json()
    assert body["session_id"] == "greet"
    assert [m["role"] for m in body["messages"]] == ["human", "assistant"]
    assert body["messages"][1]["content"] == ABOUT_RESPONSE


def test_shutdown_closes_the_research_provider(make_graph, research_provider):
    use_case = RunAgentUseCase(
        make_graph(ScriptedReasoningClient([])),
        NoopObservabilityHandler(),
        research_provider=research_provider,
    )
    with TestClient(create_app(use_case)) as client:
        assert client.get("/health").status_code == 200
        assert not research_provider.closed
    assert research_provider.closed
