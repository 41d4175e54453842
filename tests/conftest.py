from typing import Any, Callable

import pytest
from langgraph.checkpoint.memory import MemorySaver

from fakes import FakeResearchProvider
from minsky.application.agent.graph import build_agent_graph
from minsky.domain.ports.llm_port import IReasoningClient
from minsky.infrastructure.entrypoints.tool_registry import create_tools


@pytest.fixture
def research_provider() -> FakeResearchProvider:
    return FakeResearchProvider()


@pytest.fixture
def registry(research_provider):
    return create_tools(research_provider)


@pytest.fixture
def make_graph(registry) -> Callable:
    def _make(client: IReasoningClient, max_iterations: int = 20, checkpointer: Any = None):
        return build_agent_graph(
            client,
            registry,
            max_iterations=max_iterations,
            checkpointer=checkpointer or MemorySaver(),
            system_prompt="You are a test agent.",
        )

    return _make
