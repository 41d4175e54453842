"""
LangGraph research-agent graph factory.

Dependency-injection contract:
  - Receives an IReasoningClient and a ToolRegistry.
  - Never imports ChatOpenAI, ChatBedrock, httpx or langfuse directly.

Flow per inbound human turn:

    START -> start -> canned -> END                     (greeting / "what can you do")
    START -> start -> reasoning -> finish -> END        (terminal answer or ceiling hit)
                                -> announce -> dispatch -> observe -> reasoning ...

The iteration counter lives in the graph state, so it is scoped to the
session's checkpoint thread. It goes up by one per reasoning call and is reset
to zero when a run starts and by every terminal node, so a run that
failed mid-loop never hands its count to the next run on the thread.
"""

import logging
from typing import Any, Optional

from langchain_core.messages import AIMessage, BaseMessage, ToolMessage
from langgraph.graph import END, START, StateGraph

from minsky.application.agent.canned import canned_response, is_about_question
from minsky.application.agent.prompts import (
    ANALYZING_STATUS,
    RESEARCHING_STATUS,
    build_system_prompt,
)
from minsky.application.agent.state import (
    MAX_ITERATIONS,
    AgentState,
    latest_human_query,
    status_turn,
)
from minsky.application.tools.registry import ToolRegistry
from minsky.domain.entities.assistant_output import AssistantOutput, FinalAnswer, ToolRequests
from minsky.domain.entities.tool_call import ToolInvocationRequest
from minsky.domain.ports.llm_port import IReasoningClient

logger = logging.getLogger(__name__)

# Nodes visited per non-terminal iteration: reasoning, announce, dispatch, observe.
# The run also visits start and finish once each.
_NODES_PER_ITERATION = 4


def recursion_limit_for(max_iterations: int) -> int:
    """LangGraph recursion limit large enough that only the ceiling ever stops a run."""
    return _NODES_PER_ITERATION * max_iterations + 2


def to_assistant_message(output: AssistantOutput) -> AIMessage:
    if isinstance(output, ToolRequests):
        return AIMessage(
            content="",
            tool_calls=[
                {
                    "name": r.tool_name,
                    "args": r.arguments,
                    "id": r.invocation_id,
                    "type": "tool_call",
                }
                for r in output.requests
            ],
        )
    if isinstance(output, FinalAnswer):
        return AIMessage(content=output.text)
    raise TypeError(f"Unexpected reasoning output: {output!r}")


def _last_tool_request_turn(messages: list[BaseMessage]) -> Optional[AIMessage]:
    for message in reversed(messages):
        if isinstance(message, AIMessage) and message.tool_calls:
            return message
    return None


def _tool_results_since_last_assistant(messages: list[BaseMessage]) -> list[ToolMessage]:
    results: list[ToolMessage] = []
    for message in reversed(messages):
        if isinstance(message, ToolMessage):
            results.append(message)
        elif isinstance(message, AIMessage):
            break
    results.reverse()
    return results


def build_agent_graph(
    reasoning_client: IReasoningClient,
    registry: ToolRegistry,
    *,
    max_iterations: int = MAX_ITERATIONS,
    checkpointer: Any = None,
    system_prompt: Optional[str] = None,
):
    """Build and compile the research agent graph.

    Args:
        reasoning_client: IReasoningClient implementation, injected.
        registry:         ToolRegistry with every tool the model may request.
        max_iterations:   Ceiling on reasoning calls per inbound turn.
        checkpointer:     LangGraph checkpointer (e.g. MemorySaver) keeping
                          per-session state between runs. Optional.
        system_prompt:    Fixed system prompt; rendered with today's date on
                          every call when omitted.

    Returns:
        Compiled LangGraph CompiledStateGraph ready for invoke()/astream() calls.
    """
    if max_iterations < 1:
        raise ValueError("max_iterations must be at least 1")

    descriptors = registry.descriptors()

    def start_node(state: AgentState) -> dict:
        return {"iteration_count": 0}

    def route_input(state: AgentState) -> str:
        if is_about_question(latest_human_query(state.get("messages", []))):
            return "canned"
        return "reasoning"

    def canned_node(state: AgentState) -> dict:
        response = canned_response(state.get("messages", []))
        return {"messages": [response] if response else [], "iteration_count": 0}

    def reasoning_node(state: AgentState) -> dict:
        """Reasoning step: one call to the reasoning client, counted either way."""
        output = reasoning_client.respond(
            system_prompt or build_system_prompt(),
            state.get("messages", []),
            descriptors,
        )
        count = state.get("iteration_count", 0) + 1
        logger.debug("Reasoning call %d/%d returned %s", count, max_iterations, type(output).__name__)
        return {"messages": [to_assistant_message(output)], "iteration_count": count}

    def route_reasoning(state: AgentState) -> str:
        """Route: ceiling first, then tool requests, otherwise end."""
        if state.get("iteration_count", 0) >= max_iterations:
            return "finish"
        last_message = state.get("messages", [])[-1]
        if isinstance(last_message, AIMessage) and last_message.tool_calls:
            return "announce"
        return "finish"

    def announce_node(state: AgentState) -> dict:
        return {"messages": [status_turn(RESEARCHING_STATUS)]}

    def dispatch_node(state: AgentState) -> dict:
        """Action step: resolve every tool request of the latest assistant turn."""
        turn = _last_tool_request_turn(state.get("messages", []))
        if turn is None:
            return {"messages": []}
        requests = [
            ToolInvocationRequest(
                invocation_id=call["id"],
                tool_name=call["name"],
                arguments=dict(call.get("args") or {}),
            )
            for call in turn.tool_calls
        ]
        results = registry.dispatch_all(requests)
        return {
            "messages": [
                ToolMessage(
                    content=result.content,
                    tool_call_id=result.invocation_id,
                    name=result.tool_name,
                    status=result.status,
                )
                for result in results
            ]
        }

    def observe_node(state: AgentState) -> dict:
        if _tool_results_since_last_assistant(state.get("messages", [])):
            return {"messages": [status_turn(ANALYZING_STATUS)]}
        return {"messages": []}

    def finish_node(state: AgentState) -> dict:
        if state.get("iteration_count", 0) >= max_iterations:
            logger.warning("Max iterations (%d) reached, forcing end", max_iterations)
        return {"iteration_count": 0}

    workflow = StateGraph(AgentState)
    workflow.add_node("start", start_node)
    workflow.add_node("canned", canned_node)
    workflow.add_node("reasoning", reasoning_node)
    workflow.add_node("announce", announce_node)
    workflow.add_node("dispatch", dispatch_node)
    workflow.add_node("observe", observe_node)
    workflow.add_node("finish", finish_node)

    workflow.add_edge(START, "start")
    workflow.add_conditional_edges("start", route_input, ["canned", "reasoning"])
    workflow.add_edge("canned", END)
    workflow.add_conditional_edges("reasoning", route_reasoning, ["announce", "finish"])
    workflow.add_edge("announce", "dispatch")
    workflow.add_edge("dispatch", "observe")
    workflow.add_edge("observe", "reasoning")
    workflow.add_edge("finish", END)

    return workflow.compile(checkpointer=checkpointer, name="Minsky")
