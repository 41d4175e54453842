"""
LangGraph agent state and the conversation-store merge policy.
langgraph / langchain_core are the orchestration framework and are allowed in
the application layer.

A conversation is the ordered list of turns (HumanMessage, AIMessage,
ToolMessage) plus an iteration counter. Both live in the graph state, so with a
checkpointer they are scoped to one session (thread_id) and never shared
between sessions.
"""

import json
from typing import Annotated, Any, Optional, TypedDict, Union

from langchain_core.messages import (
    AIMessage,
    BaseMessage,
    HumanMessage,
    ToolMessage,
    convert_to_messages,
)

MAX_ITERATIONS = 20

STATUS_NAME = "status"

_TURN_TYPES = (HumanMessage, AIMessage, ToolMessage)


def pending_invocation_ids(messages: list[BaseMessage]) -> list[str]:
    """Invocation ids requested by assistant turns that have no tool-result yet."""
    pending: dict[str, None] = {}
    for message in messages:
        if isinstance(message, AIMessage):
            pending.update((call["id"], None) for call in message.tool_calls)
        elif isinstance(message, ToolMessage):
            pending.pop(message.tool_call_id, None)
    return list(pending)


def append_turns(
    existing: Optional[list[BaseMessage]],
    new: Union[BaseMessage, list[Any], None],
) -> list[BaseMessage]:
    """Reducer for AgentState.messages.

    Concatenates *new* after *existing* in emission order. Unlike add_messages
    it never replaces or deduplicates by message id.

    Raises:
        TypeError:  a turn is not a human, assistant or tool-result message.
        ValueError: a tool-result does not answer a pending invocation.
    """
    merged = list(existing or [])
    if new is None:
        return merged
    if not isinstance(new, list):
        new = [new]

    pending = set(pending_invocation_ids(merged))
    for turn in convert_to_messages(new):
        if not isinstance(turn, _TURN_TYPES):
            raise TypeError(
                f"Unsupported turn type {turn.__class__.__name__}; expected "
                "HumanMessage, AIMessage or ToolMessage"
            )
        if isinstance(turn, AIMessage):
            pending.update(call["id"] for call in turn.tool_calls)
        elif isinstance(turn, ToolMessage):
            if turn.tool_call_id not in pending:
                raise ValueError(
                    f"Tool result references unknown or already answered "
                    f"invocation {turn.tool_call_id!r}"
                )
            pending.discard(turn.tool_call_id)
        merged.append(turn)
    return merged


def latest_human_query(messages: list[BaseMessage]) -> str:
    """Text of the most recent human turn, or "" when there is none."""
    for message in reversed(messages):
        if isinstance(message, HumanMessage):
            content = message.content
            return content if isinstance(content, str) else json.dumps(content)
    return ""


def status_turn(text: str) -> AIMessage:
    return AIMessage(content=text, name=STATUS_NAME)


def is_status_turn(message: BaseMessage) -> bool:
    return isinstance(message, AIMessage) and message.name == STATUS_NAME


class AgentState(TypedDict, total=False):
    """Shared state threaded through every node in the research graph.

    messages:        append-only list of turns managed by append_turns.
    iteration_count: reasoning calls made in the current run; zero between runs.
    """

    messages: Annotated[list, append_turns]
    iteration_count: int
