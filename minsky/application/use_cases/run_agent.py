"""
Use-case: execute one user turn through the compiled research graph.
langchain_core.messages is treated as framework (not infrastructure) because
LangGraph is the orchestration framework used throughout the application layer.
"""

import logging
import uuid
from typing import Any, AsyncGenerator, Optional

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, ToolMessage

from minsky.application.agent.graph import recursion_limit_for
from minsky.application.agent.state import MAX_ITERATIONS, is_status_turn
from minsky.domain.formatting import content_text
from minsky.domain.ports.observability_port import IObservabilityHandler
from minsky.domain.ports.research_port import IResearchProvider

logger = logging.getLogger(__name__)


def _role_of(message: BaseMessage) -> str:
    if isinstance(message, HumanMessage):
        return "human"
    if isinstance(message, ToolMessage):
        return "tool"
    if is_status_turn(message):
        return "status"
    return "assistant"


def turn_to_dict(message: BaseMessage) -> dict:
    """JSON-friendly view of one turn, used for transcript replay."""
    turn = {"role": _role_of(message), "content": content_text(message.content)}
    if isinstance(message, AIMessage) and message.tool_calls:
        turn["tool_calls"] = [
            {"id": call["id"], "name": call["name"], "args": call["args"]}
            for call in message.tool_calls
        ]
    if isinstance(message, ToolMessage):
        turn["tool_call_id"] = message.tool_call_id
        turn["status"] = message.status
    return turn


class RunAgentUseCase:
    def __init__(
        self,
        graph: Any,
        observability: IObservabilityHandler,
        max_iterations: int = MAX_ITERATIONS,
        research_provider: Optional[IResearchProvider] = None,
    ) -> None:
        """
        Args:
            graph:          Compiled LangGraph StateGraph returned by build_agent_graph(),
                            compiled with a checkpointer so sessions keep their history.
            observability:  IObservabilityHandler implementation (e.g. Langfuse adapter).
            max_iterations: The ceiling the graph was built with; sizes the recursion limit.
            research_provider: Provider behind the graph's tools, closed with the use case.
        """
        self._graph = graph
        self._observability = observability
        self._max_iterations = max_iterations
        self._research_provider = research_provider

    def _config(self, session_id: str, user_id: Optional[str] = None) -> dict:
        callback = self._observability.as_callback()
        return {
            "configurable": {"thread_id": session_id},
            "callbacks": [callback] if callback is not None else [],
            "metadata": {
                "langfuse_user_id": user_id,
                "langfuse_session_id": session_id,
                "langfuse_tags": ["minsky"],
            },
            "recursion_limit": recursion_limit_for(self._max_iterations),
        }

    async def execute(
        self,
        query: str,
        user_id: Optional[str] = None,
        session_id: Optional[str] = None,
    ) -> AsyncGenerator[dict, None]:
        """Stream agent events for a user *query*.

        The first event announces the session id (generated when not supplied).
        Every turn appended by a node is then yielded as:
            {"node": str, "content": str, "type": str}
        with an extra "tool_calls" list on assistant turns that request tools.

        Raises:
            ValueError: if *query* is blank.
            ReasoningCallError: when the reasoning backend fails; the run stops
                                and the turns appended so far stay in the session.
        """
        if not query or not query.strip():
            raise ValueError("query must be a non-empty string")
        session_id = session_id or str(uuid.uuid4())
        yield {"node": "session", "content": session_id, "type": "session"}

        logger.info("Running agent for session %s", session_id)
        async for chunk in self._graph.astream(
            {"messages": [HumanMessage(content=query)], "iteration_count": 0},
            config=self._config(session_id, user_id),
            stream_mode="updates",
        ):
            for node_name, update in chunk.items():
                for message in (update or {}).get("messages", []):
                    event = {
                        "node": node_name,
                        "content": content_text(message.content),
                        "type": message.__class__.__name__,
                    }
                    if isinstance(message, AIMessage) and message.tool_calls:
                        event["tool_calls"] = [call["name"] for call in message.tool_calls]
                    yield event
        logger.info("Agent run finished for session %s", session_id)

    def history(self, session_id: str) -> list[dict]:
        """Replay the stored transcript of *session_id* (empty for unknown sessions)."""
        snapshot = self._graph.get_state({"configurable": {"thread_id": session_id}})
        return [turn_to_dict(m) for m in snapshot.values.get("messages", [])]

    def close(self) -> None:
        """Flush pending traces and release the research client.

        Called once when the hosting process shuts down.
        """
        self._observability.flush()
        if self._research_provider is not None:
            self._research_provider.close()
