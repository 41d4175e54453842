"""
Infrastructure adapter: any LangChain chat model -> IReasoningClient.

Confines the AIMessage <-> AssistantOutput mapping so concrete adapters only
have to construct their chat model. Status turns stay in the stored transcript
but are never sent to the backend, and tool calls left unanswered by a forced
stop are dropped because chat APIs reject unanswered tool calls.
"""

import uuid
from typing import Any

from langchain_core.messages import AIMessage, BaseMessage, SystemMessage, ToolMessage

from minsky.application.agent.state import is_status_turn
from minsky.domain.entities.assistant_output import AssistantOutput, FinalAnswer, ToolRequests
from minsky.domain.entities.tool_call import ToolDescriptor, ToolInvocationRequest
from minsky.domain.errors import ReasoningCallError
from minsky.domain.formatting import content_text, fix_definition_list_syntax
from minsky.domain.ports.llm_port import IReasoningClient


def prepare_transcript(messages: list[BaseMessage]) -> list[BaseMessage]:
    answered = {m.tool_call_id for m in messages if isinstance(m, ToolMessage)}
    prepared: list[BaseMessage] = []
    for message in messages:
        if is_status_turn(message):
            continue
        if isinstance(message, AIMessage) and message.tool_calls:
            kept = [call for call in message.tool_calls if call["id"] in answered]
            if len(kept) != len(message.tool_calls):
                if not kept and not content_text(message.content).strip():
                    continue
                message = message.model_copy(update={"tool_calls": kept})
        prepared.append(message)
    return prepared


def to_assistant_output(response: AIMessage) -> AssistantOutput:
    """Map a chat model response onto the two-case AssistantOutput.

    Raises:
        ReasoningCallError: if the response has neither text nor tool calls.
    """
    if response.tool_calls:
        seen: set[str] = set()
        requests = []
        for call in response.tool_calls:
            invocation_id = call.get("id")
            if not invocation_id or invocation_id in seen:
                invocation_id = f"call_{uuid.uuid4().hex[:24]}"
            seen.add(invocation_id)
            requests.append(
                ToolInvocationRequest(
                    invocation_id=invocation_id,
                    tool_name=call["name"],
                    arguments=dict(call.get("args") or {}),
                )
            )
        return ToolRequests(tuple(requests))

    text = content_text(response.content)
    if not text.strip():
        invalid = getattr(response, "invalid_tool_calls", None)
        detail = f" ({len(invalid)} unparseable tool calls)" if invalid else ""
        raise ReasoningCallError(f"Reasoning backend returned neither text nor tool calls{detail}")
    return FinalAnswer(fix_definition_list_syntax(text))


class LangChainReasoningClient(IReasoningClient):
    """Wraps a LangChain BaseChatModel and exposes the IReasoningClient interface."""

    def __init__(self, chat_model: Any) -> None:
        self._llm = chat_model

    def respond(
        self,
        system_prompt: str,
        transcript: list[Any],
        tools: list[ToolDescriptor],
    ) -> AssistantOutput:
        messages = [SystemMessage(content=system_prompt), *prepare_transcript(transcript)]
        model = self._llm.bind_tools([t.as_function() for t in tools]) if tools else self._llm
        try:
            response = model.invoke(messages)
        except Exception as exc:
            raise ReasoningCallError(
                f"Reasoning backend call failed: {type(exc).__name__}: {exc}"
            ) from exc
        return to_assistant_output(response)
