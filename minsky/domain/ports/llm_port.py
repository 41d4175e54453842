"""
Port (interface) for reasoning backends.
Infrastructure adapters (e.g. GrokReasoningClient) must implement this interface.
"""

from abc import ABC, abstractmethod
from typing import Any

from minsky.domain.entities.assistant_output import AssistantOutput
from minsky.domain.entities.tool_call import ToolDescriptor


class IReasoningClient(ABC):
    @abstractmethod
    def respond(
        self,
        system_prompt: str,
        transcript: list[Any],
        tools: list[ToolDescriptor],
    ) -> AssistantOutput:
        """Run one reasoning step over *transcript*.

        Returns exactly one of FinalAnswer or ToolRequests.

        Raises:
            ReasoningCallError: on network/auth failure or a malformed response.
        """
        ...
