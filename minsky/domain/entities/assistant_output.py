"""
Domain entities for a single reasoning step.
Zero external dependencies. Pure Python dataclasses only.

AssistantOutput is a two-case sum type: a reasoning call produces either a
FinalAnswer (terminal) or ToolRequests (non-terminal, never empty).
"""

from dataclasses import dataclass
from typing import Union

from minsky.domain.entities.tool_call import ToolInvocationRequest


@dataclass(frozen=True)
class FinalAnswer:
    text: str


@dataclass(frozen=True)
class ToolRequests:
    requests: tuple[ToolInvocationRequest, ...]

    def __post_init__(self) -> None:
        if not self.requests:
            raise ValueError("ToolRequests must carry at least one request")
        ids = [r.invocation_id for r in self.requests]
        if len(set(ids)) != len(ids):
            raise ValueError(f"Duplicate invocation ids in one turn: {ids}")


AssistantOutput = Union[FinalAnswer, ToolRequests]
