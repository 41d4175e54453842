"""
Domain entities for tool invocation and its outcome.
Zero external dependencies. Pure Python dataclasses only.
"""

import json
from dataclasses import dataclass, field
from typing import Any

SUCCESS = "success"
ERROR = "error"


@dataclass(frozen=True)
class ToolInvocationRequest:
    invocation_id: str
    tool_name: str
    arguments: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ToolResult:
    """Outcome of exactly one ToolInvocationRequest.

    status is the success/error discriminant; payload is the tool output on
    success and {"error": "<message>", "arguments": {...}} on failure, echoing
    the request arguments so the caller can refine and retry.
    """

    invocation_id: str
    tool_name: str
    status: str
    payload: dict[str, Any]

    @classmethod
    def success(cls, request: ToolInvocationRequest, payload: dict[str, Any]) -> "ToolResult":
        return cls(request.invocation_id, request.tool_name, SUCCESS, payload)

    @classmethod
    def failure(cls, request: ToolInvocationRequest, message: str) -> "ToolResult":
        payload = {"error": message, "arguments": dict(request.arguments)}
        return cls(request.invocation_id, request.tool_name, ERROR, payload)

    @property
    def is_error(self) -> bool:
        return self.status == ERROR

    @property
    def content(self) -> str:
        return json.dumps(self.payload, default=str)


@dataclass(frozen=True)
class ToolDescriptor:
    name: str
    description: str
    input_schema: dict[str, Any]

    def as_function(self) -> dict[str, Any]:
        """OpenAI function-calling shape, accepted by every LangChain chat model's bind_tools()."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.input_schema,
            },
        }
