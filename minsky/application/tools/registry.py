"""
Application service: the tool registry and its dispatch boundary.

dispatch() is the single place where tool failures are turned into data.
Unknown tool names, argument validation failures and anything raised while a
tool runs (including errors from deep inside an HTTP client) all resolve to an
error ToolResult, so a failed lookup is something the reasoning client can see
and react to rather than something that aborts the conversation.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable

from pydantic import ValidationError

from minsky.domain.entities.tool_call import ToolDescriptor, ToolInvocationRequest, ToolResult
from minsky.domain.errors import (
    InvalidToolArgumentsError,
    ToolDispatchError,
    UnknownToolError,
)
from minsky.domain.ports.tool_port import ITool

logger = logging.getLogger(__name__)


class ToolRegistry:
    MAX_WORKERS: int = 4

    def __init__(self, tools: Iterable[ITool]) -> None:
        self._tools: dict[str, ITool] = {}
        for tool in tools:
            if tool.name in self._tools:
                raise ValueError(f"Duplicate tool name: {tool.name!r}")
            self._tools[tool.name] = tool
        self._descriptors = tuple(
            ToolDescriptor(
                name=tool.name,
                description=tool.description,
                input_schema=tool.input_model.model_json_schema(),
            )
            for tool in self._tools.values()
        )

    @property
    def names(self) -> list[str]:
        return list(self._tools)

    def descriptors(self) -> list[ToolDescriptor]:
        return list(self._descriptors)

    def dispatch(self, request: ToolInvocationRequest) -> ToolResult:
        """Resolve one request into a ToolResult. Never raises."""
        try:
            payload = self._execute(request)
        except ToolDispatchError as exc:
            logger.warning(
                "Tool call %s (%s) failed: %s",
                request.invocation_id,
                request.tool_name,
                exc,
            )
            return ToolResult.failure(request, str(exc))
        return ToolResult.success(request, payload)

    def dispatch_all(self, requests: list[ToolInvocationRequest]) -> list[ToolResult]:
        """Dispatch a batch concurrently; results come back in request order."""
        if len(requests) <= 1:
            return [self.dispatch(r) for r in requests]
        with ThreadPoolExecutor(max_workers=min(len(requests), self.MAX_WORKERS)) as pool:
            return list(pool.map(self.dispatch, requests))

    def _execute(self, request: ToolInvocationRequest) -> dict:
        tool = self._tools.get(request.tool_name)
        if tool is None:
            raise UnknownToolError(
                f"Unknown tool {request.tool_name!r}. "
                f"Available tools: {', '.join(self._tools) or 'none'}"
            )

        try:
            args = tool.input_model.model_validate(request.arguments)
        except ValidationError as exc:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'arguments'}: {err['msg']}"
                for err in exc.errors()
            )
            raise InvalidToolArgumentsError(
                f"Invalid arguments for {tool.name}: {problems}"
            ) from exc

        logger.debug("Executing %s with %s", tool.name, request.arguments)
        try:
            payload = tool.execute(args)
        except Exception as exc:
            raise ToolDispatchError(
                f"{tool.name} failed: {type(exc).__name__}: {exc}"
            ) from exc
        return payload if isinstance(payload, dict) else {"result": payload}
