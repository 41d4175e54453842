"""
Port (interface) for tools exposed to the reasoning client.
Implementations are registered in a ToolRegistry, which owns validation and
error conversion; execute() only ever sees validated arguments.
"""

from abc import ABC, abstractmethod
from typing import Any


class ITool(ABC):
    name: str
    description: str
    # pydantic BaseModel subclass describing and validating the arguments
    input_model: type

    @abstractmethod
    def execute(self, args: Any) -> dict:
        """Run the tool with an instance of input_model and return a JSON-able payload."""
        ...
