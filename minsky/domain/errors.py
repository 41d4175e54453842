"""
Domain exceptions.
Zero external dependencies. Infrastructure adapters translate their SDK-specific
failures into these types so the application layer never catches httpx or
langchain errors directly.
"""


class MinskyError(Exception):
    """Base class for every error raised by the agent."""


class ReasoningCallError(MinskyError):
    """The reasoning backend failed outright or returned an unusable response."""


class ResearchBackendError(MinskyError):
    """The research backend could not answer (missing key, HTTP error, bad payload)."""


class ToolDispatchError(MinskyError):
    """A tool request could not be resolved.

    Never escapes ToolRegistry.dispatch(); it is converted into an error
    ToolResult there.
    """


class UnknownToolError(ToolDispatchError):
    pass


class InvalidToolArgumentsError(ToolDispatchError):
    pass
