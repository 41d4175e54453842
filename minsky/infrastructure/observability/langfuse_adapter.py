"""
Infrastructure adapter: Langfuse -> IObservabilityHandler.

Langfuse is imported lazily so the module loads without the SDK configured.
The client is initialised from explicit Settings values instead of relying on
LANGFUSE_* variables being present in os.environ.
"""

from typing import Any, Optional

from minsky.domain.ports.observability_port import IObservabilityHandler


class LangfuseObservabilityHandler(IObservabilityHandler):
    """Wraps the Langfuse LangChain CallbackHandler."""

    def __init__(
        self,
        public_key: str,
        secret_key: Optional[str] = None,
        host: Optional[str] = None,
    ) -> None:
        from langfuse import Langfuse
        from langfuse.langchain import CallbackHandler

        self._client = Langfuse(public_key=public_key, secret_key=secret_key, host=host)
        self._handler = CallbackHandler(public_key=public_key)

    def as_callback(self) -> Any:
        return self._handler

    def flush(self) -> None:
        """Send pending traces before the process exits."""
        self._client.flush()


class NoopObservabilityHandler(IObservabilityHandler):
    """Used when Langfuse is not configured: no callbacks, nothing to flush."""

    def as_callback(self) -> None:
        return None

    def flush(self) -> None:
        pass
