"""
LangGraph deployment entry point (see langgraph.json).

The platform supplies its own checkpointer and thread ids, so the graph is
compiled without one here.
"""

from dotenv import load_dotenv

load_dotenv()

from minsky.infrastructure.config import Settings  # noqa: E402
from minsky.infrastructure.entrypoints.composition import build_graph  # noqa: E402
from minsky.infrastructure.observability.logging import configure_logging  # noqa: E402

_settings = Settings.from_env()
configure_logging(_settings.log_level)

graph = build_graph(_settings)
