"""
Composition Root shared by the FastAPI app and the LangGraph deployment module:
turns Settings into wired infrastructure adapters and a compiled graph.
"""

import logging
from typing import Any, Optional

from minsky.application.agent.graph import build_agent_graph
from minsky.application.use_cases.run_agent import RunAgentUseCase
from minsky.domain.ports.llm_port import IReasoningClient
from minsky.domain.ports.observability_port import IObservabilityHandler
from minsky.domain.ports.research_port import IResearchProvider
from minsky.infrastructure.config import Settings
from minsky.infrastructure.entrypoints.tool_registry import create_tools
from minsky.infrastructure.observability.langfuse_adapter import (
    LangfuseObservabilityHandler,
    NoopObservabilityHandler,
)
from minsky.infrastructure.research.perplexity_adapter import PerplexityResearchProvider

logger = logging.getLogger(__name__)


def build_reasoning_client(settings: Settings) -> IReasoningClient:
    if settings.llm_provider == "bedrock":
        from minsky.infrastructure.llm.bedrock_adapter import BedrockReasoningClient

        return BedrockReasoningClient(
            model=settings.model or BedrockReasoningClient.DEFAULT_MODEL,
            region=settings.aws_region,
        )

    from minsky.infrastructure.llm.grok_adapter import GrokReasoningClient

    if not settings.xai_api_key:
        raise ValueError("XAI_API_KEY must be set when MINSKY_LLM_PROVIDER is 'grok'")
    return GrokReasoningClient(
        api_key=settings.xai_api_key,
        model=settings.model or GrokReasoningClient.DEFAULT_MODEL,
        timeout=settings.request_timeout,
    )


def build_observability(settings: Settings) -> IObservabilityHandler:
    if settings.langfuse_public_key:
        return LangfuseObservabilityHandler(
            public_key=settings.langfuse_public_key,
            secret_key=settings.langfuse_secret_key,
            host=settings.langfuse_host,
        )
    logger.info("LANGFUSE_PUBLIC_KEY not set, tracing disabled")
    return NoopObservabilityHandler()


def build_research_provider(settings: Settings) -> PerplexityResearchProvider:
    if not settings.perplexity_api_key:
        logger.warning("PERPLEXITY_API_KEY not set, search_perplexity calls will fail")
    return PerplexityResearchProvider(
        api_key=settings.perplexity_api_key,
        timeout=settings.request_timeout,
    )


def build_graph(
    settings: Settings,
    checkpointer: Any = None,
    research_provider: Optional[IResearchProvider] = None,
):
    research_provider = research_provider or build_research_provider(settings)
    return build_agent_graph(
        build_reasoning_client(settings),
        create_tools(research_provider),
        max_iterations=settings.max_iterations,
        checkpointer=checkpointer,
    )


def build_run_agent_use_case(settings: Settings) -> RunAgentUseCase:
    """Wire the full agent with a process-local MemorySaver keyed by session id."""
    from langgraph.checkpoint.memory import MemorySaver

    research_provider = build_research_provider(settings)
    graph = build_graph(settings, checkpointer=MemorySaver(), research_provider=research_provider)
    return RunAgentUseCase(
        graph,
        build_observability(settings),
        settings.max_iterations,
        research_provider=research_provider,
    )
