"""
Tool wiring for the Composition Root.
Binds each application use-case to an ITool and collects them in the
ToolRegistry that build_agent_graph() dispatches against.
"""

from minsky.application.tools.market_research import MarketResearchTool
from minsky.application.tools.registry import ToolRegistry
from minsky.application.use_cases.research_market import ResearchMarketUseCase
from minsky.domain.ports.research_port import IResearchProvider


def create_tools(research_provider: IResearchProvider) -> ToolRegistry:
    """Build the registry with the single search_perplexity tool.

    Args:
        research_provider: IResearchProvider implementation (e.g. PerplexityResearchProvider).
    """
    research_uc = ResearchMarketUseCase(research_provider)
    return ToolRegistry([MarketResearchTool(research_uc)])
