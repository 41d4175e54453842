"""
Use-case: answer a market research query through the research backend.
Depends only on Domain ports and entities. No infrastructure imports.
"""

from minsky.domain.entities.research import ResearchAnswer, ResearchFocus
from minsky.domain.ports.research_port import IResearchProvider


class ResearchMarketUseCase:
    def __init__(self, provider: IResearchProvider) -> None:
        self._provider = provider

    def execute(self, query: str, focus: str = "general") -> ResearchAnswer:
        """Run one research query.

        Raises:
            ValueError: if *query* is blank or *focus* is not a ResearchFocus value.
            ResearchBackendError: propagated from the provider. No retries here.
        """
        if not query or not query.strip():
            raise ValueError("query must be a non-empty string")
        return self._provider.search(query.strip(), ResearchFocus(focus))
