"""
Port (interface) for web research backends.
Infrastructure adapters (e.g. PerplexityResearchProvider) must implement this interface.
"""

from abc import ABC, abstractmethod

from minsky.domain.entities.research import ResearchAnswer, ResearchFocus


class IResearchProvider(ABC):
    @abstractmethod
    def search(self, query: str, focus: ResearchFocus) -> ResearchAnswer:
        """Answer *query* with citations.

        Raises:
            ResearchBackendError: on missing credentials or a failed backend call.
        """
        ...

    def close(self) -> None:
        """Release connections held by the provider. No-op by default."""
