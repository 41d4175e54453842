"""
Infrastructure adapter: Perplexity chat completions API -> IResearchProvider.
All httpx and Perplexity payload details are confined here; every failure mode
leaves as ResearchBackendError.
"""

from typing import Optional

import httpx

from minsky.domain.entities.research import ResearchAnswer, ResearchFocus
from minsky.domain.errors import ResearchBackendError
from minsky.domain.formatting import fix_definition_list_syntax
from minsky.domain.ports.research_port import IResearchProvider

_FORMAT_INSTRUCTIONS = (
    "Use plain text and standard markdown only. Never use definition list syntax "
    '(lines starting with ": "). For key-value pairs, use "Key: value" on the same '
    "line or use tables."
)

FOCUS_PROMPTS = {
    ResearchFocus.FINANCE: (
        "You are a financial research assistant. Provide accurate, data-driven answers "
        "about financial markets, company performance, stock analysis, and economic trends. "
        "Include specific numbers, dates, and sources when available. Focus on factual "
        f"information rather than speculation. {_FORMAT_INSTRUCTIONS}"
    ),
    ResearchFocus.NEWS: (
        "You are a news research assistant focused on financial and market news. Provide "
        "summaries of recent news, market events, and developments. Include dates and "
        "sources. Focus on the most relevant and recent information. "
        f"{_FORMAT_INSTRUCTIONS}"
    ),
    ResearchFocus.GENERAL: (
        "You are a research assistant helping with market research. Provide comprehensive, "
        "well-sourced answers. Include relevant context and background information. "
        f"{_FORMAT_INSTRUCTIONS}"
    ),
}


class PerplexityResearchProvider(IResearchProvider):
    """Answers research queries with Perplexity's `sonar` model."""

    API_URL = "https://api.perplexity.ai/chat/completions"
    MODEL = "sonar"
    MAX_TOKENS = 2048
    TEMPERATURE = 0.1

    def __init__(
        self,
        api_key: Optional[str],
        timeout: float = 60.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        """
        Args:
            api_key: Perplexity API key. A missing key is reported on each search,
                     not at construction, so the agent still starts without it.
            timeout: Per-request timeout in seconds.
            client:  Optional pre-configured httpx.Client (tests pass one with a
                     MockTransport).
        """
        self._api_key = api_key
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout)

    def search(self, query: str, focus: ResearchFocus) -> ResearchAnswer:
        if not self._api_key:
            raise ResearchBackendError(
                "PERPLEXITY_API_KEY environment variable is not set. "
                "Please add it to your .env file."
            )

        body = {
            "model": self.MODEL,
            "messages": [
                {
                    "role": "system",
                    "content": FOCUS_PROMPTS.get(focus, FOCUS_PROMPTS[ResearchFocus.GENERAL]),
                },
                {"role": "user", "content": query},
            ],
            "max_tokens": self.MAX_TOKENS,
            "temperature": self.TEMPERATURE,
            "return_citations": True,
        }
        try:
            response = self._client.post(
                self.API_URL,
                headers={"Authorization": f"Bearer {self._api_key}"},
                json=body,
            )
        except httpx.HTTPError as exc:
            raise ResearchBackendError(f"Perplexity request failed: {exc}") from exc

        if response.is_error:
            raise ResearchBackendError(
                f"Perplexity API error ({response.status_code}): {response.text}"
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise ResearchBackendError("Perplexity API returned a non-JSON body") from exc

        choices = data.get("choices") or []
        message = (choices[0].get("message") or {}) if choices else {}
        answer = message.get("content") or "No response received"
        return ResearchAnswer(
            answer=fix_definition_list_syntax(answer),
            citations=list(data.get("citations") or []),
        )

    def close(self) -> None:
        """Close the HTTP client if this provider created it."""
        if self._owns_client:
            self._client.close()
