"""
The search_perplexity tool: real-time market and news research.
Binds ResearchMarketUseCase to the ITool contract; the pydantic input model is
both the JSON schema shown to the reasoning client and the validator applied
by ToolRegistry before execute() runs.
"""

import dataclasses
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from minsky.application.use_cases.research_market import ResearchMarketUseCase
from minsky.domain.ports.tool_port import ITool


class MarketResearchInput(BaseModel):
    query: str = Field(
        description=(
            "The search query for market research. Be specific and include relevant "
            "context like company names, tickers, or time periods."
        ),
    )
    focus: Literal["finance", "news", "general"] = Field(
        description=(
            "The focus area for the search: 'finance' for financial data and analysis, "
            "'news' for recent news and events, 'general' for broader research."
        ),
    )

    @field_validator("query")
    @classmethod
    def _query_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("query must be a non-empty string")
        return value


class MarketResearchTool(ITool):
    name = "search_perplexity"
    description = """Search the web using Perplexity AI for real-time market research, news, and financial analysis.
This tool is ideal for:
- Getting the latest news and market sentiment about a company or sector
- Researching industry trends and competitive analysis
- Finding recent analyst opinions and market commentary
- Answering questions that require synthesizing multiple current sources
- Getting context and qualitative insights that complement structured financial data

Use this tool when you need real-time information or qualitative research that goes beyond structured financial statements and metrics."""
    input_model = MarketResearchInput

    def __init__(self, use_case: ResearchMarketUseCase) -> None:
        self._use_case = use_case

    def execute(self, args: MarketResearchInput) -> dict:
        result = self._use_case.execute(args.query, args.focus)
        return {
            "query": args.query,
            "focus": args.focus,
            **dataclasses.asdict(result),
        }
