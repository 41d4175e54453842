"""
Domain entities for market research answers.
Zero external dependencies. Pure Python dataclasses only.
"""

from dataclasses import dataclass, field
from enum import Enum


class ResearchFocus(str, Enum):
    FINANCE = "finance"
    NEWS = "news"
    GENERAL = "general"


@dataclass(frozen=True)
class ResearchAnswer:
    answer: str
    citations: list[str] = field(default_factory=list)
