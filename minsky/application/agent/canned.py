"""
Canned responder: answers greetings and "what can you do" questions with a
static document, without calling the reasoning backend or any tool.
"""

import re
from typing import Optional

from langchain_core.messages import AIMessage, BaseMessage

from minsky.application.agent.prompts import ABOUT_RESPONSE
from minsky.application.agent.state import latest_human_query

_ABOUT_PATTERNS = (
    re.compile(r"^(what can you do|what do you do)"),
    re.compile(r"^(tell me about yourself|who are you|what are you)"),
    re.compile(r"^(help|how can you help)"),
    re.compile(r"^(what are your capabilities|what can i ask)"),
    re.compile(r"^hi$|^hello$|^hey$"),
)


def is_about_question(text: str) -> bool:
    """True for exact greetings and for questions that start with a capability phrase."""
    normalized = text.lower().strip()
    return any(pattern.search(normalized) for pattern in _ABOUT_PATTERNS)


def canned_response(messages: list[BaseMessage]) -> Optional[AIMessage]:
    if is_about_question(latest_human_query(messages)):
        return AIMessage(content=ABOUT_RESPONSE)
    return None
