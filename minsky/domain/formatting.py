"""
Text post-processing shared by every adapter that surfaces model text to users.
Zero external dependencies.
"""

import re
from typing import Any

_DEFINITION_LIST = re.compile(r"\n+: ")


def fix_definition_list_syntax(text: str) -> str:
    """Collapse "Label\\n: value" (any number of newlines) into "Label: value"."""
    return _DEFINITION_LIST.sub(": ", text)


def content_text(content: Any) -> str:
    """Plain text of a message content: a string, or a list of text blocks."""
    if isinstance(content, str):
        return content
    parts = []
    for block in content or []:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)
