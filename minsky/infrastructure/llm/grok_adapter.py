"""
Infrastructure adapter: xAI Grok (OpenAI-compatible API) -> IReasoningClient.
All langchain_openai details are confined here.
"""

from typing import Any, Optional

from langchain_openai import ChatOpenAI

from minsky.infrastructure.llm.base import LangChainReasoningClient

# Grok rejects these even though ChatOpenAI may send them
_UNSUPPORTED_PARAMS = ("presence_penalty", "frequency_penalty")


class ChatGrok(ChatOpenAI):
    """ChatOpenAI that strips request parameters the Grok API rejects."""

    def _get_request_payload(self, input_: Any, *, stop: Optional[list[str]] = None, **kwargs: Any) -> dict:
        payload = super()._get_request_payload(input_, stop=stop, **kwargs)
        for param in _UNSUPPORTED_PARAMS:
            payload.pop(param, None)
        return payload


class GrokReasoningClient(LangChainReasoningClient):
    DEFAULT_MODEL = "grok-4-fast-reasoning"
    BASE_URL = "https://api.x.ai/v1"

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        timeout: float = 60.0,
    ) -> None:
        super().__init__(
            ChatGrok(
                model=model,
                temperature=0,
                stream_usage=True,
                base_url=self.BASE_URL,
                api_key=api_key,
                timeout=timeout,
            )
        )
