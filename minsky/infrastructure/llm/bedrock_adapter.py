"""
Infrastructure adapter: Amazon Bedrock (ChatBedrock) -> IReasoningClient.
All ChatBedrock / langchain_aws details are confined here. Selected with
MINSKY_LLM_PROVIDER=bedrock; credentials come from the standard AWS chain.
"""

from langchain_aws import ChatBedrock

from minsky.infrastructure.llm.base import LangChainReasoningClient


class BedrockReasoningClient(LangChainReasoningClient):
    DEFAULT_MODEL = "us.amazon.nova-pro-v1:0"

    def __init__(self, model: str = DEFAULT_MODEL, region: str = "us-east-1") -> None:
        super().__init__(
            ChatBedrock(
                model=model,
                model_kwargs={"temperature": 0.0},
                region_name=region,
            )
        )
