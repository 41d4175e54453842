"""
Runtime configuration read from the process environment.

Entry points call python-dotenv's load_dotenv() first so a local .env file is
honoured; everything else receives an explicit Settings instance.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from minsky.application.agent.state import MAX_ITERATIONS

PROVIDERS = ("grok", "bedrock")


def _int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from exc


def _float(env: Mapping[str, str], key: str, default: float) -> float:
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{key} must be a number, got {raw!r}") from exc


@dataclass(frozen=True)
class Settings:
    xai_api_key: Optional[str] = None
    perplexity_api_key: Optional[str] = None
    llm_provider: str = "grok"
    model: Optional[str] = None
    max_iterations: int = MAX_ITERATIONS
    request_timeout: float = 60.0
    aws_region: str = "us-east-1"
    langfuse_public_key: Optional[str] = None
    langfuse_secret_key: Optional[str] = None
    langfuse_host: Optional[str] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build Settings from *env* (defaults to os.environ).

        Raises:
            ValueError: on a malformed number, an unknown provider or a ceiling below 1.
        """
        env = os.environ if env is None else env
        settings = cls(
            xai_api_key=env.get("XAI_API_KEY") or None,
            perplexity_api_key=env.get("PERPLEXITY_API_KEY") or None,
            llm_provider=(env.get("MINSKY_LLM_PROVIDER") or "grok").lower(),
            model=env.get("MINSKY_MODEL") or None,
            max_iterations=_int(env, "MINSKY_MAX_ITERATIONS", MAX_ITERATIONS),
            request_timeout=_float(env, "MINSKY_REQUEST_TIMEOUT", 60.0),
            aws_region=env.get("AWS_DEFAULT_REGION") or "us-east-1",
            langfuse_public_key=env.get("LANGFUSE_PUBLIC_KEY") or None,
            langfuse_secret_key=env.get("LANGFUSE_SECRET_KEY") or None,
            langfuse_host=env.get("LANGFUSE_HOST") or None,
            log_level=env.get("MINSKY_LOG_LEVEL") or "INFO",
        )
        if settings.llm_provider not in PROVIDERS:
            raise ValueError(
                f"MINSKY_LLM_PROVIDER must be one of {PROVIDERS}, got {settings.llm_provider!r}"
            )
        if settings.max_iterations < 1:
            raise ValueError("MINSKY_MAX_ITERATIONS must be at least 1")
        return settings
