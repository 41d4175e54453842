import pytest

from minsky.infrastructure.config import Settings


def test_defaults():
    settings = Settings.from_env({})
    assert settings.llm_provider == "grok"
    assert settings.max_iterations == 20
    assert settings.request_timeout == 60.0
    assert settings.perplexity_api_key is None


def test_reads_environment():
    settings = Settings.from_env(
        {
            "XAI_API_KEY": "xai",
            "PERPLEXITY_API_KEY": "pplx",
            "MINSKY_LLM_PROVIDER": "Bedrock",
            "MINSKY_MAX_ITERATIONS": "5",
            "MINSKY_REQUEST_TIMEOUT": "12.5",
        }
    )
    assert settings.llm_provider == "bedrock"
    assert settings.max_iterations == 5
    assert settings.request_timeout == 12.5
    assert settings.xai_api_key == "xai"


@pytest.mark.parametrize(
    "env",
    [
        {"MINSKY_MAX_ITERATIONS": "many"},
        {"MINSKY_MAX_ITERATIONS": "0"},
        {"MINSKY_LLM_PROVIDER": "gpt"},
        {"MINSKY_REQUEST_TIMEOUT": "soon"},
    ],
)
def test_rejects_invalid_values(env):
    with pytest.raises(ValueError):
        Settings.from_env(env)
