import json

import httpx
import pytest

from minsky.domain.entities.research import ResearchFocus
from minsky.domain.errors import ResearchBackendError
from minsky.infrastructure.research.perplexity_adapter import FOCUS_PROMPTS, PerplexityResearchProvider


def _provider(handler, api_key="pplx-test"):
    return PerplexityResearchProvider(api_key=api_key, client=httpx.Client(transport=httpx.MockTransport(handler)))


def test_search_posts_focus_prompt_and_parses_answer():
    seen = {}

    def handler(request):
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            200,
            json={
                "choices": [{"message": {"role": "assistant", "content": "Revenue\n: $10B"}}],
                "citations": ["https://a.example", "https://b.example"],
            },
        )

    answer = _provider(handler).search("NVIDIA revenue", ResearchFocus.FINANCE)

    assert answer.answer == "Revenue: $10B"
    assert answer.citations == ["https://a.example", "https://b.example"]
    assert seen["auth"] == "Bearer pplx-test"
    body = seen["body"]
    assert body["model"] == "sonar"
    assert body["return_citations"] is True
    assert body["messages"][0] == {"role": "system", "content": FOCUS_PROMPTS[ResearchFocus.FINANCE]}
    assert body["messages"][1] == {"role": "user", "content": "NVIDIA revenue"}


def test_missing_key_fails_without_a_request():
    def handler(request):
        raise AssertionError("no request expected")

    with pytest.raises(ResearchBackendError, match="PERPLEXITY_API_KEY"):
        _provider(handler, api_key=None).search("q", ResearchFocus.NEWS)


def test_http_error_reports_status_code():
    provider = _provider(lambda request: httpx.Response(429, text="rate limited"))
    with pytest.raises(ResearchBackendError, match=r"Perplexity API error \(429\): rate limited"):
        provider.search("q", ResearchFocus.GENERAL)


def test_transport_error_is_wrapped():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ResearchBackendError, match="connection refused"):
        _provider(handler).search("q", ResearchFocus.GENERAL)


def test_empty_choices_fall_back_to_placeholder():
    answer = _provider(lambda request: httpx.Response(200, json={"choices": []})).search("q", ResearchFocus.NEWS)
    assert answer.answer == "No response received"
    assert answer.citations == []


def test_close_releases_the_client_it_created():
    provider = PerplexityResearchProvider(api_key="pplx-test")
    provider.close()
    assert provider._client.is_closed


def test_close_leaves_an_injected_client_open():
    client = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(200, json={})))
    PerplexityResearchProvider(api_key="pplx-test", client=client).close()
    assert not client.is_closed
    client.close()
