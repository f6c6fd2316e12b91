"""Tests for Gemini client."""

import json

import httpx
import pytest

from audience_tagger.adapters.ai import GeminiClient
from audience_tagger.core import AudienceLabel, ClassificationRequest


@pytest.fixture
def request_item() -> ClassificationRequest:
    return ClassificationRequest(
        title="Test Movie",
        year=2020,
        overview="A test movie",
        official_rating="PG-13",
        genres=["Comedy"],
    )


def make_client(handler, api_key: str = "test-key") -> GeminiClient:
    client = GeminiClient(http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))
    client.set_api_key(api_key)
    return client


def gemini_reply(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


@pytest.mark.asyncio
async def test_classify_success(request_item: ClassificationRequest) -> None:
    """Test successful classification and request shape."""
    seen = []
    
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=gemini_reply("Teens\n"))
    
    async with make_client(handler) as client:
        label = await client.classify(request_item)
    
    assert label is AudienceLabel.TEENS
    assert len(seen) == 1
    sent = seen[0]
    assert sent.method == "POST"
    assert sent.url.path == "/v1beta/models/gemini-pro:generateContent"
    assert sent.headers["x-goog-api-key"] == "test-key"
    # Credential must never leak into the URL
    assert "key" not in sent.url.params
    assert "test-key" not in str(sent.url)
    body = json.loads(sent.content)
    prompt = body["contents"][0]["parts"][0]["text"]
    assert "Title: Test Movie" in prompt


@pytest.mark.asyncio
async def test_classify_uses_configured_model(request_item: ClassificationRequest) -> None:
    paths = []
    
    def handler(request: httpx.Request) -> httpx.Response:
        paths.append(request.url.path)
        return httpx.Response(200, json=gemini_reply("kids"))
    
    client = make_client(handler)
    client.set_model_name("gemini-1.5-flash")
    client.set_model_name("   ")
    await client.classify(request_item)
    await client.aclose()
    
    assert paths == ["/v1beta/models/gemini-1.5-flash:generateContent"]


@pytest.mark.asyncio
async def test_set_endpoint_is_ignored(request_item: ClassificationRequest) -> None:
    hosts = []
    
    def handler(request: httpx.Request) -> httpx.Response:
        hosts.append(request.url.host)
        return httpx.Response(200, json=gemini_reply("adults"))
    
    client = make_client(handler)
    client.set_endpoint("http://localhost:8080")
    await client.classify(request_item)
    await client.aclose()
    
    assert hosts == ["generativelanguage.googleapis.com"]


@pytest.mark.asyncio
async def test_classify_without_api_key_makes_no_call(request_item: ClassificationRequest) -> None:
    calls = []
    
    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json=gemini_reply("kids"))
    
    client = make_client(handler, api_key="")
    
    assert await client.classify(request_item) is None
    assert calls == []
    await client.aclose()


@pytest.mark.asyncio
async def test_classify_http_error_returns_none(request_item: ClassificationRequest) -> None:
    client = make_client(lambda request: httpx.Response(403, text="forbidden"))
    
    assert await client.classify(request_item) is None
    await client.aclose()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"candidates": []},
        {"candidates": [{"content": {"parts": []}}]},
        {"candidates": [{"content": {"parts": [{"text": ""}]}}]},
        {"unexpected": True},
        ["not", "an", "object"],
    ],
)
async def test_classify_malformed_response_returns_none(
    request_item: ClassificationRequest, payload
) -> None:
    client = make_client(lambda request: httpx.Response(200, json=payload))
    
    assert await client.classify(request_item) is None
    await client.aclose()


@pytest.mark.asyncio
async def test_classify_invalid_json_returns_none(request_item: ClassificationRequest) -> None:
    client = make_client(lambda request: httpx.Response(200, text="<html>oops</html>"))
    
    assert await client.classify(request_item) is None
    await client.aclose()


@pytest.mark.asyncio
async def test_classify_network_error_returns_none(request_item: ClassificationRequest) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("name resolution failed", request=request)
    
    client = make_client(handler)
    
    assert await client.classify(request_item) is None
    await client.aclose()


@pytest.mark.asyncio
async def test_list_models_strips_prefix() -> None:
    seen = []
    
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={"models": [{"name": "models/gemini-pro"}, {"name": "models/gemini-1.5-flash"}, {}]},
        )
    
    async with make_client(handler) as client:
        models = await client.list_models()
    
    assert models == ["gemini-pro", "gemini-1.5-flash"]
    assert seen[0].method == "GET"
    assert seen[0].url.path == "/v1beta/models"
    assert seen[0].headers["x-goog-api-key"] == "test-key"


@pytest.mark.asyncio
async def test_list_models_without_api_key_returns_empty() -> None:
    calls = []
    
    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={"models": []})
    
    client = make_client(handler, api_key="")
    
    assert await client.list_models() == []
    assert calls == []
    await client.aclose()


@pytest.mark.asyncio
async def test_list_models_error_returns_empty() -> None:
    client = make_client(lambda request: httpx.Response(500, text="boom"))
    
    assert await client.list_models() == []
    await client.aclose()


@pytest.mark.asyncio
async def test_aclose_closes_http_client() -> None:
    http = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
    client = GeminiClient(http_client=http)
    
    async with client:
        pass
    
    assert http.is_closed


@pytest.mark.asyncio
async def test_classify_accepts_any_success_status(request_item: ClassificationRequest) -> None:
    client = make_client(lambda request: httpx.Response(203, json=gemini_reply("teens")))
    
    assert await client.classify(request_item) is AudienceLabel.TEENS
    await client.aclose()


@pytest.mark.asyncio
async def test_list_models_accepts_any_success_status() -> None:
    client = make_client(
        lambda request: httpx.Response(203, json={"models": [{"name": "models/gemini-pro"}]})
    )
    
    assert await client.list_models() == ["gemini-pro"]
    await client.aclose()
