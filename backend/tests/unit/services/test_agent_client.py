"""
Unit tests for the Agents API client.
"""
import json

import httpx
import pytest

from venturescope.services.agent_client import AgentAPIError, AgentClient

AGENTS_URL = "https://agents.test/v1/agents/runs"

SSE_BODY = (
    'data: {"type": "response.output_text.delta", "response": {"delta": "Hello "}}\n'
    'data: {"type": "response.output_text.delta", "response": {"delta": "world"}}\n'
    'data: {"type": "response.done", "citations": [{"title": "Src", "url": "https://src.test"}]}\n'
)


def make_client(handler, **kwargs):
    return AgentClient(
        api_key=kwargs.pop("api_key", "secret"),
        base_url=AGENTS_URL,
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


@pytest.mark.asyncio
async def test_run_posts_payload_and_parses_stream():
    """Test that run() sends the research payload and parses the event stream."""
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, text=SSE_BODY, headers={"Content-Type": "text/event-stream"})

    async with make_client(handler) as client:
        result = await client.run("Find news")

    assert result.text == "Hello world"
    assert [c.url for c in result.citations] == ["https://src.test"]

    request = requests[0]
    assert request.method == "POST"
    assert str(request.url) == AGENTS_URL
    assert request.headers["Authorization"] == "Bearer secret"
    assert request.headers["Content-Type"] == "application/json"

    payload = json.loads(request.content)
    assert payload["input"] == "Find news"
    assert payload["tools"] == [{"type": "research"}]
    assert payload["agent"] == "advanced"
    assert payload["verbosity"] == "medium"
    assert payload["workflow_config"] == {"max_workflow_steps": 5}


@pytest.mark.asyncio
async def test_non_success_status_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, text="invalid key")

    async with make_client(handler) as client:
        with pytest.raises(AgentAPIError) as exc_info:
            await client.run("Find news")

    assert exc_info.value.status_code == 401
    assert str(exc_info.value) == "Agents API 401: invalid key"


@pytest.mark.asyncio
async def test_empty_body_yields_empty_result():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="")

    async with make_client(handler) as client:
        result = await client.run("Find news")

    assert result.text == ""
    assert result.citations == []


@pytest.mark.asyncio
async def test_run_outside_context_raises():
    client = make_client(lambda request: httpx.Response(200))
    with pytest.raises(RuntimeError):
        await client.run("Find news")


@pytest.mark.asyncio
async def test_context_closes_http_client():
    client = make_client(lambda request: httpx.Response(200))
    async with client:
        assert client.client is not None
    assert client.client is None


def test_missing_api_key_raises(monkeypatch):
    from venturescope.utils.config import settings

    monkeypatch.setattr(settings, "YOU_API_KEY", "")
    with pytest.raises(ValueError):
        AgentClient()
