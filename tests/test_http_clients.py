"""Tests for completion adapters."""

import asyncio
import json

import httpx
import pytest
from openai import APIConnectionError

from fitplan.adapters.gemini_completion_client import GeminiCompletionClient
from fitplan.adapters.openai_completion_client import OpenAICompletionClient
from fitplan.domain.errors import ExternalServiceError


class _FakeResponses:
    def __init__(self, output_text: str = "", error: Exception | None = None) -> None:
        self.output_text = output_text
        self.error = error
        self.last_payload: dict[str, object] | None = None

    async def create(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_payload = kwargs
        if self.error is not None:
            raise self.error
        return type("Resp", (), {"output_text": self.output_text})()


class _FakeOpenAI:
    def __init__(self, responses: _FakeResponses) -> None:
        self.responses = responses


def test_openai_client_returns_output_text() -> None:
    responses = _FakeResponses(output_text='{"meals": []}')
    client = OpenAICompletionClient(client=_FakeOpenAI(responses), model="gpt-4o-mini")

    result = asyncio.run(client.complete("Plan my day", max_output_tokens=1500))

    assert result == '{"meals": []}'
    assert responses.last_payload is not None
    assert responses.last_payload["model"] == "gpt-4o-mini"
    assert responses.last_payload["max_output_tokens"] == 1500
    assert responses.last_payload["store"] is False
    content = responses.last_payload["input"][0]["content"][0]
    assert content["text"] == "Plan my day"


def test_openai_client_wraps_sdk_errors() -> None:
    error = APIConnectionError(
        request=httpx.Request("POST", "https://api.openai.com/v1/responses")
    )
    client = OpenAICompletionClient(
        client=_FakeOpenAI(_FakeResponses(error=error)), model="gpt-4o-mini"
    )

    with pytest.raises(ExternalServiceError):
        asyncio.run(client.complete("Plan my day", max_output_tokens=1500))


def test_openai_client_rejects_empty_output() -> None:
    client = OpenAICompletionClient(
        client=_FakeOpenAI(_FakeResponses(output_text="")), model="gpt-4o-mini"
    )

    with pytest.raises(ExternalServiceError):
        asyncio.run(client.complete("Plan my day", max_output_tokens=1500))


def _gemini_client(handler) -> GeminiCompletionClient:  # type: ignore[no-untyped-def]
    return GeminiCompletionClient(
        api_key="gemini-key",
        model="models/gemini-1.5-flash",
        base_url="https://gemini.test",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


def test_gemini_client_joins_candidate_parts() -> None:
    seen: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["key"] = request.url.params.get("key")
        seen["payload"] = json.loads(request.content.decode())
        return httpx.Response(
            200,
            json={
                "candidates": [
                    {"content": {"parts": [{"text": '{"meals":'}, {"text": "[]}"}]}}
                ]
            },
        )

    client = _gemini_client(handler)

    result = asyncio.run(client.complete("Plan", max_output_tokens=800))

    assert result == '{"meals":\n[]}'
    assert seen["path"] == "/v1beta/models/gemini-1.5-flash:generateContent"
    assert seen["key"] == "gemini-key"
    payload = seen["payload"]
    assert payload["generationConfig"]["maxOutputTokens"] == 800
    assert payload["contents"][1]["parts"][0]["text"] == "Plan"


def test_gemini_client_returns_raw_body_without_text() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"candidates": []})

    client = _gemini_client(handler)

    result = asyncio.run(client.complete("Plan", max_output_tokens=800))

    assert json.loads(result) == {"candidates": []}


def test_gemini_client_raises_on_http_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"error": {"message": "boom"}})

    with pytest.raises(ExternalServiceError, match="Gemini API error: 500"):
        asyncio.run(_gemini_client(handler).complete("Plan", max_output_tokens=800))


def test_gemini_client_raises_on_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ExternalServiceError):
        asyncio.run(_gemini_client(handler).complete("Plan", max_output_tokens=800))


@pytest.mark.parametrize(
    "body",
    [
        [],
        {"candidates": ["oops"]},
        {"candidates": [{"content": {"parts": ["oops"]}}]},
        {"candidates": [{"content": "oops"}]},
        {"candidates": {"first": {}}},
    ],
)
def test_gemini_client_rejects_malformed_body(body) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=body)

    client = _gemini_client(handler)

    with pytest.raises(ExternalServiceError):
        asyncio.run(client.complete("Plan", max_output_tokens=800))
