"""Tests for LLM provider adapters."""

import json

import httpx
import pytest

from resume_enhancer.exceptions import ProviderError, ProviderResponseError
from resume_enhancer.services.llm_providers import (
    ANTHROPIC_VERSION,
    PROVIDER_ADAPTERS,
    enhance_with_anthropic,
    enhance_with_gemini,
    enhance_with_openai,
)
from resume_enhancer.services.prompts import PROMPT_TEMPLATES, SYSTEM_PROMPT, build_prompt
from resume_enhancer.models.resume import EnhancementType

from conftest import openai_reply

RESUME = "Jane Doe\nMaster Plumber"


@pytest.mark.asyncio
async def test_openai_request_and_reply(mock_llm):
    mock_llm.reply(json_body=openai_reply("# Jane Doe"))

    async with mock_llm.client() as client:
        text = await enhance_with_openai(
            "sk-abc", "gpt-4o-mini", RESUME, "skills_certifications", client=client
        )

    assert text == "# Jane Doe"
    request = mock_llm.requests[0]
    body = json.loads(request.content)
    assert request.url == "https://api.openai.com/v1/chat/completions"
    assert request.headers["authorization"] == "Bearer sk-abc"
    assert body["model"] == "gpt-4o-mini"
    assert body["messages"][0] == {"role": "system", "content": SYSTEM_PROMPT}
    assert body["messages"][1]["content"] == build_prompt("skills_certifications", RESUME)
    assert body["temperature"] == 0.7
    assert body["max_tokens"] == 4000


@pytest.mark.asyncio
async def test_anthropic_request_and_reply(mock_llm):
    mock_llm.reply(json_body={"content": [{"type": "text", "text": "Enhanced"}]})

    async with mock_llm.client() as client:
        text = await enhance_with_anthropic(
            "ant-key", "claude-3-5-sonnet-20241022", RESUME, "project_experience", client=client
        )

    assert text == "Enhanced"
    request = mock_llm.requests[0]
    body = json.loads(request.content)
    assert request.url == "https://api.anthropic.com/v1/messages"
    assert request.headers["x-api-key"] == "ant-key"
    assert request.headers["anthropic-version"] == ANTHROPIC_VERSION
    assert body["max_tokens"] == 4000
    assert body["messages"] == [
        {"role": "user", "content": build_prompt("project_experience", RESUME)}
    ]


@pytest.mark.asyncio
async def test_gemini_request_and_reply(mock_llm):
    mock_llm.reply(json_body={"candidates": [{"content": {"parts": [{"text": "Gemini out"}]}}]})

    async with mock_llm.client() as client:
        text = await enhance_with_gemini(
            "g-key", "gemini-1.5-flash", RESUME, "client_quality", client=client
        )

    assert text == "Gemini out"
    request = mock_llm.requests[0]
    body = json.loads(request.content)
    assert request.url.path == "/v1beta/models/gemini-1.5-flash:generateContent"
    assert request.url.params["key"] == "g-key"
    assert body["contents"][0]["parts"][0]["text"] == build_prompt("client_quality", RESUME)


def test_unknown_type_uses_client_quality_prompt():
    expected = PROMPT_TEMPLATES[EnhancementType.CLIENT_QUALITY].format(content=RESUME)

    assert build_prompt("mystery", RESUME) == expected
    assert build_prompt("", RESUME) == expected


@pytest.mark.asyncio
async def test_error_status_carries_body(mock_llm):
    mock_llm.reply(status_code=401, text='{"error": "invalid api key"}')

    async with mock_llm.client() as client:
        with pytest.raises(ProviderError) as exc_info:
            await enhance_with_openai("bad", "gpt-4o-mini", RESUME, "client_quality", client=client)

    error = exc_info.value
    assert error.provider == "OpenAI"
    assert error.status == 401
    assert error.message == 'OpenAI API error: {"error": "invalid api key"}'


@pytest.mark.asyncio
async def test_unexpected_shape(mock_llm):
    mock_llm.reply(json_body={"content": []})

    async with mock_llm.client() as client:
        with pytest.raises(ProviderResponseError) as exc_info:
            await enhance_with_anthropic("k", "claude-3-haiku-20240307", RESUME, "x", client=client)

    assert exc_info.value.provider == "Anthropic"


@pytest.mark.asyncio
async def test_non_text_content(mock_llm):
    mock_llm.reply(json_body={"choices": [{"message": {"content": None}}]})

    async with mock_llm.client() as client:
        with pytest.raises(ProviderResponseError):
            await enhance_with_openai("k", "gpt-4o", RESUME, "x", client=client)


@pytest.mark.asyncio
async def test_invalid_json(mock_llm):
    mock_llm.reply(status_code=200, text="<html>gateway</html>")

    async with mock_llm.client() as client:
        with pytest.raises(ProviderResponseError):
            await enhance_with_gemini("k", "gemini-pro", RESUME, "x", client=client)


@pytest.mark.asyncio
async def test_transport_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(ProviderError) as exc_info:
            await enhance_with_openai("k", "gpt-4o", RESUME, "x", client=client)

    assert exc_info.value.status is None
    assert "connection refused" in exc_info.value.message


def test_adapter_registry():
    assert set(PROVIDER_ADAPTERS) == {"openai", "anthropic", "gemini"}
