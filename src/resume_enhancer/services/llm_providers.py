"""LLM provider adapters.

Each adapter turns (resume text, enhancement type) into a single
request/response call against one vendor and returns the generated text.
No retries and no streaming: a failed call surfaces as ``ProviderError``.
"""

from typing import Any, Awaitable, Callable

import httpx
import structlog

from resume_enhancer.config import get_settings
from resume_enhancer.exceptions import ProviderError, ProviderResponseError
from resume_enhancer.models.credential import LLMProvider
from resume_enhancer.services.prompts import SYSTEM_PROMPT, build_prompt

logger = structlog.get_logger()

OPENAI_URL = "https://api.openai.com/v1/chat/completions"
ANTHROPIC_URL = "https://api.anthropic.com/v1/messages"
ANTHROPIC_VERSION = "2023-06-01"
GEMINI_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

Adapter = Callable[..., Awaitable[str]]


async def _post_json(
    provider: str,
    url: str,
    payload: dict[str, Any],
    headers: dict[str, str],
    params: dict[str, str] | None = None,
    client: httpx.AsyncClient | None = None,
) -> Any:
    """POST ``payload`` and return the decoded JSON body of a 2xx reply."""
    owns_client = client is None
    if client is None:
        client = httpx.AsyncClient(timeout=get_settings().llm_timeout_seconds)

    try:
        response = await client.post(url, json=payload, headers=headers, params=params)
    except httpx.HTTPError as e:
        logger.warning("llm_transport_error", provider=provider, error=type(e).__name__)
        raise ProviderError(provider, None, str(e) or type(e).__name__) from e
    finally:
        if owns_client:
            await client.aclose()

    if not response.is_success:
        logger.warning("llm_error_response", provider=provider, status=response.status_code)
        raise ProviderError(provider, response.status_code, response.text)

    try:
        return response.json()
    except ValueError as e:
        raise ProviderResponseError(
            provider, response.status_code, "Response body is not valid JSON"
        ) from e


def _extract_text(provider: str, data: Any, getter: Callable[[Any], Any]) -> str:
    """Pull the generated text out of a provider reply."""
    try:
        text = getter(data)
    except (KeyError, IndexError, TypeError) as e:
        raise ProviderResponseError(provider, 200, f"Unexpected response shape: {e!r}") from e

    if not isinstance(text, str):
        raise ProviderResponseError(
            provider, 200, f"Expected text content, got {type(text).__name__}"
        )
    return text


async def enhance_with_openai(
    api_key: str,
    model: str,
    resume_text: str,
    enhancement_type: str,
    client: httpx.AsyncClient | None = None,
) -> str:
    settings = get_settings()
    payload = {
        "model": model,
        "messages": [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": build_prompt(enhancement_type, resume_text)},
        ],
        "temperature": settings.llm_temperature,
        "max_tokens": settings.llm_max_tokens,
    }
    headers = {"Authorization": f"Bearer {api_key}"}

    data = await _post_json("OpenAI", OPENAI_URL, payload, headers, client=client)
    return _extract_text("OpenAI", data, lambda d: d["choices"][0]["message"]["content"])


async def enhance_with_anthropic(
    api_key: str,
    model: str,
    resume_text: str,
    enhancement_type: str,
    client: httpx.AsyncClient | None = None,
) -> str:
    settings = get_settings()
    payload = {
        "model": model,
        "max_tokens": settings.llm_max_tokens,
        "messages": [
            {"role": "user", "content": build_prompt(enhancement_type, resume_text)},
        ],
    }
    headers = {"x-api-key": api_key, "anthropic-version": ANTHROPIC_VERSION}

    data = await _post_json("Anthropic", ANTHROPIC_URL, payload, headers, client=client)
    return _extract_text("Anthropic", data, lambda d: d["content"][0]["text"])


async def enhance_with_gemini(
    api_key: str,
    model: str,
    resume_text: str,
    enhancement_type: str,
    client: httpx.AsyncClient | None = None,
) -> str:
    payload = {
        "contents": [
            {"parts": [{"text": build_prompt(enhancement_type, resume_text)}]},
        ],
    }

    data = await _post_json(
        "Gemini",
        GEMINI_URL.format(model=model),
        payload,
        headers={},
        params={"key": api_key},
        client=client,
    )
    return _extract_text(
        "Gemini", data, lambda d: d["candidates"][0]["content"]["parts"][0]["text"]
    )


PROVIDER_ADAPTERS: dict[str, Adapter] = {
    LLMProvider.OPENAI.value: enhance_with_openai,
    LLMProvider.ANTHROPIC.value: enhance_with_anthropic,
    LLMProvider.GEMINI.value: enhance_with_gemini,
}
