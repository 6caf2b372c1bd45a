"""Known models per LLM provider."""

from dataclasses import dataclass

from resume_enhancer.models.credential import LLMProvider


@dataclass(frozen=True)
class ModelConfig:
    id: str
    name: str
    provider: LLMProvider
    max_tokens: int
    supports_streaming: bool = True


AI_MODELS: dict[LLMProvider, list[ModelConfig]] = {
    LLMProvider.OPENAI: [
        ModelConfig("gpt-4o", "GPT-4o", LLMProvider.OPENAI, 128000),
        ModelConfig("gpt-4o-mini", "GPT-4o Mini", LLMProvider.OPENAI, 128000),
        ModelConfig("gpt-4-turbo", "GPT-4 Turbo", LLMProvider.OPENAI, 128000),
        ModelConfig("gpt-4", "GPT-4", LLMProvider.OPENAI, 8192),
    ],
    LLMProvider.ANTHROPIC: [
        ModelConfig("claude-3-5-sonnet-20241022", "Claude 3.5 Sonnet", LLMProvider.ANTHROPIC, 200000),
        ModelConfig("claude-3-opus-20240229", "Claude 3 Opus", LLMProvider.ANTHROPIC, 200000),
        ModelConfig("claude-3-sonnet-20240229", "Claude 3 Sonnet", LLMProvider.ANTHROPIC, 200000),
        ModelConfig("claude-3-haiku-20240307", "Claude 3 Haiku", LLMProvider.ANTHROPIC, 200000),
    ],
    LLMProvider.GEMINI: [
        ModelConfig("gemini-1.5-pro", "Gemini 1.5 Pro", LLMProvider.GEMINI, 1000000),
        ModelConfig("gemini-1.5-flash", "Gemini 1.5 Flash", LLMProvider.GEMINI, 1000000),
        ModelConfig("gemini-pro", "Gemini Pro", LLMProvider.GEMINI, 30720),
    ],
}

DEFAULT_MODELS: dict[LLMProvider, str] = {
    LLMProvider.OPENAI: "gpt-4o-mini",
    LLMProvider.ANTHROPIC: "claude-3-5-sonnet-20241022",
    LLMProvider.GEMINI: "gemini-1.5-flash",
}

PROVIDER_NAMES: dict[LLMProvider, str] = {
    LLMProvider.OPENAI: "OpenAI",
    LLMProvider.ANTHROPIC: "Anthropic",
    LLMProvider.GEMINI: "Google Gemini",
}


def get_models_for_provider(provider: LLMProvider) -> list[ModelConfig]:
    return AI_MODELS.get(provider, [])


def get_default_model(provider: LLMProvider) -> str:
    return DEFAULT_MODELS[provider]


def is_valid_model(provider: str, model_id: str) -> bool:
    """Check that ``model_id`` is a known model of ``provider``."""
    try:
        models = AI_MODELS[LLMProvider(provider)]
    except ValueError:
        return False
    return any(m.id == model_id for m in models)
