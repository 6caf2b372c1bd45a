"""API key schemas. Secrets are accepted but never returned."""

from datetime import datetime

from pydantic import Field

from resume_enhancer.models.credential import LLMProvider
from resume_enhancer.schemas.common import CamelModel


class CredentialSave(CamelModel):
    provider: LLMProvider
    api_key: str = Field(..., min_length=1, max_length=500)
    default_model: str | None = Field(None, max_length=100)
    is_active: bool = True


class CredentialResponse(CamelModel):
    id: int
    provider: str
    default_model: str
    is_active: bool
    created_at: datetime
    updated_at: datetime


class ModelInfo(CamelModel):
    id: str
    name: str
    max_tokens: int
    supports_streaming: bool


class ProviderModels(CamelModel):
    id: LLMProvider
    name: str
    default_model: str
    models: list[ModelInfo]
