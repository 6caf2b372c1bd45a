"""API key settings and model catalog endpoints."""

from fastapi import APIRouter, status

from resume_enhancer.api.deps import CurrentUser, DbSession, Vault
from resume_enhancer.models.credential import LLMProvider
from resume_enhancer.schemas.credential import (
    CredentialResponse,
    CredentialSave,
    ModelInfo,
    ProviderModels,
)
from resume_enhancer.services.credential_service import CredentialService
from resume_enhancer.services.model_catalog import (
    PROVIDER_NAMES,
    get_default_model,
    get_models_for_provider,
)

router = APIRouter()


@router.get("/api-keys", response_model=list[CredentialResponse])
async def list_api_keys(db: DbSession, current_user: CurrentUser, vault: Vault):
    """List configured providers. Keys themselves are never returned."""
    return await CredentialService(db, vault).list_credentials(current_user)


@router.put("/api-keys", response_model=CredentialResponse)
async def save_api_key(
    data: CredentialSave,
    db: DbSession,
    current_user: CurrentUser,
    vault: Vault,
):
    """Store a key for a provider, replacing any previous one."""
    return await CredentialService(db, vault).save_credential(
        current_user,
        provider=data.provider,
        api_key=data.api_key,
        default_model=data.default_model,
        is_active=data.is_active,
    )


@router.post("/api-keys/{provider}/activate", response_model=CredentialResponse)
async def activate_api_key(
    provider: LLMProvider,
    db: DbSession,
    current_user: CurrentUser,
    vault: Vault,
):
    """Make this provider the one used for enhancements."""
    return await CredentialService(db, vault).activate(current_user, provider)


@router.delete("/api-keys/{provider}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_api_key(
    provider: LLMProvider,
    db: DbSession,
    current_user: CurrentUser,
    vault: Vault,
):
    await CredentialService(db, vault).delete_credential(current_user, provider)


@router.get("/models", response_model=list[ProviderModels])
async def list_models():
    """Known models per provider."""
    return [
        ProviderModels(
            id=provider,
            name=PROVIDER_NAMES[provider],
            default_model=get_default_model(provider),
            models=[
                ModelInfo(
                    id=m.id,
                    name=m.name,
                    max_tokens=m.max_tokens,
                    supports_streaming=m.supports_streaming,
                )
                for m in get_models_for_provider(provider)
            ],
        )
        for provider in LLMProvider
    ]
