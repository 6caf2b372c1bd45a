"""Per-user provider API keys."""

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from resume_enhancer.core.crypto import CredentialVault
from resume_enhancer.exceptions import NotFoundError, ValidationError
from resume_enhancer.models.credential import ApiCredential, LLMProvider
from resume_enhancer.models.user import User
from resume_enhancer.services.audit_service import AuditService
from resume_enhancer.services.model_catalog import get_default_model, is_valid_model


class CredentialService:
    """Store, activate and read encrypted provider credentials."""

    def __init__(self, db: AsyncSession, vault: CredentialVault):
        self.db = db
        self.vault = vault
        self.audit = AuditService(db)

    async def list_credentials(self, user: User) -> list[ApiCredential]:
        result = await self.db.execute(
            select(ApiCredential)
            .where(ApiCredential.user_id == user.id)
            .order_by(ApiCredential.provider)
        )
        return list(result.scalars().all())

    async def get_active_credential(self, user: User) -> ApiCredential | None:
        """The credential enhancement requests dispatch to, if any."""
        result = await self.db.execute(
            select(ApiCredential)
            .where(ApiCredential.user_id == user.id, ApiCredential.is_active.is_(True))
            .order_by(ApiCredential.updated_at.desc(), ApiCredential.id.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def save_credential(
        self,
        user: User,
        provider: LLMProvider,
        api_key: str,
        default_model: str | None = None,
        is_active: bool = True,
    ) -> ApiCredential:
        """Replace the user's credential for ``provider`` with a new one."""
        if not api_key.strip():
            raise ValidationError("API key is required")

        model = default_model or get_default_model(provider)
        if not is_valid_model(provider.value, model):
            raise ValidationError(f"Unknown model '{model}' for provider {provider.value}")

        await self.db.execute(
            delete(ApiCredential).where(
                ApiCredential.user_id == user.id,
                ApiCredential.provider == provider.value,
            )
        )
        if is_active:
            await self._deactivate_all(user)

        credential = ApiCredential(
            user_id=user.id,
            provider=provider.value,
            encrypted_key=self.vault.encrypt(api_key.strip()),
            default_model=model,
            is_active=is_active,
        )
        self.db.add(credential)
        await self.db.flush()

        await self.audit.info(
            "api_keys",
            f"API key saved for {provider.value}",
            {"provider": provider.value, "default_model": model, "is_active": is_active},
            user.id,
        )
        return credential

    async def activate(self, user: User, provider: LLMProvider) -> ApiCredential:
        credential = await self._get_for_provider(user, provider)
        await self._deactivate_all(user)
        credential.is_active = True
        await self.db.flush()
        await self.db.refresh(credential)
        return credential

    async def delete_credential(self, user: User, provider: LLMProvider) -> None:
        credential = await self._get_for_provider(user, provider)
        await self.db.delete(credential)
        await self.db.flush()
        await self.audit.info(
            "api_keys", f"API key removed for {provider.value}", {"provider": provider.value}, user.id
        )

    def reveal(self, credential: ApiCredential) -> str:
        """Decrypt the stored secret."""
        return self.vault.decrypt(credential.encrypted_key)

    async def _get_for_provider(self, user: User, provider: LLMProvider) -> ApiCredential:
        result = await self.db.execute(
            select(ApiCredential).where(
                ApiCredential.user_id == user.id,
                ApiCredential.provider == provider.value,
            )
        )
        credential = result.scalars().first()
        if not credential:
            raise NotFoundError(f"No API key configured for {provider.value}")
        return credential

    async def _deactivate_all(self, user: User) -> None:
        await self.db.execute(
            update(ApiCredential)
            .where(ApiCredential.user_id == user.id)
            .values(is_active=False)
            .execution_options(synchronize_session="fetch")
        )
