"""Enhancement orchestration.

An enhancement is written in two phases: the row is created and committed in
``processing`` state before the provider call, then exactly one terminal
update moves it to ``completed`` or ``error``. A failed provider call is
recorded on the row and then re-raised to the caller, including
cancellation of the request task.
"""

import asyncio
from typing import Any

import httpx
import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from resume_enhancer.core.crypto import CredentialVault
from resume_enhancer.exceptions import ConfigurationError, UnsupportedProviderError
from resume_enhancer.models.resume import (
    Enhancement,
    EnhancementStatus,
    EnhancementType,
    Resume,
    ResumeStatus,
)
from resume_enhancer.models.user import User
from resume_enhancer.services.audit_service import AuditService
from resume_enhancer.services.credential_service import CredentialService
from resume_enhancer.services.llm_providers import PROVIDER_ADAPTERS, Adapter
from resume_enhancer.services.resume_service import ResumeService

logger = structlog.get_logger()

NO_ACTIVE_KEY_MESSAGE = (
    "No active API key found. Please configure your API keys in settings."
)
CANCELLED_MESSAGE = "Enhancement cancelled before the provider responded"


class EnhancementService:
    """Runs one enhancement request against the user's active provider."""

    def __init__(
        self,
        db: AsyncSession,
        vault: CredentialVault,
        http_client: httpx.AsyncClient | None = None,
        adapters: dict[str, Adapter] | None = None,
    ):
        self.db = db
        self.vault = vault
        self.http_client = http_client
        self.adapters = adapters if adapters is not None else PROVIDER_ADAPTERS
        self.audit = AuditService(db)

    async def enhance(self, user: User, resume_id: int, enhancement_type: str) -> Enhancement:
        user_id = user.id
        resume = await ResumeService(self.db).get_owned_resume(user, resume_id)

        credentials = CredentialService(self.db, self.vault)
        credential = await credentials.get_active_credential(user)
        if not credential:
            raise ConfigurationError(NO_ACTIVE_KEY_MESSAGE)

        api_key = credentials.reveal(credential)
        provider = credential.provider
        resolved_type = EnhancementType.resolve(enhancement_type)
        context = {
            "resume_id": resume.id,
            "enhancement_type": resolved_type.value,
            "provider": provider,
        }

        enhancement = await self._begin(resume, provider, resolved_type)

        try:
            adapter = self.adapters.get(provider)
            if adapter is None:
                raise UnsupportedProviderError(provider)

            content = await adapter(
                api_key,
                credential.default_model,
                resume.original_content,
                resolved_type.value,
                client=self.http_client,
            )
        except asyncio.CancelledError:
            await asyncio.shield(
                self._fail(enhancement, CANCELLED_MESSAGE, context, user_id)
            )
            raise
        except Exception as e:
            await self._fail(enhancement, str(e), context, user_id)
            raise

        return await self._complete(enhancement, resume, content, context, user_id)

    async def _begin(
        self, resume: Resume, provider: str, enhancement_type: EnhancementType
    ) -> Enhancement:
        enhancement = Enhancement(
            resume_id=resume.id,
            enhancement_type=enhancement_type.value,
            llm_provider=provider,
            enhanced_content="",
            status=EnhancementStatus.PROCESSING,
        )
        self.db.add(enhancement)
        await self.db.commit()
        logger.info("enhancement_started", enhancement_id=enhancement.id, resume_id=resume.id)
        return enhancement

    async def _complete(
        self,
        enhancement: Enhancement,
        resume: Resume,
        content: str,
        context: dict[str, Any],
        user_id: int,
    ) -> Enhancement:
        enhancement.enhanced_content = content
        enhancement.status = EnhancementStatus.COMPLETED
        resume.status = ResumeStatus.ENHANCED

        await self.audit.info(
            "resume_enhancement",
            f"Resume enhanced successfully with {context['provider']}",
            context,
            user_id,
        )
        await self.db.commit()
        return enhancement

    async def _fail(
        self,
        enhancement: Enhancement,
        message: str,
        context: dict[str, Any],
        user_id: int,
    ) -> None:
        enhancement.status = EnhancementStatus.ERROR
        enhancement.enhancement_notes = message

        await self.audit.error(
            "resume_enhancement",
            f"Enhancement failed: {message}",
            {**context, "error": message},
            user_id,
        )
        await self.db.commit()
