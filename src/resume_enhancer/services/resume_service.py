"""Resume upload pipeline and owned-resume lookups."""

import time

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from resume_enhancer.config import get_settings
from resume_enhancer.exceptions import (
    AppError,
    NoReadableTextError,
    NotFoundError,
    PayloadTooLargeError,
    UnsupportedTypeError,
    ValidationError,
)
from resume_enhancer.models.resume import Enhancement, Resume, ResumeStatus
from resume_enhancer.models.user import User
from resume_enhancer.services.audit_service import AuditService
from resume_enhancer.services.extraction import MIME_FILE_TYPES, extract_text
from resume_enhancer.services.storage_service import StorageService

logger = structlog.get_logger()


class ResumeService:
    """Service for resume storage and retrieval."""

    def __init__(self, db: AsyncSession, storage: StorageService | None = None):
        self.db = db
        self.storage = storage
        self.settings = get_settings()
        self.audit = AuditService(db)

    async def upload_resume(
        self,
        user: User,
        filename: str | None,
        content_type: str | None,
        content: bytes | None,
    ) -> Resume:
        """Validate, extract, store and record an uploaded resume.

        Every check runs before the storage write, and the storage write runs
        before the database insert, so a rejected or failed upload never
        leaves a Resume row behind.
        """
        try:
            return await self._upload(user, filename, content_type, content)
        except AppError as e:
            # Commit so the failure record survives the request-level rollback
            await self.audit.error(
                "resume_upload",
                f"Upload failed: {e.message}",
                {"file_name": filename, "content_type": content_type, "error": e.message},
                user.id,
            )
            await self.db.commit()
            raise

    async def _upload(
        self,
        user: User,
        filename: str | None,
        content_type: str | None,
        content: bytes | None,
    ) -> Resume:
        if not filename or content is None:
            raise ValidationError("No file provided")

        file_type = MIME_FILE_TYPES.get(content_type or "")
        if file_type is None:
            raise UnsupportedTypeError()

        max_size = self.settings.resume_max_size_bytes
        if len(content) > max_size:
            raise PayloadTooLargeError(
                f"File size exceeds {self.settings.resume_max_size_mb}MB limit."
            )

        extracted_text = extract_text(file_type, content)
        if not extracted_text.strip():
            raise NoReadableTextError()

        key = self.build_storage_key(user, filename)
        await self.storage.upload(key, content, content_type)

        resume = Resume(
            user_id=user.id,
            original_name=filename,
            cloud_storage_path=key,
            file_type=file_type,
            original_content=extracted_text,
            status=ResumeStatus.UPLOADED,
        )
        self.db.add(resume)
        await self.db.flush()

        await self.audit.info(
            "resume_upload",
            "Resume uploaded successfully",
            {
                "resume_id": resume.id,
                "file_name": filename,
                "file_type": file_type.value,
                "file_size": len(content),
            },
            user.id,
        )
        return resume

    def build_storage_key(self, user: User, filename: str) -> str:
        """Per-user, timestamp-namespaced object key."""
        safe_name = filename.replace("/", "_").replace("\\", "_")
        timestamp_ms = int(time.time() * 1000)
        return f"{self.settings.s3_key_prefix}/{user.id}/{timestamp_ms}-{safe_name}"

    async def list_resumes(self, user: User) -> list[Resume]:
        """All of the user's resumes with enhancements, newest first."""
        result = await self.db.execute(
            select(Resume)
            .options(selectinload(Resume.enhancements))
            .where(Resume.user_id == user.id)
            .order_by(Resume.created_at.desc(), Resume.id.desc())
        )
        return list(result.scalars().all())

    async def get_owned_resume(self, user: User, resume_id: int) -> Resume:
        """Resolve a resume by id and owner; anything else is a 404."""
        result = await self.db.execute(
            select(Resume).where(Resume.id == resume_id, Resume.user_id == user.id)
        )
        resume = result.scalar_one_or_none()
        if not resume:
            raise NotFoundError("Resume not found")
        return resume

    async def get_owned_enhancement(self, user: User, enhancement_id: int) -> Enhancement:
        result = await self.db.execute(
            select(Enhancement)
            .join(Enhancement.resume)
            .where(Enhancement.id == enhancement_id, Resume.user_id == user.id)
        )
        enhancement = result.scalar_one_or_none()
        if not enhancement:
            raise NotFoundError("Enhancement not found")
        return enhancement

    async def list_enhancements(self, user: User, resume_id: int) -> list[Enhancement]:
        """Enhancement history for an owned resume, newest first."""
        resume = await self.get_owned_resume(user, resume_id)
        result = await self.db.execute(
            select(Enhancement)
            .where(Enhancement.resume_id == resume.id)
            .order_by(Enhancement.created_at.desc(), Enhancement.id.desc())
        )
        return list(result.scalars().all())
