"""Resume listing and upload endpoints."""

from fastapi import APIRouter, File, UploadFile

from resume_enhancer.api.deps import CurrentUser, DbSession, Storage
from resume_enhancer.config import get_settings
from resume_enhancer.schemas.resume import (
    EnhancementResponse,
    ResumeResponse,
    ResumeSummary,
    ResumeUploadResponse,
)
from resume_enhancer.services.resume_service import ResumeService

router = APIRouter()


@router.get("", response_model=list[ResumeResponse])
async def list_resumes(db: DbSession, current_user: CurrentUser):
    """Get all of the user's resumes with their enhancements."""
    return await ResumeService(db).list_resumes(current_user)


@router.post("/upload", response_model=ResumeUploadResponse)
async def upload_resume(
    db: DbSession,
    current_user: CurrentUser,
    storage: Storage,
    file: UploadFile | None = File(None),
):
    """Upload a resume file (PDF or DOCX)."""
    content = None
    if file is not None:
        # One byte past the limit is enough to reject an oversized upload
        content = await file.read(get_settings().resume_max_size_bytes + 1)

    resume = await ResumeService(db, storage).upload_resume(
        user=current_user,
        filename=file.filename if file is not None else None,
        content_type=file.content_type if file is not None else None,
        content=content,
    )
    return ResumeUploadResponse(resume=ResumeSummary.model_validate(resume))


@router.get("/{resume_id}/enhancements", response_model=list[EnhancementResponse])
async def list_enhancements(resume_id: int, db: DbSession, current_user: CurrentUser):
    """Enhancement history for one resume, newest first."""
    return await ResumeService(db).list_enhancements(current_user, resume_id)
