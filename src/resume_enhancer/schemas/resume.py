"""Resume and enhancement schemas."""

from datetime import datetime

from pydantic import Field

from resume_enhancer.models.resume import EnhancementStatus, FileType, ResumeStatus
from resume_enhancer.schemas.common import CamelModel


class EnhancementResponse(CamelModel):
    id: int
    resume_id: int
    enhancement_type: str
    llm_provider: str
    enhanced_content: str
    status: EnhancementStatus
    enhancement_notes: str | None
    created_at: datetime
    updated_at: datetime


class ResumeResponse(CamelModel):
    """Resume with its enhancement history, newest first."""

    id: int
    original_name: str
    file_type: FileType
    status: ResumeStatus
    original_content: str
    created_at: datetime
    updated_at: datetime
    enhancements: list[EnhancementResponse] = []


class ResumeSummary(CamelModel):
    id: int
    original_name: str
    file_type: FileType
    status: ResumeStatus
    created_at: datetime


class ResumeUploadResponse(CamelModel):
    success: bool = True
    resume: ResumeSummary


class EnhanceRequest(CamelModel):
    enhancement_type: str = Field(..., min_length=1, max_length=50)


class EnhanceResponse(CamelModel):
    success: bool = True
    enhancement: EnhancementResponse


class ResumeFileResponse(CamelModel):
    url: str
    file_name: str
    file_type: FileType
