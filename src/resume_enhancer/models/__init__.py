"""Database models."""

from resume_enhancer.models.base import Base
from resume_enhancer.models.user import User, UserRole
from resume_enhancer.models.credential import ApiCredential, LLMProvider
from resume_enhancer.models.resume import (
    Enhancement,
    EnhancementStatus,
    EnhancementType,
    FileType,
    Resume,
    ResumeStatus,
)
from resume_enhancer.models.log import LogLevel, SystemLog

__all__ = [
    "Base",
    "User",
    "UserRole",
    "ApiCredential",
    "LLMProvider",
    "Resume",
    "ResumeStatus",
    "FileType",
    "Enhancement",
    "EnhancementStatus",
    "EnhancementType",
    "SystemLog",
    "LogLevel",
]
