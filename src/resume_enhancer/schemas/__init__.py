"""Pydantic schemas for API validation."""

from resume_enhancer.schemas.common import CamelModel
from resume_enhancer.schemas.user import (
    LoginRequest,
    SignupRequest,
    SignupResponse,
    TokenResponse,
    UserResponse,
)
from resume_enhancer.schemas.credential import (
    CredentialResponse,
    CredentialSave,
    ModelInfo,
    ProviderModels,
)
from resume_enhancer.schemas.resume import (
    EnhanceRequest,
    EnhanceResponse,
    EnhancementResponse,
    ResumeFileResponse,
    ResumeResponse,
    ResumeSummary,
    ResumeUploadResponse,
)

__all__ = [
    "CamelModel",
    "LoginRequest",
    "SignupRequest",
    "SignupResponse",
    "TokenResponse",
    "UserResponse",
    "CredentialResponse",
    "CredentialSave",
    "ModelInfo",
    "ProviderModels",
    "EnhanceRequest",
    "EnhanceResponse",
    "EnhancementResponse",
    "ResumeFileResponse",
    "ResumeResponse",
    "ResumeSummary",
    "ResumeUploadResponse",
]
