"""Business logic services."""

from resume_enhancer.services.user_service import UserService
from resume_enhancer.services.credential_service import CredentialService
from resume_enhancer.services.resume_service import ResumeService
from resume_enhancer.services.enhancement_service import EnhancementService
from resume_enhancer.services.storage_service import StorageService
from resume_enhancer.services.audit_service import AuditService

__all__ = [
    "UserService",
    "CredentialService",
    "ResumeService",
    "EnhancementService",
    "StorageService",
    "AuditService",
]
