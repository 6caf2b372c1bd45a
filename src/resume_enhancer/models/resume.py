"""Resume and enhancement models."""

from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import Enum as SQLEnum, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from resume_enhancer.models.base import Base

if TYPE_CHECKING:
    from resume_enhancer.models.user import User


class FileType(str, Enum):
    """Detected upload kind."""

    PDF = "pdf"
    DOCX = "docx"


class ResumeStatus(str, Enum):
    """Resume lifecycle status."""

    UPLOADED = "uploaded"
    ENHANCED = "enhanced"


class EnhancementType(str, Enum):
    """Enhancement focus area."""

    SKILLS_CERTIFICATIONS = "skills_certifications"
    PROJECT_EXPERIENCE = "project_experience"
    CLIENT_QUALITY = "client_quality"

    @classmethod
    def resolve(cls, value: str | None) -> "EnhancementType":
        """Map a requested type onto a known one; unknown values use client quality."""
        try:
            return cls(value)
        except ValueError:
            return cls.CLIENT_QUALITY


class EnhancementStatus(str, Enum):
    """Enhancement processing status."""

    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


class Resume(Base):
    """Uploaded resume and its extracted text."""

    __tablename__ = "resumes"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), index=True
    )

    # File info
    original_name: Mapped[str] = mapped_column(String(255))
    cloud_storage_path: Mapped[str] = mapped_column(String(1024))  # S3 key
    file_type: Mapped[FileType] = mapped_column(
        SQLEnum(FileType, values_callable=lambda obj: [e.value for e in obj])
    )

    # Parsed content, never empty
    original_content: Mapped[str] = mapped_column(Text)

    status: Mapped[ResumeStatus] = mapped_column(
        SQLEnum(ResumeStatus, values_callable=lambda obj: [e.value for e in obj]),
        default=ResumeStatus.UPLOADED,
    )

    # Relationships
    user: Mapped["User"] = relationship(back_populates="resumes")
    enhancements: Mapped[list["Enhancement"]] = relationship(
        back_populates="resume",
        cascade="all, delete-orphan",
        order_by=lambda: [Enhancement.created_at.desc(), Enhancement.id.desc()],
    )


class Enhancement(Base):
    """One LLM rewrite of a resume."""

    __tablename__ = "resume_enhancements"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    resume_id: Mapped[int] = mapped_column(
        ForeignKey("resumes.id", ondelete="CASCADE"), index=True
    )

    enhancement_type: Mapped[str] = mapped_column(String(50))
    llm_provider: Mapped[str] = mapped_column(String(20))
    enhanced_content: Mapped[str] = mapped_column(Text, default="")

    status: Mapped[EnhancementStatus] = mapped_column(
        SQLEnum(EnhancementStatus, values_callable=lambda obj: [e.value for e in obj]),
        default=EnhancementStatus.PROCESSING,
    )
    enhancement_notes: Mapped[str | None] = mapped_column(Text)  # failure message

    # Relationship
    resume: Mapped["Resume"] = relationship(back_populates="enhancements")
