"""Append-only audit log."""

from enum import Enum

from sqlalchemy import JSON, Enum as SQLEnum, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from resume_enhancer.models.base import Base


class LogLevel(str, Enum):
    """Audit log level."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    DEBUG = "debug"


class SystemLog(Base):
    """Audit record written by the application, never updated."""

    __tablename__ = "system_logs"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    level: Mapped[LogLevel] = mapped_column(
        SQLEnum(LogLevel, values_callable=lambda obj: [e.value for e in obj]),
        index=True,
    )
    category: Mapped[str] = mapped_column(String(100), index=True)
    message: Mapped[str] = mapped_column(Text)
    # "metadata" is reserved on declarative classes
    log_metadata: Mapped[dict | None] = mapped_column("metadata", JSON)
    user_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), index=True
    )
