"""Per-user LLM provider credentials."""

from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from resume_enhancer.models.base import Base

if TYPE_CHECKING:
    from resume_enhancer.models.user import User


class LLMProvider(str, Enum):
    """Supported LLM vendors."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GEMINI = "gemini"


class ApiCredential(Base):
    """A user's API key for one provider, encrypted at rest."""

    __tablename__ = "user_api_keys"
    __table_args__ = (
        Index("ix_user_api_keys_user_provider", "user_id", "provider"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"))

    # Plain string: stored rows may name providers that have no adapter
    provider: Mapped[str] = mapped_column(String(20))
    encrypted_key: Mapped[str] = mapped_column(Text)  # nonce:tag:ciphertext hex
    default_model: Mapped[str] = mapped_column(String(100))
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    # Relationship
    user: Mapped["User"] = relationship(back_populates="credentials")
