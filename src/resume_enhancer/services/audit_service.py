"""Audit logging to the system_logs table, mirrored to structlog."""

from typing import Any

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from resume_enhancer.models.log import LogLevel, SystemLog

logger = structlog.get_logger()

# Never persisted even if a caller passes them
_REDACTED_KEYS = {"api_key", "apiKey", "password", "encrypted_key", "encryption_key", "token"}


class AuditService:
    """Append-only audit records, added to the caller's session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def log(
        self,
        level: LogLevel,
        category: str,
        message: str,
        metadata: dict[str, Any] | None = None,
        user_id: int | None = None,
    ) -> SystemLog:
        clean = {k: v for k, v in (metadata or {}).items() if k not in _REDACTED_KEYS}

        log_method = {
            LogLevel.ERROR: logger.error,
            LogLevel.WARNING: logger.warning,
            LogLevel.INFO: logger.info,
            LogLevel.DEBUG: logger.debug,
        }[level]
        log_method(category, message=message, user_id=user_id, metadata=clean)

        entry = SystemLog(
            level=level,
            category=category,
            message=message,
            log_metadata=clean or None,
            user_id=user_id,
        )
        # Flushed with the caller's next commit, alongside the change it records
        self.db.add(entry)
        return entry

    async def info(self, category: str, message: str, metadata=None, user_id=None):
        return await self.log(LogLevel.INFO, category, message, metadata, user_id)

    async def error(self, category: str, message: str, metadata=None, user_id=None):
        return await self.log(LogLevel.ERROR, category, message, metadata, user_id)
