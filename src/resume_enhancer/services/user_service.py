"""User accounts: signup and login."""

import re

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from resume_enhancer.core.security import get_password_hash, verify_password
from resume_enhancer.exceptions import AuthError, ConflictError, ValidationError
from resume_enhancer.models.user import User, UserRole
from resume_enhancer.schemas.user import SignupRequest
from resume_enhancer.services.audit_service import AuditService

PASSWORD_MIN_LENGTH = 12
EMAIL_REGEX = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class UserService:
    """Service for user-related operations."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.audit = AuditService(db)

    async def get_by_id(self, user_id: int) -> User | None:
        return await self.db.get(User, user_id)

    async def get_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def signup(self, data: SignupRequest) -> User:
        """Validate and create a new account."""
        email = (data.email or "").strip()
        password = data.password or ""

        if not email or not password:
            raise ValidationError("Email and password are required")
        if not EMAIL_REGEX.match(email):
            raise ValidationError("Invalid email format")
        if len(password) < PASSWORD_MIN_LENGTH:
            raise ValidationError(
                f"Password must be at least {PASSWORD_MIN_LENGTH} characters long"
            )

        if await self.get_by_email(email):
            raise ConflictError("Email already in use")

        display_name = f"{data.first_name or ''} {data.last_name or ''}".strip() or email
        user = User(
            email=email,
            hashed_password=get_password_hash(password),
            role=UserRole.USER,
            name=display_name,
            first_name=data.first_name or None,
            last_name=data.last_name or None,
            company_name=data.company_name or None,
        )
        self.db.add(user)
        await self.db.flush()

        await self.audit.info(
            "auth", "User account created", {"user_id": user.id, "email": user.email}, user.id
        )
        return user

    async def authenticate(self, email: str, password: str) -> User:
        """Return the user for valid credentials, else raise AuthError."""
        user = await self.get_by_email(email.strip())
        if not user or not verify_password(password, user.hashed_password):
            raise AuthError("Invalid email or password")
        return user
