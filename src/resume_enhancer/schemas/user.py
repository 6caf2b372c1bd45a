"""User-related Pydantic schemas."""

from pydantic import Field

from resume_enhancer.models.user import UserRole
from resume_enhancer.schemas.common import CamelModel


class SignupRequest(CamelModel):
    """Schema for account signup. Field rules are enforced by UserService."""

    email: str | None = None
    password: str | None = None
    first_name: str | None = Field(None, max_length=255)
    last_name: str | None = Field(None, max_length=255)
    company_name: str | None = Field(None, max_length=255)


class UserResponse(CamelModel):
    id: int
    email: str
    first_name: str | None
    last_name: str | None
    company_name: str | None = None
    role: UserRole


class SignupResponse(CamelModel):
    message: str
    user: UserResponse


class LoginRequest(CamelModel):
    email: str
    password: str


class TokenResponse(CamelModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
