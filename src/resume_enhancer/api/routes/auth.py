"""Signup and login endpoints."""

import math

from fastapi import APIRouter, status

from resume_enhancer.api.deps import ClientIP, DbSession, Limiter
from resume_enhancer.config import get_settings
from resume_enhancer.core.security import create_access_token
from resume_enhancer.exceptions import RateLimitedError
from resume_enhancer.schemas.user import (
    LoginRequest,
    SignupRequest,
    SignupResponse,
    TokenResponse,
    UserResponse,
)
from resume_enhancer.services.user_service import UserService

router = APIRouter()


@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    data: SignupRequest,
    db: DbSession,
    limiter: Limiter,
    client_ip: ClientIP,
):
    """Create an account. Rate limited per client IP."""
    settings = get_settings()
    key = f"signup:{client_ip}"
    max_attempts = settings.signup_rate_limit_attempts

    if not limiter.allow(key, max_attempts, settings.signup_rate_limit_window_seconds * 1000):
        _, reset_in_ms = limiter.remaining(key, max_attempts)
        retry_after = math.ceil(reset_in_ms / 1000) if reset_in_ms else None
        raise RateLimitedError(
            "Too many signup attempts. Please try again later.",
            retry_after=retry_after,
        )

    user = await UserService(db).signup(data)
    return SignupResponse(
        message="User created successfully",
        user=UserResponse.model_validate(user),
    )


@router.post("/auth/login", response_model=TokenResponse)
async def login(data: LoginRequest, db: DbSession):
    """Exchange email and password for a bearer token."""
    user = await UserService(db).authenticate(data.email, data.password)
    return TokenResponse(
        access_token=create_access_token(user.id),
        user=UserResponse.model_validate(user),
    )
