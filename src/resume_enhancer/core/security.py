"""
Security utilities for authentication.

Provides password hashing (bcrypt) and JWT session tokens.
"""

from datetime import datetime, timedelta, timezone

import jwt
from jwt.exceptions import InvalidTokenError
from passlib.context import CryptContext

from resume_enhancer.config import get_settings
from resume_enhancer.exceptions import ConfigurationError

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a bcrypt hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password using bcrypt."""
    return pwd_context.hash(password)


def get_signing_key() -> str:
    """Session signing key; raises ConfigurationError when SECRET_KEY is unset."""
    secret_key = get_settings().secret_key
    if not secret_key:
        raise ConfigurationError("SECRET_KEY environment variable is not set.")
    return secret_key


def create_access_token(user_id: int, expires_delta: timedelta | None = None) -> str:
    """
    Create a signed session token.

    Args:
        user_id: Subject of the token
        expires_delta: Optional custom lifetime

    Returns:
        The encoded JWT
    """
    settings = get_settings()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    payload = {"sub": str(user_id), "exp": expire}
    return jwt.encode(payload, get_signing_key(), algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> int | None:
    """
    Decode a session token.

    Returns:
        The user id, or None if the token is invalid or expired
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            get_signing_key(),
            algorithms=[settings.jwt_algorithm],
        )
        return int(payload["sub"])
    except (InvalidTokenError, KeyError, ValueError):
        return None
