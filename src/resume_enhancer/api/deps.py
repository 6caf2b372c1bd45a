"""API dependencies."""

from typing import Annotated, AsyncGenerator

import httpx
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from resume_enhancer.config import get_settings
from resume_enhancer.core.crypto import CredentialVault, get_vault
from resume_enhancer.core.rate_limiter import RateLimiter
from resume_enhancer.core.security import decode_access_token
from resume_enhancer.database import get_db
from resume_enhancer.exceptions import AuthError
from resume_enhancer.models.user import User
from resume_enhancer.services.storage_service import StorageService, get_storage
from resume_enhancer.services.user_service import UserService

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """Resolve the session user from the bearer token."""
    if credentials is None:
        raise AuthError()

    user_id = decode_access_token(credentials.credentials)
    if user_id is None:
        raise AuthError("Invalid or expired session")

    user = await UserService(db).get_by_id(user_id)
    if not user:
        raise AuthError()
    return user


async def get_llm_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    """HTTP client for provider calls, sized for slow generations."""
    async with httpx.AsyncClient(timeout=get_settings().llm_timeout_seconds) as client:
        yield client


def get_rate_limiter(request: Request) -> RateLimiter:
    return request.app.state.rate_limiter


def get_client_ip(request: Request) -> str:
    """
    Client address used for rate limiting.

    X-Forwarded-For and X-Real-IP are client-controlled, so they are only
    read when TRUST_PROXY_HEADERS is set; otherwise the socket peer is used.
    """
    if get_settings().trust_proxy_headers:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip()
        real_ip = request.headers.get("x-real-ip")
        if real_ip:
            return real_ip.strip()
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


# Type aliases for dependency injection
CurrentUser = Annotated[User, Depends(get_current_user)]
DbSession = Annotated[AsyncSession, Depends(get_db)]
Storage = Annotated[StorageService, Depends(get_storage)]
Vault = Annotated[CredentialVault, Depends(get_vault)]
LLMClient = Annotated[httpx.AsyncClient, Depends(get_llm_client)]
Limiter = Annotated[RateLimiter, Depends(get_rate_limiter)]
ClientIP = Annotated[str, Depends(get_client_ip)]
