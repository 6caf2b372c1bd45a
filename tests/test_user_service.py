"""Tests for user service."""

import pytest
from sqlalchemy import select

from resume_enhancer.core.security import verify_password
from resume_enhancer.exceptions import AuthError, ConflictError, ValidationError
from resume_enhancer.models import SystemLog
from resume_enhancer.models.user import UserRole
from resume_enhancer.schemas.user import SignupRequest
from resume_enhancer.services.user_service import UserService


@pytest.fixture
def signup_data():
    return SignupRequest(
        email="sam@example.com",
        password="correct-horse-battery",
        first_name="Sam",
        last_name="Rivera",
        company_name="Rivera Roofing",
    )


@pytest.mark.asyncio
async def test_signup_creates_user(db_session, signup_data):
    """Test creating a new account."""
    user = await UserService(db_session).signup(signup_data)

    assert user.id is not None
    assert user.email == "sam@example.com"
    assert user.role == UserRole.USER
    assert user.name == "Sam Rivera"
    assert user.company_name == "Rivera Roofing"
    assert user.hashed_password != signup_data.password
    assert verify_password("correct-horse-battery", user.hashed_password)


@pytest.mark.asyncio
async def test_signup_audit_omits_password(db_session, signup_data):
    user = await UserService(db_session).signup(signup_data)
    await db_session.flush()

    entry = await db_session.scalar(select(SystemLog).where(SystemLog.category == "auth"))
    assert entry.user_id == user.id
    assert "password" not in entry.log_metadata
    assert "correct-horse-battery" not in str(entry.log_metadata)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides,message",
    [
        ({"email": None}, "Email and password are required"),
        ({"password": ""}, "Email and password are required"),
        ({"email": "not-an-email"}, "Invalid email format"),
        ({"email": "a b@example.com"}, "Invalid email format"),
        ({"password": "short"}, "Password must be at least 12 characters long"),
    ],
)
async def test_signup_validation(db_session, signup_data, overrides, message):
    data = signup_data.model_copy(update=overrides)

    with pytest.raises(ValidationError) as exc_info:
        await UserService(db_session).signup(data)

    assert exc_info.value.message == message


@pytest.mark.asyncio
async def test_signup_duplicate_email(db_session, signup_data):
    service = UserService(db_session)
    await service.signup(signup_data)

    with pytest.raises(ConflictError):
        await service.signup(signup_data)


@pytest.mark.asyncio
async def test_authenticate(db_session, signup_data):
    service = UserService(db_session)
    created = await service.signup(signup_data)

    user = await service.authenticate("sam@example.com", "correct-horse-battery")
    assert user.id == created.id

    with pytest.raises(AuthError):
        await service.authenticate("sam@example.com", "wrong-password-123")
    with pytest.raises(AuthError):
        await service.authenticate("nobody@example.com", "correct-horse-battery")
