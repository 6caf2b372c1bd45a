"""Pytest configuration and fixtures."""

import os

# Settings are read at import time, so the environment comes first.
TEST_ENCRYPTION_KEY = "0123456789abcdef0123456789abcdef"
os.environ["ENCRYPTION_KEY"] = TEST_ENCRYPTION_KEY
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key-for-signing-session-tokens"
os.environ["S3_BUCKET_NAME"] = "test-bucket"
os.environ["APP_ENV"] = "development"
os.environ["TRUST_PROXY_HEADERS"] = "true"

from io import BytesIO
from typing import AsyncGenerator, Callable

import httpx
import pytest
import pytest_asyncio
from docx import Document
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from resume_enhancer.core.crypto import CredentialVault
from resume_enhancer.core.security import create_access_token
from resume_enhancer.exceptions import StorageError
from resume_enhancer.models import ApiCredential, Base, Resume, User
from resume_enhancer.models.resume import FileType


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
SAMPLE_RESUME_TEXT = "Jane Doe\nLicensed Electrician\nCompleted 40 commercial installs"


@pytest_asyncio.fixture(scope="function")
async def db_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async_session = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()


class FakeStorage:
    """In-memory stand-in for the S3 storage service."""

    def __init__(self):
        self.objects: dict[str, tuple[bytes, str]] = {}
        self.fail_uploads = False
        self.calls: list[tuple[str, str]] = []

    async def upload(self, key: str, content: bytes, content_type: str) -> str:
        self.calls.append(("upload", key))
        if self.fail_uploads:
            raise StorageError("Failed to upload file: simulated outage")
        self.objects[key] = (content, content_type)
        return key

    async def download(self, key: str) -> bytes:
        self.calls.append(("download", key))
        if key not in self.objects:
            raise StorageError(f"Failed to download file: {key}")
        return self.objects[key][0]

    async def generate_presigned_url(self, key: str, expiration: int | None = None) -> str:
        self.calls.append(("presign", key))
        return f"https://test-bucket.s3.amazonaws.com/{key}?X-Amz-Expires={expiration or 3600}"


@pytest.fixture
def fake_storage():
    return FakeStorage()


@pytest.fixture
def vault():
    return CredentialVault.from_secret(TEST_ENCRYPTION_KEY)


class MockLLM:
    """Records provider requests and replies with a configurable response."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.json_body: dict | None = None
        self.text_body: str | None = None

    def reply(self, status_code: int = 200, json_body: dict | None = None, text: str | None = None):
        self.status_code = status_code
        self.json_body = json_body
        self.text_body = text

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.text_body is not None:
            return httpx.Response(self.status_code, text=self.text_body)
        return httpx.Response(self.status_code, json=self.json_body or {})

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def mock_llm():
    return MockLLM()


def openai_reply(text: str) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": text}}]}


def make_pdf(text: str) -> bytes:
    """Build a small PDF; an empty or blank ``text`` yields a page with no text."""
    buffer = BytesIO()
    c = canvas.Canvas(buffer, pagesize=letter)
    y = 720
    for line in text.splitlines():
        if line.strip():
            c.drawString(72, y, line)
        y -= 14
    c.showPage()
    c.save()
    return buffer.getvalue()


def make_docx(text: str) -> bytes:
    doc = Document()
    for line in text.splitlines():
        doc.add_paragraph(line)
    buffer = BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


@pytest_asyncio.fixture
async def make_user(db_session) -> Callable:
    """Factory for persisted users."""
    counter = {"n": 0}

    async def _make(email: str | None = None) -> User:
        counter["n"] += 1
        user = User(
            email=email or f"user{counter['n']}@example.com",
            hashed_password="not-a-real-hash",
            first_name="Test",
            last_name=f"User{counter['n']}",
        )
        db_session.add(user)
        await db_session.flush()
        return user

    return _make


@pytest_asyncio.fixture
async def user(make_user) -> User:
    return await make_user("owner@example.com")


@pytest_asyncio.fixture
async def resume(db_session, user) -> Resume:
    resume = Resume(
        user_id=user.id,
        original_name="resume.pdf",
        cloud_storage_path=f"resumes/{user.id}/1700000000000-resume.pdf",
        file_type=FileType.PDF,
        original_content=SAMPLE_RESUME_TEXT,
    )
    db_session.add(resume)
    await db_session.flush()
    return resume


@pytest_asyncio.fixture
async def make_credential(db_session, vault) -> Callable:
    async def _make(
        user: User,
        provider: str = "openai",
        api_key: str = "sk-test-123",
        model: str = "gpt-4o-mini",
        is_active: bool = True,
    ) -> ApiCredential:
        credential = ApiCredential(
            user_id=user.id,
            provider=provider,
            encrypted_key=vault.encrypt(api_key),
            default_model=model,
            is_active=is_active,
        )
        db_session.add(credential)
        await db_session.flush()
        return credential

    return _make


def auth_headers(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest_asyncio.fixture
async def client(db_session, fake_storage, mock_llm) -> AsyncGenerator[httpx.AsyncClient, None]:
    """API client wired to the test session, fake storage and mock LLM."""
    from resume_enhancer.api.deps import get_llm_client
    from resume_enhancer.core.rate_limiter import RateLimiter
    from resume_enhancer.database import get_db
    from resume_enhancer.main import app
    from resume_enhancer.services.storage_service import get_storage

    llm_client = mock_llm.client()

    async def _get_db():
        yield db_session

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_storage] = lambda: fake_storage
    app.dependency_overrides[get_llm_client] = lambda: llm_client
    app.state.rate_limiter = RateLimiter()

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
    await llm_client.aclose()
