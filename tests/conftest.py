"""Pytest configuration and fixtures."""

import os
import tempfile

# Settings are read once at import time, so configure them first
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")
os.environ.setdefault("PASSWORD_HASH_TIME_COST", "1")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="pinboard-uploads-"))

from collections.abc import AsyncGenerator, Awaitable, Callable  # noqa: E402
from typing import Any  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient, Response  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from pinboard.database import build_engine, get_db  # noqa: E402
from pinboard.main import app  # noqa: E402
from pinboard.models import Base  # noqa: E402

# In-memory SQLite, one database per test
TEST_DATABASE_URL = "sqlite+aiosqlite://"

TEST_PASSWORD = "secret1"

# Smallest payload the upload endpoint accepts; content is not decoded
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


@pytest.fixture(scope="function")
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh database with all tables for each test."""
    engine = build_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture(scope="function")
async def db_session(test_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session for each test."""
    session_maker = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )
    async with session_maker() as session:
        yield session


@pytest.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client whose requests share the test session."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        try:
            yield db_session
            await db_session.commit()
        except Exception:
            await db_session.rollback()
            raise

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


def bearer(token: str) -> dict[str, str]:
    """Authorization header for a token."""
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register_user(client: AsyncClient) -> Callable[..., Awaitable[dict[str, Any]]]:
    """Register users through the API.

    The returned dict is the registration payload plus a ready-made
    ``headers`` entry.
    """

    async def _register(username: str, password: str = TEST_PASSWORD) -> dict[str, Any]:
        response = await client.post(
            "/api/auth/register",
            json={
                "username": username,
                "email": f"{username}@example.com",
                "password": password,
            },
        )
        assert response.status_code == 201, response.text
        user = response.json()["data"]
        user["headers"] = bearer(user["token"])
        return user

    return _register


@pytest.fixture
async def alice(register_user: Callable[..., Awaitable[dict[str, Any]]]) -> dict[str, Any]:
    """A registered user."""
    return await register_user("alice")


@pytest.fixture
async def bob(register_user: Callable[..., Awaitable[dict[str, Any]]]) -> dict[str, Any]:
    """A second registered user."""
    return await register_user("bob")


@pytest.fixture
def upload_image(client: AsyncClient) -> Callable[..., Awaitable[Response]]:
    """Post a multipart image upload and return the raw response."""

    async def _upload(
        headers: dict[str, str],
        *,
        title: str = "Sunset",
        category: str = "nature",
        field: str = "image",
        filename: str = "pin.png",
        content_type: str = "image/png",
        content: bytes = PNG_BYTES,
        **fields: Any,
    ) -> Response:
        form = {"title": title, "category": category}
        form.update({key: str(value) for key, value in fields.items()})
        return await client.post(
            "/api/images",
            data=form,
            files={field: (filename, content, content_type)},
            headers=headers,
        )

    return _upload


@pytest.fixture
def create_image(
    upload_image: Callable[..., Awaitable[Response]],
) -> Callable[..., Awaitable[dict[str, Any]]]:
    """Upload an image and return its data."""

    async def _create(headers: dict[str, str], **kwargs: Any) -> dict[str, Any]:
        response = await upload_image(headers, **kwargs)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _create


@pytest.fixture
def create_collection(client: AsyncClient) -> Callable[..., Awaitable[dict[str, Any]]]:
    """Create a collection through the API and return its data."""

    async def _create(
        headers: dict[str, str],
        name: str = "Ideas",
        **fields: Any,
    ) -> dict[str, Any]:
        response = await client.post(
            "/api/collections",
            json={"name": name, **fields},
            headers=headers,
        )
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _create
