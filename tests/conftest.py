import os
from typing import AsyncGenerator

# Load .env.test for local overrides, then pin the test defaults before any
# application module reads settings.
from dotenv import load_dotenv

env_test_path = os.path.join(os.path.dirname(__file__), "..", ".env.test")
if os.path.exists(env_test_path):
    load_dotenv(env_test_path, override=False)

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ["ENVIRONMENT"] = "test"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["EMAIL_API_KEY"] = ""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from libs.auth.dependencies import get_current_user
from libs.auth.models import AuthUser
from libs.common.config import get_settings
from libs.common.emails.client import get_email_client
from libs.db.base import Base
from libs.db.session import get_async_db
from services.league_service import models as _league_models  # noqa: F401
from services.league_service.app.main import app
from tests.factories import RecordingNotifier

get_settings.cache_clear()
settings = get_settings()


@pytest_asyncio.fixture
async def test_engine():
    """
    Fresh in-memory database per test.

    StaticPool keeps the single SQLite connection alive for the whole test so
    every session sees the same tables.
    """
    engine = create_async_engine(
        settings.DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Session configured like the application's (no expiry on commit)."""
    session_factory = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    session = session_factory()
    try:
        yield session
    finally:
        await session.close()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest_asyncio.fixture
async def client(db_session, notifier) -> AsyncGenerator[AsyncClient, None]:
    """
    AsyncClient against the league app with the DB session and email client
    overridden. Authenticate with the `login` fixture.
    """
    app.dependency_overrides[get_async_db] = lambda: db_session
    app.dependency_overrides[get_email_client] = lambda: notifier

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def login():
    """Make subsequent requests authenticate as the given user record."""

    def _login(user) -> AuthUser:
        auth_user = AuthUser(
            sub=user.id,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
        )
        app.dependency_overrides[get_current_user] = lambda: auth_user
        return auth_user

    yield _login
    app.dependency_overrides.pop(get_current_user, None)
