"""Test configuration: in-memory database, ASGI client and session tokens."""

from __future__ import annotations

import os

# Настройки читаются при импорте приложения, поэтому задаем их до импорта
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("ALGORITHM", "HS256")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from homework_helper.core.security import create_access_token  # noqa: E402
from homework_helper.db.base import Base  # noqa: E402
from homework_helper.db.session import get_db  # noqa: E402
from homework_helper.main import app  # noqa: E402
from homework_helper.models import homework  # noqa: E402,F401
from homework_helper.services.context import ActionContext, CurrentUser  # noqa: E402


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def db_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def make_context(db_session):
    """ActionContext для прямого вызова сервисного слоя."""

    def _make(user_id: str | None = "student-a") -> ActionContext:
        user = CurrentUser(id=user_id) if user_id is not None else None
        return ActionContext(db=db_session, user=user)

    return _make


@pytest.fixture
async def async_client(session_factory):
    async def _get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


def auth_headers(user_id: str) -> dict[str, str]:
    token = create_access_token({"sub": user_id})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def student_a() -> dict[str, str]:
    return auth_headers("student-a")


@pytest.fixture
def student_b() -> dict[str, str]:
    return auth_headers("student-b")
