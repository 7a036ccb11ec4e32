"""Shared test fixtures."""

import os

# Settings are read at import time; give every required one a value first
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("STORAGE_URL", "https://storage.test")
os.environ.setdefault("STORAGE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("MAILERSEND_API_KEY", "test-mailersend-key")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from collections.abc import AsyncIterator, Iterator  # noqa: E402
from datetime import datetime, timezone  # noqa: E402

import pytest  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from starlette.middleware.sessions import SessionMiddleware  # noqa: E402

from reelfolio.api.routes import (  # noqa: E402
    admin_auth,
    admin_films,
    admin_messages,
    admin_settings,
    contact,
    films,
    health,
    pages,
    send_email,
    site,
)
from reelfolio.api.deps import require_admin  # noqa: E402
from reelfolio.database import get_db  # noqa: E402
from reelfolio.models import Base  # noqa: E402
from reelfolio.schemas.admin import AdminIdentity  # noqa: E402


@pytest.fixture
def test_app() -> FastAPI:
    """The API routers and session middleware, without the CMS mount or lifespan."""
    app = FastAPI()
    app.add_middleware(SessionMiddleware, secret_key="test-secret-key", max_age=3600)
    app.include_router(health.router)
    app.include_router(films.router, prefix="/api")
    app.include_router(site.router, prefix="/api")
    app.include_router(contact.router, prefix="/api")
    app.include_router(send_email.router, prefix="/api")
    app.include_router(admin_auth.router, prefix="/api")
    app.include_router(admin_films.router, prefix="/api")
    app.include_router(admin_settings.router, prefix="/api")
    app.include_router(admin_messages.router, prefix="/api")
    app.include_router(pages.router)
    return app


@pytest.fixture
async def db_sessionmaker() -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    """Fresh in-memory SQLite database with all tables created."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)

    await engine.dispose()


@pytest.fixture
async def db_session(db_sessionmaker: async_sessionmaker[AsyncSession]) -> AsyncIterator[AsyncSession]:
    async with db_sessionmaker() as session:
        yield session


@pytest.fixture
def app_with_db(test_app: FastAPI, db_sessionmaker: async_sessionmaker[AsyncSession]) -> Iterator[FastAPI]:
    """``test_app`` with ``get_db`` backed by the in-memory database."""

    async def _get_db() -> AsyncIterator[AsyncSession]:
        async with db_sessionmaker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    test_app.dependency_overrides[get_db] = _get_db
    yield test_app
    test_app.dependency_overrides.clear()


@pytest.fixture
def admin_app(app_with_db: FastAPI) -> FastAPI:
    """``app_with_db`` with the admin session check satisfied."""
    app_with_db.dependency_overrides[require_admin] = lambda: AdminIdentity(
        id="admin-1",
        email="bala@example.com",
        name="Bala",
        logged_in_at=datetime.now(timezone.utc),
    )
    return app_with_db
