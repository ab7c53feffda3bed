# python
"""Database engine and session utilities.

Builds the async engine for the configured URL, the session factory used per
request, and the ``get_db`` dependency. SQLite connections get foreign key
enforcement switched on so ``ON DELETE CASCADE`` behaves as on PostgreSQL.
"""
import os
from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from app.core.config import settings


def resolve_database_url() -> str:
    """Pick the test database when running under ``TESTING=true``."""
    if os.getenv("TESTING") == "true":
        url = os.getenv("TEST_DATABASE_URL") or settings.test_database_url
    else:
        url = settings.database_url

    url = (url or "").strip()
    if not url:
        raise RuntimeError(
            "DATABASE_URL is not configured. Set it in the environment or .env file "
            "(e.g., DATABASE_URL=sqlite+aiosqlite:///./taskflow.db)."
        )
    return url


def build_engine(url: str) -> AsyncEngine:
    if url.startswith("sqlite"):
        db_engine = create_async_engine(url, echo=settings.debug)

        @event.listens_for(db_engine.sync_engine, "connect")
        def enable_foreign_keys(dbapi_connection, _record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return db_engine

    return create_async_engine(url, echo=settings.debug, pool_pre_ping=True)


DB_URL = resolve_database_url()
engine = build_engine(DB_URL)

AsyncSessionLocal = async_sessionmaker(bind=engine, expire_on_commit=False)


async def get_db() -> AsyncGenerator[AsyncSession, Any]:
    async with AsyncSessionLocal() as session:
        yield session
