"""Async engine, request-scoped sessions, and schema setup at startup."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import TYPE_CHECKING

from alembic.config import Config
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from staff_alias.core.config import settings
from staff_alias.core.logging import get_logger
from staff_alias.models import AliasAuditEntry, AliasPostMarker, Post, PostRevision, User

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = get_logger(__name__)

BACKEND_ROOT = Path(__file__).resolve().parents[2]
# Creation order follows the foreign keys.
SCHEMA_MODELS = (User, Post, PostRevision, AliasPostMarker, AliasAuditEntry)


def _async_database_url(database_url: str) -> str:
    """Pick the async driver for plain `postgresql://` and `sqlite://` URLs."""
    if database_url.startswith("postgresql://"):
        return database_url.replace("postgresql://", "postgresql+psycopg://", 1)
    if database_url.startswith("sqlite://"):
        return database_url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return database_url


def _is_memory_sqlite(database_url: str) -> bool:
    return database_url.startswith("sqlite") and ":memory:" in database_url


async_engine: AsyncEngine = create_async_engine(
    _async_database_url(settings.database_url),
    pool_pre_ping=True,
)
async_session_maker = async_sessionmaker(
    async_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


def _alembic_config() -> Config:
    alembic_cfg = Config(str(BACKEND_ROOT / "alembic.ini"))
    alembic_cfg.attributes["configure_logger"] = False
    return alembic_cfg


def run_migrations() -> None:
    """Upgrade the configured database to the latest revision."""
    from alembic import command

    logger.info("db.migrations.start")
    command.upgrade(_alembic_config(), "head")
    logger.info("db.migrations.complete")


async def create_schema(engine: AsyncEngine) -> None:
    """Create the service tables directly from model metadata."""
    tables = [model.__table__ for model in SCHEMA_MODELS]
    async with engine.connect() as conn, conn.begin():
        await conn.run_sync(SQLModel.metadata.create_all, tables=tables)


async def init_db() -> None:
    """Migrate on startup when enabled; otherwise create tables from metadata.

    Alembic runs on its own synchronous connection, so an in-memory SQLite
    database always gets `create_all` on the app's engine instead.
    """
    if settings.db_auto_migrate and not _is_memory_sqlite(settings.database_url):
        await asyncio.to_thread(run_migrations)
        return
    await create_schema(async_engine)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield a session for one request and discard any uncommitted work after it."""
    async with async_session_maker() as session:
        try:
            yield session
        finally:
            if session.in_transaction():
                try:
                    await session.rollback()
                except SQLAlchemyError:
                    logger.exception("db.session.rollback_failed")
