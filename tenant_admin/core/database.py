"""Database configuration and session management."""
from typing import AsyncIterator

from fastapi import Depends
from sqlalchemy import MetaData, text
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase

from tenant_admin.core.config import settings
from tenant_admin.core.exceptions import InfrastructureError


def _normalize_async_database_url(database_url: str) -> str:
    """Normalize async database URL to installed async driver(s)."""
    # Accept legacy asyncpg URLs and run with psycopg driver (psycopg 3)
    if database_url.startswith("postgresql+asyncpg://"):
        return database_url.replace("postgresql+asyncpg://", "postgresql+psycopg://", 1)

    # Accept legacy heroku-style postgres:// URLs and ensure psycopg driver
    if database_url.startswith("postgres://"):
        return database_url.replace("postgres://", "postgresql+psycopg://", 1)

    # Ensure plain postgresql:// uses the installed psycopg (v3) driver
    if database_url.startswith("postgresql://") and "+psycopg" not in database_url:
        return database_url.replace("postgresql://", "postgresql+psycopg://", 1)

    # Plain sqlite:// URLs get the async driver
    if database_url.startswith("sqlite://"):
        return database_url.replace("sqlite://", "sqlite+aiosqlite://", 1)

    return database_url


# Naming convention for constraints
naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s"
}

metadata = MetaData(naming_convention=naming_convention)


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""
    metadata = metadata


database_url = _normalize_async_database_url(settings.DATABASE_URL)

engine_kwargs = {
    "echo": settings.DEBUG,
    "pool_pre_ping": True,
}

if database_url.startswith("sqlite"):
    engine = create_async_engine(
        database_url,
        **engine_kwargs,
    )
else:
    engine = create_async_engine(
        database_url,
        pool_size=settings.DATABASE_POOL_SIZE,
        max_overflow=settings.DATABASE_MAX_OVERFLOW,
        pool_recycle=1800,      # Recycle connections every 30 min
        **engine_kwargs,
    )


# Session factory
async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Dependency returning the session factory (bulk work opens one session per tenant)."""
    return async_session_maker


async def get_db(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> AsyncIterator[AsyncSession]:
    """Dependency to get database session."""
    async with session_factory() as session:
        yield session


async def check_connection(db: AsyncSession) -> None:
    """Raise InfrastructureError when the database cannot answer a trivial query."""
    try:
        await db.execute(text("SELECT 1"))
    except (OperationalError, InterfaceError, OSError) as exc:
        raise InfrastructureError("Database connection not available") from exc
