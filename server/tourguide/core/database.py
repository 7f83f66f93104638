"""Database handle and async session management."""

from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""


class Database:
    """
    Storage handle owning the async engine and its session factory.

    One instance is built per application by ``create_app`` and kept on
    ``app.state.database``; request handlers reach it through ``get_db``.
    """

    def __init__(self, database_url: str, echo: bool = False):
        is_sqlite = database_url.startswith("sqlite")
        in_memory = is_sqlite and ":memory:" in database_url
        self.url = database_url
        self.engine: AsyncEngine = create_async_engine(
            database_url,
            echo=echo,
            pool_pre_ping=not is_sqlite,
            # In-memory SQLite must share a single connection
            poolclass=StaticPool if in_memory else None,
            connect_args={"check_same_thread": False} if is_sqlite else {},
        )
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Open a session, rolling back if the caller raises."""
        async with self.session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    async def create_all(self) -> None:
        """Create every table known to the ORM metadata."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def dispose(self) -> None:
        """Close pooled connections."""
        await self.engine.dispose()


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency function that yields a session from the application's database.

    Yields:
        AsyncSession: Database session
    """
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session


async def check_connection(session: AsyncSession) -> bool:
    """Probe connectivity through an already-open session."""
    try:
        await session.execute(text("SELECT 1"))
        return True
    except (SQLAlchemyError, OSError):
        return False
