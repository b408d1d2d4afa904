"""Async database session factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from pricecompare.config import DatabaseSettings

from .models.base import Base


class DatabaseSessionManager:
    """Manages database engine and session creation.

    Constructed once at application startup and passed to the components
    that need database access.

    Attributes:
        engine: SQLAlchemy async engine instance
        session_factory: Factory for creating async sessions
    """

    def __init__(
        self,
        database_url: str,
        pool_size: int = 10,
        max_overflow: int = 20,
        **engine_kwargs: Any,
    ) -> None:
        """Initialize database session manager.

        Args:
            database_url: Async connection URL (postgresql+asyncpg:// or sqlite+aiosqlite://)
            pool_size: Number of persistent connections in the pool
            max_overflow: Max additional connections beyond pool_size
            **engine_kwargs: Additional arguments passed to create_async_engine
        """
        # SQLite pools do not accept sizing arguments
        if not database_url.startswith("sqlite"):
            engine_kwargs.setdefault("pool_size", pool_size)
            engine_kwargs.setdefault("max_overflow", max_overflow)
            engine_kwargs.setdefault("pool_recycle", 3600)

        self.engine: AsyncEngine = create_async_engine(
            database_url,
            pool_pre_ping=True,  # Verify connections before use
            **engine_kwargs,
        )
        self.session_factory: async_sessionmaker[AsyncSession] = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
            autocommit=False,
        )

    @classmethod
    def from_settings(cls, settings: DatabaseSettings) -> "DatabaseSessionManager":
        """Create a manager from database settings."""
        return cls(
            settings.url,
            pool_size=settings.pool_size,
            max_overflow=settings.max_overflow,
            echo=settings.echo,
        )

    async def close(self) -> None:
        """Close database engine and all connections."""
        if self.engine:
            await self.engine.dispose()

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Open a session, rolling back on error.

        Yields:
            AsyncSession: Database session instance

        Example:
            async with session_manager.session() as session:
                result = await session.execute(select(ModelPrice))
        """
        async with self.session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    async def create_all(self) -> None:
        """Create all tables defined in Base metadata.

        This should only be used for testing. In production,
        use Alembic migrations instead.
        """
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
