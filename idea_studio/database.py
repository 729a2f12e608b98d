"""
Async database engine and session management
"""
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel

from idea_studio.config import Settings
from idea_studio.logging_config import logger
from idea_studio import models  # noqa: F401  registers tables on SQLModel.metadata


class DatabaseManager:
    """Owns the engine and session factory; built once per process"""

    def __init__(self, settings: Settings):
        self.database_url = settings.database_url
        self.echo = settings.database_echo
        self.engine = None
        self.async_session_maker = None
        self._initialized = False

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    async def initialize(self):
        """Initialize database connection and create tables if needed"""
        if self._initialized:
            return

        try:
            self.engine = create_async_engine(
                self.database_url,
                echo=self.echo,
                poolclass=NullPool,  # Use NullPool for serverless environments
                pool_pre_ping=True,
            )

            self.async_session_maker = async_sessionmaker(
                self.engine, class_=AsyncSession, expire_on_commit=False
            )

            async with self.engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)

            self._initialized = True
            logger.info("Database initialized successfully")

        except Exception as e:
            logger.error(f"Failed to initialize database: {str(e)}")
            raise

    async def close(self):
        """Close database connections"""
        if self.engine:
            await self.engine.dispose()
            self._initialized = False
            logger.info("Database connections closed")

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """Get an async database session"""
        if not self._initialized:
            await self.initialize()

        async with self.async_session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def health_check(self) -> bool:
        """Check if database is accessible"""
        try:
            async with self.get_session() as session:
                await session.execute(text("SELECT 1"))
                return True
        except Exception as e:
            logger.error(f"Database health check failed: {str(e)}")
            return False
