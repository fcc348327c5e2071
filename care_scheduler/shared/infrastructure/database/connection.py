# 📄 File: care_scheduler/shared/infrastructure/database/connection.py
#
# 🧭 Purpose (Layman Explanation):
# Manages the connection to our database, making sure we can talk to the
# place where care tasks are stored and that connections are reused
# efficiently instead of being opened for every question.
#
# 🧪 Purpose (Technical Summary):
# Async SQLAlchemy engine management with pooling for PostgreSQL (asyncpg),
# a SQLite (aiosqlite) mode for local runs and tests, health checks with
# retry, and the declarative Base shared by all ORM models.
#
# 🔗 Dependencies:
# - sqlalchemy (async engine, DeclarativeBase)
# - care_scheduler/shared/config/settings.py (database configuration)
# - asyncpg / aiosqlite (async drivers)
#
# 🔄 Connected Modules / Calls From:
# - care_scheduler/shared/infrastructure/database/session.py
# - care_management ORM models (Base)
# - care_scheduler/api/v1/health.py (database health)
# - migrations/env.py (metadata)

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from care_scheduler.shared.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for every ORM model of the scheduler."""
    pass


class DatabaseConnectionManager:
    """
    Manages database connections with connection pooling,
    health monitoring, and retry on health checks.
    """

    def __init__(self, database_url: Optional[str] = None, settings: Optional[Settings] = None):
        self._settings = settings or get_settings()
        self._database_url = database_url or self._settings.database_url
        self._engine: Optional[AsyncEngine] = None
        self._health_check_query = text("SELECT 1")
        self._retry_attempts = 3
        self._retry_delay = 1.0

    @property
    def is_sqlite(self) -> bool:
        return self._database_url.startswith("sqlite")

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database engine not initialized")
        return self._engine

    def _build_connection_params(self) -> Dict[str, Any]:
        """Build SQLAlchemy connection parameters from settings."""
        params: Dict[str, Any] = {
            "url": self._database_url,
            "echo": self._settings.DB_ECHO,
        }
        if self.is_sqlite:
            return params

        params.update({
            "pool_pre_ping": True,
            "pool_recycle": self._settings.DB_POOL_RECYCLE,
            "pool_size": self._settings.DB_POOL_SIZE,
            "max_overflow": self._settings.DB_MAX_OVERFLOW,
            "pool_timeout": self._settings.DB_POOL_TIMEOUT,
            "connect_args": {
                "server_settings": {
                    "application_name": "care_scheduler",
                    "jit": "off"
                },
                "command_timeout": 60,
                "statement_cache_size": 0,
            }
        })
        return params

    async def initialize(self) -> None:
        """Create the async engine."""
        if self._engine is not None:
            logger.warning("Database engine already initialized")
            return

        logger.info("Initializing database connection pool...")
        self._engine = create_async_engine(**self._build_connection_params())
        logger.info(
            f"Database engine initialized for "
            f"{'sqlite' if self.is_sqlite else 'postgresql'}"
        )

    async def create_tables(self) -> None:
        """Create every table registered on Base.metadata."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created")

    async def health_check(self) -> dict:
        """
        Perform database health check and return structured status.
        """
        if self._engine is None:
            logger.error("Database engine not initialized")
            return {
                "status": "unhealthy",
                "error": "Database engine not initialized",
                "timestamp": datetime.now(timezone.utc).isoformat()
            }

        for attempt in range(self._retry_attempts):
            try:
                async with self._engine.connect() as conn:
                    result = await conn.execute(self._health_check_query)
                    result.scalar()

                logger.debug("Database health check passed")
                return {
                    "status": "healthy",
                    "timestamp": datetime.now(timezone.utc).isoformat()
                }

            except Exception as e:
                logger.warning(
                    f"Database health check failed (attempt {attempt + 1}/{self._retry_attempts}): {e}"
                )
                if attempt < self._retry_attempts - 1:
                    await asyncio.sleep(self._retry_delay * (2 ** attempt))

        logger.error("Database health check failed after all retry attempts")
        return {
            "status": "unhealthy",
            "error": "Database health check failed after all retry attempts",
            "timestamp": datetime.now(timezone.utc).isoformat()
        }

    async def close(self) -> None:
        """Dispose of the engine and its pool."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            logger.info("Database connection pool closed")
