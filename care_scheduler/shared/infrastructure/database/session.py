# 📄 File: care_scheduler/shared/infrastructure/database/session.py
#
# 🧭 Purpose (Layman Explanation):
# Manages database sessions (conversations with the database), making sure
# each piece of work gets its own clean session and that half-finished changes
# are undone when something goes wrong.
#
# 🧪 Purpose (Technical Summary):
# Async SQLAlchemy session management: a session factory bound to the engine,
# a transactional context manager that commits or rolls back, a read-only
# variant, and the FastAPI dependency for request-scoped sessions.
#
# 🔗 Dependencies:
# - sqlalchemy.ext.asyncio (AsyncSession, async_sessionmaker)
# - care_scheduler/shared/infrastructure/database/connection.py (engine)
# - care_scheduler/shared/core/exceptions.py (DatabaseError, TransactionError)
#
# 🔄 Connected Modules / Calls From:
# - care_management SQLAlchemy task store and plant directory
# - care_scheduler.main (startup/shutdown)
# - Celery sweep task (database access outside requests)

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy import exc
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from care_scheduler.shared.core.exceptions import (
    DatabaseError,
    PlantCareException,
    TransactionError,
)
from care_scheduler.shared.infrastructure.database.connection import DatabaseConnectionManager

logger = logging.getLogger(__name__)


class DatabaseSessionManager:
    """
    Manages database sessions with transaction handling and automatic cleanup.
    """

    def __init__(self):
        self._connection: Optional[DatabaseConnectionManager] = None
        self._session_factory: Optional[async_sessionmaker] = None
        self._initialized = False

    @property
    def connection(self) -> DatabaseConnectionManager:
        if self._connection is None:
            raise DatabaseError("Session manager not initialized")
        return self._connection

    async def initialize(self, connection: DatabaseConnectionManager) -> None:
        """Initialize the session factory with an (initialized) connection manager."""
        await connection.initialize()
        self._connection = connection
        self._session_factory = async_sessionmaker(
            connection.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=True,
        )
        self._initialized = True
        logger.info("Database session factory initialized successfully")

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Get an async database session with automatic transaction management.

        Yields:
            AsyncSession: Database session

        Raises:
            DatabaseError: If the session manager is not ready or SQL fails
            TransactionError: If anything else interrupts the transaction
        """
        if not self._initialized or self._session_factory is None:
            raise DatabaseError("Session manager not initialized")

        session: AsyncSession = self._session_factory()

        try:
            yield session
            await session.commit()
            logger.debug("Database transaction committed successfully")

        except PlantCareException:
            # Domain errors keep their type for the caller
            await session.rollback()
            raise

        except exc.SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"Database error occurred, transaction rolled back: {e}")
            raise DatabaseError(f"Database operation failed: {e}")

        except Exception as e:
            await session.rollback()
            logger.error(f"Unexpected error occurred, transaction rolled back: {e}")
            raise TransactionError(f"Transaction failed: {e}")

        finally:
            await session.close()

    @asynccontextmanager
    async def get_read_only_session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Get a read-only database session (no automatic commit).

        Yields:
            AsyncSession: Read-only database session
        """
        if not self._initialized or self._session_factory is None:
            raise DatabaseError("Session manager not initialized")

        session: AsyncSession = self._session_factory()

        try:
            yield session

        except exc.SQLAlchemyError as e:
            logger.error(f"Read-only session error: {e}")
            raise DatabaseError(f"Read operation failed: {e}")

        finally:
            await session.close()

    async def close(self) -> None:
        if self._connection is not None:
            await self._connection.close()
        self._connection = None
        self._session_factory = None
        self._initialized = False

    def is_initialized(self) -> bool:
        """Check if session manager is initialized."""
        return self._initialized


# Global session manager instance
session_manager = DatabaseSessionManager()


async def initialize_database(
    database_url: Optional[str] = None,
    create_tables: bool = False
) -> DatabaseSessionManager:
    """
    Initialize the global session manager.

    Args:
        database_url: Override for settings.database_url
        create_tables: Create tables from ORM metadata (SQLite/dev runs)
    """
    if not session_manager.is_initialized():
        await session_manager.initialize(DatabaseConnectionManager(database_url))
        if create_tables:
            await session_manager.connection.create_tables()
    return session_manager


async def close_database() -> None:
    """Close the global session manager."""
    await session_manager.close()


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a transactional database session.
    """
    async with session_manager.get_session() as session:
        yield session
