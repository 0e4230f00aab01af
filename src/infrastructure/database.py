"""Database infrastructure with SQLAlchemy async engine and session management."""

import logging
from pathlib import Path

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from infrastructure.models import Base

logger = logging.getLogger(__name__)


def enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    """SQLite ignores ON DELETE CASCADE unless foreign keys are enabled per connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class DatabaseManager:
    """Manages SQLAlchemy async engine and sessions."""

    def __init__(self, database_url: str, echo: bool = False) -> None:
        """Initialize database manager.

        Args:
            database_url: Async database URL (e.g., sqlite+aiosqlite:///./data/db.db)
            echo: Log every SQL statement
        """
        self.database_url = database_url
        self._ensure_data_directory()

        connect_args = {}
        if "sqlite" in database_url:
            connect_args = {
                "timeout": 30.0,
                "check_same_thread": False,
            }

        self.engine: AsyncEngine = create_async_engine(
            database_url,
            echo=echo,
            future=True,
            connect_args=connect_args,
        )

        if "sqlite" in database_url:
            event.listen(self.engine.sync_engine, "connect", enable_sqlite_foreign_keys)

        self.async_session_maker = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

        logger.info(f"Database engine created: {database_url}")

    def _ensure_data_directory(self) -> None:
        """Ensure the SQLite database directory exists."""
        if "sqlite" in self.database_url and ":memory:" not in self.database_url:
            db_path = self.database_url.split("///", 1)[-1]
            if db_path:
                Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    async def create_tables(self) -> None:
        """Create any missing tables."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ensured")

    async def close(self) -> None:
        """Close the database engine."""
        await self.engine.dispose()
        logger.info("Database engine closed")
