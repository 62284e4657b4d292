"""
MoviePin - Database Management
==============================

Async database connection management using SQLAlchemy 2.0+.
Includes engine creation, session factories and health checks.

The engine is owned by a ``Database`` instance created at application
startup and handed to the repository, there is no module level engine.

Usage:
    from moviepin.core.database import Database

    database = Database.from_settings(settings)
    await database.create_tables()

    async with database.session() as session:
        ...
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from moviepin.core.config import Settings
from moviepin.core.logging import get_logger
from moviepin.models.database import Base

logger = get_logger(__name__)


# ==========================================
# ENGINE CREATION AND CONFIGURATION
# ==========================================

def create_database_engine(settings: Settings) -> AsyncEngine:
    """Create and configure the async database engine"""

    logger.info("Creating database engine", url=settings.safe_database_url)

    try:
        engine = create_async_engine(**settings.database_config)
    except Exception as e:
        logger.error("Failed to create database engine", error=str(e))
        raise

    if engine.dialect.name == "sqlite":
        setup_sqlite_events(engine)

    logger.info("Database engine created successfully")
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create async session factory"""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


def setup_sqlite_events(engine: AsyncEngine) -> None:
    """Enable foreign keys on every SQLite connection"""

    @event.listens_for(engine.sync_engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# ==========================================
# DATABASE
# ==========================================

class Database:
    """Owns the engine and the session factory for one application"""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self.session_factory = create_session_factory(engine)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(create_database_engine(settings))

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Context manager to get database session.

        Usage:
            async with database.session() as db:
                # Use database session
                pass
        """
        async with self.session_factory() as session:
            try:
                yield session
            except Exception as e:
                logger.error("Database session error", error=str(e))
                await session.rollback()
                raise

    async def create_tables(self) -> None:
        """Create all tables defined in models"""
        logger.info("Creating database tables...")
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            logger.info("Database tables created successfully")
        except Exception as e:
            logger.error("Failed to create database tables", error=str(e))
            raise

    async def drop_tables(self) -> None:
        """Drop all tables (WARNING: This will delete all data!)"""
        logger.warning("Dropping all database tables...")
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def check_health(self) -> Dict[str, Any]:
        """Database connectivity check"""
        health_status: Dict[str, Any] = {"status": "healthy", "checks": {}}

        try:
            async with self.engine.connect() as conn:
                result = await conn.execute(text("SELECT 1"))
                if result.scalar() != 1:
                    raise RuntimeError("unexpected result")
            health_status["checks"]["connectivity"] = "pass"
        except Exception as e:
            logger.error("Database health check failed", error=str(e))
            health_status["status"] = "unhealthy"
            health_status["checks"]["connectivity"] = f"fail: {e}"

        return health_status

    async def dispose(self) -> None:
        """Close database connections"""
        logger.info("Closing database connections...")
        await self.engine.dispose()


async def init_database(settings: Settings, database: Optional[Database] = None) -> Database:
    """Initialize the database and create missing tables when configured to"""
    database = database or Database.from_settings(settings)

    if settings.DB_CREATE_TABLES:
        await database.create_tables()

    logger.info("Database initialized successfully")
    return database


__all__ = [
    "Database",
    "create_database_engine",
    "create_session_factory",
    "init_database",
]
