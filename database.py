"""
Database connection and session management for the Customer Service
This module sets up the SQLAlchemy async engine and session factory with proper
unit-of-work handling. Supports local PostgreSQL, AWS RDS deployments with
connection pooling, and SQLite (aiosqlite) for tests.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from config import settings
from models.base import Base

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ships with FK enforcement off
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class DatabaseManager:
    """
    Database connection manager that handles the SQLAlchemy async engine,
    session creation, and connection lifecycle management

    The engine is created lazily on first use so importing this module never
    opens a connection.
    """

    def __init__(self, database_url: Optional[str] = None):
        self.database_url = database_url or settings.get_database_url()
        self.engine: Optional[AsyncEngine] = None
        self.SessionLocal: Optional[async_sessionmaker] = None

    def _create_engine(self) -> AsyncEngine:
        """Create database engine with appropriate settings for environment"""
        if self.database_url.startswith("sqlite"):
            engine = create_async_engine(
                self.database_url,
                echo=settings.DEBUG,
                poolclass=StaticPool,  # in-memory databases live on a single connection
                connect_args={"check_same_thread": False},
            )
            event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
            return engine

        if settings.is_lambda_environment():
            # Lambda-optimized settings for RDS Proxy
            return create_async_engine(
                self.database_url,
                echo=settings.DEBUG,
                pool_pre_ping=True,
                pool_size=1,
                max_overflow=0,
                pool_recycle=3600,
                pool_timeout=10,
                connect_args={
                    "command_timeout": 10,
                    "server_settings": {"application_name": "customer-service-lambda"},
                },
            )

        return create_async_engine(
            self.database_url,
            echo=settings.DEBUG,
            pool_pre_ping=True,  # Validate connections before use
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            connect_args={
                "server_settings": {"application_name": "customer-service-local"},
            },
        )

    def _initialize_database(self):
        """Initialize database engine and session factory"""
        try:
            logger.info(f"Initializing database connection to: {self.database_url.split('@')[-1]}")
            self.engine = self._create_engine()
            self.SessionLocal = async_sessionmaker(
                self.engine,
                class_=AsyncSession,
                expire_on_commit=False,  # Merged aggregates are read after commit
                autoflush=False,
            )
            logger.info("Database connection initialized successfully")
        except Exception as e:
            logger.error(f"Failed to initialize database connection: {e}")
            raise

    def get_engine(self) -> AsyncEngine:
        """Get database engine, creating it if necessary"""
        if self.engine is None:
            self._initialize_database()
        return self.engine

    def get_session_factory(self) -> async_sessionmaker:
        if self.SessionLocal is None:
            self._initialize_database()
        return self.SessionLocal

    async def create_tables(self):
        """Create all database tables defined in models"""
        try:
            logger.info("Creating database tables...")
            async with self.get_engine().begin() as connection:
                await connection.run_sync(Base.metadata.create_all)
            logger.info("Database tables created successfully")
        except Exception as e:
            logger.error(f"Failed to create database tables: {e}")
            raise

    async def test_connection(self) -> bool:
        """Test database connection"""
        try:
            async with self.get_engine().connect() as connection:
                await connection.execute(text("SELECT 1"))
            logger.info("Database connection test successful")
            return True
        except Exception as e:
            logger.error(f"Database connection test failed: {e}")
            return False

    @asynccontextmanager
    async def get_session(self) -> AsyncIterator[AsyncSession]:
        """
        Context manager for a unit of work with automatic commit and cleanup
        Usage:
            async with db_manager.get_session() as session:
                # database operations

        Everything done inside the block is committed together on exit, or
        rolled back together if the block raises.
        """
        session = self.get_session_factory()()
        try:
            yield session
            await session.commit()
        except Exception as e:
            await session.rollback()
            logger.error(f"Database session error: {e}")
            raise
        finally:
            await session.close()

    async def dispose(self):
        if self.engine is not None:
            await self.engine.dispose()
            self.engine = None
            self.SessionLocal = None


# Global database manager instance
db_manager = DatabaseManager()
