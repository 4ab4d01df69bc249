"""Database abstraction layer using SQLAlchemy 2.0 async.

This module provides the database session management and engine configuration
for SQLAlchemy with async support. It supports both SQLite (aiosqlite) and
PostgreSQL (asyncpg) drivers.
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from ledgerly.core.config import get_settings
from ledgerly.core.logging import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class DatabaseManager:
    """Database connection and session manager.

    Owns the async engine and the session factory, both created lazily
    from settings on first use.
    """

    def __init__(self) -> None:
        self.settings = get_settings()
        self._engine = None
        self._session_factory = None

    @property
    def engine(self):
        """Get or create the database engine."""
        if self._engine is None:
            is_sqlite = self.settings.database_url.startswith("sqlite")
            pool_options = (
                {}
                if is_sqlite
                else {
                    "pool_size": self.settings.db_pool_size,
                    "max_overflow": self.settings.db_max_overflow,
                    "pool_timeout": self.settings.db_pool_timeout,
                    "pool_recycle": self.settings.db_pool_recycle,
                }
            )
            self._engine = create_async_engine(
                self.settings.database_url,
                echo=self.settings.db_echo,
                connect_args={"check_same_thread": False} if is_sqlite else {},
                **pool_options,
            )
            logger.info(
                "Database engine created",
                database_url=self._engine.url.render_as_string(hide_password=True),
            )
        return self._engine

    @property
    def session_factory(self):
        """Get or create the session factory."""
        if self._session_factory is None:
            self._session_factory = async_sessionmaker(
                bind=self.engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autoflush=False,
            )
            logger.debug("Database session factory created")
        return self._session_factory

    async def create_tables(self) -> None:
        """Create all database tables.

        Used on startup in development. In production, use migrations instead.
        """
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
            logger.info("Database tables created")

    async def disconnect(self) -> None:
        """Close the database engine and all connections."""
        if self._engine is not None:
            await self._engine.dispose()
            logger.info("Database engine disposed")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide a transactional scope for database operations.

        Yields:
            AsyncSession: SQLAlchemy async session.

        Example:
            async with db.session() as session:
                result = await session.execute(select(UserModel))
                users = result.scalars().all()
        """
        async with self.session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def check_connection(self) -> bool:
        """Check if database connection is working."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
                logger.debug("Database connection check successful")
                return True
        except Exception as e:
            logger.error("Database connection check failed", error=str(e))
            return False


# Global database manager instance
_db_manager: DatabaseManager | None = None


def get_db_manager() -> DatabaseManager:
    """Get the global database manager instance."""
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager()
    return _db_manager


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for FastAPI to get database session.

    Yields:
        AsyncSession: SQLAlchemy async session.
    """
    db = get_db_manager()
    async with db.session() as session:
        yield session


async def init_database() -> None:
    """Initialize the database.

    Creates tables in development and seeds the system roles. In production,
    migrations are expected to have created the schema already, but the
    system role rows and the bootstrap admin are still ensured.
    """
    # Register every model with Base.metadata before create_all
    from ledgerly.infrastructure.persistence import models  # noqa: F401

    db = get_db_manager()
    settings = get_settings()

    if settings.database_url.startswith("sqlite"):
        # sqlite+aiosqlite:///path/to/file.db
        db_path = settings.database_url.split(":///")[-1]
        if db_path and db_path != ":memory:":
            db_dir = Path(db_path).parent
            db_dir.mkdir(parents=True, exist_ok=True)
            logger.info("Database directory created", path=str(db_dir))

    if not await db.check_connection():
        logger.error("Database connection failed")
        raise RuntimeError("Failed to connect to database")

    if settings.is_development:
        logger.info("Development mode: Creating database tables")
        await db.create_tables()
    else:
        logger.info("Skipping auto-create, use migrations")

    await seed_system_roles(db)
    await create_admin_from_env(db)


async def seed_system_roles(db: DatabaseManager) -> None:
    """Ensure the Admin and User roles have their full permission row-sets."""
    from ledgerly.domain.services.role_service import RoleService

    async with db.session() as session:
        created = await RoleService(session).ensure_system_roles()
        await session.commit()

    if created:
        logger.info("Seeded system role permissions", rows=created)


async def create_admin_from_env(db: DatabaseManager) -> None:
    """Create the bootstrap Admin user from environment variables if configured.

    Does nothing unless both LEDGERLY_ADMIN_EMAIL and LEDGERLY_ADMIN_PASSWORD
    are set, or when a user with that email already exists.
    """
    from ledgerly.core.exceptions import LedgerlyError
    from ledgerly.domain.services.user_service import UserService

    settings = get_settings()
    if not settings.admin_email or not settings.admin_password:
        logger.debug("Admin environment variables not configured, skipping")
        return

    try:
        async with db.session() as session:
            user = await UserService(session).ensure_admin(
                email=settings.admin_email,
                password=settings.admin_password,
            )
            await session.commit()
    except LedgerlyError as e:
        logger.error(
            "Failed to create admin from environment variables",
            error=e.message,
            email=settings.admin_email,
        )
        # Don't raise - allow application to start
        return

    if user is not None:
        logger.info("Admin created from environment variables", user_id=user.id, email=user.email)
    else:
        logger.info("Admin already exists, skipping", email=settings.admin_email)


async def close_database() -> None:
    """Close the database connection."""
    db = get_db_manager()
    await db.disconnect()
