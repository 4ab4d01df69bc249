"""Pytest configuration for all tests."""

from collections.abc import Awaitable, Callable
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from ledgerly.domain.entities.role import ADMIN_ROLE, USER_ROLE
from ledgerly.domain.services import PermissionSnapshotCache, RoleService, UserService
from ledgerly.infrastructure.auth.jwt_service import jwt_service
from ledgerly.infrastructure.persistence import models  # noqa: F401
from ledgerly.infrastructure.persistence.database import Base

TEST_PASSWORD = "Ledger!2024"


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session.

    Uses an in-memory SQLite database seeded with the Admin and User
    system roles.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session_maker() as session:
        await RoleService(session).ensure_system_roles()
        await session.commit()

    async with async_session_maker() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with overridden database dependency."""
    from ledgerly.infrastructure.api.app import app
    from ledgerly.infrastructure.persistence.database import get_db_session

    app.dependency_overrides[get_db_session] = lambda: db_session
    app.state.snapshot_cache = PermissionSnapshotCache()

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides = {}


UserFactory = Callable[..., Awaitable[tuple[str, str]]]


@pytest.fixture
def make_user(db_session: AsyncSession) -> UserFactory:
    """Factory creating a user and returning (user_id, access token)."""

    async def factory(
        email: str,
        role: str = USER_ROLE,
        password: str = TEST_PASSWORD,
        is_active: bool = True,
    ) -> tuple[str, str]:
        user = await UserService(db_session).create_user(
            email=email,
            password=password,
            role=role,
            is_active=is_active,
        )
        await db_session.commit()
        token = jwt_service.create_access_token(
            user_id=user.id,
            email=user.email,
            role=user.role,
        )
        return user.id, token

    return factory


@pytest_asyncio.fixture
async def admin_token(make_user: UserFactory) -> str:
    """Access token for an Admin user."""
    _, token = await make_user("admin@ledgerly.test", role=ADMIN_ROLE)
    return token


@pytest_asyncio.fixture
async def user_token(make_user: UserFactory) -> str:
    """Access token for a user with the default User role."""
    _, token = await make_user("user@ledgerly.test")
    return token


@pytest.fixture
def admin_headers(admin_token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def user_headers(user_token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {user_token}"}
