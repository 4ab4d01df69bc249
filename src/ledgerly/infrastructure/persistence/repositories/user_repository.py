"""User repository for database operations."""

from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ledgerly.infrastructure.persistence.models import UserModel


class UserRepository:
    """Repository for user database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, user: UserModel) -> UserModel:
        """Create a new user.

        Args:
            user: User model to create.

        Returns:
            Created user model.
        """
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def get_by_id(self, user_id: str) -> UserModel | None:
        """Get a user by ID.

        Args:
            user_id: User ID (UUID string).

        Returns:
            User model if found, None otherwise.
        """
        result = await self.session.execute(
            select(UserModel).where(UserModel.id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> UserModel | None:
        """Get a user by email, case-insensitively."""
        result = await self.session.execute(
            select(UserModel).where(func.lower(UserModel.email) == email.lower())
        )
        return result.scalar_one_or_none()

    async def email_exists(self, email: str) -> bool:
        result = await self.session.execute(
            select(UserModel.id).where(func.lower(UserModel.email) == email.lower())
        )
        return result.scalar_one_or_none() is not None

    async def list_all(self) -> list[UserModel]:
        """List all users, newest first."""
        result = await self.session.execute(
            select(UserModel).order_by(UserModel.created_at.desc(), UserModel.email)
        )
        return list(result.scalars().all())

    async def update_last_login(self, user_id: str) -> None:
        """Record a successful login for a user."""
        user = await self.get_by_id(user_id)
        if user is not None:
            user.last_login = datetime.now(timezone.utc)
            await self.session.flush()

    async def delete(self, user: UserModel) -> None:
        await self.session.delete(user)
        await self.session.flush()

    async def count_all(self) -> int:
        result = await self.session.execute(select(func.count(UserModel.id)))
        return result.scalar_one()

    async def count_by_role(self, role: str) -> int:
        """Count users whose role field equals the given name."""
        result = await self.session.execute(
            select(func.count(UserModel.id)).where(UserModel.role == role)
        )
        return result.scalar_one()

    async def count_by_roles(self) -> dict[str, int]:
        """Count users per role name in a single query.

        Returns:
            Mapping of role name to user count; roles without users are absent.
        """
        result = await self.session.execute(
            select(UserModel.role, func.count(UserModel.id)).group_by(UserModel.role)
        )
        return {role: count for role, count in result.all()}
