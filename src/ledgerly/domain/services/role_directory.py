"""Role directory.

Derives the list of roles from the permission store. A role is listed
once for every distinct name that has permission rows, annotated with how
many users carry that role.
"""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ledgerly.core.exceptions import PersistenceError
from ledgerly.core.logging import get_logger
from ledgerly.domain.entities.feature import FEATURES
from ledgerly.domain.entities.role import RoleSummary, is_system_role, role_sort_key
from ledgerly.infrastructure.persistence.repositories import (
    RolePermissionRepository,
    UserRepository,
)

logger = get_logger(__name__)


def sort_roles(names) -> list[str]:
    """Order role names: Admin, then User, then the rest alphabetically."""
    return sorted(set(names), key=role_sort_key)


class RoleDirectory:
    """Read-only view of the roles in use."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the directory.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session
        self.permission_repo = RolePermissionRepository(session)
        self.user_repo = UserRepository(session)

    async def list_roles(self) -> list[RoleSummary]:
        """List every role with its user and permission counts.

        Returns:
            Role summaries ordered Admin, User, then alphabetically.

        Raises:
            PersistenceError: If the permission store cannot be read.
        """
        try:
            names = await self.permission_repo.list_role_names()
            user_counts = await self.user_repo.count_by_roles()
        except SQLAlchemyError as e:
            logger.error("Failed to list roles", error=str(e))
            raise PersistenceError("Failed to fetch roles") from e

        return [
            RoleSummary(
                name=name,
                is_system=is_system_role(name),
                user_count=user_counts.get(name, 0),
                permission_count=len(FEATURES),
            )
            for name in sort_roles(names)
        ]

    async def role_names(self) -> list[str]:
        """List role names in directory order."""
        try:
            names = await self.permission_repo.list_role_names()
        except SQLAlchemyError as e:
            raise PersistenceError("Failed to fetch roles") from e
        return sort_roles(names)
