"""Role permission repository for database operations.

This is the permission store: every (role, feature) pair has at most one
row, and a role exists exactly while it has rows here.
"""

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ledgerly.infrastructure.persistence.models import RolePermissionModel


class RolePermissionRepository:
    """Repository for role permission database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def list_for_role(self, role: str) -> list[RolePermissionModel]:
        """Get all permission rows for a role.

        Args:
            role: Role name.

        Returns:
            Permission rows for the role, ordered by row ID.
        """
        result = await self.session.execute(
            select(RolePermissionModel)
            .where(RolePermissionModel.role == role)
            .order_by(RolePermissionModel.id)
        )
        return list(result.scalars().all())

    async def list_all(self) -> list[RolePermissionModel]:
        """Get every permission row for every role."""
        result = await self.session.execute(
            select(RolePermissionModel).order_by(
                RolePermissionModel.role, RolePermissionModel.id
            )
        )
        return list(result.scalars().all())

    async def list_role_names(self) -> list[str]:
        """Get the distinct role names present in the store, unordered."""
        result = await self.session.execute(select(RolePermissionModel.role).distinct())
        return list(result.scalars().all())

    async def role_exists(self, role: str) -> bool:
        result = await self.session.execute(
            select(RolePermissionModel.id).where(RolePermissionModel.role == role).limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def count_for_role(self, role: str) -> int:
        result = await self.session.execute(
            select(func.count(RolePermissionModel.id)).where(RolePermissionModel.role == role)
        )
        return result.scalar_one()

    async def get(self, role: str, feature: str) -> RolePermissionModel | None:
        """Get the row for a (role, feature) pair.

        Args:
            role: Role name.
            feature: Feature display name.

        Returns:
            Permission row if found, None otherwise.
        """
        result = await self.session.execute(
            select(RolePermissionModel).where(
                RolePermissionModel.role == role,
                RolePermissionModel.feature == feature,
            )
        )
        return result.scalar_one_or_none()

    async def upsert(
        self,
        role: str,
        feature: str,
        feature_path: str,
        access_level: str,
    ) -> RolePermissionModel:
        """Insert or replace the access level for a (role, feature) pair.

        Args:
            role: Role name.
            feature: Feature display name.
            feature_path: Feature route path.
            access_level: 'none', 'view' or 'edit'.

        Returns:
            The inserted or updated row.
        """
        row = await self.get(role, feature)
        if row is None:
            row = RolePermissionModel(
                role=role,
                feature=feature,
                feature_path=feature_path,
                access_level=access_level,
            )
            self.session.add(row)
        else:
            row.feature_path = feature_path
            row.access_level = access_level
        await self.session.flush()
        return row

    async def delete_all_for_role(self, role: str) -> int:
        """Delete every permission row for a role.

        Returns:
            Number of rows deleted.
        """
        result = await self.session.execute(
            delete(RolePermissionModel).where(RolePermissionModel.role == role)
        )
        await self.session.flush()
        return result.rowcount or 0
