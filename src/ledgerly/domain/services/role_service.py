"""Role administration service.

Backs the admin console: role creation and deletion, and batch updates of
a role's feature access levels. This is the only writer of the permission
store.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ledgerly.core.exceptions import (
    ConflictError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from ledgerly.core.logging import get_logger
from ledgerly.domain.entities.access_level import AccessLevel
from ledgerly.domain.entities.feature import ADMIN_PANEL, FEATURES, feature_by_name
from ledgerly.domain.entities.permission import PermissionEntry
from ledgerly.domain.entities.role import (
    ADMIN_ROLE,
    SYSTEM_ROLES,
    USER_ROLE,
    RoleSummary,
    is_system_role,
)
from ledgerly.domain.services.permission_cache import PermissionSnapshotCache
from ledgerly.infrastructure.persistence.repositories import (
    RolePermissionRepository,
    UserRepository,
)

logger = get_logger(__name__)

ROLE_NAME_MAX_LENGTH = 100


def default_level(role: str, feature_name: str) -> AccessLevel:
    """Access level a role starts with on a feature.

    Admin starts with edit everywhere. User starts with view everywhere
    except the Admin Panel. Custom roles start with none.
    """
    if role == ADMIN_ROLE:
        return AccessLevel.EDIT
    if role == USER_ROLE:
        return AccessLevel.NONE if feature_name == ADMIN_PANEL.name else AccessLevel.VIEW
    return AccessLevel.NONE


@dataclass
class RoleDetail:
    """A role with its per-feature access levels in canonical feature order."""

    summary: RoleSummary
    permissions: list[PermissionEntry] = field(default_factory=list)


@dataclass
class BatchUpdateResult:
    """Outcome of a batch permission update.

    Attributes:
        role: Role that was updated.
        submitted_count: Number of entries received.
        updated_count: Number of entries applied.
        skipped: Indexes of malformed entries that were skipped.
    """

    role: str
    submitted_count: int
    updated_count: int
    skipped: list[int] = field(default_factory=list)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)


class RoleService:
    """Service for role and permission administration."""

    def __init__(
        self,
        session: AsyncSession,
        cache: PermissionSnapshotCache | None = None,
    ) -> None:
        """Initialize the role service.

        Args:
            session: SQLAlchemy async session.
            cache: Snapshot cache to invalidate after permission writes.
        """
        self.session = session
        self.cache = cache
        self.permission_repo = RolePermissionRepository(session)
        self.user_repo = UserRepository(session)

    def _invalidate(self, role: str) -> None:
        if self.cache is not None:
            self.cache.invalidate_role(role)

    async def _require_role(self, name: str) -> None:
        if not await self.permission_repo.role_exists(name):
            raise NotFoundError(f"Role '{name}' not found")

    async def get_role(self, name: str) -> RoleDetail:
        """Get a role and its access level on every feature.

        Features without a stored row are reported at 'none'.

        Raises:
            NotFoundError: If the role has no permission rows.
        """
        try:
            rows = await self.permission_repo.list_for_role(name)
            user_count = await self.user_repo.count_by_role(name) if rows else 0
        except SQLAlchemyError as e:
            raise PersistenceError("Failed to fetch role") from e

        if not rows:
            raise NotFoundError(f"Role '{name}' not found")

        stored: dict[str, AccessLevel] = {}
        for row in rows:
            try:
                stored[row.feature] = AccessLevel.parse(row.access_level)
            except ValueError:
                stored[row.feature] = AccessLevel.NONE

        permissions = [
            PermissionEntry(
                role=name,
                feature=feature.name,
                feature_path=feature.path,
                access_level=stored.get(feature.name, AccessLevel.NONE),
            )
            for feature in FEATURES
        ]
        summary = RoleSummary(
            name=name,
            is_system=is_system_role(name),
            user_count=user_count,
            permission_count=len(FEATURES),
        )
        return RoleDetail(summary=summary, permissions=permissions)

    async def create_role(self, name: str, description: str | None = None) -> RoleSummary:
        """Create a role with every feature at 'none'.

        Args:
            name: New role name.
            description: Optional description (display only; not persisted).

        Returns:
            Summary of the created role.

        Raises:
            ValidationError: If the name is blank or too long.
            ConflictError: If a role with that name already exists.
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Role name is required")
        if len(name) > ROLE_NAME_MAX_LENGTH:
            raise ValidationError(f"Role name must be at most {ROLE_NAME_MAX_LENGTH} characters")
        if "/" in name or not name.isprintable():
            raise ValidationError("Role name cannot contain '/' or control characters")

        try:
            if name in SYSTEM_ROLES or await self.permission_repo.role_exists(name):
                raise ConflictError("Role already exists")

            for feature in FEATURES:
                await self.permission_repo.upsert(
                    role=name,
                    feature=feature.name,
                    feature_path=feature.path,
                    access_level=AccessLevel.NONE.value,
                )
        except SQLAlchemyError as e:
            logger.error("Failed to create role", role=name, error=str(e))
            raise PersistenceError("Failed to create role") from e

        self._invalidate(name)
        logger.info("Role created", role=name, permission_count=len(FEATURES))
        return RoleSummary(
            name=name,
            is_system=False,
            user_count=0,
            permission_count=len(FEATURES),
            description=description or "",
        )

    async def delete_role(self, name: str) -> int:
        """Delete a custom role and all its permission rows.

        Users keep their role field; with no rows left they resolve to
        'none' everywhere.

        Returns:
            Number of permission rows removed.

        Raises:
            ValidationError: If the role is a system role.
            NotFoundError: If the role does not exist.
        """
        if is_system_role(name):
            raise ValidationError("Cannot delete system roles")

        try:
            await self._require_role(name)
            deleted = await self.permission_repo.delete_all_for_role(name)
        except SQLAlchemyError as e:
            logger.error("Failed to delete role", role=name, error=str(e))
            raise PersistenceError("Failed to delete role") from e

        self._invalidate(name)
        logger.info("Role deleted", role=name, permissions_removed=deleted)
        return deleted

    async def rename_role(self, name: str, new_name: str) -> None:
        """Reject a rename; role names are fixed once created.

        Raises:
            ValidationError: Always, once the role is known to exist.
            NotFoundError: If the role does not exist.
        """
        if is_system_role(name):
            raise ValidationError("Cannot rename system roles")
        try:
            await self._require_role(name)
        except SQLAlchemyError as e:
            raise PersistenceError("Failed to fetch role") from e
        logger.info("Role rename rejected", role=name, new_name=new_name)
        raise ValidationError("Roles cannot be renamed after creation")

    async def update_role_permissions(
        self,
        role: str,
        entries: Iterable[Mapping[str, Any]],
    ) -> BatchUpdateResult:
        """Apply a batch of access levels to a role.

        Each entry is a mapping with 'feature_name', 'feature_path' and
        'access_level'. Entries with a missing field, an unknown feature,
        a path that does not match the feature, or an unknown level are
        skipped. A store failure rolls back the session, so no row from the
        batch is kept.

        Returns:
            BatchUpdateResult with submitted and applied counts.

        Raises:
            NotFoundError: If the role does not exist.
            PersistenceError: If any upsert fails.
        """
        entries = list(entries)
        result = BatchUpdateResult(role=role, submitted_count=len(entries), updated_count=0)

        try:
            await self._require_role(role)

            for index, entry in enumerate(entries):
                parsed = _parse_entry(entry)
                if parsed is None:
                    logger.warning("Skipping malformed permission entry", role=role, index=index)
                    result.skipped.append(index)
                    continue

                feature_name, feature_path, level = parsed
                await self.permission_repo.upsert(
                    role=role,
                    feature=feature_name,
                    feature_path=feature_path,
                    access_level=level.value,
                )
                result.updated_count += 1
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                "Permission batch failed",
                role=role,
                applied_before_failure=result.updated_count,
                error=str(e),
            )
            raise PersistenceError("Failed to update permissions") from e

        self._invalidate(role)
        logger.info(
            "Role permissions updated",
            role=role,
            submitted=result.submitted_count,
            updated=result.updated_count,
            skipped=result.skipped_count,
        )
        return result

    async def ensure_system_roles(self) -> int:
        """Give Admin and User a row for every feature they lack.

        Existing rows are never changed.

        Returns:
            Number of rows created.
        """
        created = 0
        for role in (ADMIN_ROLE, USER_ROLE):
            existing = {row.feature for row in await self.permission_repo.list_for_role(role)}
            for feature in FEATURES:
                if feature.name in existing:
                    continue
                await self.permission_repo.upsert(
                    role=role,
                    feature=feature.name,
                    feature_path=feature.path,
                    access_level=default_level(role, feature.name).value,
                )
                created += 1
            self._invalidate(role)
        return created


def _parse_entry(entry: Mapping[str, Any]) -> tuple[str, str, AccessLevel] | None:
    """Validate one batch entry; None means malformed."""
    if not isinstance(entry, Mapping):
        return None

    feature_name = entry.get("feature_name")
    feature_path = entry.get("feature_path")
    raw_level = entry.get("access_level")
    if not all(isinstance(value, str) and value for value in (feature_name, feature_path, raw_level)):
        return None

    feature = feature_by_name(feature_name)
    if feature is None or feature.path != feature_path:
        return None

    try:
        level = AccessLevel.parse(raw_level)
    except ValueError:
        return None

    return feature.name, feature.path, level
