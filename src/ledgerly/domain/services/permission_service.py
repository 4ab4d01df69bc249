"""Permission snapshot loading.

Builds the permission snapshot for a role from the store, going through
the snapshot cache, and turns snapshots into the feature list served to
clients.
"""

from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ledgerly.core.exceptions import PersistenceError
from ledgerly.core.logging import get_logger
from ledgerly.domain.entities.access_level import AccessLevel
from ledgerly.domain.entities.feature import FEATURES
from ledgerly.domain.entities.permission import PermissionSnapshot
from ledgerly.domain.entities.role import ADMIN_ROLE
from ledgerly.domain.services.permission_cache import PermissionSnapshotCache
from ledgerly.domain.services.permission_resolver import resolve_access
from ledgerly.infrastructure.persistence.repositories import RolePermissionRepository

logger = get_logger(__name__)


@dataclass(frozen=True)
class FeatureAccess:
    """One feature with the caller's access level on it."""

    page_name: str
    page_path: str
    access_level: AccessLevel


class PermissionService:
    """Loads permission snapshots for roles."""

    def __init__(
        self,
        session: AsyncSession,
        cache: PermissionSnapshotCache | None = None,
    ) -> None:
        self.session = session
        self.cache = cache
        self.permission_repo = RolePermissionRepository(session)

    async def snapshot_for(self, role: str) -> PermissionSnapshot:
        """Get the snapshot for a role, from cache when fresh.

        Admin never needs the store, so its snapshot is always empty.
        Rows with unreadable levels are left out, which resolves them to 'none'.

        Raises:
            PersistenceError: If the store cannot be read.
        """
        if role == ADMIN_ROLE:
            return PermissionSnapshot()

        if self.cache is not None:
            cached = self.cache.get(role)
            if cached is not None:
                return cached

        try:
            rows = await self.permission_repo.list_for_role(role)
        except SQLAlchemyError as e:
            logger.error("Failed to load permission snapshot", role=role, error=str(e))
            raise PersistenceError("Failed to fetch permissions") from e

        levels: dict[str, AccessLevel] = {}
        for row in rows:
            try:
                levels[row.feature_path] = AccessLevel.parse(row.access_level)
            except ValueError:
                logger.warning(
                    "Ignoring permission row with unknown level",
                    role=role,
                    feature=row.feature,
                    access_level=row.access_level,
                )
        snapshot = PermissionSnapshot(levels)

        if self.cache is not None:
            self.cache.set(role, snapshot)
        return snapshot

    async def feature_list(self, role: str) -> list[FeatureAccess]:
        """The caller's resolved access on each feature, in canonical order.

        Admin short-circuits to edit on every feature without a store lookup.
        Other roles list only features present in their snapshot.
        """
        if role == ADMIN_ROLE:
            return [
                FeatureAccess(feature.name, feature.path, AccessLevel.EDIT)
                for feature in FEATURES
            ]

        snapshot = await self.snapshot_for(role)
        features = []
        for feature in FEATURES:
            if feature.path not in snapshot:
                continue
            decision = resolve_access(role, feature.path, snapshot)
            features.append(FeatureAccess(feature.name, feature.path, decision.access_level))
        return features
