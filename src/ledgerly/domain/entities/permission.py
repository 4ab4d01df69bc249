"""Permission entities for role-based page access.

A permission entry grants one role an access level on one feature. A
snapshot is the set of entries for a single role, keyed by feature path.
"""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass

from ledgerly.domain.entities.access_level import AccessLevel


@dataclass(frozen=True)
class PermissionEntry:
    """Access level for a (role, feature) pair.

    Attributes:
        role: Role name.
        feature: Feature display name.
        feature_path: Feature route path.
        access_level: Granted access level.
    """

    role: str
    feature: str
    feature_path: str
    access_level: AccessLevel

    def __post_init__(self) -> None:
        if not self.role:
            raise ValueError("Role name is required")
        if not self.feature:
            raise ValueError("Feature name is required")
        if not self.feature_path:
            raise ValueError("Feature path is required")


@dataclass(frozen=True)
class AccessDecision:
    """Outcome of resolving a role's access to a page.

    Attributes:
        has_access: Whether the page may be shown at all.
        can_view: Whether read-only content may be shown.
        can_edit: Whether mutations are allowed.
        access_level: The effective access level.
    """

    has_access: bool
    can_view: bool
    can_edit: bool
    access_level: AccessLevel

    @classmethod
    def for_level(cls, level: AccessLevel) -> "AccessDecision":
        """Build the decision implied by an access level."""
        return cls(
            has_access=level.satisfies(AccessLevel.VIEW),
            can_view=level.satisfies(AccessLevel.VIEW),
            can_edit=level.satisfies(AccessLevel.EDIT),
            access_level=level,
        )

    def satisfies(self, required: AccessLevel) -> bool:
        return self.access_level.satisfies(required)


DENIED = AccessDecision.for_level(AccessLevel.NONE)
FULL_ACCESS = AccessDecision.for_level(AccessLevel.EDIT)


class PermissionSnapshot(Mapping[str, AccessLevel]):
    """Immutable mapping of feature path to access level for one role.

    Fetched once per session and used for every local access decision
    until the next refresh.
    """

    def __init__(self, levels: Mapping[str, AccessLevel] | None = None) -> None:
        self._levels: dict[str, AccessLevel] = dict(levels or {})

    @classmethod
    def from_entries(cls, entries: Iterable[PermissionEntry]) -> "PermissionSnapshot":
        return cls({entry.feature_path: entry.access_level for entry in entries})

    def __getitem__(self, path: str) -> AccessLevel:
        return self._levels[path]

    def __iter__(self) -> Iterator[str]:
        return iter(self._levels)

    def __len__(self) -> int:
        return len(self._levels)

    def __repr__(self) -> str:
        return f"<PermissionSnapshot({self._levels!r})>"
