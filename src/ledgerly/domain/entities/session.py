"""Session context.

Holds the authenticated user and the permission snapshot for their role.
A session context is created at login (or per request on the server) and
passed explicitly to whatever needs to make access decisions.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from ledgerly.domain.entities.access_level import AccessLevel
from ledgerly.domain.entities.permission import AccessDecision, PermissionSnapshot
from ledgerly.domain.entities.role import ADMIN_ROLE


@dataclass
class SessionContext:
    """Authenticated session with its permission snapshot.

    Attributes:
        user_id: Authenticated user's ID.
        email: Authenticated user's email.
        role: The user's role field.
        snapshot: Access levels for the user's role, keyed by feature path.
        started_at: When the snapshot was taken.
    """

    user_id: str
    email: str
    role: str
    snapshot: PermissionSnapshot = field(default_factory=PermissionSnapshot)
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE

    def check(self, page_path: str) -> AccessDecision:
        """Resolve access to a page from this session's snapshot."""
        from ledgerly.domain.services.permission_resolver import resolve_access

        return resolve_access(self.role, page_path, self.snapshot)

    def can_view(self, page_path: str) -> bool:
        return self.check(page_path).can_view

    def can_edit(self, page_path: str) -> bool:
        return self.check(page_path).can_edit

    def allows(self, page_path: str, required: AccessLevel) -> bool:
        return self.check(page_path).satisfies(required)
