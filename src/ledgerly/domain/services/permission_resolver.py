"""Permission resolution service.

Decides whether a role may view or edit a dashboard page, given the
permission snapshot for that role. Resolution is pure and synchronous.

Resolution order:
1. The 'Admin' role always gets full edit access; the snapshot is not consulted.
2. Otherwise the snapshot entry whose path equals the requested path is used.
3. A missing entry, or an unreadable level, is treated as 'none' (deny by default).
"""

from collections.abc import Mapping

from ledgerly.core.logging import get_logger
from ledgerly.domain.entities.access_level import AccessLevel
from ledgerly.domain.entities.permission import DENIED, FULL_ACCESS, AccessDecision
from ledgerly.domain.entities.role import ADMIN_ROLE

logger = get_logger(__name__)


def resolve_access(
    role: str,
    page_path: str,
    snapshot: Mapping[str, AccessLevel | str],
) -> AccessDecision:
    """Resolve a role's access to a page.

    Args:
        role: The user's role name.
        page_path: Requested feature path (e.g., '/dashboard/invoices').
        snapshot: Access levels for the role, keyed by feature path.

    Returns:
        AccessDecision for the page.
    """
    if role == ADMIN_ROLE:
        return FULL_ACCESS

    stored = snapshot.get(page_path)
    if stored is None:
        return DENIED

    try:
        level = AccessLevel.parse(stored)
    except ValueError:
        logger.warning(
            "Unreadable access level treated as none",
            role=role,
            page_path=page_path,
            stored_level=str(stored),
        )
        return DENIED

    return AccessDecision.for_level(level)
