"""Permission API routes.

Lets a signed-in user read their own resolved access, either for every
feature or for a single page path.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ledgerly.core.logging import get_logger
from ledgerly.domain.entities.feature import DEFAULT_SAFE_PATH, feature_by_path
from ledgerly.domain.services import PermissionService
from ledgerly.infrastructure.api.dependencies import (
    AuthenticatedUser,
    CurrentSession,
    SnapshotCache,
)
from ledgerly.infrastructure.api.schemas import FeaturePermission, PermissionCheckResponse
from ledgerly.infrastructure.persistence.database import get_db_session

logger = get_logger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=list[FeaturePermission],
    responses={401: {"description": "Not authenticated"}},
)
async def list_my_permissions(
    current_user: AuthenticatedUser,
    cache: SnapshotCache,
    session: AsyncSession = Depends(get_db_session),
) -> list[FeaturePermission]:
    """List the caller's access level per feature.

    Admin gets edit on every feature without a store lookup.
    """
    features = await PermissionService(session, cache).feature_list(current_user.role)
    return [
        FeaturePermission(
            page_name=feature.page_name,
            page_path=feature.page_path,
            access_level=feature.access_level,
        )
        for feature in features
    ]


@router.get(
    "/check",
    response_model=PermissionCheckResponse,
    responses={401: {"description": "Not authenticated"}},
)
async def check_permission(
    context: CurrentSession,
    path: str = Query(..., min_length=1, description="Page path to check"),
) -> PermissionCheckResponse:
    """Resolve the caller's access to one page.

    A denied check carries `redirect_to`, the page a gate should send the
    user to instead.
    """
    decision = context.check(path)
    feature = feature_by_path(path)
    if not decision.has_access:
        logger.info("Page check denied", user_id=context.user_id, role=context.role, page_path=path)

    return PermissionCheckResponse(
        page_path=path,
        page_name=feature.name if feature else None,
        has_access=decision.has_access,
        can_view=decision.can_view,
        can_edit=decision.can_edit,
        access_level=decision.access_level,
        redirect_to=None if decision.has_access else DEFAULT_SAFE_PATH,
    )
