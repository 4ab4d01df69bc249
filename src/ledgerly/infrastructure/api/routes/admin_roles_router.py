"""Admin role API routes.

Roles are addressed by name. System roles (Admin, User) cannot be
deleted, and no role can be renamed. All endpoints require the Admin role.
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ledgerly.core.logging import LoggingContext, get_logger
from ledgerly.domain.services import RoleDirectory, RoleService
from ledgerly.infrastructure.api.dependencies import AdminUser, SnapshotCache
from ledgerly.infrastructure.api.schemas import (
    BulkPermissionUpdateRequest,
    BulkPermissionUpdateResponse,
    CreateRoleRequest,
    FeaturePermission,
    RoleDetailResponse,
    RoleListItem,
    UpdateRoleRequest,
)
from ledgerly.infrastructure.persistence.database import get_db_session

logger = get_logger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=list[RoleListItem],
    responses={403: {"description": "Admin access required"}},
)
async def list_roles(
    current_user: AdminUser,
    session: AsyncSession = Depends(get_db_session),
) -> list[RoleListItem]:
    """List roles: Admin first, User second, then alphabetically."""
    summaries = await RoleDirectory(session).list_roles()
    logger.debug("Roles listed", count=len(summaries), requested_by=current_user.user_id)
    return [RoleListItem.model_validate(summary) for summary in summaries]


@router.get(
    "/{role}",
    response_model=RoleDetailResponse,
    responses={
        403: {"description": "Admin access required"},
        404: {"description": "Role not found"},
    },
)
async def get_role(
    role: str,
    current_user: AdminUser,
    session: AsyncSession = Depends(get_db_session),
) -> RoleDetailResponse:
    """Get a role with its access level on each of the nine features."""
    detail = await RoleService(session).get_role(role)
    summary = detail.summary
    return RoleDetailResponse(
        name=summary.name,
        description=summary.description,
        is_system=summary.is_system,
        user_count=summary.user_count,
        permission_count=summary.permission_count,
        permissions=[
            FeaturePermission(
                page_name=entry.feature,
                page_path=entry.feature_path,
                access_level=entry.access_level,
            )
            for entry in detail.permissions
        ],
    )


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=RoleListItem,
    responses={
        400: {"description": "Missing name or role already exists"},
        403: {"description": "Admin access required"},
    },
)
async def create_role(
    role_request: CreateRoleRequest,
    current_user: AdminUser,
    cache: SnapshotCache,
    session: AsyncSession = Depends(get_db_session),
) -> RoleListItem:
    """Create a role with every feature at 'none'."""
    summary = await RoleService(session, cache).create_role(
        role_request.name,
        role_request.description,
    )
    await session.commit()
    logger.info("Role created via API", role=summary.name, created_by=current_user.user_id)
    return RoleListItem.model_validate(summary)


@router.put(
    "/{role}",
    responses={
        400: {"description": "Roles cannot be renamed"},
        403: {"description": "Admin access required"},
        404: {"description": "Role not found"},
    },
)
async def rename_role(
    role: str,
    role_request: UpdateRoleRequest,
    current_user: AdminUser,
    session: AsyncSession = Depends(get_db_session),
) -> None:
    """Rename attempts are always rejected."""
    await RoleService(session).rename_role(role, role_request.name or "")


@router.delete(
    "/{role}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        400: {"description": "System roles cannot be deleted"},
        403: {"description": "Admin access required"},
        404: {"description": "Role not found"},
    },
)
async def delete_role(
    role: str,
    current_user: AdminUser,
    cache: SnapshotCache,
    session: AsyncSession = Depends(get_db_session),
) -> Response:
    """Delete a custom role and all of its permission rows."""
    removed = await RoleService(session, cache).delete_role(role)
    await session.commit()
    logger.info(
        "Role deleted via API",
        role=role,
        permissions_removed=removed,
        deleted_by=current_user.user_id,
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put(
    "/{role}/permissions",
    response_model=BulkPermissionUpdateResponse,
    responses={
        403: {"description": "Admin access required"},
        404: {"description": "Role not found"},
        500: {"description": "The batch failed and nothing was saved"},
    },
)
async def update_role_permissions(
    role: str,
    request: BulkPermissionUpdateRequest,
    current_user: AdminUser,
    cache: SnapshotCache,
    session: AsyncSession = Depends(get_db_session),
) -> BulkPermissionUpdateResponse:
    """Apply a batch of access levels to a role.

    Malformed entries are skipped and counted; a store failure aborts the
    batch with nothing saved.
    """
    with LoggingContext(role=role, updated_by=current_user.user_id):
        result = await RoleService(session, cache).update_role_permissions(
            role, request.permissions
        )
        await session.commit()
        # Drop anything cached between the write and the commit
        cache.invalidate_role(role)

        logger.info(
            "Permissions updated via API",
            updated=result.updated_count,
            skipped=result.skipped_count,
        )
    return BulkPermissionUpdateResponse(
        role=role,
        submitted_count=result.submitted_count,
        updated_count=result.updated_count,
        skipped_count=result.skipped_count,
        message=f"Successfully updated {result.updated_count} permissions for role {role}",
    )
