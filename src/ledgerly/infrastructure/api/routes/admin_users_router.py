"""Admin user API routes.

Standard user CRUD for the admin console. An admin cannot delete their
own account.
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ledgerly.infrastructure.api.dependencies import AdminUser
from ledgerly.infrastructure.api.schemas import (
    UserCreateRequest,
    UserResponse,
    UserUpdateRequest,
)
from ledgerly.domain.services import UserService
from ledgerly.infrastructure.persistence.database import get_db_session

router = APIRouter()


@router.get(
    "",
    response_model=list[UserResponse],
    responses={403: {"description": "Admin access required"}},
)
async def list_users(
    current_user: AdminUser,
    session: AsyncSession = Depends(get_db_session),
) -> list[UserResponse]:
    """List all users, newest first."""
    users = await UserService(session).list_users()
    return [UserResponse.model_validate(user) for user in users]


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    responses={
        403: {"description": "Admin access required"},
        404: {"description": "User not found"},
    },
)
async def get_user(
    user_id: str,
    current_user: AdminUser,
    session: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    user = await UserService(session).get_user(user_id)
    return UserResponse.model_validate(user)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=UserResponse,
    responses={
        400: {"description": "Missing email or password, or email already registered"},
        403: {"description": "Admin access required"},
    },
)
async def create_user(
    request: UserCreateRequest,
    current_user: AdminUser,
    session: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    """Create a user with any role."""
    user = await UserService(session).create_user(**request.model_dump())
    await session.commit()
    return UserResponse.model_validate(user)


@router.put(
    "/{user_id}",
    response_model=UserResponse,
    responses={
        400: {"description": "No fields to update, or email already in use"},
        403: {"description": "Admin access required"},
        404: {"description": "User not found"},
    },
)
async def update_user(
    user_id: str,
    request: UserUpdateRequest,
    current_user: AdminUser,
    session: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    """Update any subset of a user's fields, including role and password."""
    user = await UserService(session).update_user(
        user_id,
        request.model_dump(exclude_unset=True),
    )
    await session.commit()
    return UserResponse.model_validate(user)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        400: {"description": "Cannot delete your own account"},
        403: {"description": "Admin access required"},
        404: {"description": "User not found"},
    },
)
async def delete_user(
    user_id: str,
    current_user: AdminUser,
    session: AsyncSession = Depends(get_db_session),
) -> Response:
    await UserService(session).delete_user(user_id, actor_id=current_user.user_id)
    await session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
