"""Authentication API routes.

Provides endpoints for registration, login, the current user, and logout.
Register and login return the caller's permission snapshot alongside the
token so clients can gate pages without further round trips.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ledgerly.core.logging import get_logger
from ledgerly.domain.services import PermissionService, UserService
from ledgerly.infrastructure.api.dependencies import AuthenticatedUser, SnapshotCache
from ledgerly.infrastructure.api.schemas import (
    AuthResponse,
    FeaturePermission,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    UserResponse,
)
from ledgerly.infrastructure.auth import jwt_service
from ledgerly.infrastructure.persistence.database import get_db_session
from ledgerly.infrastructure.persistence.models import UserModel

logger = get_logger(__name__)

router = APIRouter()


async def _auth_response(
    user: UserModel,
    session: AsyncSession,
    cache: SnapshotCache,
) -> AuthResponse:
    features = await PermissionService(session, cache).feature_list(user.role)
    token = jwt_service.create_access_token(
        user_id=user.id,
        email=user.email,
        role=user.role,
    )
    return AuthResponse(
        token=token,
        expires_in=jwt_service.get_expires_in(),
        user=UserResponse.model_validate(user),
        permissions=[
            FeaturePermission(
                page_name=feature.page_name,
                page_path=feature.page_path,
                access_level=feature.access_level,
            )
            for feature in features
        ],
    )


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=AuthResponse,
    responses={
        400: {"description": "Validation error or email already registered"},
    },
)
async def register(
    request: RegisterRequest,
    cache: SnapshotCache,
    session: AsyncSession = Depends(get_db_session),
) -> AuthResponse:
    """Register a new account with the User role.

    Returns:
        Token, user, and the User role's permission snapshot.
    """
    user = await UserService(session).register(
        email=request.email,
        password=request.password,
        company_name=request.company_name,
        first_name=request.first_name,
        last_name=request.last_name,
    )
    await session.commit()
    return await _auth_response(user, session, cache)


@router.post(
    "/login",
    status_code=status.HTTP_200_OK,
    response_model=AuthResponse,
    responses={
        401: {"description": "Invalid credentials or deactivated account"},
    },
)
async def login(
    request: LoginRequest,
    cache: SnapshotCache,
    session: AsyncSession = Depends(get_db_session),
) -> AuthResponse:
    """Authenticate with email and password.

    Inactive accounts are rejected with 401 even when the password matches.
    """
    user = await UserService(session).authenticate(request.email, request.password)
    await session.commit()
    return await _auth_response(user, session, cache)


@router.get(
    "/me",
    response_model=UserResponse,
    responses={
        401: {"description": "Not authenticated"},
        404: {"description": "User no longer exists"},
    },
)
async def get_me(
    current_user: AuthenticatedUser,
    session: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    """Get the authenticated user's profile."""
    user = await UserService(session).get_user(current_user.user_id)
    return UserResponse.model_validate(user)


@router.post(
    "/logout",
    response_model=MessageResponse,
    responses={401: {"description": "Not authenticated"}},
)
async def logout(current_user: AuthenticatedUser) -> MessageResponse:
    """End the session by revoking the presented token."""
    jwt_service.revoke(current_user.token_payload)
    logger.info("User logged out", user_id=current_user.user_id)
    return MessageResponse(message="Logged out successfully")
