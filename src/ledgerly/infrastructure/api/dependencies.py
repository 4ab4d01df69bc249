"""FastAPI dependencies for authentication and authorization.

Every authenticated request gets a SessionContext: the user's identity
from the bearer token plus the permission snapshot for their role. Route
handlers declare the feature and level they need with require_feature.
"""

from dataclasses import dataclass, field
from typing import Annotated, Any

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ledgerly.core.config import get_settings
from ledgerly.core.exceptions import AuthenticationError, AuthorizationError
from ledgerly.core.logging import get_logger
from ledgerly.domain.entities.access_level import AccessLevel
from ledgerly.domain.entities.feature import Feature
from ledgerly.domain.entities.role import ADMIN_ROLE
from ledgerly.domain.entities.session import SessionContext
from ledgerly.domain.services import PermissionService, PermissionSnapshotCache
from ledgerly.infrastructure.auth import (
    InvalidTokenError,
    TokenExpiredError,
    jwt_service,
)
from ledgerly.infrastructure.persistence.database import get_db_session

logger = get_logger(__name__)


@dataclass
class CurrentUser:
    """Represents the current authenticated user context.

    Extracted from a valid JWT access token.
    """

    user_id: str
    email: str
    role: str
    token_payload: dict[str, Any] = field(default_factory=dict, repr=False)

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE


async def get_current_user(
    authorization: Annotated[str | None, Header()] = None,
) -> CurrentUser:
    """Extract and validate the current user from the Authorization header.

    Args:
        authorization: The Authorization header value (e.g., "Bearer <token>").

    Returns:
        CurrentUser: The authenticated user's context.

    Raises:
        AuthenticationError: If the token is missing, malformed, invalid,
            revoked, or expired.
    """
    if authorization is None:
        logger.info("Authentication failed: missing Authorization header")
        raise AuthenticationError("Missing Authorization header")

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        logger.info("Authentication failed: invalid Authorization header format")
        raise AuthenticationError("Could not validate credentials")

    try:
        payload = jwt_service.validate_access_token(parts[1])
        return CurrentUser(
            user_id=payload["user_id"],
            email=payload["email"],
            role=payload["role"],
            token_payload=payload,
        )
    except TokenExpiredError:
        logger.info("Authentication failed: token expired")
        raise AuthenticationError("Token has expired") from None
    except InvalidTokenError as e:
        logger.info("Authentication failed: invalid token", error=str(e))
        raise AuthenticationError(f"Invalid token: {e}") from None
    except KeyError as e:
        logger.warning("Authentication failed: missing claim in token", missing_claim=str(e))
        raise AuthenticationError(f"Missing claim: {e}") from None


# Type alias for dependency injection
AuthenticatedUser = Annotated[CurrentUser, Depends(get_current_user)]


async def require_admin(current_user: AuthenticatedUser) -> CurrentUser:
    """Ensure the current user has the Admin role.

    Raises:
        AuthorizationError: If the user is not an Admin.
    """
    if not current_user.is_admin:
        logger.info(
            "Admin access denied",
            user_id=current_user.user_id,
            role=current_user.role,
        )
        raise AuthorizationError("Admin access required")
    return current_user


AdminUser = Annotated[CurrentUser, Depends(require_admin)]


def get_snapshot_cache(request: Request) -> PermissionSnapshotCache:
    """Get the permission snapshot cache from app state, creating it on first use."""
    if not hasattr(request.app.state, "snapshot_cache"):
        settings = get_settings()
        request.app.state.snapshot_cache = PermissionSnapshotCache(
            ttl_seconds=settings.permission_cache_ttl_seconds
        )
    return request.app.state.snapshot_cache


SnapshotCache = Annotated[PermissionSnapshotCache, Depends(get_snapshot_cache)]


async def get_session_context(
    current_user: AuthenticatedUser,
    cache: SnapshotCache,
    session: AsyncSession = Depends(get_db_session),
) -> SessionContext:
    """Build the session context for the current request."""
    snapshot = await PermissionService(session, cache).snapshot_for(current_user.role)
    return SessionContext(
        user_id=current_user.user_id,
        email=current_user.email,
        role=current_user.role,
        snapshot=snapshot,
    )


CurrentSession = Annotated[SessionContext, Depends(get_session_context)]


def require_feature(feature: Feature, level: AccessLevel = AccessLevel.VIEW):
    """Build a dependency that enforces an access level on a feature.

    Args:
        feature: Feature whose path is checked.
        level: Minimum access level required.

    Returns:
        Dependency returning the SessionContext when access is granted.

    Example:
        @router.post("", dependencies=[Depends(require_feature(INVOICES, AccessLevel.EDIT))])
    """

    async def dependency(context: CurrentSession) -> SessionContext:
        if not context.allows(feature.path, level):
            logger.info(
                "Feature access denied",
                user_id=context.user_id,
                role=context.role,
                feature=feature.name,
                required=level.value,
                granted=context.check(feature.path).access_level.value,
            )
            raise AuthorizationError(
                f"{level.value.capitalize()} access to {feature.name} required"
            )
        return context

    return dependency
