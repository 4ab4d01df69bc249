"""JWT token service.

Issues and validates the bearer tokens that identify a session. Tokens
carry the user's ID, email and role; the permission snapshot itself is
never embedded in a token.
"""

import threading
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from ledgerly.core.config import get_settings


class JWTError(Exception):
    """Base exception for JWT-related errors."""

    pass


class TokenExpiredError(JWTError):
    """Raised when a token has expired."""

    pass


class InvalidTokenError(JWTError):
    """Raised when a token is invalid or has been revoked."""

    pass


class JWTService:
    """Service for creating, validating and revoking access tokens."""

    ALGORITHM = "HS256"
    ISSUER = "ledgerly"

    def __init__(self, secret_key: str | None = None) -> None:
        """Initialize the JWT service.

        Args:
            secret_key: Secret key for signing tokens. If not provided,
                        uses the configured secret key from settings.
        """
        self._secret_key = secret_key
        # jti -> expiry; entries are dropped once the token would have expired anyway
        self._revoked: dict[str, datetime] = {}
        self._lock = threading.Lock()

    @property
    def secret_key(self) -> str:
        if self._secret_key:
            return self._secret_key
        return get_settings().secret_key

    def create_access_token(
        self,
        user_id: str,
        email: str,
        role: str,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create an access token.

        Args:
            user_id: The user's unique identifier.
            email: The user's email address.
            role: The user's role name.
            expires_delta: Custom expiration time. Defaults to config value.

        Returns:
            Encoded JWT access token.
        """
        if expires_delta is None:
            expires_delta = timedelta(minutes=get_settings().access_token_expire_minutes)

        now = datetime.now(timezone.utc)
        payload = {
            "iss": self.ISSUER,
            "sub": user_id,
            "iat": now,
            "exp": now + expires_delta,
            "jti": str(uuid.uuid4()),
            "user_id": user_id,
            "email": email,
            "role": role,
            "type": "access",
        }

        return jwt.encode(payload, self.secret_key, algorithm=self.ALGORITHM)

    def decode_token(self, token: str) -> dict[str, Any]:
        """Decode and validate a JWT token.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: If the token is invalid.
        """
        try:
            return jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.ALGORITHM],
                issuer=self.ISSUER,
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError("Invalid token") from e

    def validate_access_token(self, token: str) -> dict[str, Any]:
        """Validate that a token is a live access token and decode it.

        Returns:
            Decoded token payload.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: If the token is invalid, not an access token,
                or has been revoked by logout.
        """
        payload = self.decode_token(token)
        if payload.get("type") != "access":
            raise InvalidTokenError("Not an access token")
        if self.is_revoked(payload.get("jti", "")):
            raise InvalidTokenError("Token has been revoked")
        return payload

    def revoke(self, payload: dict[str, Any]) -> None:
        """Revoke a decoded token until its natural expiry."""
        jti = payload.get("jti")
        if not jti:
            return
        expires_at = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
        with self._lock:
            self._prune()
            self._revoked[jti] = expires_at

    def is_revoked(self, jti: str) -> bool:
        with self._lock:
            return jti in self._revoked

    def _prune(self) -> None:
        now = datetime.now(timezone.utc)
        for jti in [jti for jti, expires_at in self._revoked.items() if expires_at < now]:
            del self._revoked[jti]

    def get_expires_in(self, expires_delta: timedelta | None = None) -> int:
        """Get the access token lifetime in seconds."""
        if expires_delta is None:
            expires_delta = timedelta(minutes=get_settings().access_token_expire_minutes)
        return int(expires_delta.total_seconds())


# Default JWT service instance
jwt_service = JWTService()
