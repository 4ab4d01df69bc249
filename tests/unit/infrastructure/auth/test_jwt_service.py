from datetime import timedelta

import jwt  # PyJWT
import pytest

from ledgerly.infrastructure.auth.jwt_service import (
    InvalidTokenError,
    JWTService,
    TokenExpiredError,
)

SECRET_KEY = "test-secret-key-with-enough-length-for-hs256"


@pytest.fixture
def jwt_service():
    return JWTService(secret_key=SECRET_KEY)


class TestJWTService:

    def test_create_access_token(self, jwt_service):
        """Test creating an access token with correct claims."""
        token = jwt_service.create_access_token(
            user_id="user123",
            email="clerk@ledgerly.test",
            role="Manager",
        )

        decoded = jwt.decode(token, SECRET_KEY, algorithms=["HS256"], issuer="ledgerly")

        assert decoded["sub"] == "user123"
        assert decoded["user_id"] == "user123"
        assert decoded["email"] == "clerk@ledgerly.test"
        assert decoded["role"] == "Manager"
        assert decoded["type"] == "access"
        assert "jti" in decoded
        assert "permissions" not in decoded

    def test_expired_token(self, jwt_service):
        token = jwt_service.create_access_token(
            user_id="user123",
            email="clerk@ledgerly.test",
            role="User",
            expires_delta=timedelta(seconds=-1),
        )

        with pytest.raises(TokenExpiredError):
            jwt_service.validate_access_token(token)

    def test_wrong_secret(self, jwt_service):
        token = JWTService(secret_key="another-secret-key-of-sufficient-length").create_access_token(
            user_id="user123",
            email="clerk@ledgerly.test",
            role="User",
        )

        with pytest.raises(InvalidTokenError):
            jwt_service.validate_access_token(token)

    def test_garbage_token(self, jwt_service):
        with pytest.raises(InvalidTokenError):
            jwt_service.decode_token("not.a.token")

    def test_revoked_token(self, jwt_service):
        """A logged-out token is rejected until it expires."""
        token = jwt_service.create_access_token(
            user_id="user123",
            email="clerk@ledgerly.test",
            role="User",
        )
        payload = jwt_service.validate_access_token(token)

        jwt_service.revoke(payload)

        assert jwt_service.is_revoked(payload["jti"]) is True
        with pytest.raises(InvalidTokenError):
            jwt_service.validate_access_token(token)

    def test_non_access_token_rejected(self, jwt_service):
        token = jwt.encode(
            {"iss": "ledgerly", "type": "refresh", "user_id": "u"},
            SECRET_KEY,
            algorithm="HS256",
        )

        with pytest.raises(InvalidTokenError):
            jwt_service.validate_access_token(token)

    def test_expires_in(self, jwt_service):
        assert jwt_service.get_expires_in(timedelta(hours=1)) == 3600
