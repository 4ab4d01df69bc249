"""Authentication API schemas for request/response validation."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

from ledgerly.infrastructure.api.schemas.permission_schemas import FeaturePermission


class RegisterRequest(BaseModel):
    """Request body for self-registration."""

    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=1, description="User's password")
    company_name: str | None = Field(None, max_length=255, description="Company name")
    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)


class LoginRequest(BaseModel):
    """Request body for login."""

    email: str = Field(..., min_length=1, description="User's email address")
    password: str = Field(..., min_length=1, description="User's password")


class UserResponse(BaseModel):
    """User information returned by auth and admin endpoints."""

    id: str = Field(..., description="User ID")
    email: str = Field(..., description="User's email address")
    first_name: str | None = None
    last_name: str | None = None
    company_name: str | None = None
    role: str = Field(..., description="User's role name")
    is_active: bool = Field(..., description="Whether the user can log in")
    last_login: datetime | None = None
    created_at: datetime | None = Field(None, description="When the user was created")

    model_config = {"from_attributes": True}


class AuthResponse(BaseModel):
    """Response for successful register or login.

    Carries the caller's permission snapshot so a client can make every
    page and control decision locally for the rest of the session.
    """

    token: str = Field(..., description="JWT access token")
    expires_in: int = Field(..., description="Access token lifetime in seconds")
    user: UserResponse
    permissions: list[FeaturePermission] = Field(
        default_factory=list,
        description="Caller's access level per feature",
    )


class MessageResponse(BaseModel):
    success: bool = True
    message: str
