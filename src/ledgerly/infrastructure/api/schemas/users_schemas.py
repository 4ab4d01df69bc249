"""Pydantic schemas for admin user CRUD operations.

Email and password are optional at the schema level so that a missing
value is reported by the service as a 400 with a readable message.
"""

from pydantic import BaseModel, Field


class UserCreateRequest(BaseModel):
    """Request schema for creating a user from the admin console."""

    email: str | None = Field(None, max_length=255, description="User's email address")
    password: str | None = Field(None, description="Initial password")
    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)
    company_name: str | None = Field(None, max_length=255)
    role: str = Field("User", min_length=1, max_length=100, description="Role name")
    is_active: bool = Field(True, description="Whether the user can log in")


class UserUpdateRequest(BaseModel):
    """Request schema for updating a user.

    All fields are optional. Only provided fields will be updated; a new
    password is re-hashed before storage.
    """

    email: str | None = Field(None, max_length=255)
    password: str | None = None
    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)
    company_name: str | None = Field(None, max_length=255)
    role: str | None = Field(None, max_length=100)
    is_active: bool | None = None
