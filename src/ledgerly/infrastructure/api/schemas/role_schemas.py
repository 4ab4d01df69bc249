"""Role API schemas for request/response validation."""

from typing import Any

from pydantic import BaseModel, Field, field_validator

from ledgerly.infrastructure.api.schemas.permission_schemas import FeaturePermission


class CreateRoleRequest(BaseModel):
    """Request schema for creating a role.

    Attributes:
        name: Role name (e.g., 'Manager').
        description: Optional description of the role's purpose.
    """

    name: str
    description: str | None = None

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        """Validate that name is not empty."""
        if not v or not v.strip():
            raise ValueError("Role name is required")
        return v.strip()


class UpdateRoleRequest(BaseModel):
    """Request schema for a role rename attempt."""

    name: str | None = None
    description: str | None = None


class RoleListItem(BaseModel):
    """One row of the role directory."""

    name: str
    description: str
    is_system: bool
    user_count: int
    permission_count: int

    model_config = {"from_attributes": True}


class RoleDetailResponse(RoleListItem):
    """A role with its access level on every feature."""

    permissions: list[FeaturePermission]


class BulkPermissionUpdateRequest(BaseModel):
    """Batch of access levels to apply to a role.

    Entries are kept as raw objects: malformed ones are skipped during the
    update instead of rejecting the whole request.
    """

    permissions: list[Any] = Field(
        ...,
        description="Entries of {feature_name, feature_path, access_level}",
    )


class BulkPermissionUpdateResponse(BaseModel):
    role: str
    submitted_count: int
    updated_count: int
    skipped_count: int
    message: str
