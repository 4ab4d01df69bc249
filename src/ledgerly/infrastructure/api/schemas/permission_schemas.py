"""Permission API schemas for request/response validation."""

from pydantic import BaseModel, Field

from ledgerly.domain.entities.access_level import AccessLevel


class FeaturePermission(BaseModel):
    """Access level on one feature.

    Attributes:
        page_name: Feature display name.
        page_path: Feature route path.
        access_level: none, view or edit.
    """

    page_name: str
    page_path: str
    access_level: AccessLevel


class PermissionCheckResponse(BaseModel):
    """Access decision for one page path."""

    page_path: str
    page_name: str | None = None
    has_access: bool
    can_view: bool
    can_edit: bool
    access_level: AccessLevel
    redirect_to: str | None = Field(
        None,
        description="Where a page gate should send the user when access is denied",
    )


class FeatureResponse(BaseModel):
    name: str
    path: str
