"""SQLAlchemy model for the role_permissions table.

One row grants one role an access level on one dashboard feature. A role
exists for as long as it has at least one row here.
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from ledgerly.infrastructure.persistence.database import Base


class RolePermissionModel(Base):
    """SQLAlchemy model for the role_permissions table.

    Attributes:
        id: Auto-incrementing primary key.
        role: Role name.
        feature: Feature display name (e.g., 'Invoices').
        feature_path: Feature route path (e.g., '/dashboard/invoices').
        access_level: One of 'none', 'view', 'edit'.
        created_at: Timestamp when the row was created.
        updated_at: Timestamp when the row was last updated.
    """

    __tablename__ = "role_permissions"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    role: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        index=True,
        comment="Role name",
    )
    feature: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Feature display name",
    )
    feature_path: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Feature route path",
    )
    access_level: Mapped[str] = mapped_column(
        String(10),
        nullable=False,
        default="none",
        comment="none | view | edit",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    __table_args__ = (
        UniqueConstraint("role", "feature", name="uq_role_permissions_role_feature"),
    )

    def __repr__(self) -> str:
        return (
            f"<RolePermission(role={self.role}, feature={self.feature}, "
            f"access_level={self.access_level})>"
        )
