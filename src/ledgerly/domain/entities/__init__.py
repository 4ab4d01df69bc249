"""Domain entities for Ledgerly.

Entities are plain Python dataclasses and enums that represent core business
concepts. They have no dependencies on infrastructure or external frameworks.
"""

from ledgerly.domain.entities.access_level import AccessLevel
from ledgerly.domain.entities.feature import (
    DEFAULT_SAFE_PATH,
    FEATURES,
    Feature,
    feature_by_name,
    feature_by_path,
)
from ledgerly.domain.entities.invoice import (
    CustomerStatus,
    InvoiceStatus,
    InvoiceTotals,
    LineItem,
    PricedLineItem,
    TransactionType,
)
from ledgerly.domain.entities.permission import (
    DENIED,
    FULL_ACCESS,
    AccessDecision,
    PermissionEntry,
    PermissionSnapshot,
)
from ledgerly.domain.entities.role import (
    ADMIN_ROLE,
    SYSTEM_ROLES,
    USER_ROLE,
    RoleSummary,
    describe_role,
    is_system_role,
    role_sort_key,
)
from ledgerly.domain.entities.session import SessionContext

__all__ = [
    "ADMIN_ROLE",
    "DEFAULT_SAFE_PATH",
    "DENIED",
    "FEATURES",
    "FULL_ACCESS",
    "SYSTEM_ROLES",
    "USER_ROLE",
    "AccessDecision",
    "AccessLevel",
    "CustomerStatus",
    "Feature",
    "InvoiceStatus",
    "InvoiceTotals",
    "LineItem",
    "PermissionEntry",
    "PermissionSnapshot",
    "PricedLineItem",
    "RoleSummary",
    "SessionContext",
    "TransactionType",
    "describe_role",
    "feature_by_name",
    "feature_by_path",
    "is_system_role",
    "role_sort_key",
]
