"""Domain services for Ledgerly.

Services contain business logic that doesn't naturally fit within a single entity.
"""

from ledgerly.domain.services.access_gate import (
    READ_ONLY_NOTICE,
    ControlGate,
    GateState,
    PageGate,
)
from ledgerly.domain.services.dashboard_service import (
    ActivityItem,
    DashboardService,
    DashboardStats,
)
from ledgerly.domain.services.invoice_calculator import (
    billable_items,
    calculate_totals,
    to_money,
)
from ledgerly.domain.services.invoice_service import InvoiceService, generate_invoice_number
from ledgerly.domain.services.permission_cache import PermissionSnapshotCache
from ledgerly.domain.services.permission_editor import (
    NavigationChoice,
    PendingNavigation,
    PermissionEditor,
)
from ledgerly.domain.services.permission_resolver import resolve_access
from ledgerly.domain.services.permission_service import FeatureAccess, PermissionService
from ledgerly.domain.services.role_directory import RoleDirectory, sort_roles
from ledgerly.domain.services.role_service import (
    BatchUpdateResult,
    RoleDetail,
    RoleService,
    default_level,
)
from ledgerly.domain.services.user_service import UserService

__all__ = [
    "READ_ONLY_NOTICE",
    "ActivityItem",
    "BatchUpdateResult",
    "ControlGate",
    "DashboardService",
    "DashboardStats",
    "FeatureAccess",
    "GateState",
    "InvoiceService",
    "NavigationChoice",
    "PageGate",
    "PendingNavigation",
    "PermissionEditor",
    "PermissionService",
    "PermissionSnapshotCache",
    "RoleDetail",
    "RoleDirectory",
    "RoleService",
    "UserService",
    "billable_items",
    "calculate_totals",
    "default_level",
    "generate_invoice_number",
    "resolve_access",
    "sort_roles",
    "to_money",
]
