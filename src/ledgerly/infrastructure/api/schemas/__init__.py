"""API Schemas for request/response validation."""

from ledgerly.infrastructure.api.schemas.auth_schemas import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    UserResponse,
)
from ledgerly.infrastructure.api.schemas.dashboard_schemas import (
    ActivityItemResponse,
    DashboardStatsResponse,
)
from ledgerly.infrastructure.api.schemas.entity_schemas import (
    CustomerCreate,
    CustomerResponse,
    CustomerUpdate,
    ExpenseCreate,
    ExpenseResponse,
    ExpenseUpdate,
    ProductCreate,
    ProductResponse,
    ProductUpdate,
    TransactionCreate,
    TransactionResponse,
    TransactionUpdate,
    VendorCreate,
    VendorResponse,
    VendorUpdate,
)
from ledgerly.infrastructure.api.schemas.invoice_schemas import (
    InvoiceCreateRequest,
    InvoiceItemInput,
    InvoiceItemResponse,
    InvoiceResponse,
    InvoiceStatusRequest,
    InvoiceTotalsPreviewResponse,
    InvoiceUpdateRequest,
    PricedItemResponse,
)
from ledgerly.infrastructure.api.schemas.permission_schemas import (
    FeaturePermission,
    FeatureResponse,
    PermissionCheckResponse,
)
from ledgerly.infrastructure.api.schemas.role_schemas import (
    BulkPermissionUpdateRequest,
    BulkPermissionUpdateResponse,
    CreateRoleRequest,
    RoleDetailResponse,
    RoleListItem,
    UpdateRoleRequest,
)
from ledgerly.infrastructure.api.schemas.users_schemas import (
    UserCreateRequest,
    UserUpdateRequest,
)

__all__ = [
    "ActivityItemResponse",
    "AuthResponse",
    "BulkPermissionUpdateRequest",
    "BulkPermissionUpdateResponse",
    "CreateRoleRequest",
    "CustomerCreate",
    "CustomerResponse",
    "CustomerUpdate",
    "DashboardStatsResponse",
    "ExpenseCreate",
    "ExpenseResponse",
    "ExpenseUpdate",
    "FeaturePermission",
    "FeatureResponse",
    "InvoiceCreateRequest",
    "InvoiceItemInput",
    "InvoiceItemResponse",
    "InvoiceResponse",
    "InvoiceStatusRequest",
    "InvoiceTotalsPreviewResponse",
    "InvoiceUpdateRequest",
    "LoginRequest",
    "MessageResponse",
    "PermissionCheckResponse",
    "PricedItemResponse",
    "ProductCreate",
    "ProductResponse",
    "ProductUpdate",
    "RegisterRequest",
    "RoleDetailResponse",
    "RoleListItem",
    "TransactionCreate",
    "TransactionResponse",
    "TransactionUpdate",
    "UpdateRoleRequest",
    "UserCreateRequest",
    "UserResponse",
    "UserUpdateRequest",
    "VendorCreate",
    "VendorResponse",
    "VendorUpdate",
]
