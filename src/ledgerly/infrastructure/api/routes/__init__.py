"""API Routes for Ledgerly."""

from ledgerly.infrastructure.api.routes.admin_roles_router import router as admin_roles_router
from ledgerly.infrastructure.api.routes.admin_router import router as admin_router
from ledgerly.infrastructure.api.routes.admin_users_router import router as admin_users_router
from ledgerly.infrastructure.api.routes.auth_router import router as auth_router
from ledgerly.infrastructure.api.routes.dashboard_router import router as dashboard_router
from ledgerly.infrastructure.api.routes.entities_router import (
    customers_router,
    expenses_router,
    products_router,
    transactions_router,
    vendors_router,
)
from ledgerly.infrastructure.api.routes.invoices_router import router as invoices_router
from ledgerly.infrastructure.api.routes.permissions_router import router as permissions_router

__all__ = [
    "admin_roles_router",
    "admin_router",
    "admin_users_router",
    "auth_router",
    "customers_router",
    "dashboard_router",
    "expenses_router",
    "invoices_router",
    "permissions_router",
    "products_router",
    "transactions_router",
    "vendors_router",
]
