"""Persistence repositories for database operations."""

from ledgerly.infrastructure.persistence.repositories.entity_repository import (
    CustomerRepository,
    EntityRepository,
    ExpenseRepository,
    ProductRepository,
    TransactionRepository,
    VendorRepository,
)
from ledgerly.infrastructure.persistence.repositories.invoice_repository import (
    InvoiceRepository,
)
from ledgerly.infrastructure.persistence.repositories.role_permission_repository import (
    RolePermissionRepository,
)
from ledgerly.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)

__all__ = [
    "CustomerRepository",
    "EntityRepository",
    "ExpenseRepository",
    "InvoiceRepository",
    "ProductRepository",
    "RolePermissionRepository",
    "TransactionRepository",
    "UserRepository",
    "VendorRepository",
]
