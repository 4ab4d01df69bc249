"""SQLAlchemy models for Ledgerly tables.

All models inherit from the Base class defined in database.py and are
automatically created on application startup in development mode.
"""

from ledgerly.infrastructure.persistence.models.customer import CustomerModel
from ledgerly.infrastructure.persistence.models.expense import ExpenseModel
from ledgerly.infrastructure.persistence.models.invoice import InvoiceItemModel, InvoiceModel
from ledgerly.infrastructure.persistence.models.product import ProductModel
from ledgerly.infrastructure.persistence.models.role_permission import RolePermissionModel
from ledgerly.infrastructure.persistence.models.transaction import TransactionModel
from ledgerly.infrastructure.persistence.models.user import UserModel
from ledgerly.infrastructure.persistence.models.vendor import VendorModel

__all__ = [
    "CustomerModel",
    "ExpenseModel",
    "InvoiceItemModel",
    "InvoiceModel",
    "ProductModel",
    "RolePermissionModel",
    "TransactionModel",
    "UserModel",
    "VendorModel",
]
