"""Ledgerly - small-business accounting backend.

Customers, vendors, products, invoices, expenses and transactions behind
a role-based permission layer that gates every dashboard page.
"""

__version__ = "0.1.0"

from ledgerly.infrastructure.api.app import app

__all__ = ["app", "__version__"]
