"""Dashboard features.

The feature set is closed: permissions are only ever granted against these
nine entries, each with a fixed route path.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Feature:
    """A named dashboard capability with its route path.

    Attributes:
        name: Display name (e.g., 'Invoices').
        path: Routable dashboard path (e.g., '/dashboard/invoices').
    """

    name: str
    path: str


DASHBOARD = Feature("Dashboard", "/dashboard")
CUSTOMERS = Feature("Customers", "/dashboard/customers")
PRODUCTS = Feature("Products", "/dashboard/products")
INVOICES = Feature("Invoices", "/dashboard/invoices")
EXPENSES = Feature("Expenses", "/dashboard/expenses")
VENDORS = Feature("Vendors", "/dashboard/vendors")
TRANSACTIONS = Feature("Transactions", "/dashboard/transactions")
REPORTS = Feature("Reports", "/dashboard/reports")
ADMIN_PANEL = Feature("Admin Panel", "/dashboard/admin")

FEATURES: tuple[Feature, ...] = (
    DASHBOARD,
    CUSTOMERS,
    PRODUCTS,
    INVOICES,
    EXPENSES,
    VENDORS,
    TRANSACTIONS,
    REPORTS,
    ADMIN_PANEL,
)

# Where a denied page gate sends the user
DEFAULT_SAFE_PATH = DASHBOARD.path

_BY_NAME = {feature.name: feature for feature in FEATURES}
_BY_PATH = {feature.path: feature for feature in FEATURES}


def feature_by_name(name: str) -> Feature | None:
    """Look up a feature by its display name."""
    return _BY_NAME.get(name)


def feature_by_path(path: str) -> Feature | None:
    """Look up a feature by its route path."""
    return _BY_PATH.get(path)
