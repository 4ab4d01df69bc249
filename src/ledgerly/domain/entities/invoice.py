"""Invoice value objects and accounting enumerations."""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum


class InvoiceStatus(str, Enum):
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"


class CustomerStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    PROSPECTIVE = "prospective"
    TENTATIVE = "tentative"


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


@dataclass(frozen=True)
class LineItem:
    """A single invoice line as entered by the user.

    Attributes:
        description: Free-text description; blank lines are not persisted.
        quantity: Quantity billed.
        rate: Unit price.
    """

    description: str
    quantity: Decimal
    rate: Decimal

    @property
    def is_blank(self) -> bool:
        return not (self.description or "").strip()


@dataclass(frozen=True)
class PricedLineItem:
    """A line item with its computed amount."""

    description: str
    quantity: Decimal
    rate: Decimal
    amount: Decimal


@dataclass(frozen=True)
class InvoiceTotals:
    """Totals derived from an invoice's line items.

    Attributes:
        items: Priced line items, in input order.
        subtotal: Sum of item amounts.
        tax: subtotal * tax_rate.
        total: subtotal + tax.
        tax_rate: Rate used to compute tax.
    """

    subtotal: Decimal
    tax: Decimal
    total: Decimal
    tax_rate: Decimal
    items: tuple[PricedLineItem, ...] = field(default_factory=tuple)
