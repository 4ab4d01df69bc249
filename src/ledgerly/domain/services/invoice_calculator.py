"""Invoice totals calculator.

amount = quantity * rate per line (zero when either is not positive),
subtotal = sum of amounts, tax = subtotal * rate, total = subtotal + tax.
All money values are rounded to cents, half up.
"""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal

from ledgerly.domain.entities.invoice import InvoiceTotals, LineItem, PricedLineItem

CENT = Decimal("0.01")
ZERO = Decimal("0")


def to_money(value: Decimal | float | int | str) -> Decimal:
    """Quantize a value to cents."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def line_amount(item: LineItem) -> Decimal:
    if item.quantity <= 0 or item.rate <= 0:
        return to_money(ZERO)
    return to_money(item.quantity * item.rate)


def billable_items(items: Iterable[LineItem]) -> list[LineItem]:
    """Drop lines with a blank description; they are never persisted."""
    return [item for item in items if not item.is_blank]


def calculate_totals(
    items: Iterable[LineItem],
    tax_rate: Decimal | float | str,
) -> InvoiceTotals:
    """Compute line amounts and invoice totals.

    Args:
        items: Line items in entry order.
        tax_rate: Fractional tax rate (0.14 for 14%).

    Returns:
        InvoiceTotals with priced items in input order.
    """
    rate = tax_rate if isinstance(tax_rate, Decimal) else Decimal(str(tax_rate))

    priced = tuple(
        PricedLineItem(
            description=item.description,
            quantity=item.quantity,
            rate=item.rate,
            amount=line_amount(item),
        )
        for item in items
    )
    subtotal = to_money(sum((p.amount for p in priced), ZERO))
    tax = to_money(subtotal * rate)
    return InvoiceTotals(
        subtotal=subtotal,
        tax=tax,
        total=to_money(subtotal + tax),
        tax_rate=rate,
        items=priced,
    )
