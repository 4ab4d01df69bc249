"""Unit tests for invoice totals."""

from decimal import Decimal

from ledgerly.domain.entities.invoice import LineItem
from ledgerly.domain.services import billable_items, calculate_totals, to_money


def _line(description, quantity, rate):
    return LineItem(description, Decimal(str(quantity)), Decimal(str(rate)))


class TestCalculateTotals:
    """Test suite for calculate_totals."""

    def test_standard_invoice(self):
        """2 x 50 + 1 x 100 at 14% gives 200 / 28 / 228."""
        totals = calculate_totals(
            [_line("Consulting", 2, 50), _line("Setup", 1, 100)],
            Decimal("0.14"),
        )

        assert [item.amount for item in totals.items] == [Decimal("100.00"), Decimal("100.00")]
        assert totals.subtotal == Decimal("200.00")
        assert totals.tax == Decimal("28.00")
        assert totals.total == Decimal("228.00")

    def test_empty_invoice(self):
        totals = calculate_totals([], 0.14)

        assert totals.subtotal == Decimal("0.00")
        assert totals.tax == Decimal("0.00")
        assert totals.total == Decimal("0.00")
        assert totals.items == ()

    def test_non_positive_quantity_or_rate_is_zero(self):
        totals = calculate_totals(
            [_line("Refund", -1, 40), _line("Free", 3, 0), _line("Paid", 1, 10)],
            "0.14",
        )

        assert [item.amount for item in totals.items] == [
            Decimal("0.00"),
            Decimal("0.00"),
            Decimal("10.00"),
        ]
        assert totals.total == Decimal("11.40")

    def test_rounding_half_up(self):
        totals = calculate_totals([_line("Widget", 3, "0.335")], Decimal("0.1"))

        assert totals.subtotal == Decimal("1.01")
        assert totals.tax == Decimal("0.10")
        assert totals.total == Decimal("1.11")

    def test_zero_tax_rate(self):
        totals = calculate_totals([_line("Hosting", 12, "9.99")], 0)
        assert totals.total == totals.subtotal == Decimal("119.88")


class TestBillableItems:
    def test_blank_descriptions_dropped(self):
        items = [_line("Design", 1, 10), _line("   ", 5, 5), _line("", 1, 1)]

        assert [item.description for item in billable_items(items)] == ["Design"]


def test_to_money():
    assert to_money("2.345") == Decimal("2.35")
    assert to_money(7) == Decimal("7.00")
