"""Dashboard service for aggregating statistics.

Provides the headline figures and the recent activity feed shown on the
main dashboard page.
"""

import datetime as dt
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ledgerly.core.exceptions import PersistenceError
from ledgerly.core.logging import get_logger
from ledgerly.domain.entities.invoice import InvoiceStatus
from ledgerly.domain.services.invoice_calculator import to_money
from ledgerly.infrastructure.persistence.repositories import (
    CustomerRepository,
    ExpenseRepository,
    InvoiceRepository,
)

logger = get_logger(__name__)

# Rows taken from each source before merging the activity feed
ACTIVITY_SOURCE_LIMIT = 5


@dataclass(frozen=True)
class DashboardStats:
    """Headline dashboard figures.

    Attributes:
        revenue: Sum of totals of paid invoices.
        expenses: Sum of all expense amounts.
        profit: revenue - expenses.
        customers: Number of customers.
        pending_invoices: Number of invoices with status 'sent'.
    """

    revenue: Decimal
    expenses: Decimal
    profit: Decimal
    customers: int
    pending_invoices: int


@dataclass(frozen=True)
class ActivityItem:
    """One entry in the recent activity feed."""

    type: str
    reference: str
    amount: Decimal
    date: dt.date
    entity: str


class DashboardService:
    """Service for aggregating dashboard statistics."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the dashboard service.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session
        self.invoice_repo = InvoiceRepository(session)
        self.expense_repo = ExpenseRepository(session)
        self.customer_repo = CustomerRepository(session)

    async def get_stats(self) -> DashboardStats:
        """Get the headline dashboard figures."""
        try:
            revenue = await self.invoice_repo.sum_total_by_status(InvoiceStatus.PAID.value)
            expenses = await self.expense_repo.sum_of("amount")
            customers = await self.customer_repo.count_all()
            pending = await self.invoice_repo.count_by_status(InvoiceStatus.SENT.value)
        except SQLAlchemyError as e:
            logger.error("Failed to compute dashboard stats", error=str(e))
            raise PersistenceError("Failed to fetch dashboard stats") from e

        return DashboardStats(
            revenue=to_money(revenue),
            expenses=to_money(expenses),
            profit=to_money(revenue - expenses),
            customers=customers,
            pending_invoices=pending,
        )

    async def get_recent_activity(self, limit: int = 10) -> list[ActivityItem]:
        """Latest invoices and expenses merged into one feed, newest first.

        Args:
            limit: Maximum number of items returned.
        """
        try:
            invoices = await self.invoice_repo.list_all(limit=ACTIVITY_SOURCE_LIMIT)
            expenses = await self.expense_repo.list_all(limit=ACTIVITY_SOURCE_LIMIT)
        except SQLAlchemyError as e:
            logger.error("Failed to load recent activity", error=str(e))
            raise PersistenceError("Failed to fetch recent activity") from e

        activity = [
            ActivityItem(
                type="invoice",
                reference=invoice.invoice_number,
                amount=to_money(invoice.total),
                date=invoice.date,
                entity=invoice.customer_name or "Unknown customer",
            )
            for invoice in invoices
        ]
        activity.extend(
            ActivityItem(
                type="expense",
                reference=expense.description,
                amount=to_money(expense.amount),
                date=expense.date,
                entity=expense.vendor_name or "No vendor",
            )
            for expense in expenses
        )

        activity.sort(key=lambda item: item.date, reverse=True)
        return activity[:limit]
