"""Invoice repository for database operations.

Invoices are always loaded together with their items and customer.
"""

from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ledgerly.infrastructure.persistence.models import InvoiceModel


class InvoiceRepository:
    """Repository for invoice database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, invoice: InvoiceModel) -> InvoiceModel:
        """Create an invoice together with its items.

        Args:
            invoice: Invoice model with items attached.

        Returns:
            The invoice, reloaded with its relationships.
        """
        self.session.add(invoice)
        await self.session.flush()
        return await self.get_by_id(invoice.id)

    async def get_by_id(self, invoice_id: int) -> InvoiceModel | None:
        """Get an invoice by ID with items and customer loaded."""
        result = await self.session.execute(
            select(InvoiceModel)
            .where(InvoiceModel.id == invoice_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_by_number(self, invoice_number: str) -> InvoiceModel | None:
        result = await self.session.execute(
            select(InvoiceModel).where(InvoiceModel.invoice_number == invoice_number)
        )
        return result.scalar_one_or_none()

    async def list_all(self, status: str | None = None, limit: int | None = None) -> list[InvoiceModel]:
        """List invoices, newest issue date first.

        Args:
            status: Only return invoices with this status.
            limit: Maximum number of invoices to return (all when None).

        Returns:
            List of invoice models.
        """
        query = (
            select(InvoiceModel)
            .order_by(InvoiceModel.date.desc(), InvoiceModel.id.desc())
            .execution_options(populate_existing=True)
        )
        if status is not None:
            query = query.where(InvoiceModel.status == status)
        if limit is not None:
            query = query.limit(limit)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def save(self, invoice: InvoiceModel) -> InvoiceModel:
        """Flush pending changes to an invoice and reload it."""
        await self.session.flush()
        return await self.get_by_id(invoice.id)

    async def delete(self, invoice: InvoiceModel) -> None:
        await self.session.delete(invoice)
        await self.session.flush()

    async def count_by_status(self, status: str) -> int:
        result = await self.session.execute(
            select(func.count(InvoiceModel.id)).where(InvoiceModel.status == status)
        )
        return result.scalar_one()

    async def sum_total_by_status(self, status: str) -> Decimal:
        """Sum invoice totals for one status."""
        result = await self.session.execute(
            select(func.coalesce(func.sum(InvoiceModel.total), 0)).where(
                InvoiceModel.status == status
            )
        )
        return Decimal(str(result.scalar_one()))
