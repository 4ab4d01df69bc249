"""Invoice service.

Invoices are priced server-side: whatever totals a client computed for
display, the stored subtotal, tax and total always come from the
calculator at the configured tax rate. Lines with a blank description
are dropped before pricing.
"""

import time
from collections.abc import Iterable, Mapping
from decimal import Decimal
from typing import Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ledgerly.core.exceptions import (
    ConflictError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from ledgerly.core.logging import get_logger
from ledgerly.domain.entities.invoice import InvoiceStatus, InvoiceTotals, LineItem
from ledgerly.domain.services.invoice_calculator import billable_items, calculate_totals
from ledgerly.infrastructure.persistence.models import InvoiceItemModel, InvoiceModel
from ledgerly.infrastructure.persistence.repositories import (
    CustomerRepository,
    InvoiceRepository,
)

logger = get_logger(__name__)

# Invoice columns taken directly from the request
HEADER_FIELDS = ("customer_id", "date", "due_date", "status", "notes")


def generate_invoice_number() -> str:
    """Default invoice number from the current time in milliseconds."""
    return f"INV-{int(time.time() * 1000)}"


def _line_items(items: Iterable[Mapping[str, Any]]) -> list[tuple[LineItem, int | None]]:
    lines = []
    for item in items:
        line = LineItem(
            description=(item.get("description") or "").strip(),
            quantity=Decimal(str(item.get("quantity") or 0)),
            rate=Decimal(str(item.get("rate") or 0)),
        )
        lines.append((line, item.get("product_id")))
    return lines


class InvoiceService:
    """Service for invoice creation, editing and status changes."""

    def __init__(self, session: AsyncSession, tax_rate: Decimal | float) -> None:
        """Initialize the invoice service.

        Args:
            session: SQLAlchemy async session.
            tax_rate: Fractional tax rate applied to every invoice.
        """
        self.session = session
        self.tax_rate = Decimal(str(tax_rate))
        self.invoice_repo = InvoiceRepository(session)
        self.customer_repo = CustomerRepository(session)

    def price(self, items: Iterable[Mapping[str, Any]]) -> tuple[InvoiceTotals, list[InvoiceItemModel]]:
        """Price billable lines and build their item rows."""
        parsed = _line_items(items)
        totals = calculate_totals(billable_items(line for line, _ in parsed), self.tax_rate)
        product_ids = [product_id for line, product_id in parsed if not line.is_blank]
        rows = [
            InvoiceItemModel(
                position=position,
                product_id=product_id,
                description=priced.description,
                quantity=priced.quantity,
                rate=priced.rate,
                amount=priced.amount,
            )
            for position, (priced, product_id) in enumerate(zip(totals.items, product_ids))
        ]
        return totals, rows

    async def _check_customer(self, customer_id: int | None) -> None:
        if customer_id is None:
            return
        if await self.customer_repo.get_by_id(customer_id) is None:
            raise ValidationError("Customer not found")

    async def list_invoices(self, status: str | None = None) -> list[InvoiceModel]:
        try:
            return await self.invoice_repo.list_all(status=status)
        except SQLAlchemyError as e:
            raise PersistenceError("Failed to fetch invoices") from e

    async def get_invoice(self, invoice_id: int) -> InvoiceModel:
        """Get an invoice with its items.

        Raises:
            NotFoundError: If no such invoice exists.
        """
        try:
            invoice = await self.invoice_repo.get_by_id(invoice_id)
        except SQLAlchemyError as e:
            raise PersistenceError("Failed to fetch invoice") from e
        if invoice is None:
            raise NotFoundError("Invoice not found")
        return invoice

    async def create_invoice(self, data: Mapping[str, Any]) -> InvoiceModel:
        """Create an invoice with server-computed totals.

        Args:
            data: Header fields, optional 'invoice_number', and 'items'.

        Raises:
            ValidationError: If the customer does not exist.
            ConflictError: If the invoice number is taken.
        """
        totals, rows = self.price(data.get("items") or [])
        invoice_number = (data.get("invoice_number") or "").strip() or generate_invoice_number()

        try:
            await self._check_customer(data.get("customer_id"))
            if await self.invoice_repo.get_by_number(invoice_number) is not None:
                raise ConflictError(f"Invoice number '{invoice_number}' already exists")

            invoice = InvoiceModel(
                invoice_number=invoice_number,
                customer_id=data.get("customer_id"),
                date=data["date"],
                due_date=data["due_date"],
                status=_status_value(data.get("status") or InvoiceStatus.DRAFT),
                notes=data.get("notes"),
                subtotal=totals.subtotal,
                tax=totals.tax,
                total=totals.total,
                items=rows,
            )
            invoice = await self.invoice_repo.create(invoice)
        except IntegrityError as e:
            raise ConflictError(f"Invoice number '{invoice_number}' already exists") from e
        except SQLAlchemyError as e:
            logger.error("Failed to create invoice", error=str(e))
            raise PersistenceError("Failed to create invoice") from e

        logger.info(
            "Invoice created",
            invoice_id=invoice.id,
            invoice_number=invoice.invoice_number,
            items=len(rows),
            total=str(totals.total),
        )
        return invoice

    async def update_invoice(self, invoice_id: int, data: Mapping[str, Any]) -> InvoiceModel:
        """Update header fields and, when 'items' is given, replace the lines.

        Totals are recomputed whenever the lines are replaced.
        """
        invoice = await self.get_invoice(invoice_id)

        try:
            if data.get("customer_id") is not None:
                await self._check_customer(data["customer_id"])

            new_number = (data.get("invoice_number") or "").strip()
            if new_number and new_number != invoice.invoice_number:
                if await self.invoice_repo.get_by_number(new_number) is not None:
                    raise ConflictError(f"Invoice number '{new_number}' already exists")
                invoice.invoice_number = new_number

            for key in HEADER_FIELDS:
                value = data.get(key)
                if value is None:
                    continue
                setattr(invoice, key, _status_value(value) if key == "status" else value)

            if data.get("items") is not None:
                totals, rows = self.price(data["items"])
                invoice.items = rows
                invoice.subtotal = totals.subtotal
                invoice.tax = totals.tax
                invoice.total = totals.total

            invoice = await self.invoice_repo.save(invoice)
        except IntegrityError as e:
            raise ConflictError("Invoice number already exists") from e
        except SQLAlchemyError as e:
            logger.error("Failed to update invoice", invoice_id=invoice_id, error=str(e))
            raise PersistenceError("Failed to update invoice") from e

        logger.info("Invoice updated", invoice_id=invoice.id)
        return invoice

    async def set_status(self, invoice_id: int, status: InvoiceStatus | str) -> InvoiceModel:
        """Change an invoice's status (e.g., mark as paid)."""
        invoice = await self.get_invoice(invoice_id)
        previous = invoice.status
        invoice.status = _status_value(status)
        try:
            invoice = await self.invoice_repo.save(invoice)
        except SQLAlchemyError as e:
            raise PersistenceError("Failed to update invoice status") from e

        logger.info(
            "Invoice status changed",
            invoice_id=invoice.id,
            previous_status=previous,
            status=invoice.status,
        )
        return invoice

    async def delete_invoice(self, invoice_id: int) -> None:
        invoice = await self.get_invoice(invoice_id)
        try:
            await self.invoice_repo.delete(invoice)
        except SQLAlchemyError as e:
            raise PersistenceError("Failed to delete invoice") from e
        logger.info("Invoice deleted", invoice_id=invoice_id)


def _status_value(status: InvoiceStatus | str) -> str:
    try:
        return InvoiceStatus(status).value
    except ValueError:
        raise ValidationError(f"Invalid invoice status: {status}") from None
