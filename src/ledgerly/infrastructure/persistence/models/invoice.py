"""SQLAlchemy models for the invoices and invoice_items tables.

Invoice totals are stored alongside the items they were computed from.
Items are owned by their invoice and deleted with it.
"""

import datetime as dt
from decimal import Decimal

from sqlalchemy import (
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ledgerly.infrastructure.persistence.database import Base


class InvoiceModel(Base):
    """SQLAlchemy model for the invoices table.

    Attributes:
        id: Auto-incrementing primary key.
        invoice_number: Human-facing number (e.g., 'INV-1718000000000').
        customer_id: Billed customer.
        date: Issue date.
        due_date: Payment due date.
        subtotal: Sum of item amounts.
        tax: Tax on the subtotal at the configured rate.
        total: subtotal + tax.
        status: One of 'draft', 'sent', 'paid', 'overdue'.
        notes: Optional free text.
    """

    __tablename__ = "invoices"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    invoice_number: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        unique=True,
        index=True,
    )
    customer_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("customers.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    due_date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    subtotal: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0"))
    tax: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0"))
    total: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0"))
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="draft", index=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[dt.datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    # Relationships
    customer: Mapped["CustomerModel"] = relationship(  # noqa: F821
        "CustomerModel",
        lazy="selectin",
    )
    items: Mapped[list["InvoiceItemModel"]] = relationship(
        "InvoiceItemModel",
        back_populates="invoice",
        cascade="all, delete-orphan",
        order_by="InvoiceItemModel.position",
        lazy="selectin",
    )

    @property
    def customer_name(self) -> str | None:
        """Name of the billed customer, if loaded."""
        if self.customer is not None:
            return self.customer.name
        return None

    def __repr__(self) -> str:
        return f"<Invoice(id={self.id}, number={self.invoice_number}, status={self.status})>"


class InvoiceItemModel(Base):
    """One line of an invoice, stored in entry order."""

    __tablename__ = "invoice_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    invoice_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("invoices.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    product_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("products.id", ondelete="SET NULL"),
        nullable=True,
    )
    description: Mapped[str] = mapped_column(Text, nullable=False)
    quantity: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    rate: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)

    invoice: Mapped["InvoiceModel"] = relationship(
        "InvoiceModel",
        back_populates="items",
    )

    def __repr__(self) -> str:
        return f"<InvoiceItem(invoice_id={self.invoice_id}, description={self.description})>"
