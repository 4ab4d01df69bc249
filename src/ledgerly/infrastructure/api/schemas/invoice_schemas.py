"""Invoice API schemas for request/response validation.

Clients send line items without amounts; the server prices every line
and computes subtotal, tax and total itself.
"""

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, Field

from ledgerly.domain.entities.invoice import InvoiceStatus


class InvoiceItemInput(BaseModel):
    """One line as entered; blank descriptions are dropped on save."""

    description: str = ""
    quantity: Decimal = Decimal("0")
    rate: Decimal = Decimal("0")
    product_id: int | None = None


class InvoiceCreateRequest(BaseModel):
    customer_id: int | None = None
    invoice_number: str | None = Field(
        None,
        max_length=50,
        description="Defaults to INV-<epoch milliseconds>",
    )
    date: dt.date
    due_date: dt.date
    status: InvoiceStatus = InvoiceStatus.DRAFT
    notes: str | None = None
    items: list[InvoiceItemInput] = Field(default_factory=list)


class InvoiceUpdateRequest(BaseModel):
    """Partial invoice update. Sending `items` replaces every line."""

    customer_id: int | None = None
    invoice_number: str | None = Field(None, max_length=50)
    date: dt.date | None = None
    due_date: dt.date | None = None
    status: InvoiceStatus | None = None
    notes: str | None = None
    items: list[InvoiceItemInput] | None = None


class InvoiceStatusRequest(BaseModel):
    status: InvoiceStatus


class InvoiceItemResponse(BaseModel):
    id: int
    product_id: int | None = None
    description: str
    quantity: Decimal
    rate: Decimal
    amount: Decimal

    model_config = {"from_attributes": True}


class InvoiceResponse(BaseModel):
    id: int
    invoice_number: str
    customer_id: int | None = None
    customer_name: str | None = None
    date: dt.date
    due_date: dt.date
    status: InvoiceStatus
    notes: str | None = None
    subtotal: Decimal
    tax: Decimal
    total: Decimal
    items: list[InvoiceItemResponse] = Field(default_factory=list)
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None

    model_config = {"from_attributes": True}


class PricedItemResponse(BaseModel):
    description: str
    quantity: Decimal
    rate: Decimal
    amount: Decimal

    model_config = {"from_attributes": True}


class InvoiceTotalsPreviewResponse(BaseModel):
    """Totals for a set of lines without saving anything."""

    subtotal: Decimal
    tax: Decimal
    total: Decimal
    tax_rate: Decimal
    items: list[PricedItemResponse]

    model_config = {"from_attributes": True}
