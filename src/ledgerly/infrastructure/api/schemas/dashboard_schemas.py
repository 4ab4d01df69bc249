"""Dashboard API schemas."""

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, Field


class DashboardStatsResponse(BaseModel):
    """Headline dashboard figures."""

    revenue: Decimal = Field(..., description="Sum of paid invoice totals")
    expenses: Decimal = Field(..., description="Sum of all expenses")
    profit: Decimal = Field(..., description="revenue - expenses")
    customers: int
    pending_invoices: int = Field(..., description="Invoices with status 'sent'")

    model_config = {"from_attributes": True}


class ActivityItemResponse(BaseModel):
    type: str
    reference: str
    amount: Decimal
    date: dt.date
    entity: str

    model_config = {"from_attributes": True}
