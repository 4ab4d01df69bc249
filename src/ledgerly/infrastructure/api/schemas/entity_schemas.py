"""Schemas for the simple CRUD entities.

Each entity has a create schema (required fields enforced), an update
schema (every field optional) and a response schema read from the model.
"""

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, Field

from ledgerly.domain.entities.invoice import CustomerStatus, TransactionType


class CustomerCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: str = ""
    phone: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""
    status: CustomerStatus = CustomerStatus.ACTIVE


class CustomerUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None
    status: CustomerStatus | None = None


class CustomerResponse(BaseModel):
    id: int
    name: str
    email: str
    phone: str
    address: str
    city: str
    state: str
    zip: str
    status: CustomerStatus
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None

    model_config = {"from_attributes": True}


class VendorCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: str = ""
    phone: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""


class VendorUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None


class VendorResponse(BaseModel):
    id: int
    name: str
    email: str
    phone: str
    address: str
    city: str
    state: str
    zip: str
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None

    model_config = {"from_attributes": True}


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    price: Decimal = Field(Decimal("0"), ge=0, decimal_places=2)
    category: str = ""
    sku: str = ""
    stock: int = Field(0, ge=0)


class ProductUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    price: Decimal | None = Field(None, ge=0, decimal_places=2)
    category: str | None = None
    sku: str | None = None
    stock: int | None = Field(None, ge=0)


class ProductResponse(BaseModel):
    id: int
    name: str
    description: str
    price: Decimal
    category: str
    sku: str
    stock: int
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None

    model_config = {"from_attributes": True}


class ExpenseCreate(BaseModel):
    date: dt.date
    vendor_name: str = ""
    category: str = ""
    description: str = ""
    amount: Decimal = Field(..., ge=0, decimal_places=2)
    payment_method: str = ""


class ExpenseUpdate(BaseModel):
    date: dt.date | None = None
    vendor_name: str | None = None
    category: str | None = None
    description: str | None = None
    amount: Decimal | None = Field(None, ge=0, decimal_places=2)
    payment_method: str | None = None


class ExpenseResponse(BaseModel):
    id: int
    date: dt.date
    vendor_name: str
    category: str
    description: str
    amount: Decimal
    payment_method: str
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None

    model_config = {"from_attributes": True}


class TransactionCreate(BaseModel):
    date: dt.date
    description: str = ""
    type: TransactionType
    category: str = ""
    amount: Decimal = Field(..., ge=0, decimal_places=2)
    balance: Decimal = Field(Decimal("0"), decimal_places=2)


class TransactionUpdate(BaseModel):
    date: dt.date | None = None
    description: str | None = None
    type: TransactionType | None = None
    category: str | None = None
    amount: Decimal | None = Field(None, ge=0, decimal_places=2)
    balance: Decimal | None = Field(None, decimal_places=2)


class TransactionResponse(BaseModel):
    id: int
    date: dt.date
    description: str
    type: TransactionType
    category: str
    amount: Decimal
    balance: Decimal
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None

    model_config = {"from_attributes": True}
