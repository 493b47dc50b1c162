"""Request schemas for Invoice API

Pydantic models for validating incoming HTTP requests. Totals sent by the
client are checked against the line items; omitted totals are derived.
"""

import re
from datetime import datetime, timezone
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator, model_validator
from src.domain.invoice import PaymentStatus
from src.domain.totals import (
    calculate_line_item_total,
    calculate_invoice_subtotal,
    calculate_invoice_total,
)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

# Amounts are compared after rounding to cents
AMOUNT_TOLERANCE = 0.01

MAX_AMOUNT = 999999.99
MAX_QUANTITY = 999999


def amounts_match(expected: float, actual: float) -> bool:
    return abs(round(expected, 2) - round(actual, 2)) <= AMOUNT_TOLERANCE + 1e-9


def _naive_utc(value: datetime) -> datetime:
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _not_blank(value: str, field_name: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError(f"{field_name} must not be blank")
    return value


def _clean_email(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    if not EMAIL_PATTERN.match(value):
        raise ValueError("Invalid email address")
    return value


class LineItemRequestSchema(BaseModel):
    """Line item as sent by the client"""

    id: Optional[str] = Field(default=None, max_length=36)

    description: str = Field(..., min_length=1, max_length=500)

    quantity: float = Field(..., gt=0, le=MAX_QUANTITY, allow_inf_nan=False)

    unit_price: float = Field(..., ge=0, le=MAX_AMOUNT, allow_inf_nan=False)

    total: Optional[float] = Field(
        default=None,
        allow_inf_nan=False,
        description="quantity * unit_price; derived when omitted"
    )

    @field_validator("description")
    @classmethod
    def validate_description(cls, v):
        return _not_blank(v, "Description")

    @model_validator(mode="after")
    def validate_total(self):
        expected = calculate_line_item_total(self.quantity, self.unit_price)
        if self.total is None:
            self.total = expected
        elif not amounts_match(expected, self.total):
            raise ValueError("Line item total must equal quantity times unit price")
        return self


class CreateInvoiceRequestSchema(BaseModel):
    """
    Request schema for creating an invoice

    Used for POST /invoices endpoint.
    """

    invoice_number: str = Field(..., min_length=1, max_length=50)

    issue_date: datetime = Field(
        ...,
        description="Issue date; timezone-aware values are converted to UTC"
    )

    customer_name: str = Field(..., min_length=1, max_length=200)

    customer_email: Optional[str] = Field(default=None, max_length=254)

    customer_address: Optional[str] = Field(default=None, max_length=500)

    line_items: List[LineItemRequestSchema] = Field(..., min_length=1, max_length=100)

    subtotal: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)

    tax: float = Field(default=0.0, ge=0, le=MAX_AMOUNT, allow_inf_nan=False)

    total: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)

    payment_status: PaymentStatus = Field(default=PaymentStatus.UNPAID)

    @field_validator("invoice_number")
    @classmethod
    def validate_invoice_number(cls, v):
        return _not_blank(v, "Invoice number")

    @field_validator("customer_name")
    @classmethod
    def validate_customer_name(cls, v):
        return _not_blank(v, "Customer name")

    @field_validator("customer_email")
    @classmethod
    def validate_customer_email(cls, v):
        return _clean_email(v)

    @field_validator("issue_date")
    @classmethod
    def validate_issue_date(cls, v):
        return _naive_utc(v)

    @model_validator(mode="after")
    def validate_totals(self):
        subtotal = calculate_invoice_subtotal(self.line_items)
        if self.subtotal is None:
            self.subtotal = subtotal
        elif not amounts_match(subtotal, self.subtotal):
            raise ValueError("Subtotal must equal the sum of line item totals")

        total = calculate_invoice_total(self.subtotal, self.tax)
        if self.total is None:
            self.total = total
        elif not amounts_match(total, self.total):
            raise ValueError("Total must equal subtotal plus tax")
        return self

    class Config:
        json_schema_extra = {
            "example": {
                "invoice_number": "INV-001",
                "issue_date": "2024-01-15",
                "customer_name": "John Doe",
                "customer_email": "john@example.com",
                "customer_address": "123 Main St",
                "line_items": [
                    {"description": "Web Development", "quantity": 1, "unit_price": 1000}
                ],
                "tax": 100,
                "payment_status": "Unpaid"
            }
        }


class UpdateInvoiceRequestSchema(BaseModel):
    """
    Request schema for updating an invoice

    Used for PATCH /invoices/{invoice_id}. Every field is optional; only the
    fields present in the body are changed. Subtotal and total are always
    recomputed from the stored line items and tax.
    """

    invoice_number: Optional[str] = Field(default=None, min_length=1, max_length=50)
    issue_date: Optional[datetime] = None
    customer_name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    customer_email: Optional[str] = Field(default=None, max_length=254)
    customer_address: Optional[str] = Field(default=None, max_length=500)
    line_items: Optional[List[LineItemRequestSchema]] = Field(
        default=None, min_length=1, max_length=100
    )
    tax: Optional[float] = Field(default=None, ge=0, le=MAX_AMOUNT, allow_inf_nan=False)
    payment_status: Optional[PaymentStatus] = None

    @field_validator("invoice_number")
    @classmethod
    def validate_invoice_number(cls, v):
        return None if v is None else _not_blank(v, "Invoice number")

    @field_validator("customer_name")
    @classmethod
    def validate_customer_name(cls, v):
        return None if v is None else _not_blank(v, "Customer name")

    @field_validator("customer_email")
    @classmethod
    def validate_customer_email(cls, v):
        return _clean_email(v)

    @field_validator("issue_date")
    @classmethod
    def validate_issue_date(cls, v):
        return None if v is None else _naive_utc(v)


class BulkDeleteRequestSchema(BaseModel):
    """Request schema for POST /invoices/bulk-delete"""

    invoice_ids: List[str] = Field(..., min_length=1)


class BulkStatusRequestSchema(BaseModel):
    """Request schema for POST /invoices/bulk-status"""

    invoice_ids: List[str] = Field(..., min_length=1)
    payment_status: PaymentStatus
