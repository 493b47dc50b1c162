"""Invoice Domain Entity

Billing document with line items, totals and payment status.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional, TYPE_CHECKING
from sqlmodel import Field, Column, Index, Relationship
from sqlalchemy import DateTime, Float, String
from src.domain.base import BaseModel, generate_uuid, utcnow

if TYPE_CHECKING:
    from src.domain.line_item import LineItem
    from src.domain.file_attachment import FileAttachment


class PaymentStatus(str, Enum):
    """Payment status of an invoice"""
    PAID = "Paid"
    UNPAID = "Unpaid"
    PARTIALLY_PAID = "Partially Paid"
    OVERDUE = "Overdue"


class Invoice(BaseModel, table=True):
    """
    Invoice - Billing document for a customer

    Domain Rules:
    - invoice_number is unique by convention (checked by use cases, not the store)
    - subtotal is the sum of line_items.total
    - total = subtotal + tax (tax is an amount, not a rate)
    - id and created_at never change after creation; updated_at bumps on every change
    - attachments are owned by the invoice and deleted with it
    """

    __tablename__ = "invoices"
    __table_args__ = (
        Index('ix_invoices_invoice_number', 'invoice_number'),
        Index('ix_invoices_payment_status', 'payment_status'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        sa_column=Column(String(36), primary_key=True),
        description="Unique invoice identifier (UUID)"
    )

    invoice_number: str = Field(
        sa_column=Column(String(50), nullable=False),
        description="Human facing invoice number (e.g., INV-001)"
    )

    issue_date: datetime = Field(
        sa_column=Column(DateTime, nullable=False),
        description="Invoice issue date"
    )

    customer_name: str = Field(
        sa_column=Column(String(200), nullable=False),
        description="Customer name"
    )

    customer_email: Optional[str] = Field(
        default=None,
        sa_column=Column(String(320), nullable=True),
        description="Customer email address"
    )

    customer_address: Optional[str] = Field(
        default=None,
        sa_column=Column(String(500), nullable=True),
        description="Customer postal address"
    )

    subtotal: float = Field(
        default=0.0,
        sa_column=Column(Float, nullable=False),
        description="Sum of line item totals"
    )

    tax: float = Field(
        default=0.0,
        sa_column=Column(Float, nullable=False),
        description="Tax amount"
    )

    total: float = Field(
        default=0.0,
        sa_column=Column(Float, nullable=False),
        description="Subtotal plus tax"
    )

    payment_status: PaymentStatus = Field(
        default=PaymentStatus.UNPAID,
        description="Payment status (Paid, Unpaid, Partially Paid, Overdue)"
    )

    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime, nullable=False),
        description="Invoice creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime, nullable=False),
        description="Last update timestamp"
    )

    line_items: List["LineItem"] = Relationship(
        back_populates="invoice",
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "order_by": "LineItem.position",
        },
    )

    attachments: List["FileAttachment"] = Relationship(
        back_populates="invoice",
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "order_by": "FileAttachment.uploaded_at",
        },
    )
