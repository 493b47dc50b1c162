"""Data Transfer Objects for Invoice Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field
from src.domain.filter_criteria import FilterCriteria, SortField, SortOrder
from src.domain.invoice import Invoice, PaymentStatus


class LineItemInputDTO(BaseModel):
    """Line item as supplied by a create/update command"""

    id: Optional[str] = Field(
        default=None,
        description="Id of an existing line item of the same invoice; a new id is generated otherwise"
    )

    description: str = Field(
        ...,
        description="Line item description"
    )

    quantity: float = Field(
        ...,
        description="Quantity"
    )

    unit_price: float = Field(
        ...,
        description="Price per unit"
    )

    total: float = Field(
        ...,
        description="Line total (quantity * unit_price)"
    )


class CreateInvoiceCommandDTO(BaseModel):
    """
    Command DTO for creating an invoice

    Used as input to CreateInvoice use case. Totals arrive precomputed and
    already validated.
    """

    invoice_number: str = Field(
        ...,
        description="Invoice number (unique by convention)"
    )

    issue_date: datetime = Field(
        ...,
        description="Invoice issue date"
    )

    customer_name: str = Field(
        ...,
        description="Customer name"
    )

    customer_email: Optional[str] = Field(
        default=None,
        description="Customer email address"
    )

    customer_address: Optional[str] = Field(
        default=None,
        description="Customer postal address"
    )

    line_items: List[LineItemInputDTO] = Field(
        ...,
        description="Ordered line items"
    )

    subtotal: float = Field(
        ...,
        description="Sum of line item totals"
    )

    tax: float = Field(
        default=0.0,
        description="Tax amount"
    )

    total: float = Field(
        ...,
        description="Subtotal plus tax"
    )

    payment_status: PaymentStatus = Field(
        default=PaymentStatus.UNPAID,
        description="Payment status"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "invoice_number": "INV-001",
                "issue_date": "2024-01-15T00:00:00",
                "customer_name": "John Doe",
                "customer_email": "john@example.com",
                "customer_address": "123 Main St",
                "line_items": [
                    {
                        "description": "Web Development",
                        "quantity": 1,
                        "unit_price": 1000,
                        "total": 1000
                    }
                ],
                "subtotal": 1000,
                "tax": 100,
                "total": 1100,
                "payment_status": "Unpaid"
            }
        }


class UpdateInvoiceCommandDTO(BaseModel):
    """
    Command DTO for updating an invoice

    Only fields that are set are applied.
    """

    invoice_id: str = Field(
        ...,
        description="Invoice to update"
    )

    invoice_number: Optional[str] = None
    issue_date: Optional[datetime] = None
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    customer_address: Optional[str] = None
    line_items: Optional[List[LineItemInputDTO]] = None
    subtotal: Optional[float] = None
    tax: Optional[float] = None
    total: Optional[float] = None
    payment_status: Optional[PaymentStatus] = None


class LineItemDTO(BaseModel):
    """Line item as returned to callers"""

    id: str
    description: str
    quantity: float
    unit_price: float
    total: float


class AttachmentDTO(BaseModel):
    """Attachment metadata (payload omitted)"""

    id: str
    filename: str
    size: int
    content_type: str
    uploaded_at: datetime


class InvoiceResponseDTO(BaseModel):
    """
    Response DTO for invoice operations

    Returned by CreateInvoice, GetInvoice, UpdateInvoice, ListInvoices.
    """

    invoice_id: str = Field(
        ...,
        description="Invoice ID"
    )

    invoice_number: str = Field(
        ...,
        description="Invoice number"
    )

    issue_date: datetime = Field(
        ...,
        description="Invoice issue date"
    )

    customer_name: str
    customer_email: Optional[str] = None
    customer_address: Optional[str] = None
    line_items: List[LineItemDTO] = Field(default_factory=list)
    subtotal: float
    tax: float
    total: float
    payment_status: PaymentStatus
    attachments: List[AttachmentDTO] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, invoice: Invoice) -> "InvoiceResponseDTO":
        return cls(
            invoice_id=invoice.id,
            invoice_number=invoice.invoice_number,
            issue_date=invoice.issue_date,
            customer_name=invoice.customer_name,
            customer_email=invoice.customer_email,
            customer_address=invoice.customer_address,
            line_items=[
                LineItemDTO(
                    id=item.id,
                    description=item.description,
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                    total=item.total,
                )
                for item in invoice.line_items
            ],
            subtotal=invoice.subtotal,
            tax=invoice.tax,
            total=invoice.total,
            payment_status=invoice.payment_status,
            attachments=[
                AttachmentDTO(
                    id=attachment.id,
                    filename=attachment.filename,
                    size=attachment.size,
                    content_type=attachment.content_type,
                    uploaded_at=attachment.uploaded_at,
                )
                for attachment in invoice.attachments
            ],
            created_at=invoice.created_at,
            updated_at=invoice.updated_at,
        )

    class Config:
        json_schema_extra = {
            "example": {
                "invoice_id": "0b9f5a8e-3c1d-4f7a-9a51-7c2f4d1e8b20",
                "invoice_number": "INV-001",
                "issue_date": "2024-01-15T00:00:00",
                "customer_name": "John Doe",
                "customer_email": "john@example.com",
                "customer_address": "123 Main St",
                "line_items": [
                    {
                        "id": "5d1c0f0e-2b7e-4a43-8a6e-3f0a2c9b1d11",
                        "description": "Web Development",
                        "quantity": 1,
                        "unit_price": 1000,
                        "total": 1000
                    }
                ],
                "subtotal": 1000,
                "tax": 100,
                "total": 1100,
                "payment_status": "Unpaid",
                "attachments": [],
                "created_at": "2024-01-15T09:30:00",
                "updated_at": "2024-01-15T09:30:00"
            }
        }


class ListInvoicesQueryDTO(BaseModel):
    """Query DTO for ListInvoices and GetInvoiceStats"""

    criteria: FilterCriteria = Field(
        default_factory=FilterCriteria,
        description="Filter predicates (all optional)"
    )

    sort_by: Optional[SortField] = Field(
        default=None,
        description="Sort field; None keeps repository order"
    )

    order: SortOrder = Field(
        default=SortOrder.DESC,
        description="Sort direction"
    )


class ListInvoicesResponseDTO(BaseModel):
    """Response DTO for ListInvoices"""

    invoices: List[InvoiceResponseDTO]
    total: int = Field(
        ...,
        description="Number of invoices returned"
    )


class BulkDeleteCommandDTO(BaseModel):
    invoice_ids: List[str] = Field(
        ...,
        description="Invoices to delete; unknown IDs are ignored"
    )


class BulkUpdatePaymentStatusCommandDTO(BaseModel):
    invoice_ids: List[str] = Field(
        ...,
        description="Invoices to update; unknown IDs are ignored"
    )

    payment_status: PaymentStatus = Field(
        ...,
        description="New payment status"
    )


class BulkOperationResponseDTO(BaseModel):
    affected: int = Field(
        ...,
        description="Number of invoices changed"
    )


class InvoicePdfResponseDTO(BaseModel):
    """Response DTO for GenerateInvoicePdf"""

    invoice_id: str
    invoice_number: str
    pdf_base64: str = Field(
        ...,
        description="PDF document, base64 encoded"
    )
    generated_at: datetime
