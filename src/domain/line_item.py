"""Line Item Domain Entity

One billable row within an invoice.
"""

from typing import Optional, TYPE_CHECKING
from sqlmodel import Field, Column, Index, Relationship
from sqlalchemy import Float, ForeignKey, Integer, String
from src.domain.base import BaseModel, generate_uuid

if TYPE_CHECKING:
    from src.domain.invoice import Invoice


class LineItem(BaseModel, table=True):
    """
    Line Item - Individual billable row within an invoice

    Domain Rules:
    - Each line item belongs to exactly one invoice
    - total = quantity * unit_price (checked at input validation only)
    - position keeps the order the items were entered in
    """

    __tablename__ = "line_items"
    __table_args__ = (
        Index('ix_line_items_invoice_id', 'invoice_id'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        sa_column=Column(String(36), primary_key=True),
        description="Unique line item identifier (UUID)"
    )

    invoice_id: Optional[str] = Field(
        default=None,
        sa_column=Column(String(36), ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False),
        description="Foreign key to Invoice"
    )

    position: int = Field(
        default=0,
        sa_column=Column(Integer, nullable=False, default=0),
        description="Zero-based order within the invoice"
    )

    description: str = Field(
        sa_column=Column(String(500), nullable=False),
        description="Line item description (e.g., 'Web development')"
    )

    quantity: float = Field(
        sa_column=Column(Float, nullable=False),
        description="Quantity (units, hours, ...)"
    )

    unit_price: float = Field(
        sa_column=Column(Float, nullable=False),
        description="Price per unit"
    )

    total: float = Field(
        sa_column=Column(Float, nullable=False),
        description="Line total (quantity * unit_price)"
    )

    invoice: Optional["Invoice"] = Relationship(back_populates="line_items")
