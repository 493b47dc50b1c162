from .base import BaseModel, generate_uuid, utcnow
from .invoice import Invoice, PaymentStatus
from .line_item import LineItem
from .file_attachment import FileAttachment
from .filter_criteria import DateRange, FilterCriteria, SortField, SortOrder
from .invoice_stats import InvoiceStats, compute_invoice_stats

__all__ = [
    "BaseModel",
    "generate_uuid",
    "utcnow",
    "Invoice",
    "PaymentStatus",
    "LineItem",
    "FileAttachment",
    "DateRange",
    "FilterCriteria",
    "SortField",
    "SortOrder",
    "InvoiceStats",
    "compute_invoice_stats",
]
