"""Invoice use cases"""
from .create_invoice import CreateInvoice
from .get_invoice import GetInvoice
from .update_invoice import UpdateInvoice
from .delete_invoice import DeleteInvoice
from .list_invoices import ListInvoices
from .get_invoice_stats import GetInvoiceStats
from .bulk_operations import BulkDeleteInvoices, BulkUpdatePaymentStatus
from .generate_invoice_pdf import GenerateInvoicePdf
from .dtos import (
    LineItemInputDTO,
    CreateInvoiceCommandDTO,
    UpdateInvoiceCommandDTO,
    LineItemDTO,
    AttachmentDTO,
    InvoiceResponseDTO,
    ListInvoicesQueryDTO,
    ListInvoicesResponseDTO,
    BulkDeleteCommandDTO,
    BulkUpdatePaymentStatusCommandDTO,
    BulkOperationResponseDTO,
    InvoicePdfResponseDTO,
)

__all__ = [
    "CreateInvoice",
    "GetInvoice",
    "UpdateInvoice",
    "DeleteInvoice",
    "ListInvoices",
    "GetInvoiceStats",
    "BulkDeleteInvoices",
    "BulkUpdatePaymentStatus",
    "GenerateInvoicePdf",
    "LineItemInputDTO",
    "CreateInvoiceCommandDTO",
    "UpdateInvoiceCommandDTO",
    "LineItemDTO",
    "AttachmentDTO",
    "InvoiceResponseDTO",
    "ListInvoicesQueryDTO",
    "ListInvoicesResponseDTO",
    "BulkDeleteCommandDTO",
    "BulkUpdatePaymentStatusCommandDTO",
    "BulkOperationResponseDTO",
    "InvoicePdfResponseDTO",
]
