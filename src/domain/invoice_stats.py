"""Aggregate figures over an invoice list"""

from typing import Iterable
from pydantic import BaseModel, Field
from src.domain.invoice import Invoice, PaymentStatus


class InvoiceStats(BaseModel):
    """Counts per payment status and amount totals"""

    total: int = Field(default=0, description="Number of invoices")
    paid: int = Field(default=0, description="Invoices with status Paid")
    unpaid: int = Field(default=0, description="Invoices with status Unpaid")
    partially_paid: int = Field(default=0, description="Invoices with status Partially Paid")
    overdue: int = Field(default=0, description="Invoices with status Overdue")
    total_amount: float = Field(default=0.0, description="Sum of all invoice totals")
    paid_amount: float = Field(default=0.0, description="Sum of totals of paid invoices")
    unpaid_amount: float = Field(default=0.0, description="Sum of totals of every invoice not fully paid")


_COUNTERS = {
    PaymentStatus.PAID: "paid",
    PaymentStatus.UNPAID: "unpaid",
    PaymentStatus.PARTIALLY_PAID: "partially_paid",
    PaymentStatus.OVERDUE: "overdue",
}


def compute_invoice_stats(invoices: Iterable[Invoice]) -> InvoiceStats:
    stats = InvoiceStats()
    for invoice in invoices:
        status = PaymentStatus(invoice.payment_status)
        stats.total += 1
        counter = _COUNTERS[status]
        setattr(stats, counter, getattr(stats, counter) + 1)
        stats.total_amount += invoice.total
        if status == PaymentStatus.PAID:
            stats.paid_amount += invoice.total
        else:
            stats.unpaid_amount += invoice.total
    return stats
