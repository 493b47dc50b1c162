"""GetInvoiceStats Use Case

Counts and amounts per payment status over the (optionally filtered) list.
"""

from typing import Optional
from libs.result import Result, Return
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.filter_criteria import FilterCriteria
from src.domain.invoice_filter import filter_invoices
from src.domain.invoice_stats import InvoiceStats, compute_invoice_stats


class GetInvoiceStats:
    """Use Case: Invoice statistics"""

    def __init__(self, invoice_repo: InvoiceRepository):
        self.invoice_repo = invoice_repo

    async def execute(self, criteria: Optional[FilterCriteria] = None) -> Result[InvoiceStats]:
        invoices = await self.invoice_repo.get_all()
        return Return.ok(compute_invoice_stats(filter_invoices(invoices, criteria)))
