"""
List Invoices Use Case

Loads the invoice list from the repository, narrows it with the filter
criteria and optionally sorts it.
"""
from typing import Optional
from libs.result import Result, Return
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.invoice_filter import filter_invoices, sort_invoices
from .dtos import ListInvoicesQueryDTO, ListInvoicesResponseDTO, InvoiceResponseDTO


class ListInvoices:
    """
    Use case: List invoices

    Filtering runs in memory over the full list on every call. Without a
    sort field the repository order (oldest first) is kept.
    """

    def __init__(self, invoice_repo: InvoiceRepository):
        """
        Initialize with invoice repository.

        Args:
            invoice_repo: InvoiceRepository instance
        """
        self.invoice_repo = invoice_repo

    async def execute(
        self, query: Optional[ListInvoicesQueryDTO] = None
    ) -> Result[ListInvoicesResponseDTO]:
        """
        List invoices matching the query.

        Args:
            query: Filter criteria and sort options (defaults to no filtering)

        Returns:
            Result[ListInvoicesResponseDTO]: Matching invoices
        """
        query = query or ListInvoicesQueryDTO()

        invoices = await self.invoice_repo.get_all()
        matching = filter_invoices(invoices, query.criteria)

        if query.sort_by is not None:
            matching = sort_invoices(matching, query.sort_by, query.order)

        return Return.ok(
            ListInvoicesResponseDTO(
                invoices=[InvoiceResponseDTO.from_entity(invoice) for invoice in matching],
                total=len(matching),
            )
        )
