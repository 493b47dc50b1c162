"""GetInvoice Use Case

Retrieves a single invoice with its line items and attachment metadata.
"""

from libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from .dtos import InvoiceResponseDTO


class GetInvoice:
    """Use Case: Get invoice by ID"""

    def __init__(self, invoice_repo: InvoiceRepository):
        self.invoice_repo = invoice_repo

    async def execute(self, invoice_id: str) -> Result[InvoiceResponseDTO]:
        invoice = await self.invoice_repo.get_by_id(invoice_id)

        if not invoice:
            return Return.err(
                Error(
                    code="INVOICE_NOT_FOUND",
                    message=f'Invoice with ID "{invoice_id}" not found',
                    reason="Invoice does not exist",
                )
            )

        return Return.ok(InvoiceResponseDTO.from_entity(invoice))
