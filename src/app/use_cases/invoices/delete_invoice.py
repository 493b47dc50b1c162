"""DeleteInvoice Use Case

Deletes an invoice together with its line items and attachments.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository

logger = logging.getLogger(__name__)


class DeleteInvoice:
    """Use Case: Delete invoice (attachments go with it)"""

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo

    async def execute(self, invoice_id: str) -> Result[bool]:
        try:
            invoice = await self.invoice_repo.get_by_id(invoice_id)

            if not invoice:
                return Return.err(
                    Error(
                        code="INVOICE_NOT_FOUND",
                        message=f'Invoice with ID "{invoice_id}" not found',
                        reason="Invoice does not exist",
                    )
                )

            await self.invoice_repo.delete(invoice)
            await self.uow.commit()

            logger.info(f"Deleted invoice {invoice.invoice_number} ({invoice_id})")
            return Return.ok(True)

        except Exception as e:
            logger.error(f"Failed to delete invoice {invoice_id}: {e}")
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="DELETE_INVOICE_FAILED",
                    message="Failed to delete invoice",
                    reason=str(e),
                )
            )
