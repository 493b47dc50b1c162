"""DeleteAttachment Use Case

Removes a file from an invoice.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository

logger = logging.getLogger(__name__)


class DeleteAttachment:
    """Use Case: Delete attachment from invoice"""

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo

    async def execute(self, invoice_id: str, attachment_id: str) -> Result[bool]:
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

            attachment = next(
                (item for item in invoice.attachments if item.id == attachment_id), None
            )
            if attachment is None:
                return Return.err(
                    Error(
                        code="ATTACHMENT_NOT_FOUND",
                        message=f'File with ID "{attachment_id}" not found',
                        reason=f"invoice_id={invoice_id}",
                    )
                )

            invoice.attachments.remove(attachment)
            await self.invoice_repo.update(invoice)
            await self.uow.commit()

            logger.info(f"Removed attachment {attachment.filename} from invoice {invoice.invoice_number}")
            return Return.ok(True)

        except Exception as e:
            logger.error(f"Failed to delete attachment {attachment_id}: {e}")
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="DELETE_ATTACHMENT_FAILED",
                    message="Failed to delete attachment",
                    reason=str(e),
                )
            )
