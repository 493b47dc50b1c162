"""Bulk Invoice Use Cases

Delete or re-status several invoices in one transaction. Unknown IDs are
skipped; the response reports how many invoices were actually changed.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from .dtos import (
    BulkDeleteCommandDTO,
    BulkUpdatePaymentStatusCommandDTO,
    BulkOperationResponseDTO,
)

logger = logging.getLogger(__name__)


class BulkDeleteInvoices:
    """Use Case: Delete several invoices"""

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo

    async def execute(self, command: BulkDeleteCommandDTO) -> Result[BulkOperationResponseDTO]:
        try:
            invoices = await self.invoice_repo.get_by_ids(command.invoice_ids)

            for invoice in invoices:
                await self.invoice_repo.delete(invoice)

            await self.uow.commit()

            logger.info(f"Bulk deleted {len(invoices)} of {len(command.invoice_ids)} requested invoices")
            return Return.ok(BulkOperationResponseDTO(affected=len(invoices)))

        except Exception as e:
            logger.error(f"Bulk delete failed: {e}")
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="BULK_DELETE_FAILED",
                    message="Failed to bulk delete invoices",
                    reason=str(e),
                )
            )


class BulkUpdatePaymentStatus:
    """Use Case: Set the payment status of several invoices"""

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo

    async def execute(
        self, command: BulkUpdatePaymentStatusCommandDTO
    ) -> Result[BulkOperationResponseDTO]:
        try:
            invoices = await self.invoice_repo.get_by_ids(command.invoice_ids)

            for invoice in invoices:
                invoice.payment_status = command.payment_status
                await self.invoice_repo.update(invoice)

            await self.uow.commit()

            logger.info(
                f"Set payment status {command.payment_status.value} on {len(invoices)} invoices"
            )
            return Return.ok(BulkOperationResponseDTO(affected=len(invoices)))

        except Exception as e:
            logger.error(f"Bulk payment status update failed: {e}")
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="BULK_UPDATE_FAILED",
                    message="Failed to bulk update payment status",
                    reason=str(e),
                )
            )
