"""UpdateInvoice Use Case

Applies a partial update to an existing invoice.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.totals import calculate_invoice_subtotal, calculate_invoice_total
from ._line_items import build_line_items
from .dtos import UpdateInvoiceCommandDTO, InvoiceResponseDTO

logger = logging.getLogger(__name__)

# Fields that may be cleared by sending an explicit null
NULLABLE_FIELDS = {"customer_email", "customer_address"}


class UpdateInvoice:
    """
    Use Case: Update invoice

    Business Rules:
    1. Invoice must exist
    2. A new invoice number must not belong to another invoice
    3. id and created_at are preserved; updated_at is bumped
    4. Line items are replaced only when supplied; ids of other invoices are never reused
    5. Attachments are managed by the attachment use cases, never here
    6. Subtotal and total are recomputed when line items or tax change

    Flow:
    1. Retrieve invoice
    2. Check invoice number uniqueness when it changes
    3. Apply supplied fields
    4. Persist and commit
    5. Return response
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo

    async def execute(self, command: UpdateInvoiceCommandDTO) -> Result[InvoiceResponseDTO]:
        """
        Execute invoice update

        Args:
            command: UpdateInvoiceCommandDTO with invoice_id and the fields to change

        Returns:
            Result[InvoiceResponseDTO]: Success with updated invoice or error
        """
        try:
            # Step 1: Retrieve invoice
            invoice = await self.invoice_repo.get_by_id(command.invoice_id)

            if not invoice:
                return Return.err(
                    Error(
                        code="INVOICE_NOT_FOUND",
                        message=f'Invoice with ID "{command.invoice_id}" not found',
                        reason="Invoice does not exist",
                    )
                )

            changes = command.model_dump(exclude_unset=True, exclude={"invoice_id", "line_items"})

            # Step 2: Check invoice number uniqueness
            new_number = changes.get("invoice_number")
            if new_number and new_number != invoice.invoice_number:
                taken = await self.invoice_repo.exists_with_invoice_number(
                    new_number, exclude_id=invoice.id
                )
                if taken:
                    return Return.err(
                        Error(
                            code="DUPLICATE_INVOICE_NUMBER",
                            message=f'Invoice number "{new_number}" already exists',
                            reason="Invoice numbers must be unique",
                        )
                    )

            # Step 3: Apply supplied fields
            for field, value in changes.items():
                if value is None and field not in NULLABLE_FIELDS:
                    continue
                setattr(invoice, field, value)

            if command.line_items is not None:
                invoice.line_items = build_line_items(command.line_items, existing=invoice.line_items)

            # Stored totals always follow the current line items and tax
            if command.line_items is not None or "tax" in changes:
                invoice.subtotal = calculate_invoice_subtotal(invoice.line_items)
                invoice.total = calculate_invoice_total(invoice.subtotal, invoice.tax)

            # Step 4: Persist and commit
            updated_invoice = await self.invoice_repo.update(invoice)
            await self.uow.commit()

            logger.info(f"Updated invoice {updated_invoice.invoice_number} ({updated_invoice.id})")

            return Return.ok(InvoiceResponseDTO.from_entity(updated_invoice))

        except Exception as e:
            logger.error(f"Failed to update invoice {command.invoice_id}: {e}")
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="UPDATE_INVOICE_FAILED",
                    message="Failed to update invoice",
                    reason=str(e),
                )
            )
