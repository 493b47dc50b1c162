"""CreateInvoice Use Case

Creates an invoice with its line items.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.base import generate_uuid, utcnow
from src.domain.invoice import Invoice
from ._line_items import build_line_items
from .dtos import CreateInvoiceCommandDTO, InvoiceResponseDTO

logger = logging.getLogger(__name__)


class CreateInvoice:
    """
    Use Case: Create invoice

    Business Rules:
    1. Invoice numbers are unique across invoices
    2. ID and timestamps are assigned here, never by the caller
    3. New invoices start without attachments
    4. Totals were validated upstream and are stored as given

    Flow:
    1. Check for duplicate invoice number
    2. Build invoice and line item entities
    3. Persist and commit
    4. Return response
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo

    async def execute(self, command: CreateInvoiceCommandDTO) -> Result[InvoiceResponseDTO]:
        """
        Execute invoice creation

        Args:
            command: CreateInvoiceCommandDTO with customer, line items and totals

        Returns:
            Result[InvoiceResponseDTO]: Success with invoice details or error
        """
        try:
            # Step 1: Check for duplicate invoice number
            exists = await self.invoice_repo.exists_with_invoice_number(command.invoice_number)

            if exists:
                return Return.err(
                    Error(
                        code="DUPLICATE_INVOICE_NUMBER",
                        message=f'Invoice number "{command.invoice_number}" already exists',
                        reason="Invoice numbers must be unique",
                    )
                )

            # Step 2: Build entities
            now = utcnow()
            invoice = Invoice(
                id=generate_uuid(),
                invoice_number=command.invoice_number,
                issue_date=command.issue_date,
                customer_name=command.customer_name,
                customer_email=command.customer_email,
                customer_address=command.customer_address,
                line_items=build_line_items(command.line_items),
                subtotal=command.subtotal,
                tax=command.tax,
                total=command.total,
                payment_status=command.payment_status,
                attachments=[],
                created_at=now,
                updated_at=now,
            )

            # Step 3: Persist and commit
            created_invoice = await self.invoice_repo.create(invoice)
            await self.uow.commit()

            logger.info(
                f"Created invoice {created_invoice.invoice_number} ({created_invoice.id})"
            )

            return Return.ok(InvoiceResponseDTO.from_entity(created_invoice))

        except Exception as e:
            logger.error(f"Failed to create invoice {command.invoice_number}: {e}")
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="CREATE_INVOICE_FAILED",
                    message="Failed to create invoice",
                    reason=str(e),
                )
            )
