"""GenerateInvoicePdf Use Case

Renders an invoice as a PDF document.
"""

import base64
from libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.services.pdf_service import PdfService
from src.domain.base import utcnow
from .dtos import InvoicePdfResponseDTO


class GenerateInvoicePdf:
    """
    Use Case: Generate invoice PDF

    Business Rules:
    1. Invoice must exist
    2. Amounts are formatted in the configured currency
    3. Returns PDF as base64-encoded string

    Flow:
    1. Retrieve invoice (line items included)
    2. Generate PDF using PDF service
    3. Return response with PDF as base64
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        pdf_service: PdfService,
        company_name: str,
        company_address: str,
        currency: str = "USD",
    ):
        self.invoice_repo = invoice_repo
        self.pdf_service = pdf_service
        self.company_name = company_name
        self.company_address = company_address
        self.currency = currency

    async def execute(self, invoice_id: str) -> Result[InvoicePdfResponseDTO]:
        """
        Execute invoice PDF generation

        Args:
            invoice_id: Invoice ID to render

        Returns:
            Result[InvoicePdfResponseDTO]: Success with PDF or error
        """
        try:
            # Step 1: Retrieve invoice
            invoice = await self.invoice_repo.get_by_id(invoice_id)

            if not invoice:
                return Return.err(
                    Error(
                        code="INVOICE_NOT_FOUND",
                        message=f'Invoice with ID "{invoice_id}" not found',
                        reason="Invoice does not exist",
                    )
                )

            # Step 2: Generate PDF
            pdf_bytes = self.pdf_service.generate_invoice(
                invoice=invoice,
                company_name=self.company_name,
                company_address=self.company_address,
                currency=self.currency,
            )

            # Step 3: Build response
            return Return.ok(
                InvoicePdfResponseDTO(
                    invoice_id=invoice.id,
                    invoice_number=invoice.invoice_number,
                    pdf_base64=base64.b64encode(pdf_bytes).decode("utf-8"),
                    generated_at=utcnow(),
                )
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="GENERATE_PDF_FAILED",
                    message="Failed to generate invoice PDF",
                    reason=str(e),
                )
            )
