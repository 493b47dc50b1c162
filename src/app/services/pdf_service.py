"""PDF Generation Service Interface

Defines the contract for PDF generation operations.
"""

from abc import ABC, abstractmethod
from src.domain.invoice import Invoice


class PdfService(ABC):
    """
    Service interface for PDF generation

    Provides PDF rendering of invoices.
    """

    @abstractmethod
    def generate_invoice(
        self,
        invoice: Invoice,
        company_name: str,
        company_address: str,
        currency: str = "USD",
    ) -> bytes:
        """
        Render an invoice as a PDF document

        Args:
            invoice: Invoice with its line items loaded
            company_name: Issuer name printed in the header
            company_address: Issuer address printed in the header
            currency: ISO 4217 code used to format amounts

        Returns:
            PDF document as bytes
        """
        pass
