"""Invoice Repository Interface

Defines the contract for invoice persistence operations. Implementations
load each invoice together with its line items and attachments.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence
from src.domain.invoice import Invoice


class InvoiceRepository(ABC):
    """
    Repository interface for Invoice persistence

    The storage backend is injected through the concrete implementation;
    use cases only depend on this contract.
    """

    @abstractmethod
    async def create(self, invoice: Invoice) -> Invoice:
        """
        Create a new invoice

        Args:
            invoice: Invoice entity (with line items) to persist

        Returns:
            Created Invoice as stored
        """
        pass

    @abstractmethod
    async def get_by_id(self, invoice_id: str) -> Optional[Invoice]:
        """
        Retrieve invoice by ID

        Args:
            invoice_id: Invoice ID

        Returns:
            Invoice if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_ids(self, invoice_ids: Sequence[str]) -> List[Invoice]:
        """
        Retrieve every existing invoice among the given IDs

        Args:
            invoice_ids: Invoice IDs; unknown IDs are ignored

        Returns:
            List of invoices found
        """
        pass

    @abstractmethod
    async def get_all(self) -> List[Invoice]:
        """
        Retrieve the full invoice list

        Returns:
            All invoices ordered by creation time (oldest first)
        """
        pass

    @abstractmethod
    async def exists_with_invoice_number(
        self, invoice_number: str, exclude_id: Optional[str] = None
    ) -> bool:
        """
        Check if an invoice number is already taken

        Args:
            invoice_number: Invoice number to look up
            exclude_id: Invoice allowed to hold the number (the one being updated)

        Returns:
            True if another invoice uses the number, False otherwise
        """
        pass

    @abstractmethod
    async def update(self, invoice: Invoice) -> Invoice:
        """
        Persist changes to an existing invoice and bump updated_at

        Args:
            invoice: Invoice entity with updated values

        Returns:
            Updated Invoice
        """
        pass

    @abstractmethod
    async def delete(self, invoice: Invoice) -> None:
        """
        Delete an invoice together with its line items and attachments

        Args:
            invoice: Invoice entity to delete
        """
        pass
