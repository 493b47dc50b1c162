"""SQLAlchemy Invoice Repository Implementation

Implements invoice persistence using SQLAlchemy async session.
"""

from typing import List, Optional, Sequence
from sqlalchemy.orm import selectinload
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.base import utcnow
from src.domain.invoice import Invoice


class SqlAlchemyInvoiceRepository(InvoiceRepository):
    """
    SQLAlchemy implementation of InvoiceRepository

    Uses async session for database operations. Line items and attachments
    are always eager loaded so callers never trigger lazy loads.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    def _select_invoices(self):
        return select(Invoice).options(
            selectinload(Invoice.line_items),
            selectinload(Invoice.attachments),
        )

    async def create(self, invoice: Invoice) -> Invoice:
        """
        Create a new invoice

        Args:
            invoice: Invoice entity (with line items) to persist

        Returns:
            Created Invoice as stored
        """
        self.session.add(invoice)
        await self.session.flush()
        return await self.get_by_id(invoice.id)

    async def get_by_id(self, invoice_id: str) -> Optional[Invoice]:
        """
        Retrieve invoice by ID

        Args:
            invoice_id: Invoice ID

        Returns:
            Invoice if found, None otherwise
        """
        statement = (
            self._select_invoices()
            .where(Invoice.id == invoice_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_by_ids(self, invoice_ids: Sequence[str]) -> List[Invoice]:
        if not invoice_ids:
            return []

        statement = (
            self._select_invoices()
            .where(Invoice.id.in_(list(invoice_ids)))
            .order_by(Invoice.created_at, Invoice.id)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def get_all(self) -> List[Invoice]:
        """
        Retrieve the full invoice list

        Returns:
            All invoices ordered by creation time (oldest first)
        """
        statement = self._select_invoices().order_by(Invoice.created_at, Invoice.id)
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def exists_with_invoice_number(
        self, invoice_number: str, exclude_id: Optional[str] = None
    ) -> bool:
        statement = (
            select(func.count())
            .select_from(Invoice)
            .where(Invoice.invoice_number == invoice_number)
        )
        if exclude_id is not None:
            statement = statement.where(Invoice.id != exclude_id)

        result = await self.session.execute(statement)
        count = result.scalar_one()
        return count > 0

    async def update(self, invoice: Invoice) -> Invoice:
        """
        Persist changes to an existing invoice and bump updated_at

        Args:
            invoice: Invoice entity with updated values

        Returns:
            Updated Invoice
        """
        invoice.updated_at = utcnow()
        self.session.add(invoice)
        await self.session.flush()
        return await self.get_by_id(invoice.id)

    async def delete(self, invoice: Invoice) -> None:
        await self.session.delete(invoice)
        await self.session.flush()
