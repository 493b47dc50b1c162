import pytest
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

from src.domain.invoice import Invoice, PaymentStatus
from src.domain.line_item import LineItem


@pytest.fixture
def mock_uow():
    """Mock unit of work"""
    uow = MagicMock()
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow


@pytest.fixture
def mock_invoice_repo():
    """Mock invoice repository"""
    return MagicMock()


@pytest.fixture
def make_invoice():
    """Factory building in-memory invoices with sensible defaults"""

    def _make_invoice(
        invoice_number: str = "INV-001",
        issue_date: datetime = datetime(2024, 1, 15),
        customer_name: str = "John Doe",
        customer_email: str = "john@example.com",
        payment_status: PaymentStatus = PaymentStatus.UNPAID,
        line_items=None,
        tax: float = 0.0,
        **overrides,
    ) -> Invoice:
        if line_items is None:
            line_items = [("Web Development", 1.0, 1000.0)]

        items = [
            LineItem(
                id=f"{invoice_number}-item-{position}",
                position=position,
                description=description,
                quantity=quantity,
                unit_price=unit_price,
                total=quantity * unit_price,
            )
            for position, (description, quantity, unit_price) in enumerate(line_items)
        ]
        subtotal = sum(item.total for item in items)

        values = dict(
            id=f"id-{invoice_number}",
            invoice_number=invoice_number,
            issue_date=issue_date,
            customer_name=customer_name,
            customer_email=customer_email,
            customer_address=None,
            subtotal=subtotal,
            tax=tax,
            total=subtotal + tax,
            payment_status=payment_status,
            created_at=datetime(2024, 1, 1, 9, 0, 0),
            updated_at=datetime(2024, 1, 1, 9, 0, 0),
        )
        values.update(overrides)

        invoice = Invoice(**values)
        invoice.line_items = items
        invoice.attachments = []
        return invoice

    return _make_invoice
