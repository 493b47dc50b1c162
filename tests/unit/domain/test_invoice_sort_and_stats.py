"""Unit tests for invoice sorting and statistics"""

import pytest
from datetime import datetime

from src.domain.filter_criteria import SortField, SortOrder
from src.domain.invoice import PaymentStatus
from src.domain.invoice_filter import sort_invoices
from src.domain.invoice_stats import compute_invoice_stats


@pytest.fixture
def invoices(make_invoice):
    return [
        make_invoice(
            "INV-002",
            issue_date=datetime(2024, 3, 1),
            customer_name="bravo Ltd",
            line_items=[("Hosting", 1.0, 50.0)],
            payment_status=PaymentStatus.PAID,
        ),
        make_invoice(
            "inv-003",
            issue_date=datetime(2024, 1, 1),
            customer_name="Alpha Inc",
            line_items=[("Design", 2.0, 100.0)],
            tax=20.0,
            payment_status=PaymentStatus.OVERDUE,
        ),
        make_invoice(
            "INV-001",
            issue_date=datetime(2024, 2, 1),
            customer_name="Charlie Co",
            line_items=[("Support", 4.0, 25.0)],
            payment_status=PaymentStatus.PARTIALLY_PAID,
        ),
    ]


def numbers(invoices):
    return [invoice.invoice_number for invoice in invoices]


class TestSortInvoices:
    def test_default_is_newest_first(self, invoices):
        assert numbers(sort_invoices(invoices)) == ["INV-002", "INV-001", "inv-003"]

    def test_date_ascending(self, invoices):
        result = sort_invoices(invoices, SortField.DATE, SortOrder.ASC)

        assert numbers(result) == ["inv-003", "INV-001", "INV-002"]

    def test_invoice_number_ignores_case(self, invoices):
        result = sort_invoices(invoices, SortField.INVOICE_NUMBER, SortOrder.ASC)

        assert numbers(result) == ["INV-001", "INV-002", "inv-003"]

    def test_customer_name_ignores_case(self, invoices):
        result = sort_invoices(invoices, SortField.CUSTOMER_NAME, SortOrder.ASC)

        assert [i.customer_name for i in result] == ["Alpha Inc", "bravo Ltd", "Charlie Co"]

    def test_total_descending(self, invoices):
        result = sort_invoices(invoices, "total", "desc")

        assert [i.total for i in result] == [220.0, 100.0, 50.0]

    def test_sort_is_stable(self, make_invoice):
        first = make_invoice("A", issue_date=datetime(2024, 1, 1))
        second = make_invoice("B", issue_date=datetime(2024, 1, 1))

        assert sort_invoices([first, second], SortField.DATE, SortOrder.ASC) == [first, second]

    def test_input_is_not_mutated(self, invoices):
        original = list(invoices)

        sort_invoices(invoices, SortField.TOTAL, SortOrder.ASC)

        assert invoices == original


class TestComputeInvoiceStats:
    def test_counts_and_amounts(self, invoices):
        stats = compute_invoice_stats(invoices)

        assert stats.total == 3
        assert stats.paid == 1
        assert stats.unpaid == 0
        assert stats.partially_paid == 1
        assert stats.overdue == 1
        assert stats.total_amount == 370.0
        assert stats.paid_amount == 50.0
        assert stats.unpaid_amount == 320.0

    def test_empty_list(self):
        stats = compute_invoice_stats([])

        assert stats.total == 0
        assert stats.total_amount == 0.0
