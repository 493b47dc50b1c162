"""Unit tests for invoice request validation"""

import pytest
from datetime import datetime
from pydantic import ValidationError

from src.api.schemas.invoice_request import (
    CreateInvoiceRequestSchema,
    LineItemRequestSchema,
    UpdateInvoiceRequestSchema,
    BulkDeleteRequestSchema,
    amounts_match,
)
from src.domain.invoice import PaymentStatus


def _payload(**overrides):
    payload = {
        "invoice_number": "INV-001",
        "issue_date": "2024-01-15T00:00:00",
        "customer_name": "John Doe",
        "customer_email": "john@example.com",
        "line_items": [
            {"description": "Web Development", "quantity": 1, "unit_price": 1000},
            {"description": "Hosting", "quantity": 2, "unit_price": 10.5},
        ],
        "tax": 100,
    }
    payload.update(overrides)
    return payload


class TestLineItemRequestSchema:
    def test_total_is_derived(self):
        item = LineItemRequestSchema(description="Hosting", quantity=2, unit_price=10.5)

        assert item.total == 21

    def test_total_within_a_cent_is_accepted(self):
        item = LineItemRequestSchema(description="Hosting", quantity=3, unit_price=0.333, total=1.0)

        assert item.total == 1.0

    def test_wrong_total_rejected(self):
        with pytest.raises(ValidationError):
            LineItemRequestSchema(description="Hosting", quantity=2, unit_price=10.5, total=25)

    @pytest.mark.parametrize(
        "overrides",
        [
            {"quantity": 0},
            {"quantity": -1},
            {"quantity": 1000000},
            {"unit_price": -0.01},
            {"unit_price": 1000000},
            {"unit_price": float("nan")},
            {"description": ""},
            {"description": "   "},
            {"description": "x" * 501},
        ],
    )
    def test_limits(self, overrides):
        values = {"description": "Hosting", "quantity": 1, "unit_price": 10}
        values.update(overrides)

        with pytest.raises(ValidationError):
            LineItemRequestSchema(**values)


class TestCreateInvoiceRequestSchema:
    def test_valid_payload_derives_totals(self):
        schema = CreateInvoiceRequestSchema(**_payload())

        assert schema.subtotal == 1021
        assert schema.total == 1121
        assert schema.payment_status == PaymentStatus.UNPAID

    def test_supplied_totals_must_match(self):
        with pytest.raises(ValidationError):
            CreateInvoiceRequestSchema(**_payload(subtotal=1000))

        with pytest.raises(ValidationError):
            CreateInvoiceRequestSchema(**_payload(subtotal=1021, total=1021))

    def test_consistent_totals_accepted(self):
        schema = CreateInvoiceRequestSchema(**_payload(subtotal=1021.004, total=1121.0))

        assert schema.total == 1121.0

    def test_blank_email_becomes_none(self):
        schema = CreateInvoiceRequestSchema(**_payload(customer_email="  "))

        assert schema.customer_email is None

    @pytest.mark.parametrize(
        "overrides",
        [
            {"invoice_number": ""},
            {"invoice_number": "x" * 51},
            {"customer_name": " "},
            {"customer_name": "x" * 201},
            {"customer_address": "x" * 501},
            {"customer_email": "not-an-email"},
            {"line_items": []},
            {"line_items": [{"description": "a", "quantity": 1, "unit_price": 1}] * 101},
            {"tax": -1},
            {"tax": 1000000},
            {"payment_status": "Refunded"},
            {"issue_date": "yesterday"},
        ],
    )
    def test_invalid_payloads(self, overrides):
        with pytest.raises(ValidationError):
            CreateInvoiceRequestSchema(**_payload(**overrides))

    def test_aware_issue_date_converted_to_naive_utc(self):
        schema = CreateInvoiceRequestSchema(**_payload(issue_date="2024-01-15T02:00:00+05:00"))

        assert schema.issue_date == datetime(2024, 1, 14, 21, 0, 0)
        assert schema.issue_date.tzinfo is None


class TestUpdateInvoiceRequestSchema:
    def test_only_supplied_fields_are_set(self):
        schema = UpdateInvoiceRequestSchema(payment_status="Paid", customer_email=None)

        assert schema.model_dump(exclude_unset=True) == {
            "payment_status": PaymentStatus.PAID,
            "customer_email": None,
        }

    def test_line_items_validated(self):
        with pytest.raises(ValidationError):
            UpdateInvoiceRequestSchema(line_items=[{"description": "a", "quantity": 0, "unit_price": 1}])

    def test_empty_line_items_rejected(self):
        with pytest.raises(ValidationError):
            UpdateInvoiceRequestSchema(line_items=[])


class TestBulkSchemas:
    def test_ids_required(self):
        with pytest.raises(ValidationError):
            BulkDeleteRequestSchema(invoice_ids=[])


def test_amounts_match_tolerance():
    assert amounts_match(100.0, 100.01)
    assert not amounts_match(100.0, 100.02)
