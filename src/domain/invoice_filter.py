"""Invoice filtering and sorting

Pure functions over in-memory invoice lists. Inputs are never mutated;
results are new lists referencing the same invoice objects.
"""

from datetime import date, datetime, time
from typing import Iterable, List, Optional, Sequence
from src.domain.filter_criteria import DateRange, FilterCriteria, SortField, SortOrder
from src.domain.invoice import Invoice, PaymentStatus

END_OF_DAY = time(23, 59, 59, 999000)


def _day(value: date) -> date:
    return value.date() if isinstance(value, datetime) else value


def _as_datetime(value: date) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def start_of_day(value: date) -> datetime:
    return datetime.combine(_day(value), time.min)


def end_of_day(value: date) -> datetime:
    return datetime.combine(_day(value), END_OF_DAY)


def matches_date_range(invoice: Invoice, date_range: Optional[DateRange]) -> bool:
    if date_range is None:
        return True

    issued = _as_datetime(invoice.issue_date)
    if date_range.start_date is not None and issued < start_of_day(date_range.start_date):
        return False
    if date_range.end_date is not None and issued > end_of_day(date_range.end_date):
        return False
    return True


def matches_payment_statuses(
    invoice: Invoice, statuses: Optional[Sequence[PaymentStatus]]
) -> bool:
    # An empty list means "no filter", not "match nothing"
    if not statuses:
        return True
    return invoice.payment_status in statuses


def matches_search_term(invoice: Invoice, search_term: Optional[str]) -> bool:
    if not search_term or not search_term.strip():
        return True

    term = search_term.strip().lower()
    fields = [
        invoice.invoice_number or "",
        invoice.customer_name or "",
        invoice.customer_email or "",
    ]
    fields.extend(item.description or "" for item in invoice.line_items)
    return any(term in field.lower() for field in fields)


def filter_invoices(
    invoices: Iterable[Invoice], criteria: Optional[FilterCriteria] = None
) -> List[Invoice]:
    """
    Keep the invoices matching every active predicate of criteria

    Args:
        invoices: Invoices in display order
        criteria: Date range, payment statuses and search term (all optional)

    Returns:
        New list with the matching invoices in their original relative order
    """
    if criteria is None:
        return list(invoices)

    return [
        invoice
        for invoice in invoices
        if matches_date_range(invoice, criteria.date_range)
        and matches_payment_statuses(invoice, criteria.payment_statuses)
        and matches_search_term(invoice, criteria.search_term)
    ]


_SORT_KEYS = {
    SortField.DATE: lambda invoice: _as_datetime(invoice.issue_date),
    SortField.INVOICE_NUMBER: lambda invoice: invoice.invoice_number.casefold(),
    SortField.CUSTOMER_NAME: lambda invoice: invoice.customer_name.casefold(),
    SortField.TOTAL: lambda invoice: invoice.total,
}


def sort_invoices(
    invoices: Iterable[Invoice],
    sort_by: SortField = SortField.DATE,
    order: SortOrder = SortOrder.DESC,
) -> List[Invoice]:
    """Stable sort returning a new list (newest first by default)"""
    return sorted(
        invoices,
        key=_SORT_KEYS[SortField(sort_by)],
        reverse=SortOrder(order) == SortOrder.DESC,
    )
