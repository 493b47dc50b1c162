"""Invoice totals and display formatting

Amounts are plain floats; nothing is rounded except when formatting for
display.
"""

from typing import Iterable, Protocol


class HasTotal(Protocol):
    total: float


CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "NGN": "₦",
}

FILE_SIZE_UNITS = ["B", "KB", "MB", "GB", "TB"]


def calculate_line_item_total(quantity: float, unit_price: float) -> float:
    return quantity * unit_price


def calculate_invoice_subtotal(line_items: Iterable[HasTotal]) -> float:
    return sum((item.total for item in line_items), 0.0)


def calculate_invoice_total(subtotal: float, tax: float) -> float:
    return subtotal + tax


def format_currency(amount: float, currency: str = "USD") -> str:
    """
    Format an amount for display

    Two decimals with thousands separators, e.g. 1234.56 -> "$1,234.56".
    Codes without a known symbol render as "CHF 1,234.56".
    """
    code = currency.upper()
    rounded = round(amount, 2)
    sign = "-" if rounded < 0 else ""
    digits = f"{abs(rounded):,.2f}"

    symbol = CURRENCY_SYMBOLS.get(code)
    if symbol is None:
        return f"{sign}{code} {digits}"
    return f"{sign}{symbol}{digits}"


def format_file_size(size: int) -> str:
    """Human readable size, e.g. 1536 -> "1.5 KB" """
    if size <= 0:
        return "0 B"

    value = float(size)
    unit = 0
    while value >= 1024 and unit < len(FILE_SIZE_UNITS) - 1:
        value /= 1024
        unit += 1

    if unit == 0:
        return f"{size} B"
    return f"{value:.1f} {FILE_SIZE_UNITS[unit]}"
