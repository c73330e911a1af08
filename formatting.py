"""Helper utilities for formatting amounts in the Estonian locale."""
from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

THOUSANDS_SEPARATOR = "\u00a0"
DECIMAL_SEPARATOR = ","
CURRENCY_SYMBOL = "€"


def to_decimal(value: object) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if value is None:
        return Decimal("0")
    return Decimal(str(value))


def _finite(value: object) -> Decimal:
    try:
        amount = to_decimal(value)
    except (InvalidOperation, ValueError):
        return Decimal("0")
    if amount.is_nan() or amount.is_infinite():
        return Decimal("0")
    return amount


def format_number(value: object, digits: int = 2) -> str:
    """``1234.5`` -> ``"1 234,50"`` with a non-breaking group separator."""

    amount = _finite(value)
    quant = Decimal(1).scaleb(-digits)
    amount = amount.quantize(quant, rounding=ROUND_HALF_UP)
    formatted = f"{abs(amount):,.{digits}f}"
    formatted = formatted.replace(",", THOUSANDS_SEPARATOR).replace(".", DECIMAL_SEPARATOR)
    return f"-{formatted}" if amount < 0 else formatted


def format_euro(value: object) -> str:
    return f"{format_number(value, 2)}{THOUSANDS_SEPARATOR}{CURRENCY_SYMBOL}"


def format_percent(value: object, digits: int = 3) -> str:
    """Format a value already expressed in percent, e.g. ``60`` -> ``"60,000%"``."""

    return f"{format_number(value, digits)}%"


def format_delta(value: object) -> str:
    amount = _finite(value)
    if amount == 0:
        return "±0"
    sign = "+" if amount > 0 else "-"
    return f"{sign}{format_euro(abs(amount))}"


__all__ = [
    "format_delta",
    "format_euro",
    "format_number",
    "format_percent",
    "to_decimal",
]
