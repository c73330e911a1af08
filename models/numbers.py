"""Numeric coercion shared by every amount field of the plan."""
from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Iterable

ZERO = Decimal("0")
CENT = Decimal("0.01")
TWELVE = Decimal("12")

_WHITESPACE = re.compile(r"\s+")


def parse_amount(value: Any, *, clamp: bool = True) -> Decimal:
    """Return *value* as a Decimal, treating anything unreadable as zero.

    Whitespace is dropped (``"1 200"``) and a comma is read as the decimal
    separator (``"12,5"``). Empty, non-numeric and non-finite input yields 0.
    With *clamp* set, negative values are clamped to 0.
    """

    if isinstance(value, Decimal):
        amount = value
    else:
        if value is None:
            return ZERO
        text = _WHITESPACE.sub("", str(value)).replace(",", ".")
        if not text:
            return ZERO
        try:
            amount = Decimal(text)
        except InvalidOperation:
            return ZERO
    if not amount.is_finite():
        return ZERO
    if clamp and amount < ZERO:
        return ZERO
    return amount


def parse_optional_amount(value: Any) -> Decimal | None:
    """Like :func:`parse_amount` but keep blank input as ``None``."""

    if value is None or (isinstance(value, str) and value.strip() == ""):
        return None
    return parse_amount(value)


def round2(value: Any) -> Decimal:
    """Round to the cent, half-up."""

    return parse_amount(value, clamp=False).quantize(CENT, rounding=ROUND_HALF_UP)


def sum_amounts(values: Iterable[Any]) -> Decimal:
    return sum((parse_amount(value, clamp=False) for value in values), start=ZERO)


__all__ = [
    "CENT",
    "TWELVE",
    "ZERO",
    "parse_amount",
    "parse_optional_amount",
    "round2",
    "sum_amounts",
]
