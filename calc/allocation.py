"""Per-unit cost allocation by floor area or ownership share."""
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Sequence

from models import Unit
from models.numbers import TWELVE, ZERO, parse_amount, round2

from .plan_constants import BASIS_EPSILON

HUNDRED = Decimal("100")
ONE = Decimal("1")


@dataclass(frozen=True)
class UnitPayment:
    unit_id: str
    label: str
    owner: str
    included: bool
    basis_value: Decimal
    share: Decimal
    share_percent: Decimal
    year_total: Decimal
    month_total: Decimal
    month_running: Decimal
    month_investment: Decimal


@dataclass(frozen=True)
class Allocation:
    """Result of distributing running and investment costs across units."""

    basis: str
    basis_total: Decimal
    valid: bool
    payments: List[UnitPayment] = field(default_factory=list)

    @property
    def share_sum(self) -> Decimal:
        return sum((payment.share for payment in self.payments), start=ZERO)


def ownership_fraction(raw: object) -> Decimal:
    """Values up to 1 are fractions; larger values are percentages."""

    value = parse_amount(raw)
    return value / HUNDRED if value > ONE else value


def basis_value(unit: Unit, basis: str) -> Decimal:
    if not unit.include_in_allocation:
        return ZERO
    if basis == "area":
        return parse_amount(unit.area)
    return ownership_fraction(unit.ownership)


def basis_total(units: Sequence[Unit], basis: str) -> Decimal:
    return sum((basis_value(unit, basis) for unit in units), start=ZERO)


def allocate(
    units: Sequence[Unit],
    basis: str,
    running_total: Decimal,
    investment_total: Decimal,
) -> Allocation:
    """Split the annual planned cost over *units*.

    Every derived figure is rounded independently, except ``month_total``
    which is taken from the rounded ``year_total``. Shares are not
    renormalized, so cent-level drift across units is left as is.
    """

    total = basis_total(units, basis)
    if total <= BASIS_EPSILON:
        return Allocation(basis=basis, basis_total=total, valid=False)

    annual_cost = running_total + investment_total
    payments: List[UnitPayment] = []
    for unit in units:
        value = basis_value(unit, basis)
        share = value / total
        year_total = round2(annual_cost * share)
        payments.append(
            UnitPayment(
                unit_id=unit.id,
                label=unit.label,
                owner=unit.owner,
                included=unit.include_in_allocation,
                basis_value=value,
                share=share,
                share_percent=share * HUNDRED,
                year_total=year_total,
                month_total=round2(year_total / TWELVE),
                month_running=round2(running_total * share / TWELVE),
                month_investment=round2(investment_total * share / TWELVE),
            )
        )
    return Allocation(basis=basis, basis_total=total, valid=True, payments=payments)


__all__ = [
    "Allocation",
    "UnitPayment",
    "allocate",
    "basis_total",
    "basis_value",
    "ownership_fraction",
]
