"""Energy forecast: heating months, other utilities and monthly weights."""
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Sequence

from models import Energy
from models.numbers import ZERO, parse_amount, parse_optional_amount, round2

from .plan_constants import DEFAULT_ENERGY_PROFILE


@dataclass(frozen=True)
class EnergyRow:
    row_id: str
    label: str
    unit: str
    quantity: Decimal
    price: Decimal
    prior_cost: Decimal
    cost: Decimal
    change: Decimal


@dataclass(frozen=True)
class EnergyTotals:
    cost: Decimal
    prior_cost: Decimal
    change: Decimal


@dataclass(frozen=True)
class EnergyForecast:
    heat_rows: List[EnergyRow] = field(default_factory=list)
    other_rows: List[EnergyRow] = field(default_factory=list)
    heat: EnergyTotals = EnergyTotals(ZERO, ZERO, ZERO)
    other: EnergyTotals = EnergyTotals(ZERO, ZERO, ZERO)
    combined: EnergyTotals = EnergyTotals(ZERO, ZERO, ZERO)


def energy_row(row_id: str, label: str, unit: str, quantity: object, price: object, prior_cost: object) -> EnergyRow:
    quantity_value = parse_amount(quantity)
    price_value = parse_amount(price)
    prior_value = parse_amount(prior_cost)
    cost = round2(quantity_value * price_value)
    return EnergyRow(
        row_id=row_id,
        label=label,
        unit=unit,
        quantity=quantity_value,
        price=price_value,
        prior_cost=prior_value,
        cost=cost,
        change=round2(cost - prior_value),
    )


def _totals(rows: Sequence[EnergyRow]) -> EnergyTotals:
    cost = round2(sum((row.cost for row in rows), start=ZERO))
    prior = round2(sum((row.prior_cost for row in rows), start=ZERO))
    return EnergyTotals(cost=cost, prior_cost=prior, change=round2(cost - prior))


def forecast_energy(energy: Energy) -> EnergyForecast:
    heat_rows = [
        energy_row(row.id, row.month, "MWh", row.qty_mwh, row.price_per_mwh, row.prev_cost)
        for row in energy.heat_months
    ]
    other_rows = [
        energy_row(row.id, row.label, row.unit, row.qty, row.price, row.prev_cost)
        for row in energy.other
    ]
    heat = _totals(heat_rows)
    other = _totals(other_rows)
    combined_cost = round2(heat.cost + other.cost)
    combined_prior = round2(heat.prior_cost + other.prior_cost)
    return EnergyForecast(
        heat_rows=heat_rows,
        other_rows=other_rows,
        heat=heat,
        other=other,
        combined=EnergyTotals(combined_cost, combined_prior, round2(combined_cost - combined_prior)),
    )


def _normalize(values: Sequence[Decimal]) -> List[Decimal]:
    total = sum(values, start=ZERO)
    return [value / total for value in values]


def monthly_energy_weights(weights: Sequence[object] | None = None) -> List[Decimal]:
    """Return twelve weights summing to 1.

    User weights are renormalized. When every weight is blank, or they do not
    add up to a positive number, the default seasonal profile is used.
    """

    raw = list(weights or [])[:12]
    raw.extend([None] * (12 - len(raw)))
    parsed = [parse_optional_amount(value) for value in raw]
    if all(value is None for value in parsed):
        return _normalize(DEFAULT_ENERGY_PROFILE)
    values = [value if value is not None else ZERO for value in parsed]
    if sum(values, start=ZERO) <= ZERO:
        return _normalize(DEFAULT_ENERGY_PROFILE)
    return _normalize(values)


__all__ = [
    "EnergyForecast",
    "EnergyRow",
    "EnergyTotals",
    "energy_row",
    "forecast_energy",
    "monthly_energy_weights",
]
