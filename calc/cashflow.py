"""Twelve-month cash-flow projection."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List, Sequence

from models import ENERGY_GROUP, PLANNED_WORKS_LINE_ID, BudgetLine, CashFlowSettings, PlannedWork
from models.numbers import TWELVE, ZERO, parse_amount, round2
from models.schedule import schedule_month

from .energy import monthly_energy_weights
from .plan_constants import (
    MONTHS,
    MONTH_LABELS,
    NON_WINTER_MULTIPLIER,
    SEASONAL_INCOME_PEAK_MONTHS,
    SEASONAL_INCOME_PEAK_SHARE,
    WINTER_MONTHS,
    WINTER_MULTIPLIER,
)


@dataclass(frozen=True)
class CashFlowRow:
    month: int
    label: str
    income: Decimal
    expense: Decimal
    net: Decimal
    cumulative_balance: Decimal


def even_weights() -> List[Decimal]:
    return [Decimal("1") / TWELVE for _ in MONTHS]


def income_weights(policy: str) -> List[Decimal]:
    if policy != "seasonal":
        return even_weights()
    off_peak_count = Decimal(len(MONTHS) - len(SEASONAL_INCOME_PEAK_MONTHS))
    off_peak_share = (Decimal("1") - SEASONAL_INCOME_PEAK_SHARE * len(SEASONAL_INCOME_PEAK_MONTHS)) / off_peak_count
    return [
        SEASONAL_INCOME_PEAK_SHARE if month in SEASONAL_INCOME_PEAK_MONTHS else off_peak_share
        for month in MONTHS
    ]


def running_weights(policy: str) -> List[Decimal]:
    if policy != "winter":
        return even_weights()
    multipliers = [
        WINTER_MULTIPLIER if month in WINTER_MONTHS else NON_WINTER_MULTIPLIER for month in MONTHS
    ]
    total = sum(multipliers, start=ZERO)
    return [multiplier / total for multiplier in multipliers]


def scheduled_investments(works: Sequence[PlannedWork]) -> Dict[int, Decimal]:
    """Planned-work cost per calendar month; unscheduled works are left out."""

    buckets: Dict[int, Decimal] = {}
    for work in works:
        month = schedule_month(work.schedule)
        if month is None:
            continue
        buckets[month] = buckets.get(month, ZERO) + parse_amount(work.cost)
    return buckets


def _planned(lines: Sequence[BudgetLine]) -> Decimal:
    return sum((parse_amount(line.plan) for line in lines), start=ZERO)


def project_cash_flow(
    income_planned: Decimal,
    running_lines: Sequence[BudgetLine],
    investment_lines: Sequence[BudgetLine],
    works: Sequence[PlannedWork],
    energy_forecast_cost: Decimal,
    settings: CashFlowSettings,
) -> List[CashFlowRow]:
    """Project income, expense and a running balance month by month.

    Running lines in the energy group are replaced by the energy forecast,
    spread with the energy weights. When the forecast is empty the energy
    lines' own planned amount is spread the same way. The balance starts
    from zero and is not tied to the fund balances.
    """

    energy_lines = [line for line in running_lines if line.group == ENERGY_GROUP]
    other_running = [line for line in running_lines if line.group != ENERGY_GROUP]
    energy_annual = energy_forecast_cost if energy_forecast_cost > ZERO else _planned(energy_lines)
    running_annual = _planned(other_running)
    other_investments = _planned([line for line in investment_lines if line.id != PLANNED_WORKS_LINE_ID])

    income_split = income_weights(settings.income_policy)
    running_split = running_weights(settings.running_policy)
    energy_split = monthly_energy_weights(settings.energy_weights)
    works_by_month = scheduled_investments(works)

    rows: List[CashFlowRow] = []
    balance = ZERO
    for index, month in enumerate(MONTHS):
        income = round2(income_planned * income_split[index])
        expense = round2(
            running_annual * running_split[index]
            + energy_annual * energy_split[index]
            + other_investments / TWELVE
            + works_by_month.get(month, ZERO)
        )
        net = round2(income - expense)
        balance = round2(balance + net)
        rows.append(
            CashFlowRow(
                month=month,
                label=MONTH_LABELS[month],
                income=income,
                expense=expense,
                net=net,
                cumulative_balance=balance,
            )
        )
    return rows


def negative_months(rows: Sequence[CashFlowRow]) -> List[CashFlowRow]:
    return [row for row in rows if row.net < ZERO]


__all__ = [
    "CashFlowRow",
    "even_weights",
    "income_weights",
    "negative_months",
    "project_cash_flow",
    "running_weights",
    "scheduled_investments",
]
