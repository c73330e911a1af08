"""Budget totals: income, running expenses and investments."""
from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Iterable, List, Sequence

from models import PLANNED_WORKS_LINE_ID, BudgetLine, PlannedWork
from models.numbers import ZERO, parse_amount, round2


@dataclass(frozen=True)
class LineTotals:
    """Prior-year and planned totals of one budget section."""

    prior_year: Decimal
    planned: Decimal
    delta: Decimal

    @classmethod
    def zero(cls) -> "LineTotals":
        return cls(prior_year=ZERO, planned=ZERO, delta=ZERO)


def summarize_lines(lines: Iterable[BudgetLine]) -> LineTotals:
    prior = ZERO
    planned = ZERO
    for line in lines:
        prior += parse_amount(line.prev)
        planned += parse_amount(line.plan)
    prior_total = round2(prior)
    planned_total = round2(planned)
    return LineTotals(prior_year=prior_total, planned=planned_total, delta=round2(planned_total - prior_total))


def planned_works_total(works: Iterable[PlannedWork]) -> Decimal:
    return round2(sum((parse_amount(work.cost) for work in works), start=ZERO))


def resolve_investment_lines(lines: Sequence[BudgetLine], works_total: Decimal) -> List[BudgetLine]:
    """Return investment lines with the planned-works row forced to *works_total*.

    Whatever was typed into that row's planned amount is ignored.
    """

    return [
        replace(line, plan=works_total) if line.id == PLANNED_WORKS_LINE_ID else line
        for line in lines
    ]


def budget_result(income: LineTotals, running: LineTotals, investments: LineTotals) -> LineTotals:
    """Income minus running costs minus investments, column by column."""

    prior = round2(income.prior_year - running.prior_year - investments.prior_year)
    planned = round2(income.planned - running.planned - investments.planned)
    return LineTotals(prior_year=prior, planned=planned, delta=round2(planned - prior))


__all__ = [
    "LineTotals",
    "budget_result",
    "planned_works_total",
    "resolve_investment_lines",
    "summarize_lines",
]
