"""The derived ledger: every computed figure of a plan in one snapshot."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, getcontext
from typing import List

from models import BudgetLine, Plan

from .allocation import Allocation, allocate
from .cashflow import CashFlowRow, project_cash_flow
from .energy import EnergyForecast, forecast_energy
from .funds import FundsSummary, derive_funds
from .totals import LineTotals, budget_result, planned_works_total, resolve_investment_lines, summarize_lines

getcontext().prec = 28


@dataclass(frozen=True)
class DerivedLedger:
    """Totals, allocation, funds, energy and cash flow derived from a plan."""

    planned_works_total: Decimal
    income: LineTotals
    running: LineTotals
    investments: LineTotals
    investment_lines: List[BudgetLine]
    result: LineTotals
    allocation: Allocation
    funds: FundsSummary
    energy: EnergyForecast
    cash_flow: List[CashFlowRow]

    @property
    def annual_planned_cost(self) -> Decimal:
        return self.funds.annual_planned_cost


def derive_ledger(plan: Plan) -> DerivedLedger:
    """Recompute everything from *plan*. Pure and cheap enough for every edit."""

    works_total = planned_works_total(plan.planned_works)
    investment_lines = resolve_investment_lines(plan.budget.invest, works_total)

    income = summarize_lines(plan.budget.income)
    running = summarize_lines(plan.budget.running)
    investments = summarize_lines(investment_lines)
    energy = forecast_energy(plan.energy)

    return DerivedLedger(
        planned_works_total=works_total,
        income=income,
        running=running,
        investments=investments,
        investment_lines=investment_lines,
        result=budget_result(income, running, investments),
        allocation=allocate(plan.units, plan.allocation.basis, running.planned, investments.planned),
        funds=derive_funds(plan.funds, running.planned, investments.planned, works_total),
        energy=energy,
        cash_flow=project_cash_flow(
            income.planned,
            plan.budget.running,
            investment_lines,
            plan.planned_works,
            energy.combined.cost,
            plan.cashflow,
        ),
    )


__all__ = ["DerivedLedger", "derive_ledger"]
