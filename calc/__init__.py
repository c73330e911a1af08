"""Calculation helpers deriving totals, allocation, funds and cash flow."""

from .allocation import Allocation, UnitPayment, allocate, basis_total, ownership_fraction
from .cashflow import CashFlowRow, income_weights, project_cash_flow, running_weights
from .energy import EnergyForecast, EnergyRow, forecast_energy, monthly_energy_weights
from .funds import FundsSummary, derive_funds, reserve_minimum
from .ledger import DerivedLedger, derive_ledger
from .plan_constants import BASIS_EPSILON, MONTH_LABELS, MONTHS
from .totals import LineTotals, budget_result, planned_works_total, resolve_investment_lines, summarize_lines

__all__ = [
    "Allocation",
    "BASIS_EPSILON",
    "CashFlowRow",
    "DerivedLedger",
    "EnergyForecast",
    "EnergyRow",
    "FundsSummary",
    "LineTotals",
    "MONTHS",
    "MONTH_LABELS",
    "UnitPayment",
    "allocate",
    "basis_total",
    "budget_result",
    "derive_funds",
    "derive_ledger",
    "forecast_energy",
    "income_weights",
    "monthly_energy_weights",
    "ownership_fraction",
    "planned_works_total",
    "project_cash_flow",
    "reserve_minimum",
    "resolve_investment_lines",
    "running_weights",
    "summarize_lines",
]
