"""Shared constants for plan calculations and reporting."""
from __future__ import annotations

from decimal import Decimal
from typing import Dict, Tuple

from models.defaults import ESTONIAN_MONTHS

MONTHS: Tuple[int, ...] = tuple(range(1, 13))

MONTH_LABELS: Dict[int, str] = {index: name for index, name in zip(MONTHS, ESTONIAN_MONTHS)}

# Allocation is undefined below this basis total.
BASIS_EPSILON = Decimal("1e-7")

RESERVE_TOLERANCE = Decimal("1e-9")

# Seasonal income: each peak month receives a fixed share, the rest split evenly.
SEASONAL_INCOME_PEAK_MONTHS: Tuple[int, ...] = (1, 2, 3, 12)
SEASONAL_INCOME_PEAK_SHARE = Decimal("0.18")

WINTER_MONTHS: Tuple[int, ...] = (1, 2, 3, 11, 12)
WINTER_MULTIPLIER = Decimal("1.1")
NON_WINTER_MULTIPLIER = Decimal("0.93")

# Relative heating-season profile, renormalized before use.
DEFAULT_ENERGY_PROFILE: Tuple[Decimal, ...] = (
    Decimal("0.16"),
    Decimal("0.14"),
    Decimal("0.12"),
    Decimal("0.08"),
    Decimal("0.05"),
    Decimal("0.03"),
    Decimal("0.03"),
    Decimal("0.03"),
    Decimal("0.05"),
    Decimal("0.08"),
    Decimal("0.10"),
    Decimal("0.13"),
)

# Column labels shared by the export tables and the print summary.
LEDGER_COLUMNS: Dict[str, str] = {
    "label": "Rida",
    "group": "Grupp",
    "prev": "Eelmine aasta (€)",
    "plan": "Plaan (€)",
    "delta": "Muutus (€)",
    "month": "Kuu",
    "income": "Tulud (€)",
    "expense": "Kulud (€)",
    "net": "Saldo (€)",
    "cumulative_balance": "Kumulatiivne saldo (€)",
    "share_percent": "Osa (%)",
    "year_total": "Aastas (€)",
    "month_total": "Kuus (€)",
    "month_running": "Kuus majandamiskulud (€)",
    "month_investment": "Kuus investeeringud (€)",
}


__all__ = [
    "BASIS_EPSILON",
    "DEFAULT_ENERGY_PROFILE",
    "LEDGER_COLUMNS",
    "MONTHS",
    "MONTH_LABELS",
    "NON_WINTER_MULTIPLIER",
    "RESERVE_TOLERANCE",
    "SEASONAL_INCOME_PEAK_MONTHS",
    "SEASONAL_INCOME_PEAK_SHARE",
    "WINTER_MONTHS",
    "WINTER_MULTIPLIER",
]
