"""Bundled sample association used for onboarding and demos."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List

from models import (
    PLANNED_WORKS_LINE_ID,
    Confirmation,
    Funds,
    Meta,
    Plan,
    PlannedWork,
    Unit,
    make_default_plan,
)
from models.plan import Building

SAMPLE_FISCAL_YEAR = 2026


@dataclass(frozen=True)
class SampleUnitSpec:
    label: str
    owner: str
    area: Decimal


def _as_decimal(value: int | float | str | Decimal) -> Decimal:
    return Decimal(str(value))


SAMPLE_UNITS: List[SampleUnitSpec] = [
    SampleUnitSpec("Korter 1", "Mari Maasikas", _as_decimal("54.2")),
    SampleUnitSpec("Korter 2", "Jaan Tamm", _as_decimal("38.6")),
    SampleUnitSpec("Korter 3", "Liis Kask", _as_decimal("54.2")),
    SampleUnitSpec("Korter 4", "Peeter Pärn", _as_decimal("38.6")),
    SampleUnitSpec("Korter 5", "Kadri Saar", _as_decimal("71.0")),
    SampleUnitSpec("Korter 6", "Andres Mets", _as_decimal("71.0")),
]

SAMPLE_INCOME: Dict[str, tuple[str, str]] = {
    "advances": ("21500", "23900"),
    "repair_fund": ("9000", "9600"),
    "reserve_fund": ("1800", "2100"),
    "rent": ("600", "600"),
}

SAMPLE_RUNNING: Dict[str, tuple[str, str]] = {
    "heat": ("11800", "12400"),
    "electric_common": ("950", "1020"),
    "water_sewer": ("310", "340"),
    "waste": ("1450", "1520"),
    "chimney": ("240", "260"),
    "fire_safety": ("180", "190"),
    "snow": ("620", "680"),
    "insurance": ("890", "960"),
    "manager": ("2400", "2520"),
    "accounting": ("1200", "1260"),
    "bank_fees": ("96", "96"),
    "other_running": ("150", "200"),
}

# Monthly heat consumption in MWh; the price is the district heating tariff.
SAMPLE_HEAT_MWH = ["22", "19", "16", "9", "3", "1", "1", "1", "3", "9", "15", "20"]
SAMPLE_HEAT_PRICE = _as_decimal("104.50")


def create_sample_plan() -> Plan:
    """Return a fully filled plan for a six-unit association."""

    plan = make_default_plan()
    plan.meta = Meta(
        name="Korteriühistu Pärna 5",
        reg_code="80123456",
        address="Pärna tn 5, Tartu",
        board="Mari Maasikas, juhatuse liige",
        year=SAMPLE_FISCAL_YEAR,
        period_start="01.01.2026",
        period_end="31.12.2026",
        meeting_date="12.03.2026",
    )
    plan.building = Building(apt_count=len(SAMPLE_UNITS), total_area=sum(u.area for u in SAMPLE_UNITS), build_year="1968", floors="3")
    plan.planned_works = [
        PlannedWork(description="Trepikoja värvimine", category="remont", period="04.2026–05.2026", cost="4200", funding="remondifond"),
        PlannedWork(description="Katuse ülevaatus ja parandus", category="hooldus", period="august", cost="1800", funding="remondifond"),
        PlannedWork(description="Küttesüsteemi tasakaalustamine", category="uuendus", period="sügisel", cost="2500", funding="reserv"),
    ]
    for line in plan.budget.income:
        if line.id in SAMPLE_INCOME:
            line.prev, line.plan = (_as_decimal(value) for value in SAMPLE_INCOME[line.id])
    for line in plan.budget.running:
        if line.id in SAMPLE_RUNNING:
            line.prev, line.plan = (_as_decimal(value) for value in SAMPLE_RUNNING[line.id])
    for line in plan.budget.invest:
        if line.id == PLANNED_WORKS_LINE_ID:
            line.prev = _as_decimal("6100")
    plan.units = [Unit(label=spec.label, owner=spec.owner, area=spec.area) for spec in SAMPLE_UNITS]
    plan.allocation.basis = "area"
    plan.funds = Funds(
        reserve_start="2600",
        reserve_in="2100",
        reserve_out="500",
        repair_start="11400",
        repair_in="9600",
        repair_target="15000",
    )
    for row, quantity in zip(plan.energy.heat_months, SAMPLE_HEAT_MWH):
        row.qty_mwh = _as_decimal(quantity)
        row.price_per_mwh = SAMPLE_HEAT_PRICE
    plan.confirmation = Confirmation(status="draft", meeting_date="12.03.2026", meeting_place="Pärna tn 5 keldrisaal")
    # Dumping and rebuilding runs every value through the model coercion.
    return Plan.from_dict(plan.model_dump())


__all__ = ["SAMPLE_FISCAL_YEAR", "SAMPLE_UNITS", "create_sample_plan"]
