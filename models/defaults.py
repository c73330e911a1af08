"""Default plan contents: building parts, budget rows and energy rows."""
from __future__ import annotations

from typing import List

from .plan import (
    ENERGY_GROUP,
    PLANNED_WORKS_LINE_ID,
    PLANNED_WORKS_LINE_LABEL,
    Budget,
    BudgetLine,
    ConditionItem,
    Energy,
    EnergyLine,
    HeatMonth,
    Plan,
    PlannedWork,
    Unit,
    new_id,
)

ESTONIAN_MONTHS: tuple[str, ...] = (
    "Jaanuar",
    "Veebruar",
    "Märts",
    "Aprill",
    "Mai",
    "Juuni",
    "Juuli",
    "August",
    "September",
    "Oktoober",
    "November",
    "Detsember",
)

DEFAULT_CONDITION: tuple[tuple[str, str], ...] = (
    ("roof", "Katus ja katusekate"),
    ("facade", "Välisseinad ja fassaad"),
    ("windows", "Aknad ja välisuksed"),
    ("foundation", "Vundament / kelder"),
    ("stair", "Trepikojad ja üldruumid"),
    ("heating", "Küttesüsteem (torustik/radiaatorid)"),
    ("hotwater", "Soe tarbevesi"),
    ("water", "Vesi ja kanalisatsioon"),
    ("electric", "Elektrisüsteem ja valgustus"),
    ("vent", "Ventilatsioon"),
    ("lift", "Lift (kui on)"),
    ("yard", "Territoorium ja haljastus"),
)

DEFAULT_INCOME: tuple[tuple[str, str], ...] = (
    ("advances", "Majandamiskulude ettemaksed korteriomanikelt (§ 40 lg 1)"),
    ("repair_fund", "Remondifond – laekumised korteriomanikelt (KrtS § 41 lg 1 p 4)"),
    ("reserve_fund", "Reservkapitali laekumised (KrtS § 48)"),
    ("rent", "Renditulud (ühisruumide üür vms)"),
    ("subsidy", "Toetused ja sihtfinantseerimine"),
    ("other_income", "Muud tulud"),
)

DEFAULT_RUNNING: tuple[tuple[str, str, str], ...] = (
    ("heat", "Soojusenergia (küttekulud)", ENERGY_GROUP),
    ("electric_common", "Elekter (üldruumid/õuevalgustus)", ENERGY_GROUP),
    ("water_sewer", "Vesi ja kanalisatsioon", "Vesi"),
    ("gas", "Gaas (kui kohaldub)", ENERGY_GROUP),
    ("waste", "Prügivedu ja jäätmekäitlus", "Hooldus"),
    ("chimney", "Korstnapühkimine / seadmete hooldus", "Hooldus"),
    ("lift_service", "Liftihooldus", "Hooldus"),
    ("fire_safety", "Tuleohutus (kustutid/signalisatsioon)", "Hooldus"),
    ("snow", "Lumekoristus ja heakord", "Hooldus"),
    ("landscape", "Haljastus ja territoorium", "Hooldus"),
    ("insurance", "Kindlustus (hoone/vastutus)", "Hooldus"),
    ("manager", "Valitseja/halduslepingu tasu", "Teenused"),
    ("accounting", "Raamatupidamisteenus", "Teenused"),
    ("bank_fees", "Pangakulud ja tehingutasud", "Teenused"),
    ("legal", "Juriidilised ja notariteenused", "Teenused"),
    ("other_running", "Muud jooksvad kulud", "Teenused"),
)

DEFAULT_INVEST: tuple[tuple[str, str], ...] = (
    (PLANNED_WORKS_LINE_ID, PLANNED_WORKS_LINE_LABEL),
    ("loan_principal", "Laenu põhiosa tagasimaksed"),
    ("loan_interest", "Laenu intressimaksed"),
    ("other_invest", "Muud investeeringud / erakorralised kulud"),
)

DEFAULT_OTHER_ENERGY: tuple[tuple[str, str, str], ...] = (
    ("elec", "Elekter (üldruumid)", "kWh"),
    ("water_cold", "Vesi (külm)", "m³"),
    ("water_hot", "Vesi (soe)", "m³"),
    ("sewer", "Kanalisatsioon", "m³"),
    ("gas", "Gaas (kui kohaldub)", "m³"),
)


def default_condition() -> List[ConditionItem]:
    return [ConditionItem(id=item_id, label=label) for item_id, label in DEFAULT_CONDITION]


def default_budget() -> Budget:
    return Budget(
        income=[BudgetLine(id=line_id, label=label) for line_id, label in DEFAULT_INCOME],
        running=[BudgetLine(id=line_id, label=label, group=group) for line_id, label, group in DEFAULT_RUNNING],
        invest=[BudgetLine(id=line_id, label=label) for line_id, label in DEFAULT_INVEST],
    )


def default_energy() -> Energy:
    return Energy(
        heat_months=[HeatMonth(id=new_id(), month=month) for month in ESTONIAN_MONTHS],
        other=[EnergyLine(id=line_id, label=label, unit=unit) for line_id, label, unit in DEFAULT_OTHER_ENERGY],
    )


def make_default_plan() -> Plan:
    """Return a fresh plan pre-filled with the standard rows."""

    return Plan(
        condition=default_condition(),
        planned_works=[
            PlannedWork(
                description="Näide: Trepikoja värvimine",
                category="remont",
                period="04.2026–05.2026",
                funding="remondifond",
            )
        ],
        budget=default_budget(),
        units=[Unit(label="Korter 1"), Unit(label="Korter 2")],
        energy=default_energy(),
    )


__all__ = [
    "DEFAULT_CONDITION",
    "DEFAULT_INCOME",
    "DEFAULT_INVEST",
    "DEFAULT_OTHER_ENERGY",
    "DEFAULT_RUNNING",
    "ESTONIAN_MONTHS",
    "default_budget",
    "default_condition",
    "default_energy",
    "make_default_plan",
]
