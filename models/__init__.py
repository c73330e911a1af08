"""Plan data models, defaults and schema upgrades."""
from __future__ import annotations

from .defaults import ESTONIAN_MONTHS, make_default_plan
from .migrations import detect_version, upgrade_snapshot, upgrade_v1_to_v2
from .numbers import parse_amount, parse_optional_amount, round2
from .plan import (
    ALLOCATION_BASES,
    CONDITION_STATUSES,
    ENERGY_GROUP,
    FUNDING_SOURCES,
    INCOME_POLICIES,
    PLANNED_WORKS_LINE_ID,
    PLANNED_WORKS_LINE_LABEL,
    PLAN_STATUSES,
    RUNNING_POLICIES,
    SCHEMA_VERSION,
    UNIT_TYPES,
    WORK_CATEGORIES,
    AllocationConfig,
    Budget,
    BudgetLine,
    Building,
    CashFlowSettings,
    ConditionItem,
    Confirmation,
    Energy,
    EnergyLine,
    Funds,
    HeatMonth,
    Meta,
    Plan,
    PlannedWork,
    Unit,
    ValidationError,
    new_id,
)
from .schedule import UNSCHEDULED, Schedule, Scheduled, Unscheduled, parse_schedule

__all__ = [
    "ALLOCATION_BASES",
    "AllocationConfig",
    "Budget",
    "BudgetLine",
    "Building",
    "CONDITION_STATUSES",
    "CashFlowSettings",
    "ConditionItem",
    "Confirmation",
    "ENERGY_GROUP",
    "ESTONIAN_MONTHS",
    "Energy",
    "EnergyLine",
    "FUNDING_SOURCES",
    "Funds",
    "HeatMonth",
    "INCOME_POLICIES",
    "Meta",
    "PLANNED_WORKS_LINE_ID",
    "PLANNED_WORKS_LINE_LABEL",
    "PLAN_STATUSES",
    "Plan",
    "PlannedWork",
    "RUNNING_POLICIES",
    "SCHEMA_VERSION",
    "Schedule",
    "Scheduled",
    "UNIT_TYPES",
    "UNSCHEDULED",
    "Unit",
    "Unscheduled",
    "ValidationError",
    "WORK_CATEGORIES",
    "detect_version",
    "make_default_plan",
    "new_id",
    "parse_amount",
    "parse_optional_amount",
    "parse_schedule",
    "round2",
    "upgrade_snapshot",
    "upgrade_v1_to_v2",
]
