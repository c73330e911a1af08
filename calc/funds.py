"""Reserve capital and repair fund balances."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from models import Funds
from models.numbers import TWELVE, parse_amount, round2

from .plan_constants import RESERVE_TOLERANCE


@dataclass(frozen=True)
class FundsSummary:
    annual_planned_cost: Decimal
    reserve_minimum: Decimal
    reserve_end: Decimal
    repair_outflow: Decimal
    repair_end: Decimal
    reserve_shortfall: bool
    reserve_target_gap: Decimal | None = None
    repair_target_gap: Decimal | None = None


def reserve_minimum(annual_planned_cost: Decimal) -> Decimal:
    """One twelfth of the planned annual cost (KrtS § 48)."""

    return round2(annual_planned_cost / TWELVE)


def derive_funds(
    funds: Funds,
    running_planned: Decimal,
    investment_planned: Decimal,
    works_total: Decimal,
) -> FundsSummary:
    annual_cost = round2(running_planned + investment_planned)
    minimum = reserve_minimum(annual_cost)
    reserve_end = round2(
        parse_amount(funds.reserve_start) + parse_amount(funds.reserve_in) - parse_amount(funds.reserve_out)
    )
    repair_outflow = round2(works_total + parse_amount(funds.repair_out_other))
    repair_end = round2(parse_amount(funds.repair_start) + parse_amount(funds.repair_in) - repair_outflow)

    reserve_gap = None if funds.reserve_target is None else round2(funds.reserve_target - reserve_end)
    repair_gap = None if funds.repair_target is None else round2(funds.repair_target - repair_end)

    return FundsSummary(
        annual_planned_cost=annual_cost,
        reserve_minimum=minimum,
        reserve_end=reserve_end,
        repair_outflow=repair_outflow,
        repair_end=repair_end,
        reserve_shortfall=reserve_end + RESERVE_TOLERANCE < minimum,
        reserve_target_gap=reserve_gap,
        repair_target_gap=repair_gap,
    )


__all__ = ["FundsSummary", "derive_funds", "reserve_minimum"]
