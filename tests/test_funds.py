from decimal import Decimal

from calc import derive_funds, reserve_minimum
from models import Funds


def test_reserve_end_and_minimum():
    funds = Funds(reserve_start="1000", reserve_in="200", reserve_out="300")

    summary = derive_funds(funds, Decimal("7200"), Decimal("0"), Decimal("0"))

    assert summary.reserve_end == Decimal("900.00")
    assert summary.reserve_minimum == Decimal("600.00")
    assert summary.reserve_shortfall is False


def test_reserve_below_minimum_is_a_shortfall():
    funds = Funds(reserve_start="1000", reserve_in="200", reserve_out="800")

    summary = derive_funds(funds, Decimal("7200"), Decimal("0"), Decimal("0"))

    assert summary.reserve_end == Decimal("400.00")
    assert summary.reserve_shortfall is True


def test_reserve_exactly_at_minimum_is_enough():
    funds = Funds(reserve_start="600")

    assert derive_funds(funds, Decimal("7200"), Decimal("0"), Decimal("0")).reserve_shortfall is False


def test_repair_fund_pays_for_planned_works():
    funds = Funds(repair_start="1000", repair_in="500", repair_out_other="100", repair_target="1500")

    summary = derive_funds(funds, Decimal("0"), Decimal("300"), Decimal("300"))

    assert summary.repair_outflow == Decimal("400.00")
    assert summary.repair_end == Decimal("1100.00")
    assert summary.repair_target_gap == Decimal("400.00")
    assert summary.reserve_target_gap is None


def test_reserve_minimum_rounds_to_cents():
    assert reserve_minimum(Decimal("1000")) == Decimal("83.33")
