from decimal import Decimal

from calc import allocate, basis_total, ownership_fraction
from formatting import format_percent
from models import Unit


def test_area_allocation_splits_annual_cost():
    units = [Unit(id="a", label="A", area="60"), Unit(id="b", label="B", area="40")]

    allocation = allocate(units, "area", Decimal("1000"), Decimal("200"))

    assert allocation.valid
    first, second = allocation.payments
    assert first.year_total == Decimal("720.00")
    assert second.year_total == Decimal("480.00")
    assert format_percent(first.share_percent) == "60,000%"
    assert format_percent(second.share_percent) == "40,000%"
    assert first.month_total == Decimal("60.00")
    assert first.month_running == Decimal("50.00")
    assert first.month_investment == Decimal("10.00")
    assert allocation.share_sum == Decimal("1")


def test_all_units_excluded_gives_no_payments():
    units = [
        Unit(id="a", label="A", area="60", include_in_allocation=False),
        Unit(id="b", label="B", area="40", include_in_allocation=False),
    ]

    allocation = allocate(units, "area", Decimal("1000"), Decimal("200"))

    assert not allocation.valid
    assert allocation.basis_total == 0
    assert allocation.payments == []


def test_excluded_unit_is_listed_with_zero_share():
    units = [
        Unit(id="a", label="A", area="60"),
        Unit(id="g", label="Üldruum", unit_type="üldruum", area="15", include_in_allocation=False),
    ]

    allocation = allocate(units, "area", Decimal("600"), Decimal("0"))

    assert [payment.unit_id for payment in allocation.payments] == ["a", "g"]
    assert allocation.payments[0].year_total == Decimal("600.00")
    assert allocation.payments[1].share == 0
    assert allocation.payments[1].year_total == Decimal("0.00")


def test_ownership_percent_and_fraction_are_equivalent():
    assert ownership_fraction("25") == Decimal("0.25")
    assert ownership_fraction("0.25") == Decimal("0.25")
    assert ownership_fraction("1") == Decimal("1")


def test_share_basis_reads_percentages():
    units = [Unit(id="a", label="A", ownership="25"), Unit(id="b", label="B", ownership="75")]

    allocation = allocate(units, "share", Decimal("1200"), Decimal("0"))

    assert basis_total(units, "share") == Decimal("1")
    assert [payment.year_total for payment in allocation.payments] == [Decimal("300.00"), Decimal("900.00")]


def test_tiny_basis_total_is_invalid():
    units = [Unit(id="a", label="A", area="0.00000001")]

    assert not allocate(units, "area", Decimal("100"), Decimal("0")).valid
