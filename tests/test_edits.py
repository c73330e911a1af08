from decimal import Decimal

import pytest

from calc import derive_ledger
from core.edits import AddRow, RemoveRow, ReplaceRows, SetField, SetStatus, UpdateRow, apply_edit, apply_edits
from models import PLANNED_WORKS_LINE_ID, PlannedWork, Scheduled, ValidationError


def test_set_field_returns_new_plan(default_plan):
    updated = apply_edit(default_plan, SetField("meta.name", "KÜ Kase 7"))

    assert updated.meta.name == "KÜ Kase 7"
    assert default_plan.meta.name == ""


def test_amounts_are_coerced_on_edit(default_plan):
    updated = apply_edit(default_plan, SetField("funds.reserve_start", "1 000,50"))

    assert updated.funds.reserve_start == Decimal("1000.50")


def test_unknown_field_is_refused(default_plan):
    with pytest.raises(KeyError):
        apply_edit(default_plan, SetField("meta.fax", "1"))
    with pytest.raises(KeyError):
        apply_edit(default_plan, SetField("nothing.here", "1"))


def test_invalid_choice_is_refused(default_plan):
    with pytest.raises(ValidationError):
        apply_edit(default_plan, SetField("allocation.basis", "volume"))


def test_row_lifecycle(default_plan):
    plan = apply_edit(default_plan, AddRow("units", {"label": "Korter 3", "area": "55"}))
    assert [unit.label for unit in plan.units] == ["Korter 1", "Korter 2", "Korter 3"]
    new_id = plan.units[-1].id
    assert new_id

    plan = apply_edit(plan, UpdateRow("units", new_id, {"area": "60,5", "id": "ignored"}))
    assert plan.units[-1].area == Decimal("60.5")
    assert plan.units[-1].id == new_id

    plan = apply_edit(plan, RemoveRow("units", new_id))
    assert len(plan.units) == 2


def test_replace_rows_reparses_schedule(default_plan):
    plan = apply_edit(
        default_plan,
        ReplaceRows("planned_works", [{"description": "Fassaad", "period": "aprill", "cost": "100"}]),
    )

    assert len(plan.planned_works) == 1
    assert plan.planned_works[0].schedule == Scheduled(4)
    assert plan.planned_works[0].id


def test_replace_rows_needs_a_collection(default_plan):
    with pytest.raises(KeyError):
        apply_edit(default_plan, ReplaceRows("meta", []))


def test_nested_collections(default_plan):
    plan = apply_edit(default_plan, AddRow("budget.income", {"label": "Parkimine", "plan": "240"}))

    assert plan.budget.income[-1].plan == Decimal("240")


def test_any_status_transition_is_allowed(default_plan):
    plan = apply_edits(default_plan, [SetStatus("approved"), SetStatus("draft"), SetStatus("amended")])

    assert plan.confirmation.status == "amended"
    with pytest.raises(ValueError):
        apply_edit(plan, SetStatus("archived"))


def test_unsupported_edit(default_plan):
    with pytest.raises(TypeError):
        apply_edit(default_plan, object())


def test_removing_the_planned_works_line_keeps_works_in_the_budget(empty_plan):
    empty_plan.planned_works = [PlannedWork(description="Katus", cost="500", period="04.2026")]

    plan = apply_edit(empty_plan, RemoveRow("budget.invest", PLANNED_WORKS_LINE_ID))
    ledger = derive_ledger(plan)

    assert PLANNED_WORKS_LINE_ID in [line.id for line in plan.budget.invest]
    assert ledger.investments.planned == Decimal("500.00")
    assert ledger.funds.reserve_minimum == Decimal("41.67")
    assert sum(payment.year_total for payment in ledger.allocation.payments) == Decimal("500.00")


def test_replacing_investment_rows_keeps_the_planned_works_line(empty_plan):
    empty_plan.planned_works = [PlannedWork(cost="300", period="05.2026")]

    plan = apply_edit(empty_plan, ReplaceRows("budget.invest", [{"id": "loan_principal", "label": "Laen", "plan": "120"}]))

    assert [line.id for line in plan.budget.invest] == [PLANNED_WORKS_LINE_ID, "loan_principal"]
    assert derive_ledger(plan).investments.planned == Decimal("420.00")
