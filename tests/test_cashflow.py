from decimal import Decimal

from calc import derive_ledger, income_weights, project_cash_flow, running_weights
from calc.cashflow import negative_months, scheduled_investments
from models import BudgetLine, CashFlowSettings, PlannedWork

TOLERANCE = Decimal("1e-20")
EVEN_ENERGY = CashFlowSettings(energy_weights=["1"] * 12)


def _line(line_id, plan, group=""):
    return BudgetLine(id=line_id, label=line_id, plan=plan, group=group)


def test_unscheduled_work_counts_in_total_but_not_in_months(empty_plan):
    empty_plan.planned_works = [PlannedWork(description="Katus", cost="500", period="sügisel")]

    ledger = derive_ledger(empty_plan)

    assert ledger.investments.planned == Decimal("500.00")
    assert all(row.expense == 0 for row in ledger.cash_flow)


def test_scheduled_work_lands_in_its_month(empty_plan):
    empty_plan.planned_works = [PlannedWork(description="Trepikoda", cost="500", period="04.2026")]

    rows = derive_ledger(empty_plan).cash_flow

    assert [row.expense for row in rows if row.expense] == [Decimal("500.00")]
    assert rows[3].month == 4
    assert rows[3].label == "Aprill"
    assert rows[3].expense == Decimal("500.00")


def test_scheduled_investments_groups_by_month():
    works = [PlannedWork(cost="100", period="mai"), PlannedWork(cost="50", period="05.2026"), PlannedWork(cost="70")]

    assert scheduled_investments(works) == {5: Decimal("150")}


def test_even_income_and_cumulative_balance():
    rows = project_cash_flow(Decimal("1200"), [], [], [], Decimal("0"), CashFlowSettings())

    assert len(rows) == 12
    assert all(row.income == Decimal("100.00") for row in rows)
    assert rows[0].cumulative_balance == Decimal("100.00")
    assert rows[-1].cumulative_balance == Decimal("1200.00")


def test_seasonal_income_peaks_in_winter():
    weights = income_weights("seasonal")
    rows = project_cash_flow(Decimal("1000"), [], [], [], Decimal("0"), CashFlowSettings(income_policy="seasonal"))

    assert sum(weights) == 1
    assert rows[0].income == Decimal("180.00")
    assert rows[3].income == Decimal("35.00")
    assert sum(row.income for row in rows) == Decimal("1000.00")


def test_winter_running_weights_preserve_total():
    weights = running_weights("winter")

    assert abs(sum(weights) - 1) < TOLERANCE
    assert weights[0] > weights[5]
    assert weights[10] == weights[0]


def test_energy_lines_are_replaced_by_forecast():
    running = [_line("heat", "5000", "Energia"), _line("waste", "1200", "Hooldus")]

    rows = project_cash_flow(Decimal("0"), running, [], [], Decimal("2400"), EVEN_ENERGY)

    assert all(row.expense == Decimal("300.00") for row in rows)


def test_energy_lines_are_used_without_forecast():
    running = [_line("heat", "5000", "Energia"), _line("waste", "1200", "Hooldus")]

    rows = project_cash_flow(Decimal("0"), running, [], [], Decimal("0"), EVEN_ENERGY)

    assert rows[0].expense == Decimal("516.67")


def test_other_investments_are_spread_evenly():
    investments = [_line("planned_works", "900"), _line("loan_principal", "1200")]

    rows = project_cash_flow(Decimal("0"), [], investments, [], Decimal("0"), CashFlowSettings())

    assert all(row.expense == Decimal("100.00") for row in rows)
    assert rows[-1].cumulative_balance == Decimal("-1200.00")


def test_negative_months_are_reported():
    rows = project_cash_flow(Decimal("0"), [_line("waste", "120")], [], [], Decimal("0"), CashFlowSettings())

    assert len(negative_months(rows)) == 12
    assert negative_months(project_cash_flow(Decimal("120"), [], [], [], Decimal("0"), CashFlowSettings())) == []
