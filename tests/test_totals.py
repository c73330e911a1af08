from decimal import Decimal

from calc import budget_result, derive_ledger, planned_works_total, resolve_investment_lines, summarize_lines
from models import PLANNED_WORKS_LINE_ID, BudgetLine, PlannedWork


def _line(line_id, plan="0", prev="0"):
    return BudgetLine(id=line_id, label=line_id, prev=prev, plan=plan)


def test_income_total_sums_planned_amounts():
    totals = summarize_lines([_line("a", plan="100.00"), _line("b", plan="50.50")])

    assert totals.planned == Decimal("150.50")


def test_totals_carry_prior_year_and_delta():
    totals = summarize_lines([_line("a", plan="150,5", prev="100"), _line("b", plan="abc", prev="20")])

    assert totals.prior_year == Decimal("120.00")
    assert totals.planned == Decimal("150.50")
    assert totals.delta == Decimal("30.50")


def test_planned_works_total():
    works = [PlannedWork(cost="500"), PlannedWork(cost="1 200,40"), PlannedWork(cost="-3")]

    assert planned_works_total(works) == Decimal("1700.40")


def test_planned_works_line_is_overridden():
    lines = [_line(PLANNED_WORKS_LINE_ID, plan="999"), _line("loan_principal", plan="300")]

    resolved = resolve_investment_lines(lines, Decimal("1700.40"))

    assert resolved[0].plan == Decimal("1700.40")
    assert resolved[1].plan == Decimal("300")
    assert lines[0].plan == Decimal("999")


def test_budget_result_subtracts_costs():
    income = summarize_lines([_line("a", plan="1000", prev="900")])
    running = summarize_lines([_line("b", plan="700", prev="600")])
    investments = summarize_lines([_line("c", plan="400", prev="100")])

    result = budget_result(income, running, investments)

    assert result.planned == Decimal("-100.00")
    assert result.prior_year == Decimal("200.00")
    assert result.delta == Decimal("-300.00")


def test_ledger_uses_works_total_for_investments(empty_plan):
    for line in empty_plan.budget.invest:
        if line.id == PLANNED_WORKS_LINE_ID:
            line.plan = Decimal("999")
    empty_plan.planned_works = [PlannedWork(cost="500", period="sügisel")]

    ledger = derive_ledger(empty_plan)

    assert ledger.planned_works_total == Decimal("500.00")
    assert ledger.investments.planned == Decimal("500.00")
    assert ledger.annual_planned_cost == Decimal("500.00")
