from decimal import Decimal

from calc import derive_ledger
from core.validators import (
    Severity,
    blocking_findings,
    collect_findings,
    collect_validation_summary,
    findings_for_step,
    step_has_blocking_errors,
    warning_findings,
)
from core.wizard import (
    STEP_KEYS,
    blocked_steps,
    can_advance,
    can_open,
    clamp_step,
    next_step,
    previous_step,
    wizard_steps,
)
from models import BudgetLine, Unit


def _codes(findings):
    return [finding.code for finding in findings]


class TestFindings:
    def test_complete_plan_has_no_findings(self, empty_plan):
        assert collect_findings(empty_plan) == []

    def test_default_plan_is_blocked_on_identity_and_payments(self, default_plan):
        findings = collect_findings(default_plan)

        assert _codes(blocking_findings(findings)) == [
            "meta_name",
            "meta_reg_code",
            "meta_address",
            "meta_meeting_date",
            "allocation_basis",
        ]
        assert step_has_blocking_errors(findings, "pass")
        assert step_has_blocking_errors(findings, "payments")
        assert not step_has_blocking_errors(findings, "budget")

    def test_allocation_message_names_the_basis(self, empty_plan):
        empty_plan.units = [Unit(label="A", area="60", include_in_allocation=False)]

        (finding,) = collect_findings(empty_plan)

        assert finding.code == "allocation_basis"
        assert finding.severity is Severity.BLOCKING
        assert finding.step == "payments"
        assert "pindala" in finding.message

    def test_reserve_shortfall_is_a_warning(self, empty_plan):
        empty_plan.budget.running.append(BudgetLine(id="x", label="Haldus", plan="1200"))
        empty_plan.budget.income.append(BudgetLine(id="y", label="Ettemaksed", plan="1200"))

        findings = collect_findings(empty_plan)

        assert _codes(findings) == ["reserve_shortfall"]
        assert findings[0].severity is Severity.WARNING
        assert "100,00" in findings[0].message

    def test_negative_result_and_cash_months(self, empty_plan):
        empty_plan.funds.reserve_start = Decimal("1000")
        empty_plan.budget.running.append(BudgetLine(id="x", label="Haldus", plan="1200"))

        findings = collect_findings(empty_plan)

        assert _codes(findings) == ["negative_result", "negative_cash_month"]
        assert "Jaanuar" in findings[1].message
        assert "Detsember" in findings[1].message
        assert findings_for_step(findings, "cashflow") == [findings[1]]

    def test_bylaw_deviation_warning(self, empty_plan):
        empty_plan.allocation.bylaw_deviation = True

        assert _codes(warning_findings(collect_findings(empty_plan))) == ["bylaw_deviation"]

    def test_approved_plan_needs_protocol(self, empty_plan):
        empty_plan.confirmation.status = "approved"
        assert _codes(collect_findings(empty_plan)) == ["missing_protocol"]

        empty_plan.confirmation.protocol_no = "3"
        empty_plan.confirmation.meeting_date = "12.03.2026"
        assert collect_findings(empty_plan) == []

    def test_draft_plan_needs_no_protocol(self, empty_plan):
        empty_plan.confirmation.status = "submitted"
        assert collect_findings(empty_plan) == []

    def test_precomputed_ledger_is_used(self, empty_plan):
        ledger = derive_ledger(empty_plan)
        assert collect_findings(empty_plan, ledger) == collect_findings(empty_plan)

    def test_summary_lists_every_message(self, default_plan):
        findings = collect_findings(default_plan)
        summary = collect_validation_summary(findings)

        assert summary.count("\n") == len(findings) - 1
        assert all(finding.message in summary for finding in findings)


class TestWizard:
    def test_steps_are_titled(self):
        steps = wizard_steps()

        assert [step.key for step in steps] == list(STEP_KEYS)
        assert steps[0].title == "Maja pass"
        assert steps[-1].legal_notes

    def test_blocked_step_cannot_advance(self, default_plan):
        findings = collect_findings(default_plan)

        assert not can_advance(0, findings)
        assert next_step(0, findings) == 0
        assert can_advance(1, findings)
        assert next_step(1, findings) == 2
        assert blocked_steps(findings) == ["pass", "payments"]

    def test_direct_jump_needs_unblocked_earlier_steps(self, default_plan):
        findings = collect_findings(default_plan)

        assert can_open(0, findings)
        assert not can_open(2, findings)

    def test_last_step_and_bounds(self, sample_plan):
        findings = collect_findings(sample_plan)
        last = len(STEP_KEYS) - 1

        assert can_advance(0, findings)
        assert not can_advance(last, findings)
        assert clamp_step(99) == last
        assert clamp_step(-4) == 0
        assert previous_step(0) == 0
        assert previous_step(3) == 2
