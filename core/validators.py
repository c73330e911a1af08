"""Blocking errors and warnings derived from a plan and its ledger."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List

from calc import DerivedLedger, derive_ledger
from calc.cashflow import negative_months
from formatting import format_euro
from localization import option_label, translate
from models import Plan


class Severity(str, Enum):
    BLOCKING = "blocking"
    WARNING = "warning"


@dataclass(frozen=True)
class Finding:
    """One classified fact: owning wizard step, severity and rendered message."""

    code: str
    severity: Severity
    step: str
    message: str

    @property
    def blocking(self) -> bool:
        return self.severity is Severity.BLOCKING


_REQUIRED_META = (
    ("name", "meta_name"),
    ("reg_code", "meta_reg_code"),
    ("address", "meta_address"),
    ("meeting_date", "meta_meeting_date"),
)

_CONFIRMED_STATUSES = ("approved", "amended")


def _blocking(code: str, step: str, **kwargs: object) -> Finding:
    return Finding(code, Severity.BLOCKING, step, translate(f"findings.{code}", **kwargs))


def _warning(code: str, step: str, **kwargs: object) -> Finding:
    return Finding(code, Severity.WARNING, step, translate(f"findings.{code}", **kwargs))


def collect_findings(plan: Plan, ledger: DerivedLedger | None = None) -> List[Finding]:
    """Classify every rule as blocking or warning, in wizard step order."""

    ledger = ledger or derive_ledger(plan)
    findings: List[Finding] = []

    for field_name, code in _REQUIRED_META:
        if not str(getattr(plan.meta, field_name)).strip():
            findings.append(_blocking(code, "pass"))

    if ledger.result.planned < 0:
        findings.append(_warning("negative_result", "budget", result=format_euro(ledger.result.planned)))

    if not ledger.allocation.valid:
        findings.append(
            _blocking("allocation_basis", "payments", basis=option_label("basis", plan.allocation.basis))
        )
    if plan.allocation.bylaw_deviation:
        findings.append(_warning("bylaw_deviation", "payments"))

    if ledger.funds.reserve_shortfall:
        findings.append(
            _warning(
                "reserve_shortfall",
                "funds",
                reserve_end=format_euro(ledger.funds.reserve_end),
                reserve_minimum=format_euro(ledger.funds.reserve_minimum),
            )
        )

    negative = negative_months(ledger.cash_flow)
    if negative:
        findings.append(
            _warning("negative_cash_month", "cashflow", months=", ".join(row.label for row in negative))
        )

    confirmation = plan.confirmation
    if confirmation.status in _CONFIRMED_STATUSES and not confirmation.has_protocol_reference:
        findings.append(
            _warning("missing_protocol", "confirmation", status=option_label("plan_status", confirmation.status))
        )

    return findings


def blocking_findings(findings: Iterable[Finding]) -> List[Finding]:
    return [finding for finding in findings if finding.blocking]


def warning_findings(findings: Iterable[Finding]) -> List[Finding]:
    return [finding for finding in findings if not finding.blocking]


def findings_for_step(findings: Iterable[Finding], step: str) -> List[Finding]:
    return [finding for finding in findings if finding.step == step]


def step_has_blocking_errors(findings: Iterable[Finding], step: str) -> bool:
    return any(finding.blocking for finding in findings_for_step(findings, step))


def collect_validation_summary(findings: Iterable[Finding]) -> str:
    """Join finding messages into a bullet-friendly string."""

    return "\n".join(f"- {finding.message}" for finding in findings)


__all__ = [
    "Finding",
    "Severity",
    "blocking_findings",
    "collect_findings",
    "collect_validation_summary",
    "findings_for_step",
    "step_has_blocking_errors",
    "warning_findings",
]
