"""Print summary of the plan and its PDF / Word renderings."""

from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Iterable, List

from docx import Document
from fpdf import FPDF
from fpdf.enums import XPos, YPos

from calc import DerivedLedger
from formatting import format_euro, format_percent
from localization import option_label, translate
from models import Plan

from .validators import Finding

# Characters outside latin-1 that the core PDF fonts cannot draw.
_PDF_REPLACEMENTS = str.maketrans(
    {
        "€": "EUR",
        "–": "-",
        "—": "-",
        "„": '"',
        "“": '"',
        "”": '"',
        "’": "'",
        "š": "s",
        "Š": "S",
        "ž": "z",
        "Ž": "Z",
        "🟢": "",
        "🟡": "",
        "🔴": "",
    }
)


@dataclass(frozen=True)
class SummaryLine:
    kind: str  # title | heading | text | bullet
    text: str


def _title(text: str) -> SummaryLine:
    return SummaryLine("title", text)


def _heading(text: str) -> SummaryLine:
    return SummaryLine("heading", text)


def _text(text: str) -> SummaryLine:
    return SummaryLine("text", text)


def _bullet(text: str) -> SummaryLine:
    return SummaryLine("bullet", text)


def build_summary_lines(plan: Plan, ledger: DerivedLedger, findings: Iterable[Finding]) -> List[SummaryLine]:
    """Lines of the printable plan. Every finding is repeated word for word."""

    meta = plan.meta
    period = " – ".join(part for part in (meta.period_start, meta.period_end) if part) or str(meta.year)
    lines: List[SummaryLine] = [
        _title(translate("print.title")),
        _text(f"{translate('print.association')}: {meta.name}"),
        _text(f"{translate('print.reg_code')}: {meta.reg_code}"),
        _text(f"{translate('print.address')}: {meta.address}"),
        _text(f"{translate('print.period')}: {period}"),
        _heading(translate("print.budget")),
        _bullet(f"{translate('print.income')}: {format_euro(ledger.income.planned)}"),
        _bullet(f"{translate('print.running')}: {format_euro(ledger.running.planned)}"),
        _bullet(f"{translate('print.investments')}: {format_euro(ledger.investments.planned)}"),
        _bullet(f"{translate('print.result')}: {format_euro(ledger.result.planned)}"),
    ]

    if plan.planned_works:
        lines.append(_heading(translate("print.works")))
        for work in plan.planned_works:
            lines.append(
                _bullet(
                    f"{work.description} ({option_label('work_category', work.category)}, {work.period or '-'}): "
                    f"{format_euro(work.cost)}, {option_label('funding', work.funding)}"
                )
            )

    lines.append(_heading(translate("print.payments")))
    for payment in ledger.allocation.payments:
        lines.append(
            _bullet(
                f"{payment.label}: {format_percent(payment.share_percent)}, "
                f"{format_euro(payment.year_total)} aastas, {format_euro(payment.month_total)} kuus"
            )
        )

    lines.extend(
        [
            _heading(translate("print.funds")),
            _bullet(f"{translate('print.reserve_end')}: {format_euro(ledger.funds.reserve_end)}"),
            _bullet(f"{translate('print.reserve_minimum')}: {format_euro(ledger.funds.reserve_minimum)}"),
            _bullet(f"{translate('print.repair_end')}: {format_euro(ledger.funds.repair_end)}"),
            _heading(translate("print.energy")),
            _bullet(f"{translate('steps.energy.title')}: {format_euro(ledger.energy.combined.cost)}"),
        ]
    )

    confirmation = plan.confirmation
    lines.extend(
        [
            _heading(translate("print.confirmation")),
            _bullet(f"{translate('print.status')}: {option_label('plan_status', confirmation.status)}"),
            _bullet(f"{translate('print.meeting')}: {confirmation.meeting_date} {confirmation.meeting_place}".strip()),
            _bullet(f"{translate('print.protocol')}: {confirmation.protocol_no}"),
        ]
    )

    findings = list(findings)
    if findings:
        lines.append(_heading(translate("print.findings")))
        lines.extend(_bullet(finding.message) for finding in findings)

    lines.append(_text(translate("print.legal_footer")))
    return lines


def pdf_safe(text: str) -> str:
    return text.translate(_PDF_REPLACEMENTS).encode("latin-1", "replace").decode("latin-1")


def export_summary_to_pdf(lines: Iterable[SummaryLine]) -> bytes:
    pdf = FPDF()
    pdf.add_page()
    for line in lines:
        if line.kind == "title":
            pdf.set_font("Helvetica", style="B", size=14)
            height = 10
        elif line.kind == "heading":
            pdf.set_font("Helvetica", style="B", size=12)
            height = 9
        else:
            pdf.set_font("Helvetica", size=10)
            height = 6
        text = f"- {line.text}" if line.kind == "bullet" else line.text
        pdf.multi_cell(0, height, pdf_safe(text), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    return bytes(pdf.output())


def export_summary_to_docx(lines: Iterable[SummaryLine]) -> bytes:
    doc = Document()
    for line in lines:
        if line.kind == "title":
            doc.add_heading(line.text, level=1)
        elif line.kind == "heading":
            doc.add_heading(line.text, level=2)
        elif line.kind == "bullet":
            para = doc.add_paragraph()
            para.style = "List Bullet"
            para.add_run(line.text)
        else:
            doc.add_paragraph(line.text)
    buffer = io.BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


__all__ = [
    "SummaryLine",
    "build_summary_lines",
    "export_summary_to_docx",
    "export_summary_to_pdf",
    "pdf_safe",
]
