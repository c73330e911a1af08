"""JSON export/import of the plan and tabular exports of the derived ledger."""

from __future__ import annotations

import io
import json
import zipfile
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Sequence

import pandas as pd

from calc import DerivedLedger
from calc.energy import EnergyRow
from calc.plan_constants import LEDGER_COLUMNS
from localization import option_label
from models import SCHEMA_VERSION, BudgetLine, Plan, ValidationError
from models.schedule import schedule_month

from .storage import plan_from_document
from .validators import Finding

UploadedFile = Any

EXPORT_VERSION = f"majanduskava-v{SCHEMA_VERSION}"


def export_plan_document(plan: Plan, *, exported_at: datetime | None = None) -> Dict[str, Any]:
    stamp = (exported_at or datetime.now()).isoformat(timespec="seconds")
    return {"exported_at": stamp, "version": EXPORT_VERSION, "plan": plan.model_dump(mode="json")}


def export_plan_json(plan: Plan, *, exported_at: datetime | None = None) -> bytes:
    """Serialize the whole plan with an export timestamp and version tag."""

    document = export_plan_document(plan, exported_at=exported_at)
    return json.dumps(document, ensure_ascii=False, indent=2).encode("utf-8")


def _format_validation(prefix: str, exc: ValidationError) -> str:
    messages = []
    for detail in exc.errors():
        loc = detail.get("loc", ())
        location = " → ".join(str(part) for part in loc) if loc else ""
        msg = detail.get("msg", "Vigane väärtus.")
        if location:
            messages.append(f"{prefix}: {location}: {msg}")
        else:
            messages.append(f"{prefix}: {msg}")
    return "\n".join(messages) if messages else f"{prefix}: {exc}"


def import_plan_json(content: bytes | str) -> tuple[Plan | None, list[str]]:
    """Parse an exported file (or a bare plan document) back into a plan.

    Returns ``(None, warnings)`` when the file cannot be used.
    """

    try:
        text = content.decode("utf-8-sig") if isinstance(content, bytes) else content
        document = json.loads(text)
    except (UnicodeDecodeError, json.JSONDecodeError):
        return None, ["Fail ei ole loetav JSON."]

    if isinstance(document, Mapping) and isinstance(document.get("plan"), Mapping):
        document = document["plan"]
    try:
        return plan_from_document(document), []
    except ValidationError as exc:
        return None, [_format_validation("Majanduskava", exc)]


def import_uploaded_plan(file: UploadedFile | None) -> tuple[Plan | None, list[str]]:
    if file is None:
        return None, ["Faili ei valitud."]
    return import_plan_json(file.getvalue())


def _money(value: Decimal) -> float:
    return float(value)


def _lines_to_dataframe(lines: Sequence[BudgetLine]) -> pd.DataFrame:
    rows = [
        {
            LEDGER_COLUMNS["label"]: line.label,
            LEDGER_COLUMNS["group"]: line.group,
            LEDGER_COLUMNS["prev"]: _money(line.prev),
            LEDGER_COLUMNS["plan"]: _money(line.plan),
            LEDGER_COLUMNS["delta"]: _money(line.plan - line.prev),
        }
        for line in lines
    ]
    columns = [LEDGER_COLUMNS[key] for key in ("label", "group", "prev", "plan", "delta")]
    return pd.DataFrame(rows, columns=columns)


def summary_frame(ledger: DerivedLedger) -> pd.DataFrame:
    rows = [
        ("Tulud", ledger.income),
        ("Majandamiskulud", ledger.running),
        ("Investeeringud", ledger.investments),
        ("Tulem", ledger.result),
    ]
    return pd.DataFrame(
        [
            {
                LEDGER_COLUMNS["label"]: label,
                LEDGER_COLUMNS["prev"]: _money(totals.prior_year),
                LEDGER_COLUMNS["plan"]: _money(totals.planned),
                LEDGER_COLUMNS["delta"]: _money(totals.delta),
            }
            for label, totals in rows
        ]
    )


def planned_works_frame(plan: Plan) -> pd.DataFrame:
    rows = [
        {
            "Töö": work.description,
            "Liik": option_label("work_category", work.category),
            "Periood": work.period,
            "Kuu": schedule_month(work.schedule),
            "Maksumus (€)": _money(work.cost),
            "Rahastus": option_label("funding", work.funding),
        }
        for work in plan.planned_works
    ]
    return pd.DataFrame(rows, columns=["Töö", "Liik", "Periood", "Kuu", "Maksumus (€)", "Rahastus"])


def payments_frame(ledger: DerivedLedger) -> pd.DataFrame:
    columns = ["Hooneosa", "Omanik", "Osaleb jaotuses"] + [
        LEDGER_COLUMNS[key]
        for key in ("share_percent", "year_total", "month_total", "month_running", "month_investment")
    ]
    rows = [
        {
            "Hooneosa": payment.label,
            "Omanik": payment.owner,
            "Osaleb jaotuses": payment.included,
            LEDGER_COLUMNS["share_percent"]: float(payment.share_percent),
            LEDGER_COLUMNS["year_total"]: _money(payment.year_total),
            LEDGER_COLUMNS["month_total"]: _money(payment.month_total),
            LEDGER_COLUMNS["month_running"]: _money(payment.month_running),
            LEDGER_COLUMNS["month_investment"]: _money(payment.month_investment),
        }
        for payment in ledger.allocation.payments
    ]
    return pd.DataFrame(rows, columns=columns)


def funds_frame(ledger: DerivedLedger) -> pd.DataFrame:
    funds = ledger.funds
    entries = [
        ("Aasta planeeritud kulud", funds.annual_planned_cost),
        ("Reservi miinimum (1/12)", funds.reserve_minimum),
        ("Reservkapital perioodi lõpus", funds.reserve_end),
        ("Remondifondi kasutus", funds.repair_outflow),
        ("Remondifond perioodi lõpus", funds.repair_end),
    ]
    if funds.reserve_target_gap is not None:
        entries.append(("Reservi sihini puudu", funds.reserve_target_gap))
    if funds.repair_target_gap is not None:
        entries.append(("Remondifondi sihini puudu", funds.repair_target_gap))
    return pd.DataFrame(
        [{"Näitaja": label, "Summa (€)": _money(value)} for label, value in entries],
        columns=["Näitaja", "Summa (€)"],
    )


def _energy_rows_to_dataframe(rows: Iterable[EnergyRow]) -> pd.DataFrame:
    columns = ["Rida", "Ühik", "Kogus", "Hind (€)", "Maksumus (€)", "Eelmine aasta (€)", "Muutus (€)"]
    return pd.DataFrame(
        [
            {
                "Rida": row.label,
                "Ühik": row.unit,
                "Kogus": float(row.quantity),
                "Hind (€)": float(row.price),
                "Maksumus (€)": _money(row.cost),
                "Eelmine aasta (€)": _money(row.prior_cost),
                "Muutus (€)": _money(row.change),
            }
            for row in rows
        ],
        columns=columns,
    )


def cash_flow_frame(ledger: DerivedLedger) -> pd.DataFrame:
    keys = ("month", "income", "expense", "net", "cumulative_balance")
    rows = [
        {
            LEDGER_COLUMNS["month"]: row.label,
            LEDGER_COLUMNS["income"]: _money(row.income),
            LEDGER_COLUMNS["expense"]: _money(row.expense),
            LEDGER_COLUMNS["net"]: _money(row.net),
            LEDGER_COLUMNS["cumulative_balance"]: _money(row.cumulative_balance),
        }
        for row in ledger.cash_flow
    ]
    return pd.DataFrame(rows, columns=[LEDGER_COLUMNS[key] for key in keys])


def findings_frame(findings: Iterable[Finding]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {"Kood": finding.code, "Tase": option_label("severity", finding.severity.value), "Teade": finding.message}
            for finding in findings
        ],
        columns=["Kood", "Tase", "Teade"],
    )


def prepare_ledger_export_payload(
    plan: Plan,
    ledger: DerivedLedger,
    findings: List[Finding],
) -> Dict[str, pd.DataFrame]:
    """Build a mapping of sheet name to DataFrame for export."""

    meta_entries = {
        "generated_at": datetime.now().isoformat(timespec="seconds"),
        "version": EXPORT_VERSION,
        "name": plan.meta.name,
        "reg_code": plan.meta.reg_code,
        "address": plan.meta.address,
        "year": plan.meta.year,
        "status": plan.confirmation.status,
    }
    metadata_frame = pd.DataFrame(list(meta_entries.items()), columns=["key", "value"])

    return {
        "metadata": metadata_frame,
        "summary": summary_frame(ledger),
        "income": _lines_to_dataframe(plan.budget.income),
        "running": _lines_to_dataframe(plan.budget.running),
        "investments": _lines_to_dataframe(ledger.investment_lines),
        "planned_works": planned_works_frame(plan),
        "payments": payments_frame(ledger),
        "funds": funds_frame(ledger),
        "energy_heat": _energy_rows_to_dataframe(ledger.energy.heat_rows),
        "energy_other": _energy_rows_to_dataframe(ledger.energy.other_rows),
        "cash_flow": cash_flow_frame(ledger),
        "findings": findings_frame(findings),
    }


def export_payload_to_excel(payload: Mapping[str, pd.DataFrame]) -> bytes:
    """Serialize the prepared payload to an Excel workbook."""

    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        for sheet_name, frame in payload.items():
            safe_name = sheet_name[:31]
            frame.to_excel(writer, sheet_name=safe_name, index=False)
    buffer.seek(0)
    return buffer.getvalue()


def export_payload_to_csv_zip(payload: Mapping[str, pd.DataFrame]) -> bytes:
    """Serialize the prepared payload to a ZIP archive of CSV files."""

    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for sheet_name, frame in payload.items():
            csv_text = frame.to_csv(index=False)
            archive.writestr(f"{sheet_name}.csv", csv_text.encode("utf-8-sig"))
    buffer.seek(0)
    return buffer.getvalue()


__all__ = [
    "EXPORT_VERSION",
    "cash_flow_frame",
    "export_payload_to_csv_zip",
    "export_payload_to_excel",
    "export_plan_document",
    "export_plan_json",
    "findings_frame",
    "funds_frame",
    "import_plan_json",
    "import_uploaded_plan",
    "payments_frame",
    "planned_works_frame",
    "prepare_ledger_export_payload",
    "summary_frame",
]
