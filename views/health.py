"""Step 2: building condition survey and planned works."""
from __future__ import annotations

import streamlit as st

from calc import DerivedLedger
from core.validators import Finding
from formatting import format_euro
from localization import option_label
from models import CONDITION_STATUSES, FUNDING_SOURCES, WORK_CATEGORIES, Plan
from models.schedule import schedule_month
from ui.widgets import render_findings, rows_editor, text_field


def _select_column(label: str, options, group: str):
    return st.column_config.SelectboxColumn(label, options=list(options), help=", ".join(option_label(group, o) for o in options))


def render_health_step(plan: Plan, ledger: DerivedLedger, findings: list[Finding]) -> None:
    st.markdown("#### Seisukord")
    rows_editor(
        "condition",
        [item.model_dump() for item in plan.condition],
        ["id", "label", "status", "last", "next", "notes"],
        {
            "label": st.column_config.TextColumn("Osa"),
            "status": _select_column("Seisukord", CONDITION_STATUSES, "condition_status"),
            "last": st.column_config.TextColumn("Viimane ülevaatus"),
            "next": st.column_config.TextColumn("Järgmine"),
            "notes": st.column_config.TextColumn("Märkused"),
        },
        dynamic=False,
        disabled=["label"],
    )

    st.markdown("#### Planeeritud tööd")
    st.caption("Periood võib olla kuu number, kuupäev (04.2026, 15.09.2026) või kuu nimi. Tundmatu periood jääb rahavoost välja.")
    rows_editor(
        "planned_works",
        [work.model_dump() for work in plan.planned_works],
        ["id", "description", "category", "period", "cost", "funding"],
        {
            "description": st.column_config.TextColumn("Töö"),
            "category": _select_column("Liik", WORK_CATEGORIES, "work_category"),
            "period": st.column_config.TextColumn("Periood"),
            "cost": st.column_config.TextColumn("Maksumus (€)"),
            "funding": _select_column("Rahastus", FUNDING_SOURCES, "funding"),
        },
    )
    unscheduled = [work.description or "-" for work in plan.planned_works if schedule_month(work.schedule) is None]
    cols = st.columns(2)
    cols[0].metric("Tööd kokku", format_euro(ledger.planned_works_total))
    if unscheduled:
        cols[1].caption("Kuuta tööd: " + ", ".join(unscheduled))

    text_field("Märkused töödele", "works_notes", plan.works_notes)
    render_findings(findings)
