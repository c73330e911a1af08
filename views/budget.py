"""Step 3: income, running costs and investments."""
from __future__ import annotations

import pandas as pd
import streamlit as st

from calc import DerivedLedger, LineTotals
from core.validators import Finding
from formatting import format_delta, format_euro
from models import PLANNED_WORKS_LINE_ID, Plan
from ui.widgets import render_findings, row_amount_field, rows_editor

_LINE_COLUMNS = ["id", "label", "group", "prev", "plan"]


def _line_config(with_group: bool) -> dict:
    config = {
        "label": st.column_config.TextColumn("Rida"),
        "prev": st.column_config.TextColumn("Eelmine aasta (€)"),
        "plan": st.column_config.TextColumn("Plaan (€)"),
        "group": st.column_config.TextColumn("Grupp") if with_group else None,
    }
    return config


def _totals_caption(totals: LineTotals) -> str:
    return (
        f"Eelmine aasta {format_euro(totals.prior_year)} · Plaan {format_euro(totals.planned)} · "
        f"Muutus {format_delta(totals.delta)}"
    )


def render_budget_step(plan: Plan, ledger: DerivedLedger, findings: list[Finding]) -> None:
    st.markdown("#### A. Tulud (KrtS § 41 lg 1 p 2)")
    rows_editor(
        "budget.income", [line.model_dump() for line in plan.budget.income], _LINE_COLUMNS, _line_config(False), dynamic=False
    )
    st.caption(_totals_caption(ledger.income))

    st.markdown("#### B. Majandamiskulud")
    rows_editor(
        "budget.running", [line.model_dump() for line in plan.budget.running], _LINE_COLUMNS, _line_config(True), dynamic=False
    )
    st.caption(_totals_caption(ledger.running))

    st.markdown("#### C. Investeeringud ja laenud")
    works_line = next(line for line in plan.budget.invest if line.id == PLANNED_WORKS_LINE_ID)
    other_lines = [line.model_dump() for line in plan.budget.invest if line.id != PLANNED_WORKS_LINE_ID]
    works_cols = st.columns([3, 1, 1])
    works_cols[0].markdown(f"**{works_line.label}**")
    works_cols[0].caption("Plaan arvutatakse sammust „Maja tervis“ ja seda ei saa siin muuta.")
    with works_cols[1]:
        row_amount_field("Eelmine aasta (€)", "budget.invest", PLANNED_WORKS_LINE_ID, "prev", works_line.prev)
    works_cols[2].metric("Plaan", format_euro(ledger.planned_works_total))
    rows_editor(
        "budget.invest",
        other_lines,
        _LINE_COLUMNS,
        _line_config(False),
        dynamic=False,
        pinned=[works_line.model_dump()],
    )
    st.caption(_totals_caption(ledger.investments))

    st.markdown("#### Kokkuvõte")
    summary = pd.DataFrame(
        [
            {"": label, "Eelmine aasta": format_euro(t.prior_year), "Plaan": format_euro(t.planned), "Muutus": format_delta(t.delta)}
            for label, t in (
                ("Tulud", ledger.income),
                ("Majandamiskulud", ledger.running),
                ("Investeeringud", ledger.investments),
                ("Tulem", ledger.result),
            )
        ]
    )
    st.dataframe(summary, hide_index=True, use_container_width=True)
    render_findings(findings)
