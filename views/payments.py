"""Step 4: units and per-unit payments."""
from __future__ import annotations

import pandas as pd
import streamlit as st

from calc import DerivedLedger
from core.validators import Finding
from formatting import format_euro, format_number, format_percent
from localization import option_label
from models import ALLOCATION_BASES, UNIT_TYPES, Plan
from ui.widgets import choice_field, render_findings, rows_editor, text_field, toggle_field


def render_payments_step(plan: Plan, ledger: DerivedLedger, findings: list[Finding]) -> None:
    cols = st.columns(3)
    cols[0].metric("Majandamiskulud aastas", format_euro(ledger.running.planned))
    cols[1].metric("Investeeringud aastas", format_euro(ledger.investments.planned))
    cols[2].metric("Kokku jaotatakse", format_euro(ledger.annual_planned_cost))

    choice_field("Jaotuse alus", "allocation.basis", plan.allocation.basis, ALLOCATION_BASES, "basis", horizontal=True)
    toggle_field("Põhikiri näeb ette kaasomandi osast erineva jaotuse", "allocation.bylaw_deviation", plan.allocation.bylaw_deviation)
    if plan.allocation.bylaw_deviation:
        text_field("Põhikirja säte", "allocation.deviation_note", plan.allocation.deviation_note)

    st.markdown("#### Hooneosad")
    st.caption("Kaasomandi osa: kuni 1 loetakse murdosaks, suurem väärtus protsendiks.")
    rows_editor(
        "units",
        [unit.model_dump() for unit in plan.units],
        ["id", "label", "unit_type", "owner", "area", "ownership", "include_in_allocation"],
        {
            "label": st.column_config.TextColumn("Hooneosa"),
            "unit_type": st.column_config.SelectboxColumn("Liik", options=list(UNIT_TYPES)),
            "owner": st.column_config.TextColumn("Omanik"),
            "area": st.column_config.TextColumn("Pind (m²)"),
            "ownership": st.column_config.TextColumn("Kaasomandi osa"),
            "include_in_allocation": st.column_config.CheckboxColumn("Osaleb jaotuses"),
        },
        bool_columns=["include_in_allocation"],
    )

    st.markdown("#### Maksed")
    basis_label = option_label("basis", ledger.allocation.basis)
    st.caption(f"Jaotuse alus: {basis_label}, kokku {format_number(ledger.allocation.basis_total, 4)}")
    if ledger.allocation.valid:
        table = pd.DataFrame(
            [
                {
                    "Hooneosa": payment.label,
                    "Omanik": payment.owner,
                    "Osa": format_percent(payment.share_percent),
                    "Aastas": format_euro(payment.year_total),
                    "Kuus": format_euro(payment.month_total),
                    "sh majandamiskulud": format_euro(payment.month_running),
                    "sh investeeringud": format_euro(payment.month_investment),
                }
                for payment in ledger.allocation.payments
            ]
        )
        st.dataframe(table, hide_index=True, use_container_width=True)
    render_findings(findings)
