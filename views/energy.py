"""Step 6: energy and utilities forecast."""
from __future__ import annotations

import streamlit as st

from calc import DerivedLedger
from core.charts import render_energy_chart
from core.validators import Finding
from formatting import format_delta, format_euro
from models import Plan
from ui.widgets import render_findings, rows_editor


def render_energy_step(plan: Plan, ledger: DerivedLedger, findings: list[Finding]) -> None:
    forecast = ledger.energy

    st.markdown("#### Soojusenergia kuude kaupa")
    rows_editor(
        "energy.heat_months",
        [row.model_dump() for row in plan.energy.heat_months],
        ["id", "month", "qty_mwh", "price_per_mwh", "prev_cost"],
        {
            "month": st.column_config.TextColumn("Kuu"),
            "qty_mwh": st.column_config.TextColumn("Kogus (MWh)"),
            "price_per_mwh": st.column_config.TextColumn("Hind (€/MWh)"),
            "prev_cost": st.column_config.TextColumn("Eelmine aasta (€)"),
        },
        dynamic=False,
        disabled=["month"],
    )
    st.caption(
        f"Küte kokku {format_euro(forecast.heat.cost)} · eelmine aasta {format_euro(forecast.heat.prior_cost)} · "
        f"muutus {format_delta(forecast.heat.change)}"
    )
    render_energy_chart(forecast)

    st.markdown("#### Muu energia ja vesi (aasta)")
    rows_editor(
        "energy.other",
        [row.model_dump() for row in plan.energy.other],
        ["id", "label", "unit", "qty", "price", "prev_cost"],
        {
            "label": st.column_config.TextColumn("Rida"),
            "unit": st.column_config.TextColumn("Ühik"),
            "qty": st.column_config.TextColumn("Kogus"),
            "price": st.column_config.TextColumn("Ühiku hind (€)"),
            "prev_cost": st.column_config.TextColumn("Eelmine aasta (€)"),
        },
    )
    st.caption(
        f"Muu kokku {format_euro(forecast.other.cost)} · muutus {format_delta(forecast.other.change)}"
    )
    st.metric("Energia prognoos kokku", format_euro(forecast.combined.cost), format_delta(forecast.combined.change))
    render_findings(findings)
