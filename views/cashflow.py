"""Step 7: monthly cash-flow projection."""
from __future__ import annotations

import pandas as pd
import streamlit as st

from calc import MONTH_LABELS, MONTHS, DerivedLedger
from calc.energy import monthly_energy_weights
from core.charts import render_cash_flow_chart
from core.edits import SetField
from core.validators import Finding
from formatting import format_euro, format_number
from models import INCOME_POLICIES, RUNNING_POLICIES, Plan, parse_optional_amount
from state import apply_plan_edit, widget_key
from ui.widgets import choice_field, render_findings


def _render_energy_weights(plan: Plan) -> None:
    current = list(plan.cashflow.energy_weights)
    effective = monthly_energy_weights(current)
    st.caption("Tühjad kaalud kasutavad vaikimisi kütteprofiili. Kaalud normeeritakse summale 1.")
    cols = st.columns(6)
    updated = []
    for index, month in enumerate(MONTHS):
        value = current[index]
        text = "" if value is None else format(value, "f")
        entered = cols[index % 6].text_input(
            MONTH_LABELS[month],
            value=text,
            key=widget_key(f"cashflow.energy_weights.{index}"),
            placeholder=format_number(effective[index] * 100, 1),
        )
        updated.append(entered.strip() or None)
    if [parse_optional_amount(text) for text in updated] != current:
        apply_plan_edit(SetField("cashflow.energy_weights", updated))


def render_cashflow_step(plan: Plan, ledger: DerivedLedger, findings: list[Finding]) -> None:
    cols = st.columns(2)
    with cols[0]:
        choice_field("Tulude jaotus", "cashflow.income_policy", plan.cashflow.income_policy, INCOME_POLICIES, "income_policy")
    with cols[1]:
        choice_field("Majandamiskulude jaotus", "cashflow.running_policy", plan.cashflow.running_policy, RUNNING_POLICIES, "running_policy")

    with st.expander("Energiakulu kuukaalud", expanded=False):
        _render_energy_weights(plan)

    render_cash_flow_chart(ledger.cash_flow)
    table = pd.DataFrame(
        [
            {
                "Kuu": row.label,
                "Laekumised": format_euro(row.income),
                "Väljaminekud": format_euro(row.expense),
                "Saldo": format_euro(row.net),
                "Kumulatiivne": format_euro(row.cumulative_balance),
            }
            for row in ledger.cash_flow
        ]
    )
    st.dataframe(table, hide_index=True, use_container_width=True)
    render_findings(findings)
