"""Step 5: reserve capital and repair fund."""
from __future__ import annotations

import streamlit as st

from calc import DerivedLedger
from core.validators import Finding
from formatting import format_euro
from models import Plan
from ui.widgets import render_findings, text_field


def render_funds_step(plan: Plan, ledger: DerivedLedger, findings: list[Finding]) -> None:
    funds = plan.funds
    derived = ledger.funds
    reserve_col, repair_col = st.columns(2)

    with reserve_col:
        st.markdown("#### A. Reservkapital (KrtS § 48)")
        text_field("Algsaldo (€)", "funds.reserve_start", funds.reserve_start)
        text_field("Laekumised (€)", "funds.reserve_in", funds.reserve_in)
        text_field("Kasutamine (€)", "funds.reserve_out", funds.reserve_out)
        text_field("Sihtsaldo (€)", "funds.reserve_target", funds.reserve_target)
        st.metric("Lõppsaldo", format_euro(derived.reserve_end))
        st.metric("Seaduslik miinimum (1/12)", format_euro(derived.reserve_minimum))
        if derived.reserve_target_gap is not None:
            st.caption(f"Sihini puudu: {format_euro(derived.reserve_target_gap)}")

    with repair_col:
        st.markdown("#### B. Remondifond (KrtS § 41 lg 1 p 4)")
        text_field("Algsaldo (€)", "funds.repair_start", funds.repair_start)
        text_field("Laekumised (€)", "funds.repair_in", funds.repair_in)
        text_field("Lisakasutus peale planeeritud tööde (€)", "funds.repair_out_other", funds.repair_out_other)
        text_field("Sihtsaldo (€)", "funds.repair_target", funds.repair_target)
        st.metric("Kasutus kokku", format_euro(derived.repair_outflow))
        st.metric("Lõppsaldo", format_euro(derived.repair_end))
        if derived.repair_target_gap is not None:
            st.caption(f"Sihini puudu: {format_euro(derived.repair_target_gap)}")

    render_findings(findings)
