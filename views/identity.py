"""Step 1: association identity and building passport."""
from __future__ import annotations

import streamlit as st

from calc import DerivedLedger
from core.validators import Finding
from models import Plan
from ui.widgets import render_findings, text_field


def render_identity_step(plan: Plan, ledger: DerivedLedger, findings: list[Finding]) -> None:
    meta = plan.meta
    st.markdown("#### Ühing")
    left, right = st.columns(2)
    with left:
        text_field("Korteriühistu nimi *", "meta.name", meta.name)
        text_field("Registrikood *", "meta.reg_code", meta.reg_code)
        text_field("Aadress *", "meta.address", meta.address)
        text_field("Juhatuse kontakt", "meta.board", meta.board)
    with right:
        text_field("Majandusaasta", "meta.year", meta.year)
        text_field("Perioodi algus", "meta.period_start", meta.period_start, placeholder="01.01.2026")
        text_field("Perioodi lõpp", "meta.period_end", meta.period_end, placeholder="31.12.2026")
        text_field(
            "Üldkoosoleku kuupäev *",
            "meta.meeting_date",
            meta.meeting_date,
            help="Võib olla ka plaanitav kuupäev.",
        )
        text_field("Protokolli nr", "meta.protocol_no", meta.protocol_no)

    st.markdown("#### Maja")
    building = plan.building
    cols = st.columns(4)
    with cols[0]:
        text_field("Korterite arv", "building.apt_count", building.apt_count)
    with cols[1]:
        text_field("Üldpind (m²)", "building.total_area", building.total_area)
    with cols[2]:
        text_field("Ehitusaasta", "building.build_year", building.build_year)
    with cols[3]:
        text_field("Korruseid", "building.floors", building.floors)

    render_findings(findings)
