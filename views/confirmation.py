"""Step 8: general meeting decision, print preview, export and import."""
from __future__ import annotations

from datetime import datetime

import streamlit as st

from calc import DerivedLedger
from config import get_settings
from core.edits import SetStatus
from core.exporters import build_summary_lines, export_summary_to_docx, export_summary_to_pdf
from core.io import (
    export_payload_to_csv_zip,
    export_payload_to_excel,
    export_plan_json,
    import_uploaded_plan,
    prepare_ledger_export_payload,
)
from core.logger import get_logger
from core.remote import CoreEvaluationClient, build_facts
from core.validators import Finding
from localization import option_label
from models import PLAN_STATUSES, Plan
from state import apply_plan_edit, replace_plan, widget_key
from ui.widgets import render_findings, text_field, toggle_field

logger = get_logger(__name__)


def _file_stem(plan: Plan) -> str:
    name = "".join(ch if ch.isalnum() else "_" for ch in plan.meta.name.strip()) or "majanduskava"
    return f"{name}_{plan.meta.year or datetime.now().year}"


def _render_decision(plan: Plan) -> None:
    confirmation = plan.confirmation
    statuses = list(PLAN_STATUSES)
    status = st.selectbox(
        "Staatus",
        statuses,
        index=statuses.index(confirmation.status),
        key=widget_key("confirmation.status"),
        format_func=lambda value: option_label("plan_status", value),
    )
    if status != confirmation.status:
        apply_plan_edit(SetStatus(status))

    cols = st.columns(2)
    with cols[0]:
        text_field("Koosoleku kuupäev", "confirmation.meeting_date", confirmation.meeting_date)
        text_field("Protokolli nr", "confirmation.protocol_no", confirmation.protocol_no)
        text_field("Kehtib alates", "confirmation.effective_from", confirmation.effective_from)
    with cols[1]:
        text_field("Koosoleku koht", "confirmation.meeting_place", confirmation.meeting_place)
        votes = st.columns(3)
        with votes[0]:
            text_field("Poolt", "confirmation.votes_for", confirmation.votes_for)
        with votes[1]:
            text_field("Vastu", "confirmation.votes_against", confirmation.votes_against)
        with votes[2]:
            text_field("Erapooletu", "confirmation.votes_abstain", confirmation.votes_abstain)

    toggle_field("Kehtestatakse tagasiulatuvalt", "confirmation.retroactive", confirmation.retroactive)
    if confirmation.retroactive:
        text_field("Tagasiulatuvuse põhjendus", "confirmation.retroactive_reason", confirmation.retroactive_reason)


def _render_downloads(plan: Plan, ledger: DerivedLedger, findings: list[Finding]) -> None:
    lines = build_summary_lines(plan, ledger, findings)
    with st.expander("Väljatrüki eelvaade", expanded=False):
        for line in lines:
            if line.kind == "title":
                st.markdown(f"### {line.text}")
            elif line.kind == "heading":
                st.markdown(f"**{line.text}**")
            elif line.kind == "bullet":
                st.markdown(f"- {line.text}")
            else:
                st.write(line.text)

    stem = _file_stem(plan)
    payload = prepare_ledger_export_payload(plan, ledger, findings)
    cols = st.columns(5)
    cols[0].download_button(
        "PDF",
        data=export_summary_to_pdf(lines),
        file_name=f"{stem}.pdf",
        mime="application/pdf",
        use_container_width=True,
    )
    cols[1].download_button(
        "Word",
        data=export_summary_to_docx(lines),
        file_name=f"{stem}.docx",
        mime="application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        use_container_width=True,
    )
    cols[2].download_button(
        "Excel",
        data=export_payload_to_excel(payload),
        file_name=f"{stem}.xlsx",
        mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        use_container_width=True,
    )
    cols[3].download_button(
        "CSV (zip)",
        data=export_payload_to_csv_zip(payload),
        file_name=f"{stem}_csv.zip",
        mime="application/zip",
        use_container_width=True,
    )
    cols[4].download_button(
        "JSON",
        data=export_plan_json(plan),
        file_name=f"{stem}.json",
        mime="application/json",
        use_container_width=True,
    )


def _render_import() -> None:
    uploaded = st.file_uploader("Impordi varem eksporditud JSON", type=["json"], key=widget_key("import_file"))
    if uploaded is not None and st.button("Impordi", key=widget_key("import_button")):
        plan, warnings = import_uploaded_plan(uploaded)
        st.session_state["import_warnings"] = warnings
        if plan is not None:
            logger.info("plan_imported", file_name=getattr(uploaded, "name", ""))
            replace_plan(plan)
            st.rerun()
    for warning in st.session_state.get("import_warnings", []):
        st.error(warning)


def _render_remote_check(plan: Plan, ledger: DerivedLedger) -> None:
    client = CoreEvaluationClient(get_settings().remote)
    if not client.enabled:
        return
    st.markdown("#### Välise kontrolli teenus")
    if st.button("Kontrolli teenuses", key=widget_key("remote_evaluate")):
        result = client.evaluate(build_facts(plan, ledger))
        st.session_state["remote_result"] = result
        if result is None:
            st.warning("Kontrolliteenus ei vastanud. Kohalik kontroll kehtib.")
    result = st.session_state.get("remote_result")
    if result:
        st.json(result, expanded=False)


def render_confirmation_step(plan: Plan, ledger: DerivedLedger, findings: list[Finding]) -> None:
    _render_decision(plan)
    if not findings:
        st.success("Vigu ega hoiatusi ei ole.")
    render_findings(findings)

    st.markdown("#### Väljatrükk ja eksport")
    _render_downloads(plan, ledger, findings)
    _render_import()
    _render_remote_check(plan, ledger)
