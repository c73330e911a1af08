"""Streamlit entry point for the annual financial plan wizard."""

from __future__ import annotations

import streamlit as st

from calc import derive_ledger
from config import get_settings
from core.logger import configure_logging, get_logger
from core.validators import collect_findings, findings_for_step
from core.wizard import STEP_KEYS, can_advance, clamp_step, next_step, previous_step, wizard_steps
from localization import translate
from state import current_plan, ensure_session_defaults
from ui.chrome import apply_app_chrome, render_app_footer, render_app_header, render_sidebar
from ui.widgets import render_legal_notes
from views import STEP_RENDERERS

logger = get_logger(__name__)


def _render_navigation(index: int, findings) -> None:
    back_col, spacer, next_col = st.columns([1, 4, 1])
    if back_col.button(translate("app.back"), key="nav_back", disabled=index == 0, use_container_width=True):
        st.session_state["wizard_step"] = previous_step(index)
        st.rerun()
    last = index >= len(STEP_KEYS) - 1
    allowed = can_advance(index, findings)
    if next_col.button(translate("app.next"), key="nav_next", disabled=last or not allowed, use_container_width=True):
        st.session_state["wizard_step"] = next_step(index, findings)
        st.rerun()
    if not last and not allowed:
        spacer.error(translate("app.blocked"))


def main() -> None:
    """Configure Streamlit and render the active wizard step."""

    settings = get_settings()
    configure_logging(settings.app.log_level, json_logs=settings.app.json_logs)
    apply_app_chrome()
    ensure_session_defaults()

    plan = current_plan()
    ledger = derive_ledger(plan)
    findings = collect_findings(plan, ledger)
    steps = wizard_steps()
    render_sidebar(steps, findings)

    index = clamp_step(st.session_state.get("wizard_step", 0))
    st.session_state["wizard_step"] = index
    step = steps[index]

    render_app_header(title=translate("app.title"), subtitle=translate("app.tagline"), findings=findings)
    st.subheader(f"{index + 1}. {step.title}")
    st.caption(step.subtitle)
    render_legal_notes(step.key)

    STEP_RENDERERS[step.key](plan, ledger, findings_for_step(findings, step.key))

    # Edits made while rendering land in session state; recompute so the gate sees them.
    plan = current_plan()
    findings = collect_findings(plan, derive_ledger(plan))
    _render_navigation(index, findings)
    render_app_footer()


if __name__ == "__main__":
    main()
