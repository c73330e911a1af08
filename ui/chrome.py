from __future__ import annotations

from typing import Sequence

import streamlit as st

from core.validators import Finding, blocking_findings, findings_for_step, warning_findings
from core.wizard import WizardStep, can_open, clamp_step
from localization import translate
from sample_data import create_sample_plan
from state import last_saved_at, replace_plan, reset_plan_state

APP_PAGE_TITLE = "Majanduskava"
APP_PAGE_ICON = "🏢"
APP_PAGE_CONFIG = {
    "page_title": APP_PAGE_TITLE,
    "page_icon": APP_PAGE_ICON,
    "layout": "wide",
}


def apply_app_chrome() -> None:
    """Configure the Streamlit page."""

    st.set_page_config(**APP_PAGE_CONFIG)


def _step_marker(step: WizardStep, findings: Sequence[Finding], active: bool) -> str:
    step_findings = findings_for_step(findings, step.key)
    if any(finding.blocking for finding in step_findings):
        marker = "⛔"
    elif step_findings:
        marker = "⚠️"
    else:
        marker = "✓"
    prefix = "▶ " if active else ""
    return f"{prefix}{step.index + 1}. {step.title} {marker}"


def render_stepper(steps: Sequence[WizardStep], findings: Sequence[Finding]) -> None:
    """Sidebar step list; a step can be opened directly by clicking it."""

    current = clamp_step(st.session_state.get("wizard_step", 0))
    st.sidebar.markdown("### Sammud")
    for step in steps:
        if st.sidebar.button(
            _step_marker(step, findings, step.index == current),
            key=f"stepper_{step.key}",
            use_container_width=True,
            type="primary" if step.index == current else "secondary",
            disabled=step.index > current and not can_open(step.index, findings),
        ):
            st.session_state["wizard_step"] = step.index
            st.rerun()


def _render_saved_badge() -> None:
    saved = last_saved_at()
    if saved is None:
        st.sidebar.caption(translate("app.not_saved"))
    else:
        st.sidebar.caption(translate("app.saved_at", time=saved.strftime("%H:%M:%S")))


def _render_reset_controls() -> bool:
    with st.sidebar.expander(translate("app.reset"), expanded=False):
        st.caption(translate("app.reset_confirm"))
        if st.button(translate("app.reset"), key="sidebar_reset_plan", use_container_width=True):
            reset_plan_state()
            st.toast("Majanduskava lähtestati.", icon="🔄")
            return True
    return False


def render_sidebar(steps: Sequence[WizardStep], findings: Sequence[Finding]) -> None:
    """Stepper, saved badge, sample data and reset controls."""

    render_stepper(steps, findings)
    st.sidebar.divider()
    _render_saved_badge()
    sample_requested = False
    if st.sidebar.button(translate("app.load_sample"), key="sidebar_load_sample", use_container_width=True):
        replace_plan(create_sample_plan())
        sample_requested = True
    reset_requested = _render_reset_controls()
    if sample_requested or reset_requested:
        st.rerun()


def render_app_header(*, title: str, subtitle: str, findings: Sequence[Finding]) -> None:
    """Title row with error and warning counters."""

    with st.container():
        columns = st.columns([4, 1, 1], gap="large")
        with columns[0]:
            st.title(title)
            st.caption(subtitle)
        columns[1].metric(translate("app.errors_title"), len(blocking_findings(findings)))
        columns[2].metric(translate("app.warnings_title"), len(warning_findings(findings)))
        st.caption(translate("app.badge"))


def render_app_footer(caption: str | None = None) -> None:
    """Render the global footer."""

    st.divider()
    st.caption(caption or translate("print.legal_footer"))


__all__ = [
    "APP_PAGE_CONFIG",
    "apply_app_chrome",
    "render_app_footer",
    "render_app_header",
    "render_sidebar",
    "render_stepper",
]
