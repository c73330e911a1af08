"""Session state for the plan wizard: the single plan handle and autosave."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, Mapping

import streamlit as st

from config import get_settings
from core.edits import Edit, apply_edit
from core.storage import AutosaveScheduler, SnapshotStore, load_plan, reset_plan, save_plan
from models import Plan

StateFactory = Callable[[], Any]
TypeHint = type | tuple[type, ...] | None


@dataclass(frozen=True)
class StateSpec:
    """Definition of a session state entry."""

    default_factory: StateFactory
    type_hint: TypeHint
    description: str

    def create_default(self) -> Any:
        """Return a new default value for the state entry."""
        return self.default_factory()

    def is_valid(self, value: Any) -> bool:
        """Check whether *value* matches the declared type hint."""
        if self.type_hint is None:
            return True
        hints = self.type_hint if isinstance(self.type_hint, tuple) else (self.type_hint,)
        return isinstance(value, hints)


@st.cache_resource
def get_store() -> SnapshotStore:
    return SnapshotStore(get_settings().storage.path)


def _storage_key() -> str:
    return get_settings().storage.key


def _load_stored_plan() -> Plan:
    return load_plan(get_store(), _storage_key())


def _new_scheduler() -> AutosaveScheduler:
    store = get_store()
    key = _storage_key()
    return AutosaveScheduler(
        lambda plan: save_plan(store, key, plan),
        delay_seconds=get_settings().storage.autosave_delay_seconds,
    )


STATE_SPECS: Dict[str, StateSpec] = {
    "plan": StateSpec(_load_stored_plan, Plan, "Aktiivne majanduskava"),
    "wizard_step": StateSpec(lambda: 0, int, "Vormi aktiivne samm"),
    "form_revision": StateSpec(lambda: 0, int, "Vormi vidinate versioon"),
    "autosave": StateSpec(_new_scheduler, AutosaveScheduler, "Automaatsalvestuse taimer"),
    "import_warnings": StateSpec(list, list, "Impordi hoiatused"),
    "remote_result": StateSpec(lambda: None, (dict, type(None)), "Kaugkontrolli tulemus"),
}


def ensure_session_defaults(overrides: Mapping[str, Any] | None = None) -> None:
    """Populate :mod:`st.session_state` with defaults and type-validate entries."""

    overrides = overrides or {}
    for key, spec in STATE_SPECS.items():
        if key in overrides:
            st.session_state[key] = overrides[key]
            continue
        if key not in st.session_state or not spec.is_valid(st.session_state[key]):
            st.session_state[key] = spec.create_default()


def reset_session_keys(keys: Iterable[str] | None = None) -> None:
    """Reset selected state keys to their default values."""

    target_keys = list(keys) if keys is not None else list(STATE_SPECS.keys())
    for key in target_keys:
        if key in STATE_SPECS:
            st.session_state[key] = STATE_SPECS[key].create_default()
        elif key in st.session_state:
            del st.session_state[key]


def current_plan() -> Plan:
    ensure_session_defaults()
    return st.session_state["plan"]


def widget_key(name: str) -> str:
    """Widget keys change with every plan replacement so stale inputs are dropped."""

    return f"{name}__r{st.session_state.get('form_revision', 0)}"


def _store_plan(plan: Plan) -> None:
    st.session_state["plan"] = plan
    st.session_state["autosave"].schedule(plan)


def apply_plan_edit(edit: Edit) -> Plan:
    """Apply *edit* to the session plan and schedule an autosave."""

    plan = apply_edit(current_plan(), edit)
    _store_plan(plan)
    return plan


def replace_plan(plan: Plan) -> None:
    """Swap in a whole plan (import or sample data) and refresh the widgets."""

    ensure_session_defaults()
    _store_plan(plan)
    st.session_state["form_revision"] += 1


def reset_plan_state() -> None:
    """Destroy the stored snapshot and start over from the default plan."""

    ensure_session_defaults()
    plan = reset_plan(get_store(), _storage_key(), st.session_state["autosave"])
    st.session_state["plan"] = plan
    st.session_state["form_revision"] += 1
    reset_session_keys(["wizard_step", "import_warnings", "remote_result"])


def last_saved_at() -> datetime | None:
    scheduler = st.session_state.get("autosave")
    return scheduler.saved_at if isinstance(scheduler, AutosaveScheduler) else None


__all__ = [
    "STATE_SPECS",
    "StateSpec",
    "apply_plan_edit",
    "current_plan",
    "ensure_session_defaults",
    "get_store",
    "last_saved_at",
    "replace_plan",
    "reset_plan_state",
    "reset_session_keys",
    "widget_key",
]
