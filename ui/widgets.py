"""Form widgets that turn Streamlit input into plan edits."""
from __future__ import annotations

import math
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Sequence

import pandas as pd
import streamlit as st

from core.edits import ReplaceRows, SetField, UpdateRow
from core.validators import Finding
from localization import option_label, translate_list
from models.numbers import parse_amount, parse_optional_amount
from state import apply_plan_edit, widget_key


def _display(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, Decimal):
        return format(value.normalize(), "f") if value == value.to_integral() else format(value, "f")
    return str(value)


def _same_value(entered: str, current: Any) -> bool:
    """Compare typed text with a stored value the way the model would read it."""

    if current is None:
        return parse_optional_amount(entered) is None
    if isinstance(current, (Decimal, int, float)) and not isinstance(current, bool):
        return parse_amount(entered) == parse_amount(current)
    return entered == _display(current)


def text_field(label: str, path: str, current: Any, *, help: str | None = None, placeholder: str | None = None) -> None:
    """Text input bound to a plan field; amounts typed here go through the model coercion."""

    value = st.text_input(label, value=_display(current), key=widget_key(path), help=help, placeholder=placeholder)
    if not _same_value(value, current):
        apply_plan_edit(SetField(path, value))


def row_amount_field(label: str, collection: str, row_id: str, name: str, current: Any) -> None:
    """Text input bound to one amount of a single row in a collection."""

    value = st.text_input(label, value=_display(current), key=widget_key(f"{collection}.{row_id}.{name}"))
    if not _same_value(value, current):
        apply_plan_edit(UpdateRow(collection, row_id, {name: value}))


def choice_field(label: str, path: str, current: str, options: Sequence[str], group: str, *, horizontal: bool = False) -> None:
    index = list(options).index(current) if current in options else 0
    if horizontal:
        value = st.radio(
            label,
            list(options),
            index=index,
            key=widget_key(path),
            format_func=lambda option: option_label(group, option),
            horizontal=True,
        )
    else:
        value = st.selectbox(
            label,
            list(options),
            index=index,
            key=widget_key(path),
            format_func=lambda option: option_label(group, option),
        )
    if value != current:
        apply_plan_edit(SetField(path, value))


def toggle_field(label: str, path: str, current: bool) -> None:
    value = st.checkbox(label, value=current, key=widget_key(path))
    if value != current:
        apply_plan_edit(SetField(path, value))


def _clean_cell(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    if value is pd.NA or value is pd.NaT:
        return None
    return value


def _rows_differ(before: Sequence[Mapping[str, Any]], after: Sequence[Mapping[str, Any]], columns: Sequence[str]) -> bool:
    if len(before) != len(after):
        return True
    for old, new in zip(before, after):
        for column in columns:
            old_value, new_value = old.get(column), new.get(column)
            if column == "id" or isinstance(new_value, bool):
                if old_value != new_value:
                    return True
            elif not _same_value(_display(new_value), old_value):
                return True
    return False


def frame_to_rows(frame: pd.DataFrame) -> List[Dict[str, Any]]:
    """Records from an edited table; blank cells become ``None`` and new rows get no id."""

    rows: List[Dict[str, Any]] = []
    for record in frame.to_dict(orient="records"):
        row = {str(key): _clean_cell(value) for key, value in record.items()}
        if not row.get("id"):
            row.pop("id", None)
        rows.append(row)
    return rows


def rows_to_frame(rows: Iterable[Mapping[str, Any]], columns: Sequence[str]) -> pd.DataFrame:
    records = [{column: _display(row.get(column)) if column != "id" else row.get(column) for column in columns} for row in rows]
    return pd.DataFrame(records, columns=list(columns))


def rows_editor(
    collection: str,
    rows: Iterable[Mapping[str, Any]],
    columns: Sequence[str],
    column_config: Mapping[str, Any],
    *,
    dynamic: bool = True,
    disabled: Sequence[str] = (),
    bool_columns: Sequence[str] = (),
    pinned: Sequence[Mapping[str, Any]] = (),
) -> None:
    """Editable table bound to a row collection of the plan.

    The whole collection is replaced when anything changes, so additions,
    deletions and cell edits are one edit each. *pinned* rows are not shown
    and are written back unchanged ahead of the edited ones.
    """

    original_rows = [dict(row) for row in rows]
    frame = rows_to_frame(original_rows, columns)
    for column in bool_columns:
        frame[column] = [bool(row.get(column)) for row in original_rows]
    edited = st.data_editor(
        frame,
        key=widget_key(collection),
        column_config={"id": None, **dict(column_config)},
        num_rows="dynamic" if dynamic else "fixed",
        disabled=list(disabled),
        hide_index=True,
        use_container_width=True,
    )
    if edited.equals(frame):
        return
    by_id = {row.get("id"): row for row in original_rows}
    merged: List[Dict[str, Any]] = [dict(row) for row in pinned]
    for row in frame_to_rows(edited):
        base = dict(by_id.get(row.get("id"), {}))
        base.pop("schedule", None)
        base.update(row)
        merged.append(base)
    if not _rows_differ(original_rows, merged[len(pinned):], columns):
        return
    apply_plan_edit(ReplaceRows(collection, merged))


def render_findings(findings: Sequence[Finding]) -> None:
    for finding in findings:
        if finding.blocking:
            st.error(finding.message, icon="⛔")
        else:
            st.warning(finding.message, icon="⚠️")


def render_legal_notes(step_key: str) -> None:
    notes = translate_list(f"steps.{step_key}.legal")
    if not notes:
        return
    with st.expander("Õiguslik taust", expanded=False):
        st.markdown("\n".join(f"- {note}" for note in notes))


__all__ = [
    "choice_field",
    "frame_to_rows",
    "render_findings",
    "render_legal_notes",
    "rows_editor",
    "row_amount_field",
    "rows_to_frame",
    "text_field",
    "toggle_field",
]
