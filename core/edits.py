"""Pure reducers applying one form edit to a plan.

Every edit works on a dumped copy of the plan and rebuilds it with
:meth:`Plan.from_dict`, so the previous plan object is never mutated and every
amount goes through the same coercion as on load.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Union

from models import PLAN_STATUSES, Plan, new_id


@dataclass(frozen=True)
class SetField:
    path: str
    value: Any


@dataclass(frozen=True)
class UpdateRow:
    collection: str
    row_id: str
    patch: Mapping[str, Any]


@dataclass(frozen=True)
class AddRow:
    collection: str
    row: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class RemoveRow:
    collection: str
    row_id: str


@dataclass(frozen=True)
class ReplaceRows:
    collection: str
    rows: List[Mapping[str, Any]]


@dataclass(frozen=True)
class SetStatus:
    """Any status may follow any other; no transition is refused."""

    status: str


Edit = Union[SetField, UpdateRow, AddRow, RemoveRow, ReplaceRows, SetStatus]


def _parent(document: Dict[str, Any], path: str) -> tuple[Dict[str, Any], str]:
    segments = path.split(".")
    current: Any = document
    for segment in segments[:-1]:
        if not isinstance(current, dict) or segment not in current:
            raise KeyError(f"Unknown plan field: {path}")
        current = current[segment]
    if not isinstance(current, dict) or segments[-1] not in current:
        raise KeyError(f"Unknown plan field: {path}")
    return current, segments[-1]


def _rows(document: Dict[str, Any], collection: str) -> List[Dict[str, Any]]:
    parent, key = _parent(document, collection)
    rows = parent[key]
    if not isinstance(rows, list):
        raise KeyError(f"Not a row collection: {collection}")
    return rows


def apply_edit(plan: Plan, edit: Edit) -> Plan:
    """Return a new plan with *edit* applied."""

    document = plan.model_dump()

    if isinstance(edit, SetField):
        parent, key = _parent(document, edit.path)
        parent[key] = edit.value
    elif isinstance(edit, UpdateRow):
        rows = _rows(document, edit.collection)
        for index, row in enumerate(rows):
            if row.get("id") == edit.row_id:
                rows[index] = {**row, **dict(edit.patch), "id": edit.row_id}
                break
    elif isinstance(edit, AddRow):
        row = dict(edit.row)
        row.setdefault("id", new_id())
        _rows(document, edit.collection).append(row)
    elif isinstance(edit, RemoveRow):
        parent, key = _parent(document, edit.collection)
        parent[key] = [row for row in _rows(document, edit.collection) if row.get("id") != edit.row_id]
    elif isinstance(edit, ReplaceRows):
        parent, key = _parent(document, edit.collection)
        _rows(document, edit.collection)
        parent[key] = [dict(row) for row in edit.rows]
    elif isinstance(edit, SetStatus):
        if edit.status not in PLAN_STATUSES:
            raise ValueError(f"Unknown plan status: {edit.status}")
        document["confirmation"]["status"] = edit.status
    else:
        raise TypeError(f"Unsupported edit: {edit!r}")

    return Plan.from_dict(document)


def apply_edits(plan: Plan, edits: List[Edit]) -> Plan:
    for edit in edits:
        plan = apply_edit(plan, edit)
    return plan


__all__ = [
    "AddRow",
    "Edit",
    "RemoveRow",
    "ReplaceRows",
    "SetField",
    "SetStatus",
    "UpdateRow",
    "apply_edit",
    "apply_edits",
]
