"""Schema version upgrades for stored and imported plan documents.

Version 1 is the browser-era document: camelCase keys, owners listed under
``apartments`` with ``shareNum`` over ``building.shareDenom``. Version 2 is the
snake_case layout produced by :meth:`models.plan.Plan.model_dump`.
"""
from __future__ import annotations

import re
from copy import deepcopy
from decimal import Decimal
from typing import Any, Callable, Dict, Mapping

from .numbers import ZERO, parse_amount
from .plan import SCHEMA_VERSION, ValidationError

Document = Dict[str, Any]

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")

_KEY_RENAMES = {
    "qtyMWh": "qty_mwh",
    "pricePerMWh": "price_per_mwh",
    "desc": "description",
    "type": "category",
}


def snake_key(key: str) -> str:
    if key in _KEY_RENAMES:
        return _KEY_RENAMES[key]
    return _CAMEL_BOUNDARY.sub("_", key).lower()


def _snake_row(row: Any) -> Any:
    if not isinstance(row, Mapping):
        return row
    converted = {snake_key(str(key)): value for key, value in row.items()}
    if "id" in converted and isinstance(converted["id"], str):
        converted["id"] = snake_key(converted["id"])
    return converted


def _snake_rows(rows: Any) -> Any:
    if not isinstance(rows, list):
        return rows
    return [_snake_row(row) for row in rows]


def detect_version(data: Mapping[str, Any]) -> int:
    if "schema_version" in data:
        return int(parse_amount(data.get("schema_version")))
    legacy_markers = ("apartments", "plannedWorks", "notes")
    meta = data.get("meta")
    if any(marker in data for marker in legacy_markers) or (isinstance(meta, Mapping) and "regCode" in meta):
        return 1
    return SCHEMA_VERSION


def upgrade_v1_to_v2(data: Mapping[str, Any]) -> Document:
    """Convert a version 1 document to version 2.

    Ownership shares are turned into fractions of ``building.shareDenom``;
    without a positive denominator they are kept as raw values so that the
    allocation engine's percent heuristic can still read them.
    """

    legacy = deepcopy(dict(data))
    upgraded: Document = {"schema_version": 2}

    if isinstance(legacy.get("meta"), Mapping):
        upgraded["meta"] = _snake_row(legacy["meta"])

    building = legacy.get("building")
    denominator = ZERO
    if isinstance(building, Mapping):
        denominator = parse_amount(building.get("shareDenom"))
        upgraded["building"] = {
            snake_key(key): value for key, value in building.items() if key != "shareDenom"
        }

    if "condition" in legacy:
        upgraded["condition"] = _snake_rows(legacy["condition"])
    if "plannedWorks" in legacy:
        upgraded["planned_works"] = _snake_rows(legacy["plannedWorks"])
    notes = legacy.get("notes")
    if isinstance(notes, Mapping):
        upgraded["works_notes"] = notes.get("worksNotes", "")

    budget = legacy.get("budget")
    if isinstance(budget, Mapping):
        upgraded["budget"] = {key: _snake_rows(rows) for key, rows in budget.items()}

    apartments = legacy.get("apartments")
    if isinstance(apartments, list):
        units = []
        for apartment in apartments:
            if not isinstance(apartment, Mapping):
                continue
            share = parse_amount(apartment.get("shareNum"))
            ownership: Decimal = share / denominator if denominator > ZERO else share
            units.append(
                {
                    "id": apartment.get("id", ""),
                    "label": apartment.get("unit", ""),
                    "unit_type": "korter",
                    "owner": apartment.get("owner", ""),
                    "ownership": ownership,
                    "include_in_allocation": True,
                }
            )
        upgraded["units"] = units

    if isinstance(legacy.get("funds"), Mapping):
        upgraded["funds"] = _snake_row(legacy["funds"])

    energy = legacy.get("energy")
    if isinstance(energy, Mapping):
        upgraded["energy"] = {
            "heat_months": _snake_rows(energy.get("heatMonths", [])),
            "other": _snake_rows(energy.get("other", [])),
        }

    confirmation = legacy.get("confirmation")
    if isinstance(confirmation, Mapping):
        converted = _snake_row(confirmation)
        retroactive = converted.get("retroactive")
        converted["retroactive"] = str(retroactive).strip().lower() == "jah" or retroactive is True
        upgraded["confirmation"] = converted

    return upgraded


UPGRADES: Dict[int, Callable[[Mapping[str, Any]], Document]] = {
    1: upgrade_v1_to_v2,
}


def upgrade_snapshot(data: Any) -> Document:
    """Apply every upgrade step needed to reach :data:`SCHEMA_VERSION`."""

    if not isinstance(data, Mapping):
        raise ValidationError([{"loc": tuple(), "msg": "Salvestatud majanduskava peab olema sõnastik."}])
    version = detect_version(data)
    if version > SCHEMA_VERSION:
        raise ValidationError(
            [{"loc": ("schema_version",), "msg": f"Tundmatu skeemi versioon {version}."}]
        )
    document: Document = dict(data)
    while version < SCHEMA_VERSION:
        upgrade = UPGRADES.get(version)
        if upgrade is None:
            raise ValidationError(
                [{"loc": ("schema_version",), "msg": f"Versioonilt {version} uuendamine puudub."}]
            )
        document = upgrade(document)
        version = detect_version(document)
    document["schema_version"] = SCHEMA_VERSION
    return document


__all__ = [
    "UPGRADES",
    "detect_version",
    "snake_key",
    "upgrade_snapshot",
    "upgrade_v1_to_v2",
]
