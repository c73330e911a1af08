"""Message catalog loading helpers."""
from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping

DEFAULT_LANGUAGE = "et"

_LOCALES_DIR = Path(__file__).resolve().parent / "locales"


@lru_cache(maxsize=None)
def _load_translations(language_code: str) -> Mapping[str, Any]:
    """Load the catalog for *language_code* from disk."""

    path = _LOCALES_DIR / f"{language_code}.json"
    if not path.exists():
        raise FileNotFoundError(path)
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def _resolve_key(data: Mapping[str, Any], key: str) -> Any | None:
    """Return the value referenced by a dotted ``key`` in a nested mapping."""

    current: Any = data
    for segment in key.split("."):
        if isinstance(current, Mapping) and segment in current:
            current = current[segment]
        else:
            return None
    return current


def get_translation(key: str, *, language_code: str = DEFAULT_LANGUAGE) -> Any | None:
    """Return the catalog entry for *key*, or ``None`` when it is missing."""

    return _resolve_key(_load_translations(language_code), key)


__all__ = ["DEFAULT_LANGUAGE", "get_translation"]
