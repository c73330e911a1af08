"""Estonian message catalog: step titles, legal notes and finding messages."""
from __future__ import annotations

from typing import Any, Iterable, List

from .translations import DEFAULT_LANGUAGE, get_translation

LOCALE = "et-EE"
CURRENCY = "EUR"


def translate(key: str, **kwargs: Any) -> str:
    """Return the catalog string for ``key`` formatted with ``kwargs``.

    Unknown keys come back unchanged so a missing entry is visible in the UI.
    """

    value = get_translation(key)
    if value is None:
        return key
    if isinstance(value, Iterable) and not isinstance(value, (str, bytes)):
        return "\n".join(str(item) for item in value)
    text = str(value)
    return text.format(**kwargs) if kwargs else text


def translate_list(key: str) -> List[str]:
    """Return a catalog list for ``key`` falling back to an empty list."""

    value = get_translation(key)
    if isinstance(value, list):
        return [str(item) for item in value]
    if isinstance(value, str):
        return [value]
    return []


def option_label(group: str, value: str) -> str:
    """Label of an enumerated value, e.g. ``option_label("funding", "laen")``."""

    label = get_translation(f"labels.{group}.{value}")
    return str(label) if label is not None else value


__all__ = [
    "CURRENCY",
    "DEFAULT_LANGUAGE",
    "LOCALE",
    "option_label",
    "translate",
    "translate_list",
]
