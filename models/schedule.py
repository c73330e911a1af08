"""Scheduling of planned works.

A work's free-text period ("04.2026–05.2026", "aprill", "15.09.2026") is
parsed once, when the work is entered, into either :class:`Scheduled` with a
calendar month or :class:`Unscheduled`. Derivations only look at the parsed
value.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

# Stems match inflected forms too ("aprillis", "märtsini", "septembrist").
MONTH_NAME_STEMS: tuple[tuple[str, int], ...] = (
    ("jaan", 1),
    ("veebr", 2),
    ("märts", 3),
    ("marts", 3),
    ("apr", 4),
    ("mai", 5),
    ("juun", 6),
    ("juul", 7),
    ("aug", 8),
    ("sept", 9),
    ("okt", 10),
    ("nov", 11),
    ("dets", 12),
)

_DAY_MONTH_YEAR = re.compile(r"\b\d{1,2}\.(\d{1,2})\.\d{2,4}\b")
_MONTH_YEAR = re.compile(r"\b(\d{1,2})[./](\d{4})\b")
_ISO_YEAR_MONTH = re.compile(r"\b\d{4}-(\d{1,2})\b")
_BARE_MONTH = re.compile(r"^\s*(\d{1,2})\s*\.?\s*$")


@dataclass(frozen=True)
class Scheduled:
    month: int

    def __post_init__(self) -> None:
        if not 1 <= int(self.month) <= 12:
            raise ValueError("Kuu peab olema vahemikus 1–12.")


@dataclass(frozen=True)
class Unscheduled:
    pass


Schedule = Union[Scheduled, Unscheduled]

UNSCHEDULED = Unscheduled()


def _valid_month(raw: str) -> int | None:
    month = int(raw)
    return month if 1 <= month <= 12 else None


def parse_schedule(text: object) -> Schedule:
    """Parse the first recognisable month out of a free-text period."""

    if text is None:
        return UNSCHEDULED
    value = str(text).strip().lower()
    if not value:
        return UNSCHEDULED

    for pattern in (_DAY_MONTH_YEAR, _MONTH_YEAR, _ISO_YEAR_MONTH, _BARE_MONTH):
        match = pattern.search(value)
        if match:
            month = _valid_month(match.group(1))
            if month is not None:
                return Scheduled(month)

    earliest: tuple[int, int] | None = None
    for stem, month in MONTH_NAME_STEMS:
        match = re.search(rf"\b{stem}", value)
        if match and (earliest is None or match.start() < earliest[0]):
            earliest = (match.start(), month)
    if earliest is not None:
        return Scheduled(earliest[1])
    return UNSCHEDULED


def schedule_month(schedule: Schedule) -> int | None:
    return schedule.month if isinstance(schedule, Scheduled) else None


__all__ = [
    "MONTH_NAME_STEMS",
    "Schedule",
    "Scheduled",
    "UNSCHEDULED",
    "Unscheduled",
    "parse_schedule",
    "schedule_month",
]
