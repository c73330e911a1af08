"""Wizard step definitions and the forward-navigation gate."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Tuple

from localization import translate, translate_list

from .validators import Finding, step_has_blocking_errors

STEP_KEYS: Tuple[str, ...] = (
    "pass",
    "health",
    "budget",
    "payments",
    "funds",
    "energy",
    "cashflow",
    "confirmation",
)


@dataclass(frozen=True)
class WizardStep:
    index: int
    key: str
    title: str
    subtitle: str
    legal_notes: Tuple[str, ...]


def wizard_steps() -> List[WizardStep]:
    return [
        WizardStep(
            index=index,
            key=key,
            title=translate(f"steps.{key}.title"),
            subtitle=translate(f"steps.{key}.subtitle"),
            legal_notes=tuple(translate_list(f"steps.{key}.legal")),
        )
        for index, key in enumerate(STEP_KEYS)
    ]


def clamp_step(index: int) -> int:
    return max(0, min(len(STEP_KEYS) - 1, int(index)))


def can_advance(index: int, findings: Iterable[Finding]) -> bool:
    """Forward navigation is refused from the last step and from a blocked step."""

    index = clamp_step(index)
    if index >= len(STEP_KEYS) - 1:
        return False
    return not step_has_blocking_errors(findings, STEP_KEYS[index])


def next_step(index: int, findings: Iterable[Finding]) -> int:
    index = clamp_step(index)
    return index + 1 if can_advance(index, findings) else index


def previous_step(index: int) -> int:
    return clamp_step(index - 1)


def can_open(index: int, findings: Iterable[Finding]) -> bool:
    """A step can be opened directly only when no earlier step is blocked."""

    findings = list(findings)
    index = clamp_step(index)
    return not any(step_has_blocking_errors(findings, key) for key in STEP_KEYS[:index])


def blocked_steps(findings: Iterable[Finding]) -> List[str]:
    findings = list(findings)
    return [key for key in STEP_KEYS if step_has_blocking_errors(findings, key)]


__all__ = [
    "STEP_KEYS",
    "WizardStep",
    "blocked_steps",
    "can_advance",
    "can_open",
    "clamp_step",
    "next_step",
    "previous_step",
    "wizard_steps",
]
