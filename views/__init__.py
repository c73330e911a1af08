"""Per-step renderers of the plan wizard."""

from typing import Callable, Dict

from .budget import render_budget_step
from .cashflow import render_cashflow_step
from .confirmation import render_confirmation_step
from .energy import render_energy_step
from .funds import render_funds_step
from .health import render_health_step
from .identity import render_identity_step
from .payments import render_payments_step

STEP_RENDERERS: Dict[str, Callable[..., None]] = {
    "pass": render_identity_step,
    "health": render_health_step,
    "budget": render_budget_step,
    "payments": render_payments_step,
    "funds": render_funds_step,
    "energy": render_energy_step,
    "cashflow": render_cashflow_step,
    "confirmation": render_confirmation_step,
}

__all__ = [
    "STEP_RENDERERS",
    "render_budget_step",
    "render_cashflow_step",
    "render_confirmation_step",
    "render_energy_step",
    "render_funds_step",
    "render_health_step",
    "render_identity_step",
    "render_payments_step",
]
