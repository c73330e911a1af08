"""Optional client for the remote evaluation service.

The plan's own figures never depend on this call; a failure only means no
remote evaluation is shown.
"""
from __future__ import annotations

import json
import urllib.error
import urllib.request
from typing import Any, Dict

from calc import DerivedLedger
from config import RemoteSettings
from models import Plan

from .logger import get_logger

logger = get_logger(__name__)


def build_facts(plan: Plan, ledger: DerivedLedger) -> Dict[str, Any]:
    """Flatten the plan's key figures into a JSON-ready fact set."""

    return {
        "association": {
            "name": plan.meta.name,
            "reg_code": plan.meta.reg_code,
            "year": plan.meta.year,
        },
        "budget": {
            "income_planned": float(ledger.income.planned),
            "running_planned": float(ledger.running.planned),
            "investments_planned": float(ledger.investments.planned),
            "result_planned": float(ledger.result.planned),
        },
        "funds": {
            "reserve_end": float(ledger.funds.reserve_end),
            "reserve_minimum": float(ledger.funds.reserve_minimum),
            "repair_end": float(ledger.funds.repair_end),
        },
        "allocation": {
            "basis": plan.allocation.basis,
            "basis_total": float(ledger.allocation.basis_total),
            "bylaw_deviation": plan.allocation.bylaw_deviation,
            "unit_count": len(plan.units),
        },
        "confirmation": {
            "status": plan.confirmation.status,
            "protocol_no": plan.confirmation.protocol_no,
            "meeting_date": plan.confirmation.meeting_date,
        },
    }


class CoreEvaluationClient:
    """POST ``{domain, jurisdiction, facts}`` to ``<base_url>/evaluate``."""

    def __init__(self, settings: RemoteSettings | None = None) -> None:
        self.settings = settings or RemoteSettings()

    @property
    def enabled(self) -> bool:
        return self.settings.enabled

    def evaluate(self, facts: Dict[str, Any]) -> Dict[str, Any] | None:
        payload = {
            "domain": self.settings.domain,
            "jurisdiction": self.settings.jurisdiction,
            "facts": facts,
        }
        data = json.dumps(payload, ensure_ascii=False).encode("utf-8")
        req = urllib.request.Request(
            self.settings.evaluate_url,
            data=data,
            headers={"Content-Type": "application/json"},
            method="POST",
        )
        try:
            with urllib.request.urlopen(req, timeout=self.settings.timeout_seconds) as resp:
                status = getattr(resp, "status", 200)
                if not 200 <= status < 300:
                    logger.warning("remote_evaluation_failed", url=self.settings.evaluate_url, status=status)
                    return None
                body = resp.read().decode("utf-8")
                parsed = json.loads(body)
        except (urllib.error.URLError, OSError, ValueError) as exc:
            logger.warning("remote_evaluation_failed", url=self.settings.evaluate_url, error=str(exc))
            return None
        if not isinstance(parsed, dict):
            logger.warning("remote_evaluation_failed", url=self.settings.evaluate_url, error="unexpected payload")
            return None
        return parsed


__all__ = ["CoreEvaluationClient", "build_facts"]
