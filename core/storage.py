"""Local snapshot persistence with debounced autosave."""
from __future__ import annotations

import json
import math
import os
import tempfile
import threading
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict

from models import Plan, ValidationError, make_default_plan, upgrade_snapshot

from .logger import get_logger

logger = get_logger(__name__)


def _sanitize_json_compat(value: Any) -> Any:
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        return value
    if isinstance(value, dict):
        return {key: _sanitize_json_compat(val) for key, val in value.items()}
    if isinstance(value, list):
        return [_sanitize_json_compat(item) for item in value]
    return value


class SnapshotStore:
    """A JSON file holding documents by key."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def read_all(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            raw_text = self.path.read_text(encoding="utf-8").strip()
            if not raw_text:
                return {}
            data = json.loads(raw_text)
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("snapshot_store_unreadable", path=str(self.path), error=str(exc))
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str) -> Any | None:
        return self.read_all().get(key)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            documents = self.read_all()
            documents[key] = value
            self._write(documents)

    def delete(self, key: str) -> None:
        with self._lock:
            documents = self.read_all()
            if key in documents:
                del documents[key]
                self._write(documents)

    def _write(self, documents: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=f"{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(_sanitize_json_compat(documents), handle, ensure_ascii=False, allow_nan=False)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise


def merge_with_defaults(document: Dict[str, Any]) -> Dict[str, Any]:
    """Shallow merge: stored top-level sections replace the default ones."""

    defaults = make_default_plan().model_dump(mode="json")
    return {**defaults, **document}


def plan_from_document(document: Any) -> Plan:
    """Upgrade, merge over defaults and build a plan; raises ``ValidationError``."""

    return Plan.from_dict(merge_with_defaults(upgrade_snapshot(document)))


def load_plan(store: SnapshotStore, key: str) -> Plan:
    """Return the stored plan, or a fresh default plan when none is usable."""

    document = store.get(key)
    if document is None:
        return make_default_plan()
    try:
        plan = plan_from_document(document)
    except ValidationError as exc:
        logger.warning("snapshot_unreadable", key=key, errors=exc.errors())
        return make_default_plan()
    logger.info("snapshot_loaded", key=key)
    return plan


def save_plan(store: SnapshotStore, key: str, plan: Plan) -> None:
    store.set(key, plan.model_dump(mode="json"))
    logger.debug("snapshot_saved", key=key)


class AutosaveScheduler:
    """Debounce plan writes: each schedule() cancels the pending write.

    Only the most recent plan is written. A failed write is logged and dropped
    without retry. Writes never overlap, and a write that was cancelled after
    its timer fired is skipped.
    """

    def __init__(self, save: Callable[[Plan], None], delay_seconds: float = 0.35) -> None:
        self._save = save
        self.delay_seconds = delay_seconds
        self._lock = threading.Lock()
        self._write_lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._generation = 0
        self.saved_at: datetime | None = None

    def schedule(self, plan: Plan) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._generation += 1
            timer = threading.Timer(self.delay_seconds, self._run, args=(plan, self._generation))
            timer.daemon = True
            self._timer = timer
            timer.start()

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
            self._generation += 1

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._timer is not None

    def flush(self, plan: Plan) -> None:
        """Write *plan* right away, dropping any pending write."""

        with self._write_lock:
            self.cancel()
            self._write(plan)

    def discard(self, clear: Callable[[], None]) -> None:
        """Drop pending writes, wait for one in flight, then run *clear*."""

        with self._write_lock:
            self.cancel()
            clear()

    def _run(self, plan: Plan, generation: int) -> None:
        with self._write_lock:
            with self._lock:
                if generation != self._generation:
                    return
                self._timer = None
            self._write(plan)

    def _write(self, plan: Plan) -> None:
        try:
            self._save(plan)
        except Exception as exc:  # noqa: BLE001 - autosave failures never reach the form
            logger.warning("autosave_failed", error=str(exc))
            return
        self.saved_at = datetime.now()


def reset_plan(store: SnapshotStore, key: str, scheduler: AutosaveScheduler | None = None) -> Plan:
    """Delete the stored snapshot and return a fresh default plan."""

    if scheduler is None:
        store.delete(key)
    else:
        scheduler.discard(lambda: store.delete(key))
    logger.info("snapshot_reset", key=key)
    return make_default_plan()


__all__ = [
    "AutosaveScheduler",
    "SnapshotStore",
    "load_plan",
    "merge_with_defaults",
    "plan_from_document",
    "reset_plan",
    "save_plan",
]
