import json
import math
import threading

from core.storage import (
    AutosaveScheduler,
    SnapshotStore,
    _sanitize_json_compat,
    load_plan,
    merge_with_defaults,
    reset_plan,
    save_plan,
)
from models import SCHEMA_VERSION, Plan, make_default_plan

KEY = "solverelab_majanduskava_v1"


def test_sanitize_json_compat_replaces_special_numbers():
    payload = {"float": math.nan, "list": [1, float("inf")], "nested": {"value": -float("inf")}}

    assert _sanitize_json_compat(payload) == {"float": None, "list": [1, None], "nested": {"value": None}}


def test_store_persists_documents_by_key(tmp_path):
    store = SnapshotStore(tmp_path / "nested" / "snapshots.json")

    store.set("a", {"value": math.nan})
    store.set("b", {"value": 2})

    with (tmp_path / "nested" / "snapshots.json").open("r", encoding="utf-8") as handle:
        stored = json.load(handle)
    assert stored == {"a": {"value": None}, "b": {"value": 2}}

    store.delete("a")
    assert store.get("a") is None
    assert store.get("b") == {"value": 2}


def test_unreadable_store_reads_as_empty(tmp_path):
    path = tmp_path / "snapshots.json"
    path.write_text("{not json", encoding="utf-8")

    assert SnapshotStore(path).read_all() == {}


def test_missing_snapshot_gives_default_plan(tmp_path):
    plan = load_plan(SnapshotStore(tmp_path / "s.json"), KEY)

    assert [unit.label for unit in plan.units] == ["Korter 1", "Korter 2"]
    assert plan.schema_version == SCHEMA_VERSION


def test_saved_plan_loads_back(tmp_path, sample_plan):
    store = SnapshotStore(tmp_path / "s.json")

    save_plan(store, KEY, sample_plan)
    loaded = load_plan(store, KEY)

    assert loaded.meta.name == sample_plan.meta.name
    assert loaded.units == sample_plan.units
    assert loaded.funds == sample_plan.funds


def test_partial_snapshot_is_merged_with_defaults(tmp_path):
    store = SnapshotStore(tmp_path / "s.json")
    store.set(KEY, {"meta": {"name": "KÜ Osaline"}})

    plan = load_plan(store, KEY)

    assert plan.meta.name == "KÜ Osaline"
    assert len(plan.budget.income) == 6
    assert len(plan.energy.heat_months) == 12


def test_merge_is_shallow():
    merged = merge_with_defaults({"budget": {"income": []}})

    assert merged["budget"] == {"income": []}
    assert merged["units"]


def test_broken_snapshot_falls_back_to_default(tmp_path):
    store = SnapshotStore(tmp_path / "s.json")
    store.set(KEY, {"units": "kõik"})

    plan = load_plan(store, KEY)

    assert [unit.label for unit in plan.units] == ["Korter 1", "Korter 2"]


def test_autosave_writes_only_the_latest_plan():
    saved = []
    done = threading.Event()

    def save(plan: Plan) -> None:
        saved.append(plan.meta.name)
        done.set()

    scheduler = AutosaveScheduler(save, delay_seconds=0.05)
    first = make_default_plan()
    first.meta.name = "esimene"
    second = make_default_plan()
    second.meta.name = "teine"

    scheduler.schedule(first)
    scheduler.schedule(second)

    assert done.wait(2)
    assert saved == ["teine"]


def test_flush_writes_immediately():
    saved = []
    scheduler = AutosaveScheduler(saved.append, delay_seconds=10)
    plan = make_default_plan()

    scheduler.schedule(plan)
    scheduler.flush(plan)

    assert saved == [plan]
    assert not scheduler.pending
    assert scheduler.saved_at is not None


def test_autosave_failure_is_swallowed():
    def save(plan: Plan) -> None:
        raise OSError("disk full")

    scheduler = AutosaveScheduler(save, delay_seconds=10)
    scheduler.flush(make_default_plan())

    assert scheduler.saved_at is None
    assert not scheduler.pending


def test_reset_deletes_snapshot_and_cancels_pending(tmp_path, sample_plan):
    store = SnapshotStore(tmp_path / "s.json")
    save_plan(store, KEY, sample_plan)
    scheduler = AutosaveScheduler(lambda plan: save_plan(store, KEY, plan), delay_seconds=10)
    scheduler.schedule(sample_plan)

    plan = reset_plan(store, KEY, scheduler)

    assert not scheduler.pending
    assert store.get(KEY) is None
    assert plan.meta.name == ""


def test_reset_waits_for_a_write_in_progress(tmp_path, sample_plan):
    store = SnapshotStore(tmp_path / "s.json")
    started = threading.Event()
    release = threading.Event()

    def slow_save(plan: Plan) -> None:
        started.set()
        release.wait(2)
        save_plan(store, KEY, plan)

    scheduler = AutosaveScheduler(slow_save, delay_seconds=0.01)
    scheduler.schedule(sample_plan)
    assert started.wait(2)

    resetter = threading.Thread(target=reset_plan, args=(store, KEY, scheduler))
    resetter.start()
    resetter.join(0.1)
    assert resetter.is_alive()

    release.set()
    resetter.join(2)

    assert not resetter.is_alive()
    assert store.get(KEY) is None


def test_cancelled_write_is_skipped_after_its_timer_fired():
    saved = []
    scheduler = AutosaveScheduler(saved.append, delay_seconds=10)
    plan = make_default_plan()

    scheduler.schedule(plan)
    scheduler.cancel()
    scheduler._run(plan, 1)

    assert saved == []


def test_concurrent_writes_keep_every_key(tmp_path):
    store = SnapshotStore(tmp_path / "s.json")
    threads = [threading.Thread(target=store.set, args=(f"k{index}", {"value": index})) for index in range(20)]

    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert store.read_all() == {f"k{index}": {"value": index} for index in range(20)}
    assert [path.name for path in tmp_path.iterdir()] == ["s.json"]
