import random
from datetime import date
from pathlib import Path

from sqlalchemy.exc import OperationalError
from streamlit.testing.v1 import AppTest

from missionpicker.errors import StoreUnavailable
from missionpicker.services.catalogue import WEEKLY_POOL
from missionpicker.services.dates import week_start
from missionpicker.services.store import MemoryKeyValueStore, RecordStore

ROOT = Path(__file__).resolve().parent.parent
DEGRADED_TEXT = "will not be saved"


class FailingWritesKV(MemoryKeyValueStore):
    """Reads work; writes to keys with the given prefix fail like a full or read-only store."""

    def __init__(self, failing_prefix, data=None):
        super().__init__(data)
        self.failing_prefix = failing_prefix

    def set(self, key, value):
        if key.startswith(self.failing_prefix):
            raise StoreUnavailable("set", "quota exceeded")
        super().set(key, value)


def _history_page(kv, owner="hana"):
    at = AppTest.from_file(str(ROOT / "pages" / "1_History.py"))
    at.session_state["user"] = {"owner_id": owner}
    at.session_state["record_store"] = RecordStore(kv, rng=random.Random(3))
    at.session_state["degraded"] = False
    return at


def _has_degraded_warning(at):
    return any(DEGRADED_TEXT in w.value for w in at.warning)


def test_toggle_saves_flag():
    kv = MemoryKeyValueStore()
    at = _history_page(kv)
    at.run()
    today = date.today().isoformat()

    at.checkbox(key=f"chk-hana-daily-{today}").check().run()

    assert kv.get(f"checked-hana-mission-hana-{today}") == "true"
    assert at.session_state["degraded"] is False
    assert not _has_degraded_warning(at)


def test_failed_toggle_reverts_checkbox_and_warns():
    kv = FailingWritesKV("checked-")
    at = _history_page(kv)
    at.run()
    today = date.today().isoformat()
    widget_key = f"chk-hana-daily-{today}"
    daily = at.session_state["mission_session"].daily

    at.checkbox(key=widget_key).check().run()

    store = at.session_state["record_store"]
    assert at.session_state["degraded"] is True
    assert store.kv is not kv
    assert at.checkbox(key=widget_key).value is False
    assert store.get_completed(daily.identity) is False
    assert kv.get(f"checked-hana-mission-hana-{today}") is None
    # Same mission as before the failure
    assert at.session_state["mission_session"].daily == daily
    assert _has_degraded_warning(at)

    at.run()
    assert at.checkbox(key=widget_key).value is False
    assert _has_degraded_warning(at)


def test_failed_weekly_write_keeps_persisted_daily():
    kv = FailingWritesKV("weekly-")
    at = _history_page(kv)
    at.run()
    today = date.today()

    session = at.session_state["mission_session"]
    assert at.session_state["degraded"] is True
    assert session.daily.mission_text == kv.get(f"mission-hana-{today.isoformat()}")
    assert session.weekly.mission_text in WEEKLY_POOL
    assert kv.get(f"weekly-hana-{week_start(today).isoformat()}") is None
    assert _has_degraded_warning(at)


def test_init_db_failure_falls_back_to_memory(monkeypatch):
    def broken_init_db(bind=None):
        raise OperationalError("CREATE TABLE kv_entries", {}, Exception("unable to open database file"))

    monkeypatch.setattr("missionpicker.ui.state.init_db", broken_init_db)
    at = AppTest.from_file(str(ROOT / "app.py"))
    at.run()

    assert at.session_state["degraded"] is True
    assert at.session_state["db_init"] is False

    at.session_state["user"] = {"owner_id": "hana"}
    at.run()

    store = at.session_state["record_store"]
    assert type(store.kv) is MemoryKeyValueStore
    assert len(at.session_state["mission_session"].history) == 2
    assert _has_degraded_warning(at)
