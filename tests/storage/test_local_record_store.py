from __future__ import annotations

import os
from dataclasses import replace
from datetime import date, datetime, timedelta, timezone

import pytest

from chrono_sync.attendance.model import AttendanceRecord
from chrono_sync.core.enums import AttendanceStatus
from chrono_sync.core.exceptions import StorageError
from chrono_sync.storage.kv_store import KeyValueStore
from chrono_sync.storage.local_record_store import LocalRecordStore
from chrono_sync.users.model import User

TZ = timezone(timedelta(hours=7))


@pytest.fixture
def store(tmp_path):
    return LocalRecordStore(KeyValueStore(tmp_path / "data"))


def make_record(record_id: str, *, hour: int = 9) -> AttendanceRecord:
    return AttendanceRecord(
        id=record_id,
        user_id="u1",
        work_date=date(2026, 3, 2),
        check_in=datetime(2026, 3, 2, hour, 0, tzinfo=TZ),
        check_out=None,
        status=AttendanceStatus.PRESENT,
        is_late=hour >= 10,
    )


def make_user() -> User:
    return User(
        id="u1",
        name="Alex",
        email="alex@example.com",
        phone="123",
        department="Engineering",
        position="Engineer",
        theme_color="emerald",
        is_dark_mode=True,
    )


def test_empty_store_defaults(store):
    assert store.get_user() is None
    assert store.get_alarmed_session_id() is None
    assert store.get_records() == []
    assert store.get_current_session_id() is None
    assert store.get_theme() == "indigo"
    assert store.get_dark_mode() is False


def test_user_round_trip_last_write_wins(store):
    user = make_user()
    store.save_user(user)
    store.save_user(replace(user, phone="999"))

    assert store.get_user() == replace(user, phone="999")


def test_save_record_appends_new_ids(store):
    store.save_record(make_record("a"))
    store.save_record(make_record("b"))

    assert [r.id for r in store.get_records()] == ["a", "b"]


def test_save_record_replaces_existing_in_place(store):
    store.save_record(make_record("a"))
    store.save_record(make_record("b"))
    store.save_record(make_record("c"))

    closed = replace(
        make_record("b"),
        check_out=datetime(2026, 3, 2, 17, 0, tzinfo=TZ),
        work_duration_minutes=480,
    )
    store.save_record(closed)

    records = store.get_records()
    assert [r.id for r in records] == ["a", "b", "c"]
    assert records[1] == closed


def test_records_keep_utc_offset(store):
    store.save_record(make_record("a"))

    check_in = store.get_records()[0].check_in
    assert check_in.utcoffset() == timedelta(hours=7)
    assert check_in.hour == 9


def test_session_pointer_absent_vs_empty(store):
    store.set_current_session_id("abc")
    assert store.get_current_session_id() == "abc"

    store.set_current_session_id("")
    assert store.get_current_session_id() == ""

    store.set_current_session_id(None)
    assert store.get_current_session_id() is None


def test_clear_session_keeps_records_and_preferences(store):
    store.save_user(make_user())
    store.save_record(make_record("a"))
    store.set_current_session_id("a")
    store.save_theme("rose")
    store.set_alarmed_session_id("a")
    store.save_dark_mode(True)

    store.clear_session()

    assert store.get_user() is None
    assert store.get_current_session_id() is None
    assert [r.id for r in store.get_records()] == ["a"]
    assert store.get_theme() == "rose"
    assert store.get_dark_mode() is True
    assert store.get_alarmed_session_id() == "a"


def test_state_survives_new_store_instance(tmp_path):
    first = LocalRecordStore(KeyValueStore(tmp_path))
    first.save_record(make_record("a"))
    first.set_current_session_id("a")

    second = LocalRecordStore(KeyValueStore(tmp_path))
    assert [r.id for r in second.get_records()] == ["a"]
    assert second.get_current_session_id() == "a"


def test_corrupt_records_raise_storage_error(tmp_path):
    (tmp_path / "chrono_records").write_text("{not json", encoding="utf-8")
    store = LocalRecordStore(KeyValueStore(tmp_path))

    with pytest.raises(StorageError):
        store.get_records()


def test_failed_write_leaves_previous_value(tmp_path, monkeypatch):
    kv = KeyValueStore(tmp_path)
    kv.set("chrono_current_session", "old")

    def failing_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(os, "replace", failing_replace)

    with pytest.raises(StorageError):
        kv.set("chrono_current_session", "new")

    monkeypatch.undo()
    assert kv.get("chrono_current_session") == "old"
    assert sorted(p.name for p in tmp_path.iterdir()) == ["chrono_current_session"]


def test_remove_missing_key_is_noop(tmp_path):
    kv = KeyValueStore(tmp_path)

    kv.remove("chrono_user")

    assert kv.get("chrono_user") is None


def test_rejects_path_like_keys(tmp_path):
    with pytest.raises(ValueError):
        KeyValueStore(tmp_path).get("../escape")
