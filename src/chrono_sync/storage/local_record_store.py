from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import parse_instant, parse_iso_date, to_iso
from ..core.constants import (
    DEFAULT_THEME,
    KEY_ALARMED_SESSION,
    KEY_DARK_MODE,
    KEY_RECORDS,
    KEY_SESSION,
    KEY_THEME,
    KEY_USER,
)
from ..core.enums import AttendanceStatus
from ..core.exceptions import StorageError
from ..users.model import User
from ..users.repository import UserRepository
from .kv_store import KeyValueStore


class LocalRecordStore(AttendanceRepository, UserRepository):
    """Record store over a KeyValueStore.

    Values are JSON documents under stable logical keys. There is no schema
    versioning: a format change needs a one-off transform of stored data.
    """

    def __init__(self, kv: KeyValueStore):
        self._kv = kv

    # --- user -----------------------------------------------------------

    def get_user(self) -> Optional[User]:
        doc = self._load_json(KEY_USER)
        if doc is None:
            return None
        return _user_from_doc(doc)

    def save_user(self, user: User) -> None:
        self._kv.set(KEY_USER, json.dumps(_user_to_doc(user)))

    # --- records ----------------------------------------------------------

    def get_records(self) -> List[AttendanceRecord]:
        docs = self._load_json(KEY_RECORDS)
        if not docs:
            return []
        try:
            return [_record_from_doc(d) for d in docs]
        except (KeyError, TypeError, ValueError) as e:
            raise StorageError(f"Stored attendance records are malformed: {e}") from e

    def save_record(self, record: AttendanceRecord) -> None:
        docs = self._load_json(KEY_RECORDS) or []
        doc = _record_to_doc(record)
        for i, existing in enumerate(docs):
            if existing.get("id") == record.id:
                docs[i] = doc
                break
        else:
            docs.append(doc)
        self._kv.set(KEY_RECORDS, json.dumps(docs))

    # --- session pointer ------------------------------------------------

    def get_current_session_id(self) -> Optional[str]:
        return self._kv.get(KEY_SESSION)

    def set_current_session_id(self, session_id: Optional[str]) -> None:
        if session_id is None:
            self._kv.remove(KEY_SESSION)
        else:
            self._kv.set(KEY_SESSION, session_id)

    def get_alarmed_session_id(self) -> Optional[str]:
        return self._kv.get(KEY_ALARMED_SESSION)

    def set_alarmed_session_id(self, session_id: str) -> None:
        self._kv.set(KEY_ALARMED_SESSION, session_id)

    def clear_session(self) -> None:
        self._kv.remove(KEY_USER)
        self._kv.remove(KEY_SESSION)

    # --- display preferences ------------------------------------------------

    def get_theme(self) -> str:
        return self._kv.get(KEY_THEME) or DEFAULT_THEME

    def save_theme(self, theme: str) -> None:
        self._kv.set(KEY_THEME, theme)

    def get_dark_mode(self) -> bool:
        return self._kv.get(KEY_DARK_MODE) == "true"

    def save_dark_mode(self, is_dark: bool) -> None:
        self._kv.set(KEY_DARK_MODE, "true" if is_dark else "false")

    def _load_json(self, key: str) -> Any:
        raw = self._kv.get(key)
        if not raw:
            return None
        try:
            return json.loads(raw)
        except ValueError as e:
            raise StorageError(f"Stored value for {key!r} is not valid JSON") from e


def _user_to_doc(user: User) -> Dict[str, Any]:
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "phone": user.phone,
        "department": user.department,
        "position": user.position,
        "avatar_url": user.avatar_url,
        "theme_color": user.theme_color,
        "is_dark_mode": user.is_dark_mode,
    }


def _user_from_doc(doc: Dict[str, Any]) -> User:
    try:
        return User(
            id=str(doc["id"]),
            name=doc.get("name", ""),
            email=doc.get("email", ""),
            phone=doc.get("phone", ""),
            department=doc.get("department", ""),
            position=doc.get("position", ""),
            avatar_url=doc.get("avatar_url"),
            theme_color=doc.get("theme_color"),
            is_dark_mode=doc.get("is_dark_mode"),
        )
    except (KeyError, TypeError) as e:
        raise StorageError(f"Stored user is malformed: {e}") from e


def _record_to_doc(r: AttendanceRecord) -> Dict[str, Any]:
    return {
        "id": r.id,
        "user_id": r.user_id,
        "date": r.work_date.strftime("%Y-%m-%d"),
        "check_in": to_iso(r.check_in),
        "check_out": to_iso(r.check_out) if r.check_out else None,
        "status": r.status.value,
        "is_late": r.is_late,
        "is_early_leave": r.is_early_leave,
        "work_duration_minutes": r.work_duration_minutes,
        "note": r.note,
    }


def _record_from_doc(d: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        id=str(d["id"]),
        user_id=str(d["user_id"]),
        work_date=parse_iso_date(d["date"]),
        check_in=parse_instant(d["check_in"]),
        check_out=parse_instant(d["check_out"]) if d.get("check_out") else None,
        status=AttendanceStatus(d.get("status", AttendanceStatus.PRESENT.value)),
        is_late=bool(d.get("is_late", False)),
        is_early_leave=bool(d.get("is_early_leave", False)),
        work_duration_minutes=int(d.get("work_duration_minutes", 0)),
        note=d.get("note"),
    )
