from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Repository interface for attendance records and the session pointer.

    Note (DIP): services depend on this interface, not on the concrete store.
    """

    def get_records(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def save_record(self, record: AttendanceRecord) -> None:
        """Upsert by id: replace in place or append."""

        raise NotImplementedError

    def get_current_session_id(self) -> Optional[str]:
        raise NotImplementedError

    def set_current_session_id(self, session_id: Optional[str]) -> None:
        """`None` removes the pointer entirely."""

        raise NotImplementedError

    def get_alarmed_session_id(self) -> Optional[str]:
        """Id of the last record whose duration alarm has fired."""

        raise NotImplementedError

    def set_alarmed_session_id(self, session_id: str) -> None:
        raise NotImplementedError
