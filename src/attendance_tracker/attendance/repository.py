from __future__ import annotations

from datetime import date
from typing import Mapping, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def list_for_user(self, user_id: str) -> Sequence[AttendanceRecord]:
        """All records for one user; order is not guaranteed."""

        raise NotImplementedError

    def list_for_users(self, user_ids: Sequence[str]) -> Mapping[str, Sequence[AttendanceRecord]]:
        """Histories keyed by user id, one key per requested id (empty when unmarked)."""

        raise NotImplementedError

    def upsert(self, *, user_id: str, record_date: date, status: AttendanceStatus) -> AttendanceRecord:
        """Insert, or overwrite the existing record for ``(user_id, record_date)``."""

        raise NotImplementedError
