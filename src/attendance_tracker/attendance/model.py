from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_iso_date
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError


def parse_status(value: Any) -> AttendanceStatus:
    if isinstance(value, AttendanceStatus):
        return value
    try:
        return AttendanceStatus(value)
    except ValueError:
        raise ValidationError(f"Unknown attendance status: {value!r}") from None


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one user's attendance on one calendar day."""

    user_id: str
    record_date: date
    status: AttendanceStatus

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], *, user_id: str) -> "AttendanceRecord":
        """Build a record from the store shape ``{"date": "YYYY-MM-DD", "status": "Present"}``."""

        if "date" not in data or "status" not in data:
            raise ValidationError("Attendance record needs 'date' and 'status'")
        raw_date = data["date"]
        record_date = raw_date if isinstance(raw_date, date) else parse_iso_date(raw_date)
        return cls(user_id=user_id, record_date=record_date, status=parse_status(data["status"]))

    def to_dict(self) -> dict:
        return {"date": self.record_date.isoformat(), "status": self.status.value}


@dataclass(frozen=True)
class AggregateSnapshot:
    """Derived view of one user's history; recomputed on every read."""

    latest_status: Optional[AttendanceStatus]
    percentage: Optional[float]

    def to_display(self) -> dict:
        return {
            "latestStatus": self.latest_status.value if self.latest_status else None,
            "percentagePresent": round(self.percentage, 1) if self.percentage is not None else None,
        }


@dataclass(frozen=True)
class CohortEntry:
    user_id: str
    status: AttendanceStatus

    def to_payload(self) -> dict:
        return {"userId": self.user_id, "status": self.status.value}
