"""Attendance aggregation.

Pure functions turning a raw, possibly unsorted attendance history into the
values the dashboard and the trend-analysis step consume:

- ``latest_status``: status on the most recent date, or ``None`` when nothing
  has been marked yet.
- ``attendance_percentage``: credit-weighted share of days present, or
  ``None`` when there is no history (never shown as 0%).
- ``build_cohort_snapshot``: latest status per user, dropping users without
  history, for the trend-analysis prompt.

Nothing here touches the store; callers may recompute freely.
"""

from __future__ import annotations

from typing import Mapping, Optional, Sequence

from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..users.model import User
from .model import AggregateSnapshot, AttendanceRecord, CohortEntry
from .policy import CreditPolicy, validate_policy


def sort_history(history: Sequence[AttendanceRecord]) -> list[AttendanceRecord]:
    # Stable: same-date entries keep input order, so the later write ends up last.
    return sorted(history, key=lambda r: r.record_date)


def latest_status(history: Sequence[AttendanceRecord]) -> Optional[AttendanceStatus]:
    if not history:
        return None
    return sort_history(history)[-1].status


def attendance_percentage(history: Sequence[AttendanceRecord], policy: CreditPolicy) -> Optional[float]:
    validate_policy(policy)
    if not history:
        return None

    earned = 0.0
    for record in history:
        try:
            earned += float(policy[record.status])
        except KeyError:
            raise ValidationError(f"Status {record.status.value} has no credit under this policy") from None

    return 100.0 * earned / len(history)


def summarize(history: Sequence[AttendanceRecord], policy: CreditPolicy) -> AggregateSnapshot:
    return AggregateSnapshot(
        latest_status=latest_status(history),
        percentage=attendance_percentage(history, policy),
    )


def build_cohort_snapshot(
    requesting_user: User,
    histories: Mapping[str, Sequence[AttendanceRecord]],
) -> list[CohortEntry]:
    """Latest status per user, in the mapping's insertion order.

    Users with an empty history are left out rather than reported as unmarked.
    """

    if requesting_user.role != Role.TEACHER:
        raise AuthorizationError("Only teachers can view cohort attendance")

    snapshot: list[CohortEntry] = []
    for user_id, history in histories.items():
        status = latest_status(history)
        if status is None:
            continue
        snapshot.append(CohortEntry(user_id=user_id, status=status))
    return snapshot


def upsert_record(history: Sequence[AttendanceRecord], record: AttendanceRecord) -> list[AttendanceRecord]:
    """Return a new history with ``record`` replacing any entry on the same date."""

    out = [r for r in history if r.record_date != record.record_date]
    out.append(record)
    return out


def meets_requirement(percentage: Optional[float], threshold: float) -> Optional[bool]:
    if percentage is None:
        return None
    return percentage >= threshold


def format_percentage(percentage: Optional[float]) -> str:
    if percentage is None:
        return "N/A"
    return f"{percentage:.1f}%"


def format_cohort_for_prompt(snapshot: Sequence[CohortEntry]) -> str:
    """Render the cohort as ``"T01T001:Present,T02T002:Absent"``."""

    return ",".join(f"{entry.user_id}:{entry.status.value}" for entry in snapshot)
