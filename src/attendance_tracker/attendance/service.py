from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..common.datetime_utils import today_local
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..users.model import User
from ..users.repository import UserRepository
from . import aggregator
from .model import AttendanceRecord, CohortEntry, parse_status
from .policy import allowed_statuses_for_role, policy_for_role, required_percentage_for_role
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

_CSS_CLASS = {
    AttendanceStatus.PRESENT: "bg-success",
    AttendanceStatus.ABSENT: "bg-danger",
    AttendanceStatus.TARDY: "bg-warning text-dark",
}


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository, users: UserRepository):
        self._attendance = attendance
        self._users = users

    def _get_user(self, user_id: str) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise ValidationError("User does not exist")
        return user

    def _get_teacher(self, user_id: str) -> User:
        user = self._get_user(user_id)
        if user.role != Role.TEACHER:
            raise AuthorizationError("Only teachers can do this")
        return user

    def _record(self, user: User, status, today: Optional[date]) -> AttendanceRecord:
        status = parse_status(status)
        if status not in allowed_statuses_for_role(user.role):
            raise ValidationError(f"{status.value} is not a valid status for a {user.role.value}")

        record = self._attendance.upsert(
            user_id=user.user_id,
            record_date=today or today_local(),
            status=status,
        )
        logger.info("Marked %s %s on %s", user.user_id, record.status.value, record.record_date)
        return record

    def mark(self, user_id: str, status, *, today: Optional[date] = None) -> AttendanceRecord:
        """Mark the user's own attendance for today; re-marking the same day overwrites."""

        return self._record(self._get_user(user_id), status, today)

    def mark_student(self, teacher_id: str, student_id: str, status, *, today: Optional[date] = None) -> AttendanceRecord:
        teacher = self._get_teacher(teacher_id)
        student = self._get_user(student_id)
        if student.role != Role.STUDENT or student.teacher_id != teacher.user_id:
            raise AuthorizationError("Student is not on your roster")
        return self._record(student, status, today)

    def get_history(self, user_id: str) -> list[AttendanceRecord]:
        return aggregator.sort_history(self._attendance.list_for_user(user_id))

    def get_summary(self, user_id: str) -> dict:
        user = self._get_user(user_id)
        history = self._attendance.list_for_user(user.user_id)
        return self._summary_for(user, history)

    def _summary_for(self, user: User, history) -> dict:
        snapshot = aggregator.summarize(history, policy_for_role(user.role))
        required = required_percentage_for_role(user.role)
        out = snapshot.to_display()
        out.update(
            {
                "requiredPercentage": required,
                "meetsRequirement": aggregator.meets_requirement(snapshot.percentage, required),
                "totalDays": len(history),
            }
        )
        return out

    def get_history_ui(self, user_id: str, *, limit: int = DEFAULT_HISTORY_LIMIT) -> list[dict]:
        if limit < 1:
            raise ValidationError("limit must be at least 1")
        rows = list(reversed(self.get_history(user_id)))[:limit]
        return [self._to_ui(r) for r in rows]

    def _to_ui(self, r: AttendanceRecord) -> dict:
        return {
            "date": r.record_date.strftime("%Y-%m-%d"),
            "status": r.status.value,
            "css_class": _CSS_CLASS.get(r.status, "bg-secondary"),
        }

    def peer_cohort(self, requesting_user_id: str) -> list[CohortEntry]:
        """Latest status of every teacher, the requester included."""

        requester = self._get_user(requesting_user_id)
        teachers = self._users.list_by_role(Role.TEACHER)
        histories = self._attendance.list_for_users([t.user_id for t in teachers])
        return aggregator.build_cohort_snapshot(requester, histories)

    def roster_cohort(self, teacher_id: str) -> list[CohortEntry]:
        teacher = self._get_teacher(teacher_id)
        students = self._users.list_students_for_teacher(teacher.user_id)
        histories = self._attendance.list_for_users([s.user_id for s in students])
        return aggregator.build_cohort_snapshot(teacher, histories)

    def roster_summary(self, teacher_id: str) -> list[dict]:
        teacher = self._get_teacher(teacher_id)
        students = self._users.list_students_for_teacher(teacher.user_id)
        histories = self._attendance.list_for_users([s.user_id for s in students])

        rows = []
        for student in students:
            history = aggregator.sort_history(histories.get(student.user_id, []))
            row = {"userId": student.user_id, "displayName": student.display_name, "grade": student.grade}
            row.update(self._summary_for(student, history))
            row["records"] = [r.to_dict() for r in history]
            rows.append(row)
        return rows
