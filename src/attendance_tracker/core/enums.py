from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    TEACHER = "teacher"
    STUDENT = "student"


class AttendanceStatus(str, Enum):
    """Attendance status as stored and exchanged on the wire."""

    PRESENT = "Present"
    ABSENT = "Absent"
    TARDY = "Tardy"
