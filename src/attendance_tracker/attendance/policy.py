"""Credit policies: how much each status counts towards the presence percentage."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from ..core.constants import STUDENT_REQUIRED_PERCENTAGE, TEACHER_REQUIRED_PERCENTAGE
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import ValidationError

CreditPolicy = Mapping[AttendanceStatus, float]

TEACHER_POLICY: CreditPolicy = MappingProxyType(
    {
        AttendanceStatus.PRESENT: 1.0,
        AttendanceStatus.ABSENT: 0.0,
    }
)

STUDENT_POLICY: CreditPolicy = MappingProxyType(
    {
        AttendanceStatus.PRESENT: 1.0,
        AttendanceStatus.TARDY: 0.5,
        AttendanceStatus.ABSENT: 0.0,
    }
)


def validate_policy(policy: CreditPolicy) -> CreditPolicy:
    if not policy:
        raise ValidationError("Credit policy must not be empty")
    for status, credit in policy.items():
        if not 0 <= credit <= 1:
            raise ValidationError(f"Credit for {AttendanceStatus(status).value} must be within [0, 1], got {credit}")
    return policy


def policy_for_role(role: Role) -> CreditPolicy:
    return STUDENT_POLICY if role == Role.STUDENT else TEACHER_POLICY


def allowed_statuses_for_role(role: Role) -> frozenset[AttendanceStatus]:
    # Tardy is only tracked for students.
    return frozenset(policy_for_role(role))


def required_percentage_for_role(role: Role) -> float:
    return STUDENT_REQUIRED_PERCENTAGE if role == Role.STUDENT else TEACHER_REQUIRED_PERCENTAGE
