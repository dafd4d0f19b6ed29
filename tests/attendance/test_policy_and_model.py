from datetime import date

import pytest

from attendance_tracker.attendance.model import AttendanceRecord
from attendance_tracker.attendance.policy import (
    STUDENT_POLICY,
    TEACHER_POLICY,
    allowed_statuses_for_role,
    policy_for_role,
    required_percentage_for_role,
    validate_policy,
)
from attendance_tracker.core.enums import AttendanceStatus, Role
from attendance_tracker.core.exceptions import ValidationError


def test_role_policies():
    assert policy_for_role(Role.TEACHER) is TEACHER_POLICY
    assert policy_for_role(Role.STUDENT) is STUDENT_POLICY
    assert STUDENT_POLICY[AttendanceStatus.TARDY] == 0.5


def test_tardy_only_for_students():
    assert AttendanceStatus.TARDY in allowed_statuses_for_role(Role.STUDENT)
    assert AttendanceStatus.TARDY not in allowed_statuses_for_role(Role.TEACHER)


def test_required_percentages():
    assert required_percentage_for_role(Role.TEACHER) == 90.0
    assert required_percentage_for_role(Role.STUDENT) == 85.0


def test_policies_are_read_only():
    with pytest.raises(TypeError):
        TEACHER_POLICY[AttendanceStatus.TARDY] = 1.0


def test_validate_policy_rejects_empty_and_negative():
    with pytest.raises(ValidationError):
        validate_policy({})
    with pytest.raises(ValidationError):
        validate_policy({AttendanceStatus.PRESENT: -0.1})


def test_record_from_store_dict():
    record = AttendanceRecord.from_dict({"date": "2024-05-21", "status": "Tardy"}, user_id="S01")

    assert record == AttendanceRecord("S01", date(2024, 5, 21), AttendanceStatus.TARDY)
    assert record.to_dict() == {"date": "2024-05-21", "status": "Tardy"}


@pytest.mark.parametrize(
    "data",
    [
        {"date": "2024-13-01", "status": "Present"},
        {"date": "2024-05-21", "status": "Sick"},
        {"status": "Present"},
    ],
)
def test_record_from_invalid_dict_raises(data):
    with pytest.raises(ValidationError):
        AttendanceRecord.from_dict(data, user_id="S01")
