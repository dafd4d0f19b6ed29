from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from attendance_tracker.analysis.model import TrendAnalysis
from attendance_tracker.attendance.aggregator import upsert_record
from attendance_tracker.attendance.model import AttendanceRecord
from attendance_tracker.container import wire_container
from attendance_tracker.core.enums import AttendanceStatus, Role
from attendance_tracker.main import create_app
from attendance_tracker.users.model import User

PASSWORD = "secret1"
_PASSWORD_HASH = generate_password_hash(PASSWORD)


@dataclass
class InMemoryUsers:
    users_by_id: dict[str, User] = field(default_factory=dict)

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self.users_by_id.get(user_id)

    def create_user(self, *, user_id, display_name, password_hash, role, teacher_id=None, grade=None) -> str:
        self.users_by_id[user_id] = User(
            user_id=user_id,
            display_name=display_name,
            password_hash=password_hash,
            role=role,
            teacher_id=teacher_id,
            grade=grade,
        )
        return user_id

    def list_by_role(self, role: Role):
        return [u for u in self.users_by_id.values() if u.role == role]

    def list_students_for_teacher(self, teacher_id: str):
        return [u for u in self.users_by_id.values() if u.role == Role.STUDENT and u.teacher_id == teacher_id]


class InMemoryAttendance:
    def __init__(self):
        self._by_user: dict[str, list[AttendanceRecord]] = {}

    def list_for_user(self, user_id: str):
        return list(self._by_user.get(user_id, []))

    def list_for_users(self, user_ids):
        return {uid: self.list_for_user(uid) for uid in user_ids}

    def upsert(self, *, user_id: str, record_date: date, status: AttendanceStatus) -> AttendanceRecord:
        record = AttendanceRecord(user_id=user_id, record_date=record_date, status=status)
        self._by_user[user_id] = upsert_record(self._by_user.get(user_id, []), record)
        return record

    def seed(self, user_id: str, *items) -> None:
        for record_date, status in items:
            self.upsert(user_id=user_id, record_date=record_date, status=status)


class FakeAnalyzer:
    def __init__(self, result: Optional[TrendAnalysis] = None, error: Optional[Exception] = None):
        self.result = result or TrendAnalysis(analysis_result="No unusual patterns.")
        self.error = error
        self.calls: list[str] = []

    def analyze(self, attendance_data: str) -> TrendAnalysis:
        self.calls.append(attendance_data)
        if self.error:
            raise self.error
        return self.result


def _user(
    user_id: str, name: str, role: Role, teacher_id: Optional[str] = None, grade: Optional[str] = None
) -> User:
    return User(
        user_id=user_id,
        display_name=name,
        password_hash=_PASSWORD_HASH,
        role=role,
        teacher_id=teacher_id,
        grade=grade,
    )


@pytest.fixture
def fixed_today() -> date:
    return date(2024, 5, 24)


@pytest.fixture
def users_repo() -> InMemoryUsers:
    users = [
        _user("T01T001", "Krithi", Role.TEACHER),
        _user("T02T002", "Sam", Role.TEACHER),
        _user("S01", "Alice", Role.STUDENT, "T01T001", "5"),
        _user("S02", "Bob", Role.STUDENT, "T01T001", "5"),
        _user("S03", "Charlie", Role.STUDENT, "T02T002", "6"),
    ]
    return InMemoryUsers({u.user_id: u for u in users})


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def analyzer() -> FakeAnalyzer:
    return FakeAnalyzer()


@pytest.fixture
def container(users_repo, attendance_repo, analyzer):
    return wire_container(users_repo=users_repo, attendance_repo=attendance_repo, analyzer=analyzer)


@pytest.fixture
def app(container):
    return create_app(container, settings_module="attendance_tracker.settings.testing")


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    def _login(user_id: str, password: str = PASSWORD):
        return client.post("/api/login", json={"id": user_id, "password": password})

    return _login
