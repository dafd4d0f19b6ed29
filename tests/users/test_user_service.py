from __future__ import annotations

import pytest
from werkzeug.security import check_password_hash

from attendance_tracker.core.enums import Role
from attendance_tracker.core.exceptions import AuthenticationError, ValidationError
from attendance_tracker.users.service import AuthService, UserService


def test_register_student_with_teacher(users_repo):
    svc = UserService(users_repo)

    user = svc.register(user_id="s10", display_name=" Dana ", role=Role.STUDENT, password="pw1234", teacher_id="t01t001")

    assert user.user_id == "S10"
    assert user.display_name == "Dana"
    assert user.teacher_id == "T01T001"
    stored = users_repo.get_by_id("S10")
    assert check_password_hash(stored.password_hash, "pw1234")
    assert stored.password_hash != "pw1234"


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(user_id="", display_name="X", role=Role.TEACHER, password="pw1234"),
        dict(user_id="T09", display_name="", role=Role.TEACHER, password="pw1234"),
        dict(user_id="T09", display_name="X", role=Role.TEACHER, password="short"),
        dict(user_id="t01t001", display_name="X", role=Role.TEACHER, password="pw1234"),
        dict(user_id="S09", display_name="X", role=Role.STUDENT, password="pw1234", teacher_id="S01"),
        dict(user_id="T09", display_name="X", role=Role.TEACHER, password="pw1234", teacher_id="T01T001"),
    ],
)
def test_register_rejects_invalid_input(users_repo, kwargs):
    with pytest.raises(ValidationError):
        UserService(users_repo).register(**kwargs)


def test_authenticate_is_case_insensitive_on_id(users_repo):
    s_user = AuthService(users_repo).authenticate("t01t001", "secret1")

    assert s_user.user_id == "T01T001"
    assert s_user.role == Role.TEACHER


def test_authenticate_wrong_password_raises(users_repo):
    with pytest.raises(AuthenticationError):
        AuthService(users_repo).authenticate("T01T001", "wrong")


def test_authenticate_unknown_user_raises(users_repo):
    with pytest.raises(AuthenticationError):
        AuthService(users_repo).authenticate("NOBODY", "secret1")


def test_register_student_keeps_grade(users_repo):
    user = UserService(users_repo).register(
        user_id="S11", display_name="Eli", role=Role.STUDENT, password="pw1234", grade=" 5 "
    )

    assert user.grade == "5"
    assert users_repo.get_by_id("S11").grade == "5"


def test_register_teacher_with_grade_is_rejected(users_repo):
    with pytest.raises(ValidationError):
        UserService(users_repo).register(
            user_id="T09", display_name="X", role=Role.TEACHER, password="pw1234", grade="5"
        )


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(user_id=123, display_name="X", role=Role.TEACHER, password="pw1234"),
        dict(user_id="T09", display_name=["X"], role=Role.TEACHER, password="pw1234"),
        dict(user_id="T09", display_name="X", role=Role.TEACHER, password=1234567),
        dict(user_id="S09", display_name="X", role=Role.STUDENT, password="pw1234", teacher_id=7),
    ],
)
def test_register_rejects_non_string_fields(users_repo, kwargs):
    with pytest.raises(ValidationError):
        UserService(users_repo).register(**kwargs)


@pytest.mark.parametrize("user_id, password", [(5, "secret1"), ("T01T001", None), (None, None)])
def test_authenticate_non_string_credentials_raises(users_repo, user_id, password):
    with pytest.raises(AuthenticationError):
        AuthService(users_repo).authenticate(user_id, password)
