from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ValidationError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


def normalize_user_id(value: str) -> str:
    # IDs are matched case-insensitively; store them upper-cased.
    return require_non_empty(value, "User ID").upper()


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: str
    display_name: str
    role: Role
    teacher_id: Optional[str]


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, user_id: str, password: str) -> SessionUser:
        if not isinstance(user_id, str) or not isinstance(password, str):
            raise AuthenticationError("Invalid ID or password")

        user = self._users.get_by_id(user_id.strip().upper())
        if not user or not user.is_active:
            raise AuthenticationError("Invalid ID or password")

        try:
            ok = check_password_hash(user.password_hash, password)
        except ValueError:
            # e.g. placeholder hashes or corrupted values
            ok = False

        if not ok:
            logger.info("Failed login for %s", user.user_id)
            raise AuthenticationError("Invalid ID or password")

        return SessionUser(
            user_id=user.user_id,
            display_name=user.display_name,
            role=user.role,
            teacher_id=user.teacher_id,
        )


class UserService:
    """Use case: register and look up users."""

    def __init__(self, users: UserRepository):
        self._users = users

    def register(
        self,
        *,
        user_id: str,
        display_name: str,
        role: Role,
        password: str,
        teacher_id: Optional[str] = None,
        grade: Optional[str] = None,
    ) -> User:
        user_id = normalize_user_id(user_id)
        display_name = require_non_empty(display_name, "Name")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._users.get_by_id(user_id):
            raise ValidationError("User ID is already taken")

        if teacher_id:
            if role != Role.STUDENT:
                raise ValidationError("Only students can be assigned to a teacher")
            teacher_id = normalize_user_id(teacher_id)
            teacher = self._users.get_by_id(teacher_id)
            if not teacher or teacher.role != Role.TEACHER:
                raise ValidationError("Teacher does not exist")
        else:
            teacher_id = None

        if grade is not None:
            if role != Role.STUDENT:
                raise ValidationError("Only students have a grade")
            grade = require_non_empty(grade, "Grade")

        password_hash = generate_password_hash(password)
        self._users.create_user(
            user_id=user_id,
            display_name=display_name,
            password_hash=password_hash,
            role=role,
            teacher_id=teacher_id,
            grade=grade,
        )
        logger.info("Registered %s %s", role.value, user_id)
        return User(
            user_id=user_id,
            display_name=display_name,
            password_hash=password_hash,
            role=role,
            teacher_id=teacher_id,
            grade=grade,
        )
