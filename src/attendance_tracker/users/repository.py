from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(
        self,
        *,
        user_id: str,
        display_name: str,
        password_hash: str,
        role: Role,
        teacher_id: Optional[str] = None,
        grade: Optional[str] = None,
    ) -> str:
        raise NotImplementedError

    def list_by_role(self, role: Role) -> Sequence[User]:
        raise NotImplementedError

    def list_students_for_teacher(self, teacher_id: str) -> Sequence[User]:
        raise NotImplementedError
