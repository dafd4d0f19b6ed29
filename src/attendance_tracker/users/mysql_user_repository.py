from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import User
from .repository import UserRepository

_USER_COLUMNS = "user_id, display_name, password_hash, role, teacher_id, grade, is_active"


def _to_user(row: Dict[str, Any]) -> User:
    return User(
        user_id=row["user_id"],
        display_name=row["display_name"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        teacher_id=row.get("teacher_id"),
        grade=row.get("grade"),
        is_active=bool(row.get("is_active", True)),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE user_id=%s", (user_id,))
            row = fetchone(cur)
            return _to_user(row) if row else None

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(user_id, display_name, password_hash, role, teacher_id, grade, is_active)
                VALUES(%s,%s,%s,%s,%s,%s,1)
                """,
                (user_id, display_name, password_hash, role.value, teacher_id, grade),
            )
            return user_id

    def list_by_role(self, role: Role) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_USER_COLUMNS} FROM users WHERE role=%s AND is_active=1 ORDER BY user_id",
                (role.value,),
            )
            return [_to_user(r) for r in fetchall(cur)]

    def list_students_for_teacher(self, teacher_id: str) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_USER_COLUMNS}
                FROM users
                WHERE role=%s AND teacher_id=%s AND is_active=1
                ORDER BY user_id
                """,
                (Role.STUDENT.value, teacher_id),
            )
            return [_to_user(r) for r in fetchall(cur)]
