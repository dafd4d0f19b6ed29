from __future__ import annotations

from datetime import date
from typing import Any, Dict, Mapping, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AttendanceRecord
from .repository import AttendanceRepository


def _to_record(row: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        user_id=row["user_id"],
        record_date=row["record_date"],
        status=AttendanceStatus(row["status"]),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_user(self, user_id: str) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, record_date, status
                FROM attendance_records
                WHERE user_id=%s
                """,
                (user_id,),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_users(self, user_ids: Sequence[str]) -> Mapping[str, Sequence[AttendanceRecord]]:
        out: dict[str, list[AttendanceRecord]] = {uid: [] for uid in user_ids}
        if not user_ids:
            return out

        placeholders = ",".join(["%s"] * len(user_ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT user_id, record_date, status
                FROM attendance_records
                WHERE user_id IN ({placeholders})
                """,
                tuple(user_ids),
            )
            for r in fetchall(cur):
                out[r["user_id"]].append(_to_record(r))
        return out

    def upsert(self, *, user_id: str, record_date: date, status: AttendanceStatus) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(user_id, record_date, status)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE status=VALUES(status)
                """,
                (user_id, record_date, status.value),
            )
        return AttendanceRecord(user_id=user_id, record_date=record_date, status=status)
