from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Iterable, Optional

import mysql.connector
from werkzeug.security import generate_password_hash

from .connection import DBConfig

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).with_name("schema.sql")

DEMO_PASSWORD = "welcome1"

DEMO_TEACHERS = [
    ("T01T001", "Krithi"),
    ("T02T002", "Sam"),
]

# (student id, name, grade, teacher id, statuses for the demo week starting DEMO_WEEK_START)
DEMO_STUDENTS = [
    ("S01", "Alice", "5", "T01T001", ["Present", "Present", "Absent", "Present", "Tardy"]),
    ("S02", "Bob", "5", "T01T001", ["Present", "Present", "Present", "Present", "Present"]),
    ("S03", "Charlie", "6", "T02T002", ["Absent", "Absent", "Present", "Present", "Present"]),
    ("S04", "David", "6", "T02T002", ["Present", "Tardy", "Tardy", "Present", "Present"]),
    ("S05", "Eve", "5", "T01T001", ["Present", "Present", "Present", "Absent", "Present"]),
]
DEMO_WEEK_START = date(2024, 5, 20)


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Split on ';' outside quoted strings.
    buf: list[str] = []
    quote: Optional[str] = None
    for ch in sql:
        if quote:
            if ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue
        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _connect(config: DBConfig, *, with_database: bool = True):
    kwargs = dict(host=config.host, port=config.port, user=config.user, password=config.password, use_pure=True)
    if with_database:
        kwargs["database"] = config.database
    return mysql.connector.connect(**kwargs)


def ensure_database_exists(db_config: dict) -> None:
    config = DBConfig.from_dict(db_config)
    conn = _connect(config, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{config.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path = SCHEMA_PATH) -> None:
    ensure_database_exists(db_config)
    sql = Path(schema_path).read_text(encoding="utf-8")

    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info("Applied schema from %s", schema_path)


def ensure_demo_data(db_config: dict) -> None:
    """Insert or refresh the demo teachers, students and one week of attendance."""

    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        password_hash = generate_password_hash(DEMO_PASSWORD)

        def upsert_user(user_id: str, name: str, role: str, teacher_id: Optional[str], grade: Optional[str]) -> None:
            cur.execute(
                """
                INSERT INTO users (user_id, display_name, password_hash, role, teacher_id, grade, is_active)
                VALUES (%s, %s, %s, %s, %s, %s, 1)
                ON DUPLICATE KEY UPDATE
                    display_name=VALUES(display_name), password_hash=VALUES(password_hash),
                    role=VALUES(role), teacher_id=VALUES(teacher_id), grade=VALUES(grade), is_active=1
                """,
                (user_id, name, password_hash, role, teacher_id, grade),
            )

        for teacher_id, name in DEMO_TEACHERS:
            upsert_user(teacher_id, name, "teacher", None, None)

        for student_id, name, grade, teacher_id, statuses in DEMO_STUDENTS:
            upsert_user(student_id, name, "student", teacher_id, grade)
            for offset, status in enumerate(statuses):
                cur.execute(
                    """
                    INSERT INTO attendance_records (user_id, record_date, status)
                    VALUES (%s, DATE_ADD(%s, INTERVAL %s DAY), %s)
                    ON DUPLICATE KEY UPDATE status=VALUES(status)
                    """,
                    (student_id, DEMO_WEEK_START, offset, status),
                )

        conn.commit()
    finally:
        conn.close()
    logger.info("Demo data ready (%d teachers, %d students)", len(DEMO_TEACHERS), len(DEMO_STUDENTS))


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
