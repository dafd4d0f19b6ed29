from __future__ import annotations

from dataclasses import dataclass

from .analysis.client import GeminiTrendAnalyzer, TrendAnalyzer
from .analysis.service import AnalysisService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    attendance_repo: AttendanceRepository

    auth_service: AuthService
    user_service: UserService
    attendance_service: AttendanceService
    analysis_service: AnalysisService


def wire_container(
    *,
    users_repo: UserRepository,
    attendance_repo: AttendanceRepository,
    analyzer: TrendAnalyzer,
) -> Container:
    attendance_service = AttendanceService(attendance_repo, users_repo)
    return Container(
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        attendance_service=attendance_service,
        analysis_service=AnalysisService(attendance_service, analyzer),
    )


def build_container(*, db_config: dict, analysis_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return wire_container(
        users_repo=MySQLUserRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        analyzer=GeminiTrendAnalyzer.from_config(analysis_config),
    )
