from __future__ import annotations

from flask import Flask, request

from ..common.http import current_user_id, fail, json_body, login_required, ok, teacher_required
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.exceptions import AuthorizationError, ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    svc = container.attendance_service

    @app.route("/api/dashboard", endpoint="dashboard")
    @login_required
    def dashboard():
        try:
            user_id = current_user_id()
            return ok(summary=svc.get_summary(user_id), history=svc.get_history_ui(user_id))
        except ValidationError as e:
            return fail(str(e), 400)
        except Exception:
            app.logger.exception("Dashboard failed")
            return fail("Could not load attendance", 500)

    @app.route("/api/attendance", methods=["POST"], endpoint="mark_attendance")
    @login_required
    def mark_attendance():
        try:
            data = json_body()
            record = svc.mark(current_user_id(), data.get("status"))
            return ok(record=record.to_dict(), summary=svc.get_summary(record.user_id))
        except ValidationError as e:
            return fail(str(e), 400)
        except Exception:
            app.logger.exception("Marking attendance failed")
            return fail("Could not mark attendance", 500)

    @app.route("/api/attendance/history", endpoint="attendance_history")
    @login_required
    def attendance_history():
        try:
            limit = int(request.args.get("limit", DEFAULT_HISTORY_LIMIT))
        except ValueError:
            return fail("limit must be a number", 400)
        try:
            return ok(history=svc.get_history_ui(current_user_id(), limit=limit))
        except ValidationError as e:
            return fail(str(e), 400)
        except Exception:
            app.logger.exception("Loading history failed")
            return fail("Could not load attendance", 500)

    @app.route("/api/students", endpoint="students")
    @teacher_required
    def students():
        try:
            return ok(students=svc.roster_summary(current_user_id()))
        except AuthorizationError as e:
            return fail(str(e), 403)
        except ValidationError as e:
            return fail(str(e), 400)
        except Exception:
            app.logger.exception("Loading roster failed")
            return fail("Could not load students", 500)

    @app.route("/api/students/<student_id>/attendance", methods=["POST"], endpoint="mark_student")
    @teacher_required
    def mark_student(student_id: str):
        try:
            data = json_body()
            record = svc.mark_student(current_user_id(), student_id.upper(), data.get("status"))
            return ok(record=record.to_dict())
        except AuthorizationError as e:
            return fail(str(e), 403)
        except ValidationError as e:
            return fail(str(e), 400)
        except Exception:
            app.logger.exception("Marking student attendance failed")
            return fail("Could not mark attendance", 500)

    @app.route("/api/cohort/peers", endpoint="peer_cohort")
    @teacher_required
    def peer_cohort():
        try:
            cohort = svc.peer_cohort(current_user_id())
            return ok(cohort=[entry.to_payload() for entry in cohort])
        except AuthorizationError as e:
            return fail(str(e), 403)
        except ValidationError as e:
            return fail(str(e), 400)
        except Exception:
            app.logger.exception("Loading peer cohort failed")
            return fail("Could not load attendance", 500)
