from __future__ import annotations

from datetime import timedelta

from flask import Flask, session

from ..common.http import current_user_id, fail, json_body, login_required, ok
from ..core.constants import DEFAULT_SESSION_DAYS
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    app.permanent_session_lifetime = timedelta(days=int(app.config.get("SESSION_DAYS", DEFAULT_SESSION_DAYS)))

    @app.route("/api/register", methods=["POST"], endpoint="register")
    def register_user():
        try:
            data = json_body()
            try:
                role = Role(str(data.get("role", "")).lower())
            except ValueError:
                raise ValidationError("You need to select a role")

            user = container.user_service.register(
                user_id=data.get("id", ""),
                display_name=data.get("name", ""),
                role=role,
                password=data.get("password", ""),
                teacher_id=data.get("teacherId") or None,
                grade=data.get("grade") or None,
            )
            return ok(201, user={"id": user.user_id, "name": user.display_name, "role": user.role.value})
        except ValidationError as e:
            return fail(str(e), 400)
        except Exception:
            app.logger.exception("Registration failed")
            return fail("Registration failed", 500)

    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        try:
            data = json_body()
            s_user = container.auth_service.authenticate(data.get("id", ""), data.get("password", ""))
        except ValidationError as e:
            return fail(str(e), 400)
        except AuthenticationError as e:
            return fail(str(e), 401)
        except Exception:
            app.logger.exception("Login failed")
            return fail("Login failed", 500)

        session.clear()
        session.permanent = bool(data.get("rememberMe"))
        session["user_id"] = s_user.user_id
        session["name"] = s_user.display_name
        session["role"] = s_user.role.value
        session["teacher_id"] = s_user.teacher_id
        return ok(user={"id": s_user.user_id, "name": s_user.display_name, "role": s_user.role.value})

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return ok()

    @app.route("/api/me", endpoint="me")
    @login_required
    def me():
        return ok(
            user={
                "id": current_user_id(),
                "name": session.get("name"),
                "role": session.get("role"),
                "teacherId": session.get("teacher_id"),
            }
        )
