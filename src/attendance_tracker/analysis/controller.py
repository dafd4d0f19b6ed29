from __future__ import annotations

from flask import Flask

from ..common.http import current_user_id, fail, ok, teacher_required
from ..core.exceptions import AnalysisError, AuthorizationError, ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    svc = container.analysis_service

    def _respond(run):
        try:
            result = run(current_user_id())
        except AnalysisError as e:
            return fail(str(e), 502)
        except AuthorizationError as e:
            return fail(str(e), 403)
        except ValidationError as e:
            return fail(str(e), 400)
        except Exception:
            app.logger.exception("Trend analysis failed")
            return fail("Failed to analyze attendance data.", 500)
        return ok(analysis=result.to_dict() if result else None)

    @app.route("/api/analysis/peers", methods=["POST"], endpoint="analyze_peers")
    @teacher_required
    def analyze_peers():
        return _respond(svc.analyze_peer_trends)

    @app.route("/api/analysis/roster", methods=["POST"], endpoint="analyze_roster")
    @teacher_required
    def analyze_roster():
        return _respond(svc.analyze_roster_trends)
