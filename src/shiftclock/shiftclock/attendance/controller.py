from __future__ import annotations

from datetime import date

from flask import Flask, jsonify, request

from ..common.web import current_user, json_error, login_required, manager_required
from ..container import Container
from ..geo.perimeter import distance_meters
from .model import ClockRequest


def register(app: Flask, container: Container) -> None:
    @app.route("/api/clock", methods=["POST"], endpoint="clock")
    @login_required
    def clock():
        data = request.get_json(silent=True) or {}
        clock_request = ClockRequest.from_payload(current_user().user_id, data)
        event = container.clock_service.clock(clock_request)
        return jsonify({"success": True, "record": event.as_dict()}), 201

    @app.route("/api/me/history", methods=["GET"], endpoint="my_history")
    @login_required
    def my_history():
        history = container.report_service.history_for_user(current_user().user_id)
        return jsonify(history.as_dict())

    @app.route("/api/me/status", methods=["GET"], endpoint="my_status")
    @login_required
    def my_status():
        return jsonify(container.report_service.current_status(current_user().user_id))

    @app.route("/api/manager/clocked-in", methods=["GET"], endpoint="manager_clocked_in")
    @manager_required
    def manager_clocked_in():
        return jsonify([u.as_dict() for u in container.report_service.clocked_in_users()])

    @app.route("/api/manager/stats", methods=["GET"], endpoint="manager_stats")
    @manager_required
    def manager_stats():
        return jsonify(container.report_service.dashboard_stats().as_dict())

    @app.route("/api/manager/weekly", methods=["GET"], endpoint="manager_weekly")
    @manager_required
    def manager_weekly():
        return jsonify(container.report_service.weekly_user_stats())

    @app.route("/api/manager/history", methods=["GET"], endpoint="manager_history")
    @manager_required
    def manager_history():
        return jsonify([e.as_dict() for e in container.report_service.all_history()])

    @app.route("/api/manager/history.csv", methods=["GET"], endpoint="manager_history_csv")
    @manager_required
    def manager_history_csv():
        filename = f"clock_history_{date.today().strftime('%Y%m%d')}.csv"
        return app.response_class(
            container.report_service.history_csv(),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/manager/staff/<int:user_id>", methods=["GET"], endpoint="manager_staff")
    @manager_required
    def manager_staff(user_id: int):
        user = container.users_repo.get_by_id(user_id)
        if not user:
            return json_error("User not found", 404)
        history = container.report_service.history_for_user(user_id)
        body = history.as_dict()

        center = container.organization_service.get_current().center
        for event, row in zip(history.events, body["events"]):
            row["distanceMeters"] = round(distance_meters(event.location, center), 1) if event.location else None
        return jsonify({"user": user.as_dict(), **body})
