from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import login_required, manager_required
from ..container import Container
from ..geo.model import Coordinate
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/organization", methods=["GET"], endpoint="organization")
    @login_required
    def organization():
        service = container.organization_service
        return jsonify({**service.get_current().as_dict(), "movementThresholdMeters": service.movement_threshold_meters})

    @app.route("/api/organization", methods=["PUT"], endpoint="organization_update")
    @manager_required
    def organization_update():
        data = request.get_json(silent=True) or {}
        org = container.organization_service.update(
            name=data.get("name", ""),
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
            radius_meters=data.get("radius"),
            location_name=data.get("locationName"),
        )
        return jsonify(org.as_dict())

    @app.route("/api/perimeter", methods=["GET"], endpoint="perimeter_check")
    @login_required
    def perimeter_check():
        point = Coordinate.parse(request.args.get("latitude"), request.args.get("longitude"))
        if point is None:
            raise ValidationError("latitude and longitude are required")
        check = container.organization_service.check_perimeter(point, request.args.get("organizationId"))
        return jsonify(check.as_dict())
