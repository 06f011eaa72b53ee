from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import admin_required, login_required
from ..container import Container
from ..core.constants import DEFAULT_OFFICE_RADIUS_METERS
from ..core.exceptions import InvalidInput
from .model import OfficeLocation


def location_to_dict(location: OfficeLocation) -> dict:
    return {
        "latitude": location.latitude,
        "longitude": location.longitude,
        "address": location.address,
        "radius": location.radius_meters,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/office-location", methods=["GET"], endpoint="api_office_location")
    @login_required
    def api_office_location():
        location = container.location_service.get_office_location()
        return jsonify(location_to_dict(location))

    @app.route("/api/admin/office-location", methods=["PUT"], endpoint="api_admin_office_location_update")
    @admin_required
    def api_admin_office_location_update():
        data = request.get_json(silent=True) or {}
        try:
            latitude = float(data["latitude"])
            longitude = float(data["longitude"])
            radius = data.get("radius", data.get("radius_meters", DEFAULT_OFFICE_RADIUS_METERS))
            if isinstance(radius, float) and not radius.is_integer():
                raise InvalidInput("radius must be a whole number of meters")
            radius_meters = int(radius)
        except (KeyError, TypeError, ValueError):
            raise InvalidInput("latitude and longitude are required numbers, radius a number") from None

        location = container.location_service.update_office_location(
            latitude=latitude,
            longitude=longitude,
            address=data.get("address"),
            radius_meters=radius_meters,
        )
        return jsonify({"success": True, "location": location_to_dict(location)})
