from flask import Blueprint, request, jsonify

from ..services.common import vehicle_to_dict
from ..services.vehicle_service import VehicleService

bp = Blueprint("vehicles", __name__, url_prefix="/vehicles")


@bp.get("/available")
def available():
    """Vehicles free to rent, as [{vehicle_id, info}] in catalog order."""
    rows = VehicleService.list_available_vehicles()
    return jsonify(vehicles=[{"vehicle_id": vid, "info": info} for vid, info in rows])


@bp.get("")
def list_vehicles():
    """Whole catalog with optional filters; empty query params are ignored."""
    q = {k: (v or "").strip() for k, v in request.args.items()}
    nonempty = {k: v for k, v in q.items() if v}

    vehicles = VehicleService.filter_vehicles(
        category=nonempty.get("category"),
        brand=nonempty.get("brand"),
        min_rate=nonempty.get("min_rate"),
        max_rate=nonempty.get("max_rate"),
        available_only=nonempty.get("available", "").lower() in ("1", "true", "yes"),
    )
    return jsonify(vehicles=vehicles)


@bp.get("/<vid>")
def vehicle_detail(vid):
    return jsonify(vehicle_to_dict(VehicleService.get_vehicle(vid)))
