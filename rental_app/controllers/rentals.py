from flask import Blueprint, jsonify

from ..services.customer_service import CustomerService
from ..services.common import customer_to_dict
from ..services.rental_service import RentalService
from ..services.vehicle_service import VehicleService
from ..utils.decorators import json_body_required

bp = Blueprint("rentals", __name__)

_TRUE = {"y", "yes", "true", "1", "on"}
_FALSE = {"n", "no", "false", "0", "off", ""}


def _parse_days(value):
    """Positive whole day count from JSON (int or digit string); None if malformed."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value.strip())
    if isinstance(value, int) and value >= 1:
        return value
    return None


def _parse_flag(value):
    """Insurance flag from JSON (bool or Y/N style string); None if malformed."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    s = str(value).strip().lower()
    if s in _TRUE:
        return True
    if s in _FALSE:
        return False
    return None


def _rental_request(body):
    """
    Validate the shared quote/rent body:
      {"vehicle_id": "E001", "customer": {...}, "days": 3, "insurance": true}
    Returns (args, error_response).
    """
    vid = str(body.get("vehicle_id") or "").strip()
    if not vid:
        return None, (jsonify(ok=False, message="Missing vehicle_id"), 400)
    customer = body.get("customer")
    if not isinstance(customer, dict):
        return None, (jsonify(ok=False, message="Missing customer data"), 400)
    days = _parse_days(body.get("days"))
    if days is None:
        return None, (jsonify(ok=False, message="days must be a positive integer"), 400)
    insurance = _parse_flag(body.get("insurance"))
    if insurance is None:
        return None, (jsonify(ok=False, message="insurance must be yes or no"), 400)

    VehicleService.get_vehicle(vid)  # 404 via error handler
    return (vid, customer, days, insurance), None


@bp.post("/rentals/quote")
@json_body_required
def quote(body):
    """Price breakdown shown before the customer confirms."""
    args, err = _rental_request(body)
    if err:
        return err
    ok, msg, q = RentalService.quote_rental(*args)
    return jsonify(ok=ok, message=msg, quote=q), (200 if ok else 400)


@bp.post("/rentals")
@json_body_required
def rent(body):
    args, err = _rental_request(body)
    if err:
        return err
    ok, msg, rental = RentalService.rent_vehicle(*args)
    if not ok:
        return jsonify(ok=False, message=msg), 409
    return jsonify(ok=True, message=msg, rental=rental), 201


@bp.get("/rentals")
def open_rentals():
    return jsonify(rentals=RentalService.active_rentals())


@bp.post("/vehicles/<vid>/return")
def return_vehicle(vid):
    """Close the vehicle's open rental; the late fee is 0 when on time."""
    ok, msg, late_fee = RentalService.return_vehicle(vid)
    if not ok:
        return jsonify(ok=False, message=msg), 409
    return jsonify(ok=True, message=msg, late_fee=late_fee)


@bp.get("/customers/<cid>")
def customer_detail(cid):
    return jsonify(customer_to_dict(CustomerService.get_customer(cid)))
