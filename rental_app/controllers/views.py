from flask import Blueprint, current_app, jsonify

from ..services.common import _ledger

bp = Blueprint("views", __name__)


@bp.get("/health")
def health():
    st = _ledger()
    return jsonify(
        status="ok",
        env=current_app.config.get("APP_ENV"),
        vehicles=len(st.vehicles),
        available=len(st.available_vehicles()),
        open_rentals=len(st.rentals),
    )
