from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple, TYPE_CHECKING

from rental_app.exceptions import VehicleNotFoundError
from rental_app.services.common import norm_type, to_float_safe, _lc, _ledger, vehicle_from_dict, vehicle_to_dict

if TYPE_CHECKING:
    from rental_app.models.ledger import Ledger  # noqa: F401
    from rental_app.models.vehicle import VehicleBase  # noqa: F401

logger = logging.getLogger(__name__)


class VehicleService:
    """Vehicle catalogue: availability listing, filter, lookup, catalog loading."""

    @staticmethod
    def list_available_vehicles(*, ledger: Optional["Ledger"] = None) -> List[Tuple[str, str]]:
        """(vehicle_id, description) for every vehicle free to rent, in catalog order."""
        st = ledger or _ledger()
        return [(v.vehicle_id, v.info()) for v in st.available_vehicles()]

    @staticmethod
    def filter_vehicles(category=None, brand=None, min_rate=None, max_rate=None,
                        available_only=False, *, ledger=None):
        """
        Filter vehicles by category, brand/model, and price range.
        - If `ledger` is provided, use it (for tests).
        - Otherwise call rental_app.services.common._ledger() (tests monkeypatch this).
        """
        # 1. Resolve data source
        st = ledger or _ledger()
        res = list(st.available_vehicles() if available_only else st.vehicles.values())

        # 2. Category filter
        if category:
            cat = norm_type(category)
            res = [v for v in res if v.category == cat]

        # 3. Brand/model filter (case-insensitive, partial match)
        if brand:
            kw = _lc(brand).strip()
            if kw:
                res = [v for v in res if kw in _lc(v.brand) or kw in _lc(v.model)]

        # 4. Price range filter on the listed daily rate (invalid min/max ignored)
        min_val = to_float_safe(min_rate)
        max_val = to_float_safe(max_rate)
        if (min_val is not None) and (max_val is not None) and (min_val > max_val):
            min_val, max_val = max_val, min_val
        if min_val is not None:
            res = [v for v in res if v.rate >= min_val]
        if max_val is not None:
            res = [v for v in res if v.rate <= max_val]

        return [vehicle_to_dict(v) for v in res]

    @staticmethod
    def get_vehicle(vid: str, *, ledger: Optional["Ledger"] = None) -> "VehicleBase":
        """Return a vehicle by ID or raise VehicleNotFoundError."""
        st = ledger or _ledger()
        v = st.get_vehicle(vid)
        if v is None:
            logger.warning("Vehicle lookup failed: %s", vid)
            raise VehicleNotFoundError(f"Error: vehicle with ID '{vid}' not found")
        return v

    @staticmethod
    def admin_create_vehicle(payload: dict, *, ledger: Optional["Ledger"] = None):
        """
        Add one vehicle to the catalog from a plain dict.

        Returns:
            (ok: bool, message: str, vehicle_id: Optional[str])
        """
        st = ledger or _ledger()

        vid = str(payload.get("vehicle_id") or "").strip()
        brand = (payload.get("brand") or "").strip()
        model = (payload.get("model") or "").strip()
        if not vid or not brand or not model:
            return False, "Invalid vehicle data", None
        if st.get_vehicle(vid) is not None:
            return False, f"Vehicle id '{vid}' already exists", None

        try:
            vehicle = vehicle_from_dict(payload)
        except (TypeError, ValueError) as e:
            return False, f"Invalid vehicle data: {e}", None
        if vehicle is None:
            return False, "Invalid vehicle category", None

        st.add_vehicle(vehicle)
        return True, "Vehicle created", vid

    @staticmethod
    def load_catalog(rows: Iterable[dict], *, ledger: Optional["Ledger"] = None) -> int:
        """Add every row to the catalog; skipped rows are logged. Returns the number added."""
        added = 0
        for row in rows:
            ok, msg, vid = VehicleService.admin_create_vehicle(row, ledger=ledger)
            if ok:
                added += 1
            else:
                logger.warning("Catalog row skipped (%s): %r", msg, row)
        logger.info("Catalog loaded: %d vehicles", added)
        return added
