"""Shared service helpers and factories."""

from dataclasses import asdict, fields
from typing import Optional

from flask import current_app, has_app_context

from rental_app.models.customer import CustomerBase, CUSTOMER_TIERS, RegularCustomer
from rental_app.models.ledger import Ledger
from rental_app.models.vehicle import VehicleBase, VEHICLE_TYPES

LEDGER_EXTENSION = "rental_ledger"


def _ledger() -> Ledger:
    """
    The ledger for the current app, or the process singleton outside a
    request/app context. Tests monkeypatch this.
    """
    if has_app_context():
        ledger = current_app.extensions.get(LEDGER_EXTENSION)
        if ledger is not None:
            return ledger
    return Ledger.instance()


def to_float_safe(value) -> Optional[float]:
    """Safely convert to float; return None if invalid."""
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def norm_type(value: Optional[str]) -> str:
    """Normalize a category/tier tag to lowercase string; return '' for None."""
    return (value or "").strip().lower()


def _lc(s):
    """Safe lowercase for case-insensitive compare."""
    return (s or "").lower()


# -------- dict -> rich model mappers --------
def customer_from_dict(d: Optional[dict], customer_id: Optional[str] = None) -> Optional[CustomerBase]:
    """
    Map caller-supplied customer data to a tier object; unknown tiers are regular.
    Loyalty always starts at zero. Pass customer_id="" to leave the id for the
    ledger to assign.
    """
    if not d:
        return None
    tier = norm_type(d.get("tier") or d.get("type"))
    cls = CUSTOMER_TIERS.get(tier, RegularCustomer)
    cid = customer_id if customer_id is not None else (d.get("customer_id") or d.get("id"))
    if cid is None:
        return None
    return cls(
        customer_id=str(cid),
        name=(d.get("name") or "").strip(),
        email=(d.get("email") or "").strip(),
    )


def vehicle_from_dict(d: Optional[dict]) -> Optional[VehicleBase]:
    """
    Map a catalog row to a vehicle variant. Variant-specific keys
    (fuel_efficiency, gps, seating_capacity, ...) are passed through when present.
    Returns None for an unknown category.
    """
    if not d:
        return None
    cls = VEHICLE_TYPES.get(norm_type(d.get("category") or d.get("type")))
    if cls is None:
        return None
    base = dict(
        vehicle_id=str(d.get("vehicle_id") or d.get("id")),
        brand=d.get("brand"),
        model=d.get("model"),
        rate=float(d.get("rate") or 0.0),
    )
    extra = {
        f.name: d[f.name]
        for f in fields(cls)
        if f.name not in base and f.name != "available" and f.name in d
    }
    return cls(**base, **extra)


# -------- rich model -> dict (for JSON payloads) --------
def vehicle_to_dict(v: VehicleBase) -> dict:
    d = asdict(v)
    d.update({
        "category": v.category,
        "info": v.info(),
        "late_fee_per_day": v.late_fee_per_day(),
        "insurance_label": v.insurance_label() if v.supports_insurance() else None,
    })
    return d


def customer_to_dict(c: CustomerBase) -> dict:
    d = asdict(c)
    d.update({
        "tier": c.tier,
        "discount_rate": c.discount_rate(),
        "max_rental_days": c.max_rental_days(),
    })
    return d
