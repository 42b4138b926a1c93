from __future__ import annotations

from dataclasses import dataclass, field, asdict
from datetime import date, timedelta
from typing import Optional

from .customer import CustomerBase
from .vehicle import VehicleBase, check_days
from ..utils.constants import DATE_FMT
from ..utils.dates import as_date, whole_days_late


def round2(x: float) -> float:
    return round(float(x), 2)


@dataclass(frozen=True)
class PriceQuote:
    """Cost breakdown for one vehicle, customer and duration."""
    base_cost: float
    discount: float
    total_cost: float
    insurance_requested: bool = False
    insurance_cost: Optional[float] = None  # None when not applied
    insurance_label: Optional[str] = None

    @property
    def insurance_applied(self) -> bool:
        return self.insurance_cost is not None

    def to_dict(self) -> dict:
        d = asdict(self)
        d["insurance_applied"] = self.insurance_applied
        return d


def quote_for(vehicle: VehicleBase, customer: CustomerBase, days: int,
              insurance: bool = False) -> PriceQuote:
    """
    Price a rental without touching any state:
      base     = vehicle category price for `days`
      discount = customer tier rate * base
      total    = base - discount (+ insurance when the vehicle offers it)
    Insurance asked for on a vehicle without a plan is dropped, and the
    quote says so via `insurance_applied`.
    """
    check_days(days)
    base = vehicle.price_for_days(days)
    discount = customer.discount_rate() * base
    total = base - discount

    ins_cost = None
    ins_label = None
    if insurance and vehicle.supports_insurance():
        ins_cost = vehicle.insurance_cost(days)
        ins_label = vehicle.insurance_label()
        total += ins_cost

    return PriceQuote(
        base_cost=round2(base),
        discount=round2(discount),
        total_cost=round2(total),
        insurance_requested=bool(insurance),
        insurance_cost=None if ins_cost is None else round2(ins_cost),
        insurance_label=ins_label,
    )


@dataclass
class Rental:
    """
    One vehicle bound to one customer for `days` whole days.

    The price is quoted once, at construction, and kept; later changes to
    fee rules never reach an existing rental.
    """
    vehicle: VehicleBase
    customer: CustomerBase
    days: int
    insurance_included: bool = False
    start_date: date = field(default_factory=date.today)
    actual_return_date: Optional[date] = None
    quote: PriceQuote = field(init=False)

    def __post_init__(self):
        check_days(self.days)
        self.start_date = as_date(self.start_date)
        self.quote = quote_for(self.vehicle, self.customer, self.days, self.insurance_included)

    @property
    def total_cost(self) -> float:
        return self.quote.total_cost

    @property
    def expected_return_date(self) -> date:
        return self.start_date + timedelta(days=self.days)

    @property
    def is_open(self) -> bool:
        return self.actual_return_date is None

    def mark_returned(self, on) -> None:
        self.actual_return_date = as_date(on)

    def late_fee(self) -> float:
        """Whole late days times the vehicle's daily late fee; 0 if on time or still open."""
        if self.actual_return_date is None:
            return 0.0
        late_days = whole_days_late(self.expected_return_date, self.actual_return_date)
        return late_days * self.vehicle.late_fee_per_day()

    def to_dict(self) -> dict:
        return {
            "vehicle_id": self.vehicle.vehicle_id,
            "customer_id": self.customer.customer_id,
            "days": self.days,
            "start_date": self.start_date.strftime(DATE_FMT),
            "expected_return_date": self.expected_return_date.strftime(DATE_FMT),
            "actual_return_date": (self.actual_return_date.strftime(DATE_FMT)
                                   if self.actual_return_date else None),
            "insurance_included": self.insurance_included,
            "total_cost": self.total_cost,
            "quote": self.quote.to_dict(),
        }
