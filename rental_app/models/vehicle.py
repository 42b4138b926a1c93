from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from ..exceptions import InvalidRentalDaysError
from ..utils.constants import (
    VehicleCategory,
    ECONOMY_LONG_RENTAL_DAYS, ECONOMY_LONG_RENTAL_FACTOR, ECONOMY_LATE_FEE,
    LUXURY_LONG_RENTAL_DAYS, LUXURY_LONG_RENTAL_FACTOR, LUXURY_LATE_FEE,
    LUXURY_GPS_FEE, LUXURY_SUNROOF_FEE, LUXURY_LEATHER_FEE,
    SUV_4WD_FEE, SUV_LATE_FEE,
)


def check_days(days) -> int:
    """Return `days` if it is a positive int, else raise InvalidRentalDaysError."""
    if isinstance(days, bool) or not isinstance(days, int) or days < 1:
        raise InvalidRentalDaysError(f"Error: rental days must be a positive integer, got {days!r}")
    return days


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


@dataclass(frozen=True)
class InsurancePlan:
    """Flat per-day insurance offered with a vehicle category."""
    label: str
    per_day: float

    def cost(self, days: int) -> float:
        return self.per_day * days


@dataclass
class VehicleBase:
    """
    Base vehicle model. `rate` is the listed per-day price before any
    category rule or customer discount.

    Subclasses decide the category pricing, the late fee and, optionally,
    an insurance plan. A subclass without `insurance` simply does not
    offer insurance; callers check `supports_insurance()` first.
    """
    vehicle_id: str
    brand: str
    model: str
    rate: float  # base rate per day
    available: bool = True

    category: ClassVar[str] = ""
    insurance: ClassVar[Optional[InsurancePlan]] = None

    def __post_init__(self):
        if self.rate <= 0:
            raise ValueError(f"Base rate must be positive, got {self.rate!r}")

    # ---------- pricing ----------
    def price_for_days(self, days: int) -> float:
        """
        Base price for the rental length *before* customer discount is applied.
        Subclasses override to add surcharges or reductions.
        """
        return self.rate * check_days(days)

    def late_fee_per_day(self) -> float:
        raise NotImplementedError

    def info(self) -> str:
        return f"{self.brand} {self.model}"

    # ---------- insurance capability ----------
    def supports_insurance(self) -> bool:
        return self.insurance is not None

    def insurance_cost(self, days: int) -> float:
        if self.insurance is None:
            raise NotImplementedError(f"{type(self).__name__} does not offer insurance")
        return self.insurance.cost(check_days(days))

    def insurance_label(self) -> str:
        if self.insurance is None:
            raise NotImplementedError(f"{type(self).__name__} does not offer insurance")
        return self.insurance.label

    # ---------- availability ----------
    def rent(self) -> None:
        self.available = False

    def return_vehicle(self) -> None:
        self.available = True


@dataclass
class EconomyCar(VehicleBase):
    """
    Economy cars get 10% off the whole rental when it runs longer than a week.
    """
    fuel_efficiency: float = 0.0  # km/l

    category: ClassVar[str] = VehicleCategory.ECONOMY
    insurance: ClassVar[Optional[InsurancePlan]] = InsurancePlan("Basic Insurance", 5.0)

    def price_for_days(self, days: int) -> float:
        price = super().price_for_days(days)
        if days > ECONOMY_LONG_RENTAL_DAYS:
            price *= ECONOMY_LONG_RENTAL_FACTOR
        return price

    def late_fee_per_day(self) -> float:
        return ECONOMY_LATE_FEE

    def info(self) -> str:
        return f"Economy Car: {self.brand} {self.model} (Fuel Efficiency: {self.fuel_efficiency:.1f} km/l)"


@dataclass
class LuxuryCar(VehicleBase):
    """
    Luxury cars charge a per-day fee for each fitted feature, and take 5% off
    the whole rental (base plus features) beyond two weeks.
    """
    gps: bool = False
    sunroof: bool = False
    leather_seats: bool = False

    category: ClassVar[str] = VehicleCategory.LUXURY
    insurance: ClassVar[Optional[InsurancePlan]] = InsurancePlan("Premium Insurance", 15.0)

    def luxury_fee(self) -> float:
        """Per-day surcharge for the enabled features."""
        fee = 0.0
        if self.gps:
            fee += LUXURY_GPS_FEE
        if self.sunroof:
            fee += LUXURY_SUNROOF_FEE
        if self.leather_seats:
            fee += LUXURY_LEATHER_FEE
        return fee

    def price_for_days(self, days: int) -> float:
        price = super().price_for_days(days) + self.luxury_fee() * days
        if days > LUXURY_LONG_RENTAL_DAYS:
            price *= LUXURY_LONG_RENTAL_FACTOR
        return price

    def late_fee_per_day(self) -> float:
        return LUXURY_LATE_FEE

    def info(self) -> str:
        return (f"Luxury Car: {self.brand} {self.model} "
                f"(GPS: {_yes_no(self.gps)}, Sunroof: {_yes_no(self.sunroof)}, "
                f"Leather: {_yes_no(self.leather_seats)})")


@dataclass
class SUV(VehicleBase):
    """
    SUVs follow the base rule, plus a flat per-day charge for four-wheel drive.
    """
    seating_capacity: int = 5
    four_wheel_drive: bool = False

    category: ClassVar[str] = VehicleCategory.SUV
    insurance: ClassVar[Optional[InsurancePlan]] = InsurancePlan("Standard Insurance", 10.0)

    def price_for_days(self, days: int) -> float:
        price = super().price_for_days(days)
        if self.four_wheel_drive:
            price += SUV_4WD_FEE * days
        return price

    def late_fee_per_day(self) -> float:
        return SUV_LATE_FEE

    def info(self) -> str:
        return (f"SUV: {self.brand} {self.model} "
                f"({self.seating_capacity} seats, 4WD: {_yes_no(self.four_wheel_drive)})")


# category tag -> variant; register new categories here
VEHICLE_TYPES: dict[str, type[VehicleBase]] = {
    EconomyCar.category: EconomyCar,
    LuxuryCar.category: LuxuryCar,
    SUV.category: SUV,
}
