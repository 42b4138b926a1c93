import logging
import threading
from datetime import date
from typing import Callable, Iterator, Optional

from .customer import CustomerBase
from .rental import Rental
from .vehicle import VehicleBase, check_days
from ..utils.constants import (
    DEFAULT_TIMEZONE,
    MSG_OK, MSG_UNAVAILABLE, MSG_TOO_MANY_DAYS, MSG_NOT_RENTED, MSG_RETURNED, MSG_NO_INSURANCE,
    MSG_CUSTOMER_ID_TAKEN,
)
from ..utils.dates import local_today

logger = logging.getLogger(__name__)


class AvailableVehicles:
    """
    Lazy view over the catalog's available vehicles, in insertion order.
    Every iteration re-reads the ledger, so the view can be walked again
    after rentals and returns.
    """

    def __init__(self, ledger: "Ledger"):
        self._ledger = ledger

    def __iter__(self) -> Iterator[VehicleBase]:
        with self._ledger._rw:
            snapshot = [v for v in self._ledger.vehicles.values() if v.available]
        yield from snapshot

    def __len__(self) -> int:
        return sum(1 for _ in self)


class Ledger:
    """
    In-memory owner of the catalog, the customer roster and the open rentals.

    It is the only place that flips vehicle availability. Open rentals are
    keyed by vehicle id, so a vehicle can never hold two of them.
    """
    _inst = None
    _inst_lock = threading.Lock()

    def __init__(self, clock: Optional[Callable[[], date]] = None, tz_name: str = DEFAULT_TIMEZONE):
        self.tz_name = tz_name
        self.clock = clock or (lambda: local_today(self.tz_name))
        self.vehicles: dict[str, VehicleBase] = {}
        self.customers: dict[str, CustomerBase] = {}
        self.rentals: dict[str, Rental] = {}  # vehicle_id -> open rental
        self._rw = threading.RLock()

    # ---------- Singleton ----------
    @classmethod
    def instance(cls) -> "Ledger":
        """Return the process-wide ledger."""
        with cls._inst_lock:
            if cls._inst is None:
                cls._inst = Ledger()
        return cls._inst

    @classmethod
    def reset_instance(cls) -> None:
        with cls._inst_lock:
            cls._inst = None

    # ---------- Catalog / roster ----------
    def add_vehicle(self, vehicle: VehicleBase) -> None:
        with self._rw:
            if vehicle.vehicle_id in self.vehicles:
                raise ValueError(f"Vehicle id already in catalog: {vehicle.vehicle_id}")
            self.vehicles[vehicle.vehicle_id] = vehicle

    def get_vehicle(self, vehicle_id: str) -> Optional[VehicleBase]:
        return self.vehicles.get(str(vehicle_id))

    def next_customer_id(self) -> str:
        """Next free 'CUS<n>' id, n counting from roster size + 1."""
        with self._rw:
            n = len(self.customers) + 1
            while f"CUS{n}" in self.customers:
                n += 1
            return f"CUS{n}"

    def add_customer(self, customer: CustomerBase) -> None:
        """
        Put `customer` on the roster. A customer without an id gets the next
        'CUS<n>'; an id already held by a different customer is refused.
        """
        with self._rw:
            if not customer.customer_id:
                customer.customer_id = self.next_customer_id()
            known = self.customers.get(customer.customer_id)
            if known is not None and known is not customer:
                raise ValueError(f"Customer id already in roster: {customer.customer_id}")
            self.customers[customer.customer_id] = customer

    def get_customer(self, customer_id: str) -> Optional[CustomerBase]:
        return self.customers.get(str(customer_id))

    def available_vehicles(self) -> AvailableVehicles:
        return AvailableVehicles(self)

    def open_rental(self, vehicle_id: str) -> Optional[Rental]:
        return self.rentals.get(str(vehicle_id))

    def open_rentals(self) -> list:
        """Snapshot of the open rentals in the order they were made."""
        with self._rw:
            return list(self.rentals.values())

    # ---------- Transactions ----------
    def check_eligibility(self, vehicle: VehicleBase, customer: CustomerBase, days: int):
        """Return (ok, message) without changing anything."""
        check_days(days)
        if not vehicle.available or vehicle.vehicle_id in self.rentals:
            return False, MSG_UNAVAILABLE
        if days > customer.max_rental_days():
            return False, MSG_TOO_MANY_DAYS.format(max_days=customer.max_rental_days())
        known = self.customers.get(customer.customer_id) if customer.customer_id else None
        if known is not None and known is not customer:
            return False, MSG_CUSTOMER_ID_TAKEN
        return True, MSG_OK

    def rent(self, vehicle: VehicleBase, customer: CustomerBase, days: int, insurance: bool = False):
        """
        Rent `vehicle` to `customer` for `days` days starting today.

        Returns:
            (ok: bool, message: str, rental: Optional[Rental])
        A refusal leaves the catalog, roster, open rentals and loyalty points untouched.
        """
        with self._rw:
            ok, msg = self.check_eligibility(vehicle, customer, days)
            if not ok:
                logger.info("Rent refused for %s / %s (%d days): %s",
                            vehicle.vehicle_id, customer.customer_id, days, msg)
                return False, msg, None

            rental = Rental(vehicle, customer, days, insurance_included=bool(insurance),
                            start_date=self.clock())
            vehicle.rent()
            self.rentals[vehicle.vehicle_id] = rental
            self.add_customer(customer)
            customer.record_rental(days)

        if insurance and not rental.quote.insurance_applied:
            msg = f"{MSG_OK} ({MSG_NO_INSURANCE})"
            logger.info("Insurance requested on %s but %s", vehicle.vehicle_id, MSG_NO_INSURANCE)
        logger.info("Rented %s to %s for %d days, total %.2f",
                    vehicle.vehicle_id, customer.customer_id, days, rental.total_cost)
        return True, msg, rental

    def return_vehicle(self, vehicle_id: str):
        """
        Close the open rental of `vehicle_id` as of today.

        Returns:
            (ok: bool, message: str, late_fee: Optional[float])
        """
        with self._rw:
            rental = self.rentals.get(str(vehicle_id))
            if rental is None:
                logger.info("Return refused for %s: %s", vehicle_id, MSG_NOT_RENTED)
                return False, MSG_NOT_RENTED, None

            rental.mark_returned(self.clock())
            late_fee = rental.late_fee()
            del self.rentals[rental.vehicle.vehicle_id]
            rental.vehicle.return_vehicle()

        if late_fee > 0:
            logger.info("Returned %s late, fee %.2f", vehicle_id, late_fee)
        else:
            logger.info("Returned %s on time", vehicle_id)
        return True, MSG_RETURNED, late_fee
