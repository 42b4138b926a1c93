"""Rental-related service layer: quote, rent, return, and open-rental listing."""

from __future__ import annotations

import logging
from typing import Optional, TYPE_CHECKING

from rental_app.exceptions import InvalidRentalDaysError
from rental_app.models.rental import quote_for
from rental_app.services.common import _ledger
from rental_app.services.customer_service import CustomerService
from rental_app.utils.constants import MSG_OK, MSG_INVALID_VEHICLE, MSG_NO_INSURANCE

if TYPE_CHECKING:
    from rental_app.models.ledger import Ledger  # noqa: F401

logger = logging.getLogger(__name__)


class RentalService:
    """
    Quote, rent and return operations for callers that only hold primitive data.
    Uses polymorphic pricing (VehicleBase.price_for_days + CustomerBase.discount_rate).

    Every operation answers (ok, message, payload); refusals are outcomes,
    not exceptions.
    """

    @staticmethod
    def _lookup(vehicle_id, customer_data, st):
        veh = st.get_vehicle(vehicle_id)
        if veh is None:
            return None, None, MSG_INVALID_VEHICLE
        customer = CustomerService.resolve(customer_data, ledger=st)
        if customer is None:
            return veh, None, "Invalid customer data"
        return veh, customer, None

    @staticmethod
    def quote_rental(vehicle_id: str, customer_data: dict, days: int, insurance: bool = False,
                     *, ledger: Optional["Ledger"] = None):
        """
        Price a rental for display before confirmation. Nothing is mutated
        and eligibility is not checked.

        Returns:
            (ok: bool, message: str, quote: Optional[dict])
            quote keys: base_cost, discount, insurance_cost (None if not applied),
                        insurance_label, total_cost
        """
        st = ledger or _ledger()
        veh, customer, err = RentalService._lookup(vehicle_id, customer_data, st)
        if err:
            return False, err, None

        try:
            quote = quote_for(veh, customer, days, insurance)
        except InvalidRentalDaysError as e:
            return False, e.message, None

        msg = MSG_OK
        if insurance and not quote.insurance_applied:
            msg = f"{MSG_OK} ({MSG_NO_INSURANCE})"
        return True, msg, quote.to_dict()

    @staticmethod
    def rent_vehicle(vehicle_id: str, customer_data: dict, days: int, insurance: bool = False,
                     *, ledger: Optional["Ledger"] = None):
        """
        Rent a vehicle if it is free and `days` is within the customer's limit.
        A new customer joins the roster only when the rent goes through.

        Returns:
            (ok: bool, message: str, rental: Optional[dict])
        """
        st = ledger or _ledger()
        veh, customer, err = RentalService._lookup(vehicle_id, customer_data, st)
        if err:
            return False, err, None

        try:
            ok, msg, rental = st.rent(veh, customer, days, insurance)
        except InvalidRentalDaysError as e:
            return False, e.message, None
        if not ok:
            return False, msg, None
        return True, msg, rental.to_dict()

    @staticmethod
    def return_vehicle(vehicle_id: str, *, ledger: Optional["Ledger"] = None):
        """
        Close the open rental of a vehicle and free it.

        Returns:
            (ok: bool, message: str, late_fee: Optional[float])
        """
        st = ledger or _ledger()
        return st.return_vehicle(vehicle_id)

    @staticmethod
    def active_rentals(*, ledger: Optional["Ledger"] = None):
        """Open rentals in the order they were made."""
        st = ledger or _ledger()
        return [r.to_dict() for r in st.open_rentals()]
