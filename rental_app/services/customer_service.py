from __future__ import annotations

import logging
from typing import Optional, TYPE_CHECKING

from rental_app.exceptions import CustomerNotFoundError
from rental_app.services.common import _ledger, customer_from_dict

if TYPE_CHECKING:
    from rental_app.models.customer import CustomerBase  # noqa: F401
    from rental_app.models.ledger import Ledger  # noqa: F401

logger = logging.getLogger(__name__)


class CustomerService:
    """Customer roster: id allocation, lookup, and resolving caller data to a tier object."""

    @staticmethod
    def next_customer_id(*, ledger: Optional["Ledger"] = None) -> str:
        """Next free 'CUS<n>' id. The ledger assigns it for real when a new customer rents."""
        st = ledger or _ledger()
        return st.next_customer_id()

    @staticmethod
    def get_customer(customer_id: str, *, ledger: Optional["Ledger"] = None) -> "CustomerBase":
        """Return a customer by ID or raise CustomerNotFoundError."""
        st = ledger or _ledger()
        c = st.get_customer(customer_id)
        if c is None:
            logger.warning("Customer lookup failed: %s", customer_id)
            raise CustomerNotFoundError(f"Error: customer with ID '{customer_id}' not found")
        return c

    @staticmethod
    def resolve(customer_data: Optional[dict], *, ledger: Optional["Ledger"] = None) -> Optional["CustomerBase"]:
        """
        Turn caller data into a customer object.
        - A known `customer_id` (or `id`) returns the roster entry, so loyalty keeps accruing.
        - Otherwise a new tier object is built. Without an id it is left blank and
          the ledger assigns the next 'CUS<n>' while registering it.
        New customers are *not* added here; the ledger registers them on a successful rent.
        """
        if not customer_data:
            return None
        st = ledger or _ledger()

        cid = customer_data.get("customer_id") or customer_data.get("id")
        if cid:
            existing = st.get_customer(cid)
            if existing is not None:
                return existing
        return customer_from_dict(customer_data, customer_id=str(cid) if cid else "")
