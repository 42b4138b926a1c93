from dataclasses import dataclass
from typing import ClassVar

from ..utils.constants import CustomerTier, REGULAR_MAX_DAYS, PREMIUM_MAX_DAYS, PREMIUM_DISCOUNT


@dataclass
class CustomerBase:
    """
    Base customer model. Tier subclasses express the discount and the
    longest rental they may book via polymorphism.
    """
    customer_id: str
    name: str
    email: str

    tier: ClassVar[str] = ""

    def discount_rate(self) -> float:
        """
        Return a discount ratio in [0, 1), e.g. 0.10 means 10% off.
        Subclasses override this to implement tier-specific rules.
        """
        return 0.0

    def max_rental_days(self) -> int:
        raise NotImplementedError

    def record_rental(self, days: int) -> None:
        """Hook called by the ledger after a successful rent."""


class RegularCustomer(CustomerBase):
    """
    Regular customers pay list price and may book up to 30 days.
    """
    tier: ClassVar[str] = CustomerTier.REGULAR

    def max_rental_days(self) -> int:
        return REGULAR_MAX_DAYS


@dataclass
class PremiumCustomer(CustomerBase):
    """
    Premium customers get a flat 10% off, may book up to 60 days, and earn
    one loyalty point per rented day.
    """
    loyalty_points: int = 0

    tier: ClassVar[str] = CustomerTier.PREMIUM

    def discount_rate(self) -> float:
        return PREMIUM_DISCOUNT

    def max_rental_days(self) -> int:
        return PREMIUM_MAX_DAYS

    def add_loyalty_points(self, points: int) -> None:
        self.loyalty_points += points

    def record_rental(self, days: int) -> None:
        self.add_loyalty_points(days)


# tier tag -> variant; unknown tags fall back to regular
CUSTOMER_TIERS = {
    RegularCustomer.tier: RegularCustomer,
    PremiumCustomer.tier: PremiumCustomer,
}
