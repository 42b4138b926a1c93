"""
Custom exception classes for the rental ledger.

Business refusals (vehicle busy, too many days, vehicle not rented) are
reported as service outcomes, not raised. These exceptions cover lookups
of unknown ids and malformed input that slipped past the caller.
"""


class VehicleNotFoundError(Exception):
    """Raised when a vehicle ID cannot be found in the catalog."""

    def __init__(self, message: str = "Error: vehicle not found") -> None:
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:  # pragma: no cover
        return self.message


class CustomerNotFoundError(Exception):
    """Raised when a customer ID cannot be found in the roster."""

    def __init__(self, message: str = "Error: customer not found") -> None:
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:  # pragma: no cover
        return self.message


class InvalidRentalDaysError(ValueError):
    """Raised when a day count is not a positive whole number."""

    def __init__(self, message: str = "Error: rental days must be a positive integer") -> None:
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:  # pragma: no cover
        return self.message
