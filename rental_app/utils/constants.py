# rental_app/utils/constants.py

"""
Global constants for vehicle categories, customer tiers and fee tables.
These constants are imported by both models and services.
"""

# Date format (used for start/expected/actual return dates in payloads)
DATE_FMT = "%Y-%m-%d"

DEFAULT_TIMEZONE = "Pacific/Auckland"

class VehicleCategory:
    ECONOMY = "economy"
    LUXURY = "luxury"
    SUV = "suv"

class CustomerTier:
    REGULAR = "regular"
    PREMIUM = "premium"


# --- Economy ---
ECONOMY_LONG_RENTAL_DAYS = 7  # discount applies strictly above this
ECONOMY_LONG_RENTAL_FACTOR = 0.90
ECONOMY_LATE_FEE = 20.0

# --- Luxury ---
LUXURY_LONG_RENTAL_DAYS = 14
LUXURY_LONG_RENTAL_FACTOR = 0.95
LUXURY_LATE_FEE = 50.0
LUXURY_GPS_FEE = 10.0
LUXURY_SUNROOF_FEE = 15.0
LUXURY_LEATHER_FEE = 20.0

# --- SUV ---
SUV_4WD_FEE = 25.0
SUV_LATE_FEE = 35.0

# --- Customers ---
REGULAR_MAX_DAYS = 30
PREMIUM_MAX_DAYS = 60
PREMIUM_DISCOUNT = 0.10

# --- Outcome messages ---
MSG_OK = "OK"
MSG_INVALID_VEHICLE = "Invalid vehicle"
MSG_UNAVAILABLE = "Vehicle is not available"
MSG_TOO_MANY_DAYS = "Rental period exceeds customer limit of {max_days} days"
MSG_NOT_RENTED = "Vehicle was not rented"
MSG_CUSTOMER_ID_TAKEN = "Customer id is already registered to another customer"
MSG_RETURNED = "Vehicle returned"
MSG_NO_INSURANCE = "insurance is not offered for this vehicle"
