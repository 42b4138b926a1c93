"""
Demo catalog loaded into the ledger at startup when SEED_DEMO_CATALOG is on.

Usage:
    $ python -m rental_app.seeds

prints the seeded catalog, which is handy to check the pricing rules by eye.
"""

from rental_app.services.vehicle_service import VehicleService

DEMO_CATALOG = [
    {"vehicle_id": "E001", "category": "economy", "brand": "Toyota", "model": "Corolla",
     "rate": 45.0, "fuel_efficiency": 18.5},
    {"vehicle_id": "E002", "category": "economy", "brand": "Honda", "model": "Civic",
     "rate": 50.0, "fuel_efficiency": 17.0},
    {"vehicle_id": "L001", "category": "luxury", "brand": "BMW", "model": "X5",
     "rate": 120.0, "gps": True, "sunroof": True, "leather_seats": True},
    {"vehicle_id": "L002", "category": "luxury", "brand": "Mercedes", "model": "E-Class",
     "rate": 150.0, "gps": True, "sunroof": False, "leather_seats": True},
    {"vehicle_id": "S001", "category": "suv", "brand": "Ford", "model": "Explorer",
     "rate": 85.0, "seating_capacity": 7, "four_wheel_drive": True},
    {"vehicle_id": "S002", "category": "suv", "brand": "Jeep", "model": "Wrangler",
     "rate": 95.0, "seating_capacity": 5, "four_wheel_drive": True},
]


def seed_demo_catalog(ledger=None) -> int:
    """Add the demo vehicles that are not in the catalog yet."""
    return VehicleService.load_catalog(DEMO_CATALOG, ledger=ledger)


def main():
    from rental_app.models.ledger import Ledger

    ledger = Ledger()
    seed_demo_catalog(ledger)
    for vid, info in VehicleService.list_available_vehicles(ledger=ledger):
        print(f"{vid} - {info}")


if __name__ == "__main__":
    main()
