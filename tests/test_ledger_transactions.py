"""
Ledger rent/return transactions: availability transitions, eligibility
refusals that leave state untouched, loyalty accrual and late fees.
"""

import threading

import pytest

from rental_app.exceptions import InvalidRentalDaysError
from rental_app.models.customer import RegularCustomer, PremiumCustomer
from rental_app.models.ledger import Ledger


@pytest.fixture
def regular():
    return RegularCustomer("CUS1", "Ann", "ann@example.com")


@pytest.fixture
def premium():
    return PremiumCustomer("CUS2", "Bob", "bob@example.com")


def _snapshot(ledger):
    return (
        {vid: v.available for vid, v in ledger.vehicles.items()},
        dict(ledger.rentals),
        dict(ledger.customers),
    )


@pytest.mark.parametrize("vid", ["E001", "L001", "S001"])
def test_availability_cycle_for_every_category(ledger, regular, vid):
    v = ledger.get_vehicle(vid)
    assert v.available
    ok, msg, rental = ledger.rent(v, regular, 3)
    assert ok, msg
    assert not v.available
    assert ledger.open_rental(vid) is rental

    ok, msg, late_fee = ledger.return_vehicle(vid)
    assert ok, msg
    assert late_fee == 0.0
    assert v.available
    assert ledger.open_rental(vid) is None


def test_rent_registers_customer_and_stamps_clock(ledger, clock, regular):
    ok, _, rental = ledger.rent(ledger.get_vehicle("E001"), regular, 2)
    assert ok
    assert ledger.get_customer("CUS1") is regular
    assert rental.start_date == clock.today


def test_renting_a_rented_vehicle_is_ineligible(ledger, regular, premium):
    v = ledger.get_vehicle("S001")
    assert ledger.rent(v, regular, 3)[0]
    before = _snapshot(ledger)

    ok, msg, rental = ledger.rent(v, premium, 3)
    assert not ok and rental is None
    assert "not available" in msg.lower()
    assert _snapshot(ledger) == before
    assert premium.loyalty_points == 0


def test_too_many_days_is_ineligible(ledger, regular):
    before = _snapshot(ledger)
    ok, msg, rental = ledger.rent(ledger.get_vehicle("E001"), regular, 31)
    assert not ok and rental is None
    assert "30" in msg
    assert _snapshot(ledger) == before
    assert ledger.get_customer("CUS1") is None


def test_premium_limit_is_sixty_days(ledger, premium):
    assert not ledger.rent(ledger.get_vehicle("E001"), premium, 61)[0]
    assert ledger.rent(ledger.get_vehicle("E001"), premium, 60)[0]


def test_invalid_days_raise(ledger, regular):
    with pytest.raises(InvalidRentalDaysError):
        ledger.rent(ledger.get_vehicle("E001"), regular, 0)
    assert ledger.get_vehicle("E001").available


def test_loyalty_points_only_move_on_successful_rents(ledger, premium, regular):
    assert ledger.rent(ledger.get_vehicle("E001"), premium, 5)[0]
    assert premium.loyalty_points == 5

    # failed attempts: busy vehicle, too many days
    assert not ledger.rent(ledger.get_vehicle("E001"), premium, 2)[0]
    assert not ledger.rent(ledger.get_vehicle("L001"), premium, 90)[0]
    assert premium.loyalty_points == 5

    # returns do not touch points
    assert ledger.return_vehicle("E001")[0]
    assert premium.loyalty_points == 5

    assert ledger.rent(ledger.get_vehicle("L001"), premium, 10)[0]
    assert premium.loyalty_points == 15


def test_late_return_charges_whole_days(ledger, clock, regular):
    v = ledger.get_vehicle("L001")
    ledger.rent(v, regular, 4)
    clock.advance(4 + 2)
    ok, _, late_fee = ledger.return_vehicle("L001")
    assert ok
    assert late_fee == 2 * v.late_fee_per_day()


def test_return_of_vehicle_not_rented(ledger):
    before = _snapshot(ledger)
    ok, msg, late_fee = ledger.return_vehicle("E002")
    assert not ok and late_fee is None
    assert msg == "Vehicle was not rented"
    ok, msg, _ = ledger.return_vehicle("NOPE")
    assert not ok
    assert _snapshot(ledger) == before


def test_available_view_is_lazy_and_restartable(ledger, regular):
    view = ledger.available_vehicles()
    assert [v.vehicle_id for v in view] == ["E001", "E002", "L001", "L002", "S001", "S002"]

    ledger.rent(ledger.get_vehicle("L001"), regular, 1)
    assert [v.vehicle_id for v in view] == ["E001", "E002", "L002", "S001", "S002"]
    assert len(view) == 5

    ledger.return_vehicle("L001")
    assert len(view) == 6


def test_duplicate_vehicle_id_rejected(ledger):
    with pytest.raises(ValueError):
        ledger.add_vehicle(ledger.get_vehicle("E001"))


def test_concurrent_rents_leave_one_open_rental(ledger):
    v = ledger.get_vehicle("S002")
    results = []

    def attempt(i):
        c = RegularCustomer(f"T{i}", "t", "t@example.com")
        results.append(ledger.rent(v, c, 2)[0])

    threads = [threading.Thread(target=attempt, args=(i,)) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert results.count(True) == 1
    assert len([r for r in ledger.rentals.values() if r.vehicle is v]) == 1


def test_default_clock_uses_business_timezone():
    from datetime import date
    assert isinstance(Ledger(tz_name="UTC").clock(), date)


def test_singleton():
    Ledger.reset_instance()
    try:
        assert Ledger.instance() is Ledger.instance()
    finally:
        Ledger.reset_instance()


def test_rent_assigns_id_to_new_customer(ledger):
    pending = PremiumCustomer("", "Cy", "cy@example.com")
    ok, _, rental = ledger.rent(ledger.get_vehicle("E001"), pending, 2)
    assert ok
    assert pending.customer_id == "CUS1"
    assert ledger.get_customer("CUS1") is pending
    assert rental.to_dict()["customer_id"] == "CUS1"


def test_rent_refuses_impostor_with_taken_id(ledger, regular):
    assert ledger.rent(ledger.get_vehicle("E001"), regular, 2)[0]
    before = _snapshot(ledger)

    impostor = PremiumCustomer("CUS1", "Eve", "eve@example.com")
    ok, msg, rental = ledger.rent(ledger.get_vehicle("E002"), impostor, 2)
    assert not ok and rental is None
    assert "already registered" in msg
    assert _snapshot(ledger) == before
    assert ledger.get_customer("CUS1") is regular
    assert impostor.loyalty_points == 0

    with pytest.raises(ValueError):
        ledger.add_customer(impostor)


def test_concurrent_new_customers_get_distinct_ids(ledger):
    ids = []

    def attempt(vid):
        c = RegularCustomer("", "t", "t@example.com")
        assert ledger.rent(ledger.get_vehicle(vid), c, 1)[0]
        ids.append(c.customer_id)

    threads = [threading.Thread(target=attempt, args=(vid,))
               for vid in ("E001", "E002", "L001", "L002", "S001", "S002")]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(ids) == [f"CUS{n}" for n in range(1, 7)]
    assert len(ledger.customers) == 6


def test_snapshots_wait_for_the_ledger_lock(ledger, regular):
    ledger.rent(ledger.get_vehicle("E001"), regular, 1)
    seen = {}

    def read():
        seen["available"] = [v.vehicle_id for v in ledger.available_vehicles()]
        seen["open"] = [r.vehicle.vehicle_id for r in ledger.open_rentals()]

    with ledger._rw:
        t = threading.Thread(target=read)
        t.start()
        t.join(0.2)
        assert t.is_alive()
        assert seen == {}
    t.join()

    assert seen["available"] == ["E002", "L001", "L002", "S001", "S002"]
    assert seen["open"] == ["E001"]
