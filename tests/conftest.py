import sys, pathlib
from datetime import date, timedelta

ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

import pytest

from rental_app.models.ledger import Ledger
from rental_app.seeds import seed_demo_catalog

START = date(2026, 3, 2)


class FakeClock:
    """Callable date source the tests can move forward."""

    def __init__(self, today: date = START):
        self.today = today

    def __call__(self) -> date:
        return self.today

    def advance(self, days: int) -> None:
        self.today += timedelta(days=days)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def empty_ledger(clock):
    return Ledger(clock=clock, tz_name="UTC")


@pytest.fixture
def ledger(clock):
    st = Ledger(clock=clock, tz_name="UTC")
    seed_demo_catalog(st)
    return st


@pytest.fixture(autouse=True)
def unified_ledger(monkeypatch, ledger):
    """
    Patch _ledger() in common and in every module that imported it by name,
    so services and controllers all see the SAME per-test ledger.
    """
    from rental_app.services import common as common_mod
    monkeypatch.setattr(common_mod, "_ledger", lambda: ledger, raising=True)

    from rental_app.services import vehicle_service as vs
    from rental_app.services import customer_service as cs
    from rental_app.services import rental_service as rs
    from rental_app.controllers import views as vw
    for mod in (vs, cs, rs, vw):
        monkeypatch.setattr(mod, "_ledger", lambda: ledger, raising=False)

    yield ledger


@pytest.fixture
def client():
    from rental_app import create_app
    app = create_app({
        "TESTING": True,
        "APP_ENV": "test",
        "SECRET_KEY": "test",
        "SEED_DEMO_CATALOG": False,
    })
    with app.test_client() as c:
        yield c
