"""Shared fixtures for PrintStudio tests."""

from datetime import datetime, timedelta, timezone

import pytest

from app import create_app
from core.storage import MemoryStorage
from models.cart_item import ItemType, NewItem
from models.order import CustomerInfo
from services.cart_store import CartStore


class FakeClock:
    """Controllable replacement for the store's clock."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


# Fixtures

@pytest.fixture
def storage():
    """Empty in-memory snapshot storage."""
    return MemoryStorage()


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 1, 15, 10, 0, tzinfo=timezone.utc))


@pytest.fixture
def store(storage, clock):
    """Permissive store on in-memory storage."""
    return CartStore(storage, clock=clock)


@pytest.fixture
def print_a4():
    """The calculator's default print: matte A4."""
    return NewItem(
        type=ItemType.PRINT,
        name="Print A4",
        description="Matte photo paper",
        price=350.0,
        quantity=1,
        options={"material": "matte", "size": "A4"},
    )


@pytest.fixture
def cartridge():
    return NewItem(
        type=ItemType.CARTRIDGE,
        name="HP 123 Black",
        description="Original black cartridge",
        price=1890.0,
        quantity=1,
        options={"brand": "HP", "model": "123"},
    )


@pytest.fixture
def customer():
    return CustomerInfo(name="Ann", email="a@b.c", phone="123")


@pytest.fixture
def app(storage):
    """Flask app in testing mode sharing the ``storage`` fixture."""
    app = create_app("config.TestingConfig", storage=storage)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client
