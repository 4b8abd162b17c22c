from datetime import date

import pytest

from farmledger.ledger import FarmLedger
from farmledger.models.order_models import Order
from farmledger.store import MemoryKeyValueStore

TODAY = date(2024, 6, 15)

NORTH_FARMER = {
    "farmerId": "F1",
    "name": "Asha Patel",
    "phone": "+91-9876543210",
    "email": "asha@example.com",
    "address": "12 Mill Road",
    "region": "North",
    "gps": "18.52,73.85",
}

SOUTH_FARMER = {
    **NORTH_FARMER,
    "farmerId": "F2",
    "name": "Ravi Kumar",
    "email": "ravi@example.com",
    "region": "South",
}


def fixed_today():
    return TODAY


def make_order(order_id, category, quantity, day, price=10.0, status="Pending"):
    return Order(
        orderId=order_id,
        customerName="Test Customer",
        customerContact="5551234567",
        category=category,
        quantity=quantity,
        totalPrice=price * quantity,
        status=status,
        date=day,
    )


@pytest.fixture
def provider():
    return MemoryKeyValueStore()


@pytest.fixture
def ledger(provider):
    fl = FarmLedger(provider, today=fixed_today)
    fl.initialize()
    return fl


@pytest.fixture
def north(ledger):
    """Farmer F1 (region North) with purchase P1: 100 kg at $2/kg."""
    ledger.farmers.upsert(NORTH_FARMER)
    ledger.purchases.record({
        "purchaseId": "P1",
        "farmerId": "F1",
        "date": "2024-06-01",
        "quantity": "100",
        "pricePerKg": "2",
    })
    return ledger


@pytest.fixture
def stocked(north):
    """North scenario plus 50 kg packaged into Medium (250g): 200 units."""
    north.packaging.package("North", "Medium (250g)", 50)
    return north


@pytest.fixture
def app(provider):
    from app import create_app

    app = create_app(
        {"LEDGER_STORE": "memory", "TESTING": True, "REVENUE_ALERT_THRESHOLD": 10000.0},
        provider=provider,
        today=fixed_today,
    )
    return app


@pytest.fixture
def client(app):
    return app.test_client()
