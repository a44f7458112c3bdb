from decimal import Decimal

import pytest

from rest_framework.test import APIClient


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def make_customer():
    """Persist a customer directly through the ORM."""
    from modules.customers.models import Customer

    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        defaults = {
            "first_name": "John",
            "last_name": "Doe",
            "email": f"john{counter['n']}@example.com",
            "phone_number": "+1234567890",
        }
        defaults.update(overrides)
        return Customer.objects.create(**defaults)

    return _make


@pytest.fixture()
def make_product():
    """Persist a product directly through the ORM."""
    from modules.products.models import Product

    def _make(**overrides):
        defaults = {
            "name": "Widget",
            "description": "A widget",
            "price": Decimal("9.99"),
            "quantity_in_stock": 10,
        }
        defaults.update(overrides)
        return Product.objects.create(**defaults)

    return _make
