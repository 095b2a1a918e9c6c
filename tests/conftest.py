from decimal import Decimal

import pytest

from django.contrib.auth import get_user_model

from rest_framework.test import APIClient

from modules.core.caller import Caller
from modules.products.models import Product

User = get_user_model()


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


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


@pytest.fixture()
def customer():
    return User.objects.create_user(
        username="alice",
        email="alice@example.com",
        password="testpass123",
        first_name="Alice",
        last_name="Martin",
    )


@pytest.fixture()
def other_customer():
    return User.objects.create_user(
        username="bob",
        email="bob@example.com",
        password="testpass123",
    )


@pytest.fixture()
def staff_user():
    return User.objects.create_user(
        username="staff",
        email="staff@example.com",
        password="testpass123",
        is_staff=True,
    )


@pytest.fixture()
def customer_caller(customer):
    return Caller.from_user(customer)


@pytest.fixture()
def other_caller(other_customer):
    return Caller.from_user(other_customer)


@pytest.fixture()
def admin_caller(staff_user):
    return Caller.from_user(staff_user)


# ---------------------------------------------------------------------------
# Authenticated clients
# ---------------------------------------------------------------------------


@pytest.fixture()
def customer_client(customer):
    """APIClient force-authenticated as the ordinary customer."""
    client = APIClient()
    client.force_authenticate(user=customer)
    return client


@pytest.fixture()
def other_client(other_customer):
    client = APIClient()
    client.force_authenticate(user=other_customer)
    return client


@pytest.fixture()
def staff_client(staff_user):
    """APIClient force-authenticated as an admin (staff) user."""
    client = APIClient()
    client.force_authenticate(user=staff_user)
    return client


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------


@pytest.fixture()
def mug():
    return Product.objects.create(name="Ceramic Mug", price=Decimal("10.00"), stock=5)


@pytest.fixture()
def beans():
    return Product.objects.create(
        name="Espresso Beans", price=Decimal("24.50"), stock=20
    )


@pytest.fixture()
def grinder():
    return Product.objects.create(name="Burr Grinder", price=Decimal("129.00"), stock=1)
