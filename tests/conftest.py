import uuid

import pytest
import uuid6
from django.core.cache import cache

from rest_framework.test import APIClient

from modules.customers.authorization import CustomerPrincipal
from modules.customers.models import Customer, CustomerStatus, Role


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture(autouse=True)
def _clear_cache():
    """Throttle counters live in the cache; start every test from zero."""
    cache.clear()
    yield
    cache.clear()


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
def client_for():
    """Factory of APIClients authenticated as a stored customer."""

    def _client(customer: Customer) -> APIClient:
        client = APIClient()
        client.force_authenticate(
            user=CustomerPrincipal(customer_id=str(customer.id), roles=tuple(customer.roles))
        )
        return client

    return _client


@pytest.fixture()
def make_customer():
    """Factory persisting a Customer with sane defaults."""

    def _make(
        name: str = "Fake Name",
        email: str | None = None,
        password: str = "123456",
        roles: list[str] | None = None,
        status: str = CustomerStatus.ACTIVE,
    ) -> Customer:
        customer = Customer(
            name=name,
            email=email or f"{uuid.uuid4().hex[:10]}@fakeemail.com",
            roles=roles or [Role.USER.value],
            status=status,
        )
        customer.set_password(password)
        customer.save()
        return customer

    return _make


@pytest.fixture()
def user_client():
    """APIClient authenticated as a USER that owns no stored customer."""
    client = APIClient()
    client.force_authenticate(user=CustomerPrincipal(customer_id=str(uuid6.uuid7())))
    return client


@pytest.fixture()
def admin_client():
    """APIClient authenticated as an ADMIN."""
    client = APIClient()
    client.force_authenticate(
        user=CustomerPrincipal(
            customer_id=str(uuid6.uuid7()),
            roles=(Role.USER.value, Role.ADMIN.value),
        )
    )
    return client
