"""Integration tests for customer JWT authentication.

Validates:
  - /health is public (plain Django view, no DRF).
  - Login exchanges email + password for a Bearer token.
  - The token authenticates as the customer and carries its roles.
  - Protected endpoints return 401 for missing, invalid or malformed
    credentials, and for customers deactivated after login.
"""

import pytest
from rest_framework_simplejwt.tokens import AccessToken

from modules.customers.models import CustomerStatus, Role

pytestmark = pytest.mark.integration

LOGIN_URL = "/api/v1/auth/login/"
ME_URL = "/api/v1/auth/me/"


def login(api_client, email, password):
    return api_client.post(LOGIN_URL, {"email": email, "password": password}, format="json")


class TestPublicEndpoints:
    """Health check must remain accessible without credentials."""

    def test_health_is_public(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"


class TestLogin:
    def test_valid_credentials_return_token(self, api_client, make_customer):
        customer = make_customer(email="login@fakeemail.com", password="s3cret")

        response = login(api_client, "login@fakeemail.com", "s3cret")

        assert response.status_code == 200
        token = AccessToken(response.json()["access"])
        assert token["customer_id"] == str(customer.id)
        assert token["roles"] == [Role.USER.value]

    def test_wrong_password_returns_401(self, api_client, make_customer):
        make_customer(email="login@fakeemail.com", password="s3cret")

        response = login(api_client, "login@fakeemail.com", "wrong")

        assert response.status_code == 401
        assert response.json()["internalCode"] == "ML-0002"

    def test_unknown_email_returns_401(self, api_client):
        response = login(api_client, "nobody@fakeemail.com", "s3cret")
        assert response.status_code == 401

    def test_email_letter_case_is_ignored(self, api_client, make_customer):
        make_customer(email="login@fakeemail.com", password="s3cret")

        response = login(api_client, "Login@FakeEmail.com", "s3cret")

        assert response.status_code == 200

    def test_inactive_customer_cannot_login(self, api_client, make_customer):
        make_customer(
            email="gone@fakeemail.com", password="s3cret", status=CustomerStatus.INACTIVE
        )

        response = login(api_client, "gone@fakeemail.com", "s3cret")

        assert response.status_code == 401

    def test_missing_fields_return_422(self, api_client):
        response = api_client.post(LOGIN_URL, {"email": "a@fakeemail.com"}, format="json")
        assert response.status_code == 422
        assert response.json()["internalCode"] == "ML-0001"


class TestTokenAuthentication:
    def test_token_authenticates_as_customer(self, api_client, make_customer):
        customer = make_customer(email="me@fakeemail.com", password="s3cret")
        access = login(api_client, "me@fakeemail.com", "s3cret").json()["access"]
        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {access}")

        response = api_client.get(ME_URL)

        assert response.status_code == 200
        assert response.json() == {
            "id": str(customer.id),
            "name": customer.name,
            "email": "me@fakeemail.com",
            "status": "ACTIVE",
            "roles": ["USER"],
        }

    def test_owner_reads_own_record_with_token(self, api_client, make_customer):
        customer = make_customer(email="me@fakeemail.com", password="s3cret")
        access = login(api_client, "me@fakeemail.com", "s3cret").json()["access"]
        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {access}")

        response = api_client.get(f"/api/v1/customers/{customer.id}/")

        assert response.status_code == 200

    def test_admin_token_can_delete(self, api_client, make_customer):
        make_customer(
            email="admin@fakeemail.com",
            password="s3cret",
            roles=[Role.USER.value, Role.ADMIN.value],
        )
        target = make_customer()
        access = login(api_client, "admin@fakeemail.com", "s3cret").json()["access"]
        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {access}")

        response = api_client.delete(f"/api/v1/customers/{target.id}/")

        assert response.status_code == 204

    def test_deactivated_customer_token_is_rejected(self, api_client, make_customer):
        customer = make_customer(email="me@fakeemail.com", password="s3cret")
        access = login(api_client, "me@fakeemail.com", "s3cret").json()["access"]
        customer.deactivate()
        customer.save()
        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {access}")

        response = api_client.get(ME_URL)

        assert response.status_code == 401


class TestProtectedEndpoints:
    """All DRF endpoints require a valid JWT by default (Fail Closed)."""

    def test_no_token_returns_401(self, api_client):
        response = api_client.get(ME_URL)
        assert response.status_code == 401

    def test_invalid_token_returns_401(self, api_client):
        api_client.credentials(HTTP_AUTHORIZATION="Bearer invalid.token.here")
        response = api_client.get(ME_URL)
        assert response.status_code == 401

    def test_malformed_auth_header_returns_401(self, api_client):
        api_client.credentials(HTTP_AUTHORIZATION="Token some-token")
        response = api_client.get(ME_URL)
        assert response.status_code == 401

    def test_401_includes_www_authenticate_header(self, api_client):
        response = api_client.get(ME_URL)
        assert response.status_code == 401
        assert "Bearer" in response.get("WWW-Authenticate", "")
