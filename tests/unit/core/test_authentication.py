"""Unit tests for customer JWT issuance and resolution."""

import pytest
import uuid6
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.exceptions import InvalidToken
from rest_framework_simplejwt.tokens import AccessToken

from modules.core.authentication import CustomerJWTAuthentication, issue_access_token
from modules.customers.authorization import CustomerPrincipal
from modules.customers.models import CustomerStatus, Role

pytestmark = pytest.mark.unit


def test_issued_token_names_customer_and_roles(make_customer):
    customer = make_customer(roles=[Role.USER.value, Role.ADMIN.value])

    token = AccessToken(str(issue_access_token(customer)))

    assert token["customer_id"] == str(customer.id)
    assert token["roles"] == ["USER", "ADMIN"]


class TestGetUser:
    def test_resolves_active_customer(self, make_customer):
        customer = make_customer(roles=[Role.USER.value, Role.ADMIN.value])
        token = issue_access_token(customer)

        principal = CustomerJWTAuthentication().get_user(token)

        assert principal == CustomerPrincipal(
            customer_id=str(customer.id), roles=("USER", "ADMIN")
        )
        assert principal.is_admin

    def test_roles_come_from_the_store(self, make_customer):
        customer = make_customer()
        token = issue_access_token(customer)
        token["roles"] = ["USER", "ADMIN"]

        principal = CustomerJWTAuthentication().get_user(token)

        assert principal.roles == ("USER",)

    def test_inactive_customer_is_rejected(self, make_customer):
        customer = make_customer(status=CustomerStatus.INACTIVE)

        with pytest.raises(AuthenticationFailed):
            CustomerJWTAuthentication().get_user(issue_access_token(customer))

    def test_unknown_customer_is_rejected(self):
        token = AccessToken()
        token["customer_id"] = str(uuid6.uuid7())

        with pytest.raises(AuthenticationFailed):
            CustomerJWTAuthentication().get_user(token)

    def test_token_without_claim_is_invalid(self):
        with pytest.raises(InvalidToken):
            CustomerJWTAuthentication().get_user(AccessToken())
