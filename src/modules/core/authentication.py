"""JWT authentication bound to customer accounts.

Tokens are SimpleJWT HS256 access tokens whose ``customer_id`` claim
(``SIMPLE_JWT["USER_ID_CLAIM"]``) names the authenticated customer.
There is no Django ``User`` row behind a request: the authenticated
``request.user`` is a ``CustomerPrincipal``.

Security decisions
------------------
* **Fail Closed** — any decode / validation error returns 401.
* Roles are re-read from the store on every request; the ``roles``
  claim in the token is informational only.
* INACTIVE customers are rejected even with an unexpired token.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import AccessToken

from modules.customers.authorization import CustomerPrincipal
from modules.customers.repositories.django_repository import CustomerDjangoRepository

if TYPE_CHECKING:
    from modules.customers.models import Customer

logger = structlog.get_logger(__name__)


def issue_access_token(customer: Customer) -> AccessToken:
    """Build a signed access token for ``customer``."""
    token = AccessToken()
    token[api_settings.USER_ID_CLAIM] = str(customer.id)
    token["roles"] = list(customer.roles or [])
    return token


class CustomerJWTAuthentication(JWTAuthentication):
    """DRF authentication class resolving Bearer tokens to customers."""

    www_authenticate_realm = "api"

    def get_user(self, validated_token) -> CustomerPrincipal:
        """Return the ``CustomerPrincipal`` named by the token."""
        try:
            customer_id = validated_token[api_settings.USER_ID_CLAIM]
        except KeyError as exc:
            raise InvalidToken("Token contained no recognizable customer identification") from exc

        customer = CustomerDjangoRepository().get_by_id(customer_id)
        if customer is None or not customer.is_active:
            logger.warning("jwt_customer_rejected", customer_id=str(customer_id))
            raise AuthenticationFailed("Customer not found or inactive.", code="customer_inactive")

        logger.info("jwt_authenticated", customer_id=str(customer.id))
        return CustomerPrincipal(customer_id=str(customer.id), roles=tuple(customer.roles or ()))
