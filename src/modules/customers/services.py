"""Customer service layer (Use Cases).

Orchestrates business logic for the Customer aggregate, delegating
persistence to the injected ``ICustomerRepository``.

Every command follows the same order, and stops at the first failing
step without touching the store:

1. request validation (all field rules, aggregated),
2. authorization (``authorization.authorize``),
3. existence of the targeted customer,
4. mutation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, List, Optional

import structlog
from django.db import transaction

from modules.customers.authorization import Decision, Operation, authorize
from modules.customers.exceptions import (
    CustomerAccessDenied,
    CustomerNotFound,
    InvalidCredentials,
    InvalidCustomerRequest,
)
from modules.customers.models import Customer
from modules.customers.validators import (
    create_rules,
    normalize_email,
    update_rules,
    validate,
)

if TYPE_CHECKING:
    from modules.customers.authorization import CustomerPrincipal
    from modules.customers.dtos import CustomerRequestDTO, LoginDTO
    from modules.customers.repositories.interfaces import ICustomerRepository
    from modules.customers.validators import Rule

logger = structlog.get_logger(__name__)


class CustomerService:
    """Application service for Customer use-cases.

    Receives an ``ICustomerRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: ICustomerRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Guards
    # ------------------------------------------------------------------

    def _validate(self, dto: CustomerRequestDTO, rules: Iterable[Rule]) -> None:
        violations = validate(dto, rules)
        if violations:
            logger.info(
                "customer.invalid_request",
                fields=sorted({v.field for v in violations}),
            )
            raise InvalidCustomerRequest(violations)

    @staticmethod
    def _authorize(
        principal: Optional[CustomerPrincipal],
        operation: Operation,
        resource_owner_id: Optional[str] = None,
    ) -> None:
        if authorize(principal, operation, resource_owner_id) is Decision.DENY:
            logger.warning(
                "customer.access_denied",
                operation=str(operation),
                principal=str(principal) if principal is not None else None,
                target=resource_owner_id,
            )
            raise CustomerAccessDenied(f"{operation} denied")

    def _get_or_raise(self, id: str) -> Customer:
        customer = self._repo.get_by_id(id)
        if not customer:
            raise CustomerNotFound(id)
        return customer

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_customer(
        self, dto: CustomerRequestDTO, principal: Optional[CustomerPrincipal]
    ) -> Customer:
        """Register a new ACTIVE customer with the USER role.

        Raises:
            InvalidCustomerRequest: blank name/password, malformed or
                already registered email.
            CustomerAccessDenied: the caller is not authenticated.
        """
        self._validate(dto, create_rules(self._repo))
        self._authorize(principal, Operation.CREATE)

        customer = Customer(name=dto.name, email=normalize_email(dto.email))
        customer.set_password(dto.password)
        customer = self._repo.save(customer)
        logger.info("customer.created", customer_id=str(customer.id))
        return customer

    @transaction.atomic
    def update_customer(
        self, id: str, dto: CustomerRequestDTO, principal: Optional[CustomerPrincipal]
    ) -> Customer:
        """Replace name and email of an existing customer (ADMIN only).

        The password in the request is validated but not applied; id,
        status and roles are untouched.

        Raises:
            InvalidCustomerRequest: a field rule failed.
            CustomerAccessDenied: the caller is not ADMIN.
            CustomerNotFound: no customer has this id.
        """
        self._validate(dto, update_rules(self._repo, id))
        self._authorize(principal, Operation.UPDATE, id)
        customer = self._get_or_raise(id)

        customer.name = dto.name
        customer.email = normalize_email(dto.email)
        customer = self._repo.save(customer)
        logger.info("customer.updated", customer_id=str(customer.id))
        return customer

    @transaction.atomic
    def delete_customer(self, id: str, principal: Optional[CustomerPrincipal]) -> None:
        """Soft-delete a customer: status becomes INACTIVE (ADMIN only).

        Deleting an INACTIVE customer succeeds and changes nothing.

        Raises:
            CustomerAccessDenied: the caller is not ADMIN.
            CustomerNotFound: no customer has this id.
        """
        self._authorize(principal, Operation.DELETE, id)
        self._get_or_raise(id)
        self._repo.delete(id)
        logger.info("customer.soft_deleted", customer_id=str(id))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_customers(
        self,
        principal: Optional[CustomerPrincipal],
        name: Optional[str] = None,
        status: Optional[str] = None,
    ) -> List[Customer]:
        """Return customers in insertion order.

        ``name`` is a case-insensitive substring filter, ``status`` an
        exact match.  Both are skipped when empty.
        """
        self._authorize(principal, Operation.LIST)
        filters = {}
        if name:
            filters["name__icontains"] = name
        if status:
            filters["status"] = status
        return self._repo.list(filters or None)

    def get_customer(self, id: str, principal: Optional[CustomerPrincipal]) -> Customer:
        """Retrieve a single customer, for its owner or an ADMIN.

        Raises:
            CustomerAccessDenied: the caller neither owns the record nor is ADMIN.
            CustomerNotFound: no customer has this id.
        """
        self._authorize(principal, Operation.GET, id)
        customer = self._get_or_raise(id)
        logger.info("customer.retrieved", customer_id=str(id))
        return customer

    def authenticate(self, dto: LoginDTO) -> Customer:
        """Check credentials for token issuance.

        Raises:
            InvalidCredentials: unknown email, wrong password, or the
                customer is INACTIVE.  The three cases are not told apart.
        """
        customer = self._repo.get_by_email(dto.email)
        if not customer or not customer.is_active or not customer.check_password(dto.password):
            logger.warning("customer.login_failed")
            raise InvalidCredentials("Invalid email or password.")
        logger.info("customer.logged_in", customer_id=str(customer.id))
        return customer
