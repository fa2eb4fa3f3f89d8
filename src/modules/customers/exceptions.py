"""Customer domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer (Views) catches these and translates them into
appropriate HTTP responses.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from modules.customers.validators import FieldViolation


class CustomerNotFound(Exception):
    """No customer exists with the requested id."""

    def __init__(self, customer_id: str) -> None:
        super().__init__(f"Customer {customer_id} not exists")
        self.customer_id = customer_id


class InvalidCustomerRequest(Exception):
    """One or more request fields broke a validation rule."""

    def __init__(self, violations: List[FieldViolation]) -> None:
        super().__init__("Invalid Request")
        self.violations = violations


class CustomerAccessDenied(Exception):
    """The principal may not perform the operation on this customer."""


class InvalidCredentials(Exception):
    """Login failed: unknown email, wrong password or inactive customer."""
