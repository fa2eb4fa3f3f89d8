"""Field rules for customer create/update requests.

Each rule is a callable ``rule(request) -> FieldViolation | None``.
``validate()`` runs every rule and returns all violations, so a
request with a blank name *and* a taken email reports both.

Rules that need the store (``email_available``) are built by factories
that close over a repository; the rule itself stays a plain function
of the request.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Iterable, List, Optional

from email_validator import EmailNotValidError, validate_email

from modules.customers.dtos import CustomerRequestDTO
from modules.customers.models import NAME_MAX_LENGTH

if TYPE_CHECKING:
    from modules.customers.repositories.interfaces import ICustomerRepository


@dataclass(frozen=True)
class FieldViolation:
    field: str
    message: str

    def as_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


Rule = Callable[[CustomerRequestDTO], Optional[FieldViolation]]

NAME_REQUIRED = "Name must be informed"
NAME_TOO_LONG = f"Name must have at most {NAME_MAX_LENGTH} characters"
EMAIL_INVALID = "Email must be valid"
EMAIL_TAKEN = "Email already registered"
PASSWORD_REQUIRED = "Password must be informed"


def name_not_blank(request: CustomerRequestDTO) -> Optional[FieldViolation]:
    if not request.name.strip():
        return FieldViolation("name", NAME_REQUIRED)
    return None


def name_within_length(request: CustomerRequestDTO) -> Optional[FieldViolation]:
    if len(request.name) > NAME_MAX_LENGTH:
        return FieldViolation("name", NAME_TOO_LONG)
    return None


def email_well_formed(request: CustomerRequestDTO) -> Optional[FieldViolation]:
    try:
        validate_email(request.email, check_deliverability=False)
    except EmailNotValidError:
        return FieldViolation("email", EMAIL_INVALID)
    return None


def normalize_email(email: str) -> str:
    """Canonical form of a well-formed address (domain lowercased).

    Raises:
        email_validator.EmailNotValidError: when ``email`` is malformed.
    """
    return validate_email(email, check_deliverability=False).normalized


def password_not_blank(request: CustomerRequestDTO) -> Optional[FieldViolation]:
    if not request.password.strip():
        return FieldViolation("password", PASSWORD_REQUIRED)
    return None


def email_available(
    repository: ICustomerRepository, exclude_id: Optional[str] = None
) -> Rule:
    """Rule rejecting an email another customer already owns.

    ``exclude_id`` lets a customer keep its own address on update.
    Blank emails are left to ``email_well_formed``.
    """

    def rule(request: CustomerRequestDTO) -> Optional[FieldViolation]:
        if not request.email:
            return None
        if repository.exists_by_email(request.email, exclude_id=exclude_id):
            return FieldViolation("email", EMAIL_TAKEN)
        return None

    return rule


def validate(request: CustomerRequestDTO, rules: Iterable[Rule]) -> List[FieldViolation]:
    """Apply every rule; never short-circuits."""
    return [v for v in (rule(request) for rule in rules) if v is not None]


def create_rules(repository: ICustomerRepository) -> List[Rule]:
    return [
        name_not_blank,
        name_within_length,
        email_well_formed,
        email_available(repository),
        password_not_blank,
    ]


def update_rules(repository: ICustomerRepository, customer_id: str) -> List[Rule]:
    return [
        name_not_blank,
        name_within_length,
        email_well_formed,
        email_available(repository, exclude_id=customer_id),
        password_not_blank,
    ]
