"""Who may do what with a customer record.

``authorize()`` is a pure function of the principal, the operation and
the owner of the targeted record; views and services ask it instead of
scattering role checks.

=========  =======================================
Operation  Allowed when
=========  =======================================
LIST       any authenticated principal
CREATE     any authenticated principal
GET        principal owns the record, or is ADMIN
UPDATE     ADMIN
DELETE     ADMIN
=========  =======================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Optional, Tuple

from modules.customers.models import Role


class Operation(StrEnum):
    LIST = "LIST"
    GET = "GET"
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class Decision(StrEnum):
    ALLOW = "ALLOW"
    DENY = "DENY"


@dataclass(frozen=True)
class CustomerPrincipal:
    """Authenticated caller, bound to one customer id.

    Plays the role of ``request.user`` for DRF: ``is_authenticated`` is
    always ``True`` and ``pk`` feeds the per-user throttle.
    """

    customer_id: str
    roles: Tuple[str, ...] = field(default=(Role.USER.value,))

    is_authenticated = True
    is_active = True

    @property
    def pk(self) -> str:
        return self.customer_id

    @property
    def is_admin(self) -> bool:
        return Role.ADMIN.value in self.roles

    def __str__(self) -> str:
        return self.customer_id


_OPEN_OPERATIONS = frozenset({Operation.LIST, Operation.CREATE})
_ADMIN_OPERATIONS = frozenset({Operation.UPDATE, Operation.DELETE})


def authorize(
    principal: Optional[CustomerPrincipal],
    operation: Operation,
    resource_owner_id: Optional[str] = None,
) -> Decision:
    if principal is None or not principal.is_authenticated:
        return Decision.DENY
    if operation in _OPEN_OPERATIONS:
        return Decision.ALLOW
    if principal.is_admin:
        return Decision.ALLOW
    if operation in _ADMIN_OPERATIONS:
        return Decision.DENY
    if resource_owner_id is not None and _same_id(principal.customer_id, resource_owner_id):
        return Decision.ALLOW
    return Decision.DENY


def _same_id(left: object, right: object) -> bool:
    return str(left).lower() == str(right).lower()
