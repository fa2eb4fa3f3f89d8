"""Customer model with hashed password, roles and status-based soft delete.

Business rules implemented:
- Email must be unique across every customer, active or not.
- The raw password is never stored; only a Django password hash.
- Deleting a customer is the ACTIVE -> INACTIVE transition in
  ``deactivate()``; the row is never removed.
"""

from __future__ import annotations

import structlog
from django.contrib.auth.hashers import check_password, make_password
from django.db import models

from modules.core.models import BaseModel

logger = structlog.get_logger(__name__)


NAME_MAX_LENGTH = 255


class CustomerStatus(models.TextChoices):
    ACTIVE = "ACTIVE", "Active"
    INACTIVE = "INACTIVE", "Inactive"


class Role(models.TextChoices):
    USER = "USER", "User"
    ADMIN = "ADMIN", "Admin"


def default_roles() -> list[str]:
    return [Role.USER.value]


class Customer(BaseModel):
    """Customer aggregate root.

    ``email`` carries ``unique=True`` so uniqueness holds regardless of
    ``status`` — an INACTIVE customer keeps its address reserved.
    """

    name = models.CharField(max_length=NAME_MAX_LENGTH)
    email = models.EmailField(max_length=254, unique=True)
    password_hash = models.CharField(max_length=128)
    status = models.CharField(
        max_length=8,
        choices=CustomerStatus.choices,
        default=CustomerStatus.ACTIVE,
    )
    roles = models.JSONField(default=default_roles)

    class Meta:
        db_table = "customers"
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(fields=["created_at"], name="customers_created_idx"),
            models.Index(fields=["status"], name="customers_status_idx"),
        ]

    # ------------------------------------------------------------------
    # Credentials
    # ------------------------------------------------------------------

    def set_password(self, raw_password: str) -> None:
        self.password_hash = make_password(raw_password)

    def check_password(self, raw_password: str) -> bool:
        return check_password(raw_password, self.password_hash)

    # ------------------------------------------------------------------
    # Roles / state
    # ------------------------------------------------------------------

    @property
    def is_admin(self) -> bool:
        return Role.ADMIN.value in (self.roles or [])

    @property
    def is_active(self) -> bool:
        return self.status == CustomerStatus.ACTIVE

    def deactivate(self) -> bool:
        """Move ACTIVE -> INACTIVE.

        Returns ``True`` when the status changed, ``False`` when the
        customer was already INACTIVE.  The caller persists the change.
        """
        if self.status == CustomerStatus.INACTIVE:
            return False
        self.status = CustomerStatus.INACTIVE
        logger.info("customer.deactivated", customer_id=str(self.id))
        return True

    def __str__(self) -> str:
        return f"{self.name} <{self.email}> [{self.status}]"
