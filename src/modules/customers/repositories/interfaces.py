"""Customer repository interface.

Extends ``IRepository[Customer]`` with the look-ups required by the
email uniqueness rule and by login.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.customers.models import Customer


class ICustomerRepository(IRepository["Customer"]):
    """Repository contract for the Customer aggregate."""

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[Customer]:
        """Retrieve a customer by email address."""

    @abstractmethod
    def exists_by_email(self, email: str, exclude_id: Optional[str] = None) -> bool:
        """Whether any customer (active or not) owns ``email``, in any letter case.

        ``exclude_id`` removes one customer from the check.
        """
