"""Django ORM implementation of the Customer repository.

Satisfies ``ICustomerRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: methods return ``None``
instead of raising HTTP-level exceptions — the Service Layer decides
how to translate a missing entity into an API response.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction

from modules.customers.models import Customer
from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)


class CustomerDjangoRepository(ICustomerRepository):
    """Concrete Customer repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Customer]:
        """Retrieve a customer by primary key.

        Returns ``None`` for non-existent or invalid IDs (e.g. ``"1"``).
        """
        try:
            return Customer.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Customer]:
        """List customers in insertion order with optional ORM look-ups.

        Examples of valid filters::

            {"status": "ACTIVE"}
            {"name__icontains": "gus"}
        """
        queryset = Customer.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    @transaction.atomic
    def save(self, entity: Customer) -> Customer:
        """Persist (create or update) a customer."""
        is_new = entity._state.adding
        entity.save()
        logger.info("customer.saved", customer_id=str(entity.id), is_new=is_new)
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        """Soft-delete a customer by ID (status -> INACTIVE).

        Returns ``True`` if the customer exists (already INACTIVE
        included), ``False`` if no customer has the given ID.
        """
        customer = self.get_by_id(id)
        if not customer:
            return False
        if customer.deactivate():
            customer.save(update_fields=["status", "updated_at"])
        return True

    def get_by_email(self, email: str) -> Optional[Customer]:
        """Retrieve a customer by email address, ignoring letter case."""
        return Customer.objects.filter(email__iexact=email).first()

    def exists_by_email(self, email: str, exclude_id: Optional[str] = None) -> bool:
        queryset = Customer.objects.filter(email__iexact=email)
        if exclude_id is None:
            return queryset.exists()
        try:
            return queryset.exclude(id=exclude_id).exists()
        except (ValueError, ValidationError):
            # a malformed id matches no customer
            return queryset.exists()
