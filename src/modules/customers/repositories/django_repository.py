"""Django ORM implementation of the Customer repository.

Satisfies ``ICustomerRepository`` using Django's QuerySet API.
Look-ups follow the Null Object pattern: they return ``None`` instead of
raising, and the Service Layer decides what a missing customer means.
"""

from __future__ import annotations

from typing import Optional

import structlog

from modules.core.repositories.django_repository import save_or_conflict
from modules.customers.models import Customer
from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)


class CustomerDjangoRepository(ICustomerRepository):
    """Concrete Customer repository backed by Django ORM."""

    def find_active_by_id(self, id: int) -> Optional[Customer]:
        """Retrieve a non-deleted customer by primary key."""
        return Customer.objects.alive().filter(id=id).first()

    def find_active_by_email(self, email: str) -> Optional[Customer]:
        """Retrieve a non-deleted customer whose email matches, ignoring case."""
        return Customer.objects.alive().filter(email__iexact=email).first()

    def save(self, entity: Customer) -> Customer:
        """Persist (create or update) a customer."""
        is_new = entity._state.adding
        save_or_conflict(entity)
        logger.info("customer.saved", customer_id=entity.id, is_new=is_new)
        return entity
