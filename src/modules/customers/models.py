"""Customer model with a validated phone number and soft delete.

Business rules implemented:
- Email is unique, case-insensitively, among non-deleted customers
  (service pre-check + partial functional unique index as backstop).
- ``phone_number`` always holds a ``PhoneNumber``: assigning a raw string
  validates and normalises it on the spot.
- Soft delete via the ``deleted`` flag (inherited from SoftDeleteModel).
"""

from __future__ import annotations

from typing import Any

from django.db import models
from django.db.models import Q
from django.db.models.functions import Lower
from django.db.models.query_utils import DeferredAttribute

from modules.core.models import SoftDeleteModel
from modules.customers.value_objects import PhoneNumber


# ---------------------------------------------------------------------------
# PhoneNumber column
# ---------------------------------------------------------------------------


class PhoneNumberDescriptor(DeferredAttribute):
    """Coerce raw strings into ``PhoneNumber`` on assignment."""

    def __set__(self, instance: models.Model, value: Any) -> None:
        if isinstance(value, str) and value:
            value = PhoneNumber(value)
        instance.__dict__[self.field.attname] = value


class PhoneNumberField(models.CharField):
    """Stores the normalised form; loads it back as a ``PhoneNumber``.

    An empty or invalid value can sit on an unsaved instance but never
    reaches the database: ``get_prep_value`` validates it first.
    """

    descriptor_class = PhoneNumberDescriptor

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("max_length", 21)
        super().__init__(*args, **kwargs)

    def from_db_value(self, value: Any, expression: Any, connection: Any) -> PhoneNumber | None:
        if value is None:
            return None
        return PhoneNumber._restore(value)

    def to_python(self, value: Any) -> PhoneNumber | None:
        if value is None or isinstance(value, PhoneNumber):
            return value
        return PhoneNumber(value)

    def get_prep_value(self, value: Any) -> str | None:
        phone = self.to_python(value)
        return phone.value if phone is not None else None


# ---------------------------------------------------------------------------
# Customer
# ---------------------------------------------------------------------------


class Customer(SoftDeleteModel):
    """Customer aggregate root.

    ``orders`` (reverse FK from ``Order.customer``) is a back-reference
    only; the order repository is the source of truth for orders.
    """

    first_name = models.CharField(max_length=255)
    last_name = models.CharField(max_length=255)
    email = models.EmailField(max_length=254)
    phone_number = PhoneNumberField()

    class Meta:
        db_table = "customers"
        ordering = ["id"]
        constraints = [
            models.UniqueConstraint(
                Lower("email"),
                condition=Q(deleted=False),
                name="customers_email_ci_unique_alive",
            ),
        ]

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __str__(self) -> str:
        return f"{self.full_name} (#{self.pk})"
