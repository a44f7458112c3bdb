"""Product model with stock control and soft delete.

Business rules implemented:
- Price is optional; when present it must be greater than zero.
- Stock quantity cannot be negative.
- ``description`` is never NULL in storage (``""`` when absent).
- Soft delete via the ``deleted`` flag (inherited from SoftDeleteModel).
"""

from __future__ import annotations

from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Q

from modules.core.models import SoftDeleteModel


class Product(SoftDeleteModel):
    """Product aggregate root. No uniqueness rule applies to products."""

    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(0.01)],
    )
    quantity_in_stock = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "products"
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=Q(price__isnull=True) | Q(price__gt=0),
                name="products_price_positive",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.name} (#{self.pk})"
