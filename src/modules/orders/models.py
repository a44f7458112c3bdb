"""Order and OrderProduct models.

Business rules implemented:
- ``order_date`` and the ``PROCESSING`` status are stamped on insert only.
- ``DELETED`` is terminal and hides the order from every "active" query.
- Each product appears at most once per order; the link row records the
  position the caller listed it in.
- Reading ``Order.products`` skips soft-deleted products while their
  link rows stay in place.
- Customer and Product FKs use PROTECT to keep order history intact.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, List

from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Q
from django.utils import timezone

from modules.core.models import BaseModel, is_visible
from modules.orders.constants import TERMINAL_STATES, VALID_TRANSITIONS, OrderStatus
from modules.orders.exceptions import InvalidStatusTransition

if TYPE_CHECKING:
    from modules.products.models import Product


class Order(BaseModel):
    """Order aggregate root.

    Products attached before the first save are held in memory and written
    as ``OrderProduct`` rows by the repository, in the same transaction as
    the order itself.
    """

    customer = models.ForeignKey(
        "customers.Customer",
        on_delete=models.PROTECT,
        related_name="orders",
    )
    order_date = models.DateTimeField(editable=False)
    shipping_address = models.CharField(max_length=255)
    total_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(0)],
    )
    order_status = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PROCESSING,
    )

    class Meta:
        db_table = "orders"
        ordering = ["id"]
        indexes = [
            models.Index(fields=["order_status"], name="orders_status_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(total_price__gte=0),
                name="orders_total_price_non_negative",
            ),
        ]

    # ------------------------------------------------------------------
    # Visibility
    # ------------------------------------------------------------------

    @classmethod
    def visible_condition(cls) -> Q:
        return ~Q(order_status=OrderStatus.DELETED)

    @property
    def is_visible(self) -> bool:
        return self.order_status != OrderStatus.DELETED

    # ------------------------------------------------------------------
    # State machine helpers
    # ------------------------------------------------------------------

    @property
    def is_terminal(self) -> bool:
        return self.order_status in TERMINAL_STATES

    def can_transition_to(self, new_status: str) -> bool:
        """Check whether transitioning to *new_status* is valid."""
        return new_status in VALID_TRANSITIONS.get(self.order_status, set())

    def transition_to(self, new_status: str) -> None:
        """Move to *new_status* in memory; the caller persists the order.

        Raises:
            InvalidStatusTransition: if the life cycle forbids the change.
        """
        if not self.can_transition_to(new_status):
            raise InvalidStatusTransition(
                f"Cannot change order status from {self.order_status} to {new_status}"
            )
        self.order_status = new_status

    # ------------------------------------------------------------------
    # Product association
    # ------------------------------------------------------------------

    def attach_products(self, products: Iterable[Product]) -> None:
        """Queue *products*, in order, to be linked when the order is inserted.

        Repeated products are kept once, at their first position.
        """
        if not self._state.adding:
            raise ValueError("Products can only be attached to a new order.")
        pending = self.pending_products
        for product in products:
            if not any(product.pk == p.pk for p in pending):
                pending.append(product)
        self._pending_products = pending

    @property
    def pending_products(self) -> List[Product]:
        return list(getattr(self, "_pending_products", []))

    def clear_pending_products(self) -> None:
        self._pending_products = []

    @property
    def products(self) -> List[Product]:
        """Visible products of this order, in the caller's listing order."""
        if self._state.adding:
            candidates = self.pending_products
        else:
            candidates = [link.product for link in self.product_links.all()]
        return [product for product in candidates if is_visible(product)]

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, *args: Any, **kwargs: Any) -> None:
        if self._state.adding:
            self.order_date = timezone.now()
            self.order_status = OrderStatus.PROCESSING
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"Order #{self.pk} ({self.order_status})"


class OrderProduct(models.Model):
    """Link row between an Order and one of its Products."""

    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name="product_links",
    )
    product = models.ForeignKey(
        "products.Product",
        on_delete=models.PROTECT,
        related_name="order_links",
    )
    position = models.PositiveIntegerField()

    class Meta:
        db_table = "order_products"
        ordering = ["position"]
        constraints = [
            models.UniqueConstraint(
                fields=["order", "product"],
                name="uc_order_product_unique",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.order_id} -> {self.product_id}"
