"""Django ORM implementation of the Order repository.

Satisfies ``IOrderRepository`` using Django's QuerySet API.
The order row and its ``OrderProduct`` link rows are written inside one
savepoint, so a reader never sees an order without its products.
"""

from __future__ import annotations

from typing import Optional

import structlog
from django.db.models import Prefetch

from modules.core.repositories.django_repository import save_or_conflict
from modules.orders.constants import OrderStatus
from modules.orders.models import Order, OrderProduct
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    @staticmethod
    def _with_products(queryset):
        return queryset.select_related("customer").prefetch_related(
            Prefetch(
                "product_links",
                queryset=OrderProduct.objects.select_related("product"),
            )
        )

    def find_by_id_excluding_status(self, id: int, status: str) -> Optional[Order]:
        """Retrieve an order with its product links prefetched."""
        queryset = Order.objects.filter(id=id).exclude(order_status=status)
        return self._with_products(queryset).first()

    def find_active_by_id(self, id: int) -> Optional[Order]:
        """Retrieve an order that has not been logically deleted."""
        return self.find_by_id_excluding_status(id, OrderStatus.DELETED)

    def save(self, entity: Order) -> Order:
        """Persist an order; on insert, also write its pending product links."""
        is_new = entity._state.adding
        save_or_conflict(entity, write=self._write)
        logger.info(
            "order.saved",
            order_id=entity.id,
            is_new=is_new,
            order_status=entity.order_status,
        )
        return entity

    @staticmethod
    def _write(order: Order) -> None:
        order.save()
        pending = order.pending_products
        if pending:
            OrderProduct.objects.bulk_create(
                OrderProduct(order=order, product=product, position=position)
                for position, product in enumerate(pending)
            )
        order.clear_pending_products()
