"""Order service layer (Use Cases).

Orchestrates order creation and logical deletion across the Order,
Customer and Product aggregates.  Write operations are atomic: the
service defines the unit-of-work boundary.

Business rules enforced:
- The customer must exist and be visible.
- Every requested product must exist and be visible, or nothing is written.
- Repeated product ids collapse to one link, at the first position.
- Deleted orders are invisible to reads and to further deletes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import structlog
from django.db import transaction

from modules.core.validation import require, require_positive_id
from modules.customers.exceptions import CustomerNotFound
from modules.orders.constants import OrderStatus
from modules.orders.dtos import OrderOutputDTO
from modules.orders.exceptions import OrderNotFound
from modules.products.exceptions import ProductNotFound

if TYPE_CHECKING:
    from modules.customers.repositories.interfaces import ICustomerRepository
    from modules.orders.dtos import CreateOrderDTO
    from modules.orders.repositories.interfaces import IOrderRepository
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class OrderService:
    """Application service for Order use-cases.

    Receives repositories via constructor injection (DIP).
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        customer_repository: ICustomerRepository,
        product_repository: IProductRepository,
    ) -> None:
        self._order_repo = order_repository
        self._customer_repo = customer_repository
        self._product_repo = product_repository

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, id: Optional[int]) -> OrderOutputDTO:
        """Retrieve a non-deleted order with its visible products.

        Raises:
            OrderNotFound: if the order does not exist or was deleted.
        """
        require_positive_id(id, "Order id")
        order = self._order_repo.find_by_id_excluding_status(id, OrderStatus.DELETED)
        if not order:
            raise OrderNotFound(f"Order not found for id: {id}")
        logger.info("order.retrieved", order_id=id)
        return OrderOutputDTO.with_products(order)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_order(self, dto: Optional[CreateOrderDTO]) -> OrderOutputDTO:
        """Create an order for a visible customer and visible products.

        Steps:
        1. Resolve the customer.
        2. Resolve every distinct product id with a single query.
        3. Fail if any id did not resolve; nothing has been written yet.
        4. Build the order, attach customer and products in caller order.
        5. Persist order and product links together.

        Raises:
            CustomerNotFound: the customer does not exist or was deleted.
            ProductNotFound: one or more products do not exist or were
                deleted; the message lists the missing ids.
        """
        require(dto, "request", "Order request mustn't be null")
        log = logger.bind(customer_id=dto.customer_id)
        log.info("order.creation_started")

        customer = self._customer_repo.find_active_by_id(dto.customer_id)
        if not customer:
            raise CustomerNotFound(f"Customer not found for id: {dto.customer_id}")

        product_ids = dto.product_ids
        found = {p.id: p for p in self._product_repo.find_all_active_by_ids(product_ids)}
        missing = [pid for pid in product_ids if pid not in found]
        if missing:
            log.warning("order.products_missing", missing_ids=missing)
            raise ProductNotFound.for_ids(missing)

        order = dto.to_entity()
        order.customer = customer
        order.attach_products(found[pid] for pid in product_ids)

        order = self._order_repo.save(order)
        log.info("order.created", order_id=order.id, product_count=len(product_ids))
        return OrderOutputDTO.with_products(order)

    @transaction.atomic
    def soft_delete_order(self, id: Optional[int]) -> None:
        """Move a visible order to DELETED; silently ignore missing orders."""
        require_positive_id(id, "Order id")
        order = self._order_repo.find_by_id_excluding_status(id, OrderStatus.DELETED)
        if not order:
            logger.info("order.delete_skipped", order_id=id)
            return
        order.transition_to(OrderStatus.DELETED)
        self._order_repo.save(order)
        logger.info("order.soft_deleted", order_id=id, customer_id=order.customer_id)
