"""Order API views.

Exposes the ``OrderService`` via HTTP using a DRF ViewSet.
Domain errors propagate to ``modules.core.exception_handler``.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.core.validation import coerce_id, parse_request
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.orders.dtos import CreateOrderDTO
from modules.orders.repositories import OrderDjangoRepository
from modules.orders.services import OrderService
from modules.products.repositories.django_repository import ProductDjangoRepository


class OrderViewSet(ViewSet):
    """ViewSet for Order operations (create, retrieve, logical delete).

    Uses ``OrderService`` with the Django repositories (DIP).
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = OrderService(
            order_repository=OrderDjangoRepository(),
            customer_repository=CustomerDjangoRepository(),
            product_repository=ProductDjangoRepository(),
        )

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/"""
        order = self._service.get_order(coerce_id(pk, "Order id"))
        return Response(order.model_dump(mode="json"))

    def create(self, request: Request) -> Response:
        """POST /api/v1/orders/"""
        dto = parse_request(CreateOrderDTO, request.data, "Order request")
        order = self._service.create_order(dto)
        return Response(order.model_dump(mode="json"), status=status.HTTP_201_CREATED)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/orders/{pk}/"""
        self._service.soft_delete_order(coerce_id(pk, "Order id"))
        return Response(status=status.HTTP_204_NO_CONTENT)
