"""Customer API views.

Exposes the ``CustomerService`` via HTTP using a DRF ViewSet.
Domain errors propagate to ``modules.core.exception_handler``, which
renders every failure in the same shape.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.core.validation import coerce_id, parse_request
from modules.customers.dtos import CreateCustomerDTO
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.customers.services import CustomerService


class CustomerViewSet(ViewSet):
    """ViewSet for Customer operations (create, retrieve, soft delete).

    Uses ``CustomerService`` with ``CustomerDjangoRepository`` (DIP).
    All ORM access goes through the service/repository layer.
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = CustomerService(repository=CustomerDjangoRepository())

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/customers/{pk}/"""
        customer = self._service.get_customer(coerce_id(pk, "Customer id"))
        return Response(customer.model_dump(mode="json"))

    def create(self, request: Request) -> Response:
        """POST /api/v1/customers/"""
        dto = parse_request(CreateCustomerDTO, request.data, "Customer request")
        customer = self._service.create_customer(dto)
        return Response(customer.model_dump(mode="json"), status=status.HTTP_201_CREATED)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/customers/{pk}/"""
        self._service.soft_delete_customer(coerce_id(pk, "Customer id"))
        return Response(status=status.HTTP_204_NO_CONTENT)
