"""Product API views.

Exposes the ``ProductService`` via HTTP using a DRF ViewSet.
Domain errors propagate to ``modules.core.exception_handler``.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.settings import api_settings
from rest_framework.viewsets import ViewSet

from modules.core.validation import coerce_id, parse_request
from modules.products.dtos import CreateProductDTO, UpdateProductDTO
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.services import ProductService


class ProductViewSet(ViewSet):
    """ViewSet for Product CRUD operations.

    Uses ``ProductService`` with ``ProductDjangoRepository`` (DIP).
    """

    pagination_class = api_settings.DEFAULT_PAGINATION_CLASS
    ordering_fields = ["id", "name", "price", "quantity_in_stock", "created_at"]
    ordering = ["id"]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ProductService(repository=ProductDjangoRepository())

    def list(self, request: Request) -> Response:
        """GET /api/v1/products/?page=&size=&sort="""
        paginator = self.pagination_class()
        page = self._service.list_products(paginator.get_page_request(request, self))
        return paginator.get_page_response(
            page, [dto.model_dump(mode="json") for dto in page.items]
        )

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/products/{pk}/"""
        product = self._service.get_product(coerce_id(pk, "Product id"))
        return Response(product.model_dump(mode="json"))

    def create(self, request: Request) -> Response:
        """POST /api/v1/products/"""
        dto = parse_request(CreateProductDTO, request.data, "Product request")
        product = self._service.create_product(dto)
        return Response(product.model_dump(mode="json"), status=status.HTTP_201_CREATED)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/products/{pk}/"""
        product_id = coerce_id(pk, "Product id")
        dto = parse_request(UpdateProductDTO, request.data, "Product request")
        product = self._service.update_product(product_id, dto)
        return Response(product.model_dump(mode="json"))

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/products/{pk}/"""
        self._service.soft_delete_product(coerce_id(pk, "Product id"))
        return Response(status=status.HTTP_204_NO_CONTENT)
