"""Product service layer (Use Cases).

Orchestrates business logic for the Product aggregate, delegating
persistence to the injected ``IProductRepository``.

Business rules enforced here:
- Ids must be present and positive.
- Only non-deleted products are listed, read or updated.
- Updates replace every field.
- Soft delete is idempotent: deleting a missing product is a no-op.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import structlog
from django.db import transaction

from modules.core.validation import require, require_positive_id
from modules.products.dtos import ProductOutputDTO
from modules.products.exceptions import ProductNotFound

if TYPE_CHECKING:
    from modules.core.pagination import Page, PageRequest
    from modules.products.dtos import CreateProductDTO, UpdateProductDTO
    from modules.products.models import Product
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: IProductRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_products(self, page_request: Optional[PageRequest]) -> Page[ProductOutputDTO]:
        """Return one page of visible products."""
        require(page_request, "page_request", "Page request mustn't be null")
        page = self._repo.find_active_page(page_request)
        logger.info(
            "product.listed",
            page=page.page,
            size=page.size,
            total=page.total,
        )
        return page.map(ProductOutputDTO.from_entity)

    def get_product(self, id: Optional[int]) -> ProductOutputDTO:
        """Retrieve a single non-deleted product by ID.

        Raises:
            ProductNotFound: if no visible product has this id.
        """
        product = self._get_visible(id)
        logger.info("product.retrieved", product_id=id)
        return ProductOutputDTO.from_entity(product)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_product(self, dto: Optional[CreateProductDTO]) -> ProductOutputDTO:
        """Create a new product. Products carry no uniqueness rule."""
        require(dto, "request", "Product request mustn't be null")
        product = self._repo.save(dto.to_entity())
        logger.info("product.created", product_id=product.id)
        return ProductOutputDTO.from_entity(product)

    @transaction.atomic
    def update_product(
        self, id: Optional[int], dto: Optional[UpdateProductDTO]
    ) -> ProductOutputDTO:
        """Replace name, description, price and stock of a visible product.

        Raises:
            ProductNotFound: if the product does not exist or was deleted.
        """
        require(dto, "request", "Product request mustn't be null")
        product = self._get_visible(id)
        product = self._repo.save(dto.apply_to(product))
        logger.info("product.updated", product_id=id)
        return ProductOutputDTO.from_entity(product)

    @transaction.atomic
    def soft_delete_product(self, id: Optional[int]) -> None:
        """Mark a product as deleted; silently ignore missing products."""
        require_positive_id(id, "Product id")
        product = self._repo.find_active_by_id(id)
        if not product:
            logger.info("product.delete_skipped", product_id=id)
            return
        product.deleted = True
        self._repo.save(product)
        logger.info("product.soft_deleted", product_id=id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _get_visible(self, id: Optional[int]) -> Product:
        require_positive_id(id, "Product id")
        product = self._repo.find_active_by_id(id)
        if not product:
            raise ProductNotFound(f"Product not found for id: {id}")
        return product
