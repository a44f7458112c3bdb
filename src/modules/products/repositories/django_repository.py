"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.
Look-ups return ``None`` or an empty list instead of raising; the
Service Layer decides how to translate a missing entity.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

import structlog

from modules.core.pagination import Page, PageRequest
from modules.core.repositories.django_repository import save_or_conflict
from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def find_active_by_id(self, id: int) -> Optional[Product]:
        """Retrieve a non-deleted product by primary key."""
        return Product.objects.alive().filter(id=id).first()

    def find_all_active_by_ids(self, ids: Iterable[int]) -> List[Product]:
        """Single query for every visible product in *ids*."""
        ids = list(ids)
        if not ids:
            return []
        return list(Product.objects.alive().filter(id__in=ids))

    def find_active_page(self, page_request: PageRequest) -> Page[Product]:
        """Order, count and slice the visible products.

        ``id`` is appended as a tie-breaker so pages never overlap.
        """
        ordering = list(page_request.sort)
        if not any(key.lstrip("-") == "id" for key in ordering):
            ordering.append("id")

        queryset = Product.objects.alive().order_by(*ordering)
        total = queryset.count()
        start = page_request.offset
        items = list(queryset[start : start + page_request.size])
        return Page(
            items=items,
            page=page_request.page,
            size=page_request.size,
            total=total,
            sort=page_request.sort,
        )

    def save(self, entity: Product) -> Product:
        """Persist (create or update) a product."""
        is_new = entity._state.adding
        save_or_conflict(entity)
        logger.info("product.saved", product_id=entity.id, is_new=is_new)
        return entity
