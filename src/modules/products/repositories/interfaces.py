"""Product repository interface.

Extends ``IRepository[Product]`` with the batch look-up used by order
creation and the paged listing.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Iterable, List

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.core.pagination import Page, PageRequest
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def find_all_active_by_ids(self, ids: Iterable[int]) -> List[Product]:
        """Return the non-deleted products among *ids*, in no particular order.

        Ids that do not resolve are simply absent from the result.
        """

    @abstractmethod
    def find_active_page(self, page_request: PageRequest) -> Page[Product]:
        """Return one page of non-deleted products."""
