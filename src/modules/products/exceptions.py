"""Product domain exceptions.

Raised by the Service Layer when business rules are violated.
The API exception handler translates them into HTTP responses.
"""

from __future__ import annotations

from typing import Iterable

from modules.core.exceptions import NotFoundError


class ProductNotFound(NotFoundError):
    """The requested product(s) do not exist or have been soft-deleted."""

    code = "product_not_found"

    @classmethod
    def for_ids(cls, ids: Iterable[int]) -> ProductNotFound:
        """Error for a batch look-up that left some ids unresolved."""
        missing = ", ".join(str(i) for i in ids)
        return cls(f"Order contains products that weren't found for ids: [{missing}]")
