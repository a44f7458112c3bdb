"""Order repository interface.

Extends ``IRepository[Order]`` with the status-aware look-up used to hide
logically deleted orders.  ``save`` must write the order and its pending
product links atomically.

The Service Layer depends exclusively on this contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.orders.models import Order


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root."""

    @abstractmethod
    def find_by_id_excluding_status(self, id: int, status: str) -> Optional[Order]:
        """Retrieve an order by id unless it is in *status*."""
