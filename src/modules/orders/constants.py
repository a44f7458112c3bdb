"""Order domain constants.

Defines status choices and the valid status transitions of the order
life cycle.  ``DELETED`` is the logical deletion of an order.
"""

from django.db import models


class OrderStatus(models.TextChoices):
    PROCESSING = "PROCESSING", "Processing"
    DELETED = "DELETED", "Deleted"


VALID_TRANSITIONS: dict[str, set[str]] = {
    OrderStatus.PROCESSING: {OrderStatus.DELETED},
    OrderStatus.DELETED: set(),
}

TERMINAL_STATES: set[str] = {OrderStatus.DELETED}
