"""Order domain exceptions.

Raised by the Service Layer when business rules are violated.
"""

from __future__ import annotations

from modules.core.exceptions import DomainValidationError, NotFoundError


class OrderNotFound(NotFoundError):
    """The requested order does not exist or has been deleted."""

    code = "order_not_found"


class InvalidStatusTransition(DomainValidationError):
    """The requested status change is not allowed by the order life cycle."""

    code = "invalid_status_transition"
    attr = "order_status"
