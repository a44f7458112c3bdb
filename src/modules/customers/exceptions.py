"""Customer domain exceptions.

Raised by the Service Layer (and the ``PhoneNumber`` value object) when
business rules are violated.  The API exception handler translates them
into HTTP responses by their ``kind``.
"""

from __future__ import annotations

from modules.core.exceptions import ConflictError, DomainValidationError, NotFoundError


class EmailAlreadyRegistered(ConflictError):
    """A visible customer already uses this email (compared case-insensitively)."""

    code = "email_already_registered"


class CustomerNotFound(NotFoundError):
    """The requested customer does not exist or has been soft-deleted."""

    code = "customer_not_found"


class InvalidPhoneNumber(DomainValidationError):
    """The phone number does not match the accepted pattern."""

    code = "invalid_phone_number"
    attr = "phone_number"
