"""Domain error taxonomy shared by every module.

Every error the services raise is a ``DomainError`` subclass tagged with
an ``ErrorKind``.  The API layer never inspects concrete classes: the
exception handler (``modules.core.exception_handler``) maps the kind to a
status code and a uniform response body.

Module-specific errors (``CustomerNotFound``, ``ProductNotFound`` ...) live
in each module's ``exceptions.py`` and subclass the bases defined here.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import ClassVar, Iterable, List


class ErrorKind(StrEnum):
    """Failure categories, from cheapest to most expensive to detect."""

    VALIDATION = "validation"
    DOMAIN_VALIDATION = "domain_validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    UNCLASSIFIED = "unclassified"


class DomainError(Exception):
    """Base class for every error raised by the service layer."""

    kind: ClassVar[ErrorKind] = ErrorKind.UNCLASSIFIED
    code: ClassVar[str] = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


# ---------------------------------------------------------------------------
# Structural validation
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FieldViolation:
    """A single (field path, message) pair."""

    field: str
    message: str


class RequestValidationError(DomainError):
    """One or more structural constraints were violated.

    All violations found for a single call are carried together.
    """

    kind = ErrorKind.VALIDATION
    code = "invalid"

    def __init__(self, violations: Iterable[FieldViolation]) -> None:
        self.violations: List[FieldViolation] = list(violations)
        summary = "; ".join(f"{v.field}: {v.message}" for v in self.violations)
        super().__init__(summary or "Invalid request.")

    @classmethod
    def single(cls, field: str, message: str) -> RequestValidationError:
        return cls([FieldViolation(field=field, message=message)])


# ---------------------------------------------------------------------------
# Semantic, lookup and conflict failures
# ---------------------------------------------------------------------------


class DomainValidationError(DomainError):
    """A value is present but breaks a business-specific rule."""

    kind = ErrorKind.DOMAIN_VALIDATION
    code = "invalid_value"


class NotFoundError(DomainError):
    """The referenced aggregate does not exist or is not visible."""

    kind = ErrorKind.NOT_FOUND
    code = "not_found"


class ConflictError(DomainError):
    """A uniqueness rule would be violated."""

    kind = ErrorKind.CONFLICT
    code = "conflict"


class StorageConflict(ConflictError):
    """The database rejected a write after the service pre-checks passed."""

    code = "storage_conflict"
