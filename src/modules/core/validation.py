"""Structural validation helpers.

Field-level rules are declared on the pydantic DTOs of each module; this
module turns pydantic's error list into a single ``RequestValidationError``
and provides the guards the services apply to bare arguments (ids, page
requests, missing request objects).
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Mapping, Type, TypeVar

from pydantic import BaseModel, ValidationError
from pydantic_core import PydanticCustomError

from modules.core.exceptions import FieldViolation, RequestValidationError

M = TypeVar("M", bound=BaseModel)

CENTS = Decimal("0.01")


def blank_error(label: str) -> PydanticCustomError:
    """Error raised by DTO validators for empty / whitespace-only strings."""
    return PydanticCustomError("blank", "{label} mustn't be empty", {"label": label})


def not_blank(value: Any, label: str) -> Any:
    """Reject ``None`` and whitespace-only strings, pass anything else through."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise blank_error(label)
    return value


def to_cents(amount: Decimal) -> Decimal:
    """Scale a money amount to the two decimal places it is stored with."""
    return amount.quantize(CENTS)


def violations_from(exc: ValidationError) -> list[FieldViolation]:
    """Flatten a pydantic ``ValidationError`` into field violations."""
    violations = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or "request"
        violations.append(FieldViolation(field=field, message=error["msg"]))
    return violations


def parse_request(dto_class: Type[M], data: Mapping[str, Any] | None, label: str = "Request") -> M:
    """Build *dto_class* from raw data, collecting every violation.

    Raises:
        RequestValidationError: if ``data`` is missing or any field
            violates its declared constraints.
    """
    if data is None:
        raise RequestValidationError.single("request", f"{label} mustn't be null")
    if not isinstance(data, Mapping):
        raise RequestValidationError.single("request", f"{label} must be an object")
    # Item access, not dict(): QueryDict would otherwise yield lists.
    payload = {key: data[key] for key in data}
    try:
        return dto_class.model_validate(payload)
    except ValidationError as exc:
        raise RequestValidationError(violations_from(exc)) from exc


def require(value: Any, field: str, message: str) -> Any:
    """Fail when a required argument is ``None``."""
    if value is None:
        raise RequestValidationError.single(field, message)
    return value


def require_positive_id(value: Any, label: str) -> int:
    """Validate an aggregate id argument: present, integral and > 0."""
    field = label.lower().replace(" ", "_")
    if value is None:
        raise RequestValidationError.single(field, f"{label} mustn't be null")
    if isinstance(value, bool) or not isinstance(value, int):
        raise RequestValidationError.single(field, f"{label} must be an integer")
    if value <= 0:
        raise RequestValidationError.single(field, f"{label} must be positive")
    return value


def coerce_id(raw: Any, label: str) -> int:
    """Convert a path parameter to an integer id (sign is checked later)."""
    try:
        return int(str(raw))
    except (TypeError, ValueError):
        field = label.lower().replace(" ", "_")
        raise RequestValidationError.single(field, f"Invalid format: {raw}") from None
