"""Customer DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (Views) and the Service
layer, and they carry the entity mapping in both directions.  DTOs are
immutable (``frozen=True``).

- ``CreateCustomerDTO``: input for customer creation (structural checks);
  ``to_entity()`` hands the raw phone to ``PhoneNumber``.
- ``CustomerOutputDTO``: output with the phone unwrapped to its
  normalised string.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator, validate_email
from pydantic_core import PydanticCustomError

from modules.core.validation import not_blank

if TYPE_CHECKING:
    from modules.customers.models import Customer

_LABELS = {
    "first_name": "first name",
    "last_name": "last name",
    "email": "email",
    "phone_number": "phone number",
}


# ---------------------------------------------------------------------------
# Input DTO
# ---------------------------------------------------------------------------


class CreateCustomerDTO(BaseModel):
    """Immutable DTO for customer creation requests.

    Validates:
    - first/last name, email and phone number are present and not blank.
    - ``email`` is a well-formed address (Pydantic ``validate_email``); it
      is kept exactly as sent, without domain normalisation.

    The phone *pattern* is a domain rule, checked by ``PhoneNumber`` when
    the entity is built.
    """

    model_config = ConfigDict(frozen=True)

    first_name: str
    last_name: str
    email: str
    phone_number: str

    @field_validator("first_name", "last_name", "email", "phone_number", mode="before")
    @classmethod
    def must_not_be_blank(cls, v: Any, info: ValidationInfo) -> Any:
        return not_blank(v, _LABELS[info.field_name])

    @field_validator("email")
    @classmethod
    def email_must_be_well_formed(cls, v: str) -> str:
        address = v.strip()
        _, normalised = validate_email(address)
        if normalised.lower() != address.lower():
            raise PydanticCustomError(
                "value_error",
                "value is not a valid email address: {reason}",
                {"reason": "display names are not allowed"},
            )
        return address

    def to_entity(self) -> Customer:
        """Build an unsaved Customer.

        Raises:
            InvalidPhoneNumber: if the phone does not match the pattern.
        """
        from modules.customers.models import Customer
        from modules.customers.value_objects import PhoneNumber

        return Customer(
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
            phone_number=PhoneNumber(self.phone_number),
        )


# ---------------------------------------------------------------------------
# Output DTO
# ---------------------------------------------------------------------------


class CustomerOutputDTO(BaseModel):
    """Immutable DTO for customer API responses."""

    model_config = ConfigDict(frozen=True)

    id: int
    first_name: str
    last_name: str
    email: str
    phone_number: str
    created_at: datetime

    @classmethod
    def from_entity(cls, customer: Customer) -> CustomerOutputDTO:
        """Build an output DTO from a Customer model instance."""
        return cls(
            id=customer.id,
            first_name=customer.first_name,
            last_name=customer.last_name,
            email=customer.email,
            phone_number=str(customer.phone_number),
            created_at=customer.created_at,
        )
