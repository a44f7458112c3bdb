"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (Views) and the Service
layer.  DTOs are immutable (``frozen=True``).

- ``CreateProductDTO``: input for product creation.
- ``UpdateProductDTO``: input for full product replacement.
- ``ProductOutputDTO``: output with all product fields.

``description`` may be omitted on input; it becomes ``""`` on the way
into the entity and on the way out of it.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from modules.core.validation import not_blank, to_cents

if TYPE_CHECKING:
    from modules.products.models import Product


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateProductDTO(BaseModel):
    """Immutable DTO for product creation requests.

    Validates:
    - ``name`` is present and not blank.
    - ``price`` is optional; when given it is greater than zero.
    - ``quantity_in_stock`` is present and non-negative.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(default=None, validate_default=True)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(default=None, max_digits=12, decimal_places=2)
    quantity_in_stock: int = Field(default=None, validate_default=True)

    @field_validator("name", mode="before")
    @classmethod
    def name_must_not_be_blank(cls, v: Any) -> Any:
        return not_blank(v, "product name")

    @field_validator("quantity_in_stock", mode="before")
    @classmethod
    def quantity_must_be_present(cls, v: Any) -> Any:
        if v is None:
            raise PydanticCustomError("null", "quantity in stock mustn't be null")
        return v

    @field_validator("quantity_in_stock")
    @classmethod
    def quantity_must_be_non_negative(cls, v: int) -> int:
        if v < 0:
            raise PydanticCustomError(
                "negative", "quantity in stock must be positive or zero"
            )
        return v

    @field_validator("price")
    @classmethod
    def price_must_be_positive(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        if v is not None and v <= 0:
            raise PydanticCustomError("not_positive", "price must be positive")
        return None if v is None else to_cents(v)

    def to_entity(self) -> Product:
        """Build an unsaved Product."""
        from modules.products.models import Product

        return Product(
            name=self.name,
            description=self.description or "",
            price=self.price,
            quantity_in_stock=self.quantity_in_stock,
        )


class UpdateProductDTO(CreateProductDTO):
    """Immutable DTO for product update requests.

    Updates replace every field; an omitted description clears it.
    """

    def apply_to(self, product: Product) -> Product:
        """Copy every field onto *product* in place."""
        product.name = self.name
        product.description = self.description or ""
        product.price = self.price
        product.quantity_in_stock = self.quantity_in_stock
        return product


# ---------------------------------------------------------------------------
# Output DTO
# ---------------------------------------------------------------------------


class ProductOutputDTO(BaseModel):
    """Immutable DTO for product API responses."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    description: str
    price: Optional[Decimal]
    quantity_in_stock: int
    created_at: datetime

    @classmethod
    def from_entity(cls, product: Product) -> ProductOutputDTO:
        """Build an output DTO from a Product model instance."""
        return cls(
            id=product.id,
            name=product.name,
            description=product.description or "",
            price=product.price,
            quantity_in_stock=product.quantity_in_stock,
            created_at=product.created_at,
        )
