"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
DTOs are immutable (``frozen=True``).

- ``OrderProductRefDTO``: a product reference inside an order request;
  only its ``id`` is read.
- ``CreateOrderDTO``: input for order creation.
- ``OrderOutputDTO``: output, with or without the product list.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from modules.core.validation import not_blank, to_cents
from modules.products.dtos import ProductOutputDTO

if TYPE_CHECKING:
    from modules.orders.models import Order


def _not_null(v: Any, label: str) -> Any:
    if v is None:
        raise PydanticCustomError("null", "{label} mustn't be null", {"label": label})
    return v


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class OrderProductRefDTO(BaseModel):
    """Reference to an existing product. Other product fields are ignored."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int = Field(default=None, validate_default=True)

    @field_validator("id", mode="before")
    @classmethod
    def id_must_be_present(cls, v: Any) -> Any:
        return _not_null(v, "product id")

    @field_validator("id")
    @classmethod
    def id_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise PydanticCustomError("not_positive", "product id must be positive")
        return v


class CreateOrderDTO(BaseModel):
    """Immutable DTO for order creation requests.

    Validates:
    - ``customer_id`` is present and positive.
    - ``products`` is present (it may be empty).
    - ``shipping_address`` is present and not blank.
    - ``total_price`` is present and not negative.
    """

    model_config = ConfigDict(frozen=True)

    customer_id: int = Field(default=None, validate_default=True)
    products: List[OrderProductRefDTO] = Field(default=None, validate_default=True)
    shipping_address: str = Field(default=None, validate_default=True)
    total_price: Decimal = Field(
        default=None, validate_default=True, max_digits=12, decimal_places=2
    )

    @field_validator("customer_id", mode="before")
    @classmethod
    def customer_id_must_be_present(cls, v: Any) -> Any:
        return _not_null(v, "customer id")

    @field_validator("customer_id")
    @classmethod
    def customer_id_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise PydanticCustomError("not_positive", "customer id must be positive")
        return v

    @field_validator("products", mode="before")
    @classmethod
    def products_must_be_present(cls, v: Any) -> Any:
        return _not_null(v, "products")

    @field_validator("shipping_address", mode="before")
    @classmethod
    def shipping_address_must_not_be_blank(cls, v: Any) -> Any:
        return not_blank(v, "shipping address")

    @field_validator("total_price", mode="before")
    @classmethod
    def total_price_must_be_present(cls, v: Any) -> Any:
        return _not_null(v, "total price")

    @field_validator("total_price")
    @classmethod
    def total_price_must_not_be_negative(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise PydanticCustomError("negative", "total price must be positive or zero")
        return to_cents(v)

    @property
    def product_ids(self) -> List[int]:
        """Distinct product ids, in the order the caller listed them."""
        return list(dict.fromkeys(ref.id for ref in self.products))

    def to_entity(self) -> Order:
        """Build an unsaved Order with the caller's scalar fields only.

        Customer and products are attached by ``OrderService``; the date and
        status are stamped when the order is first saved.
        """
        from modules.orders.models import Order

        return Order(
            shipping_address=self.shipping_address,
            total_price=self.total_price,
        )


# ---------------------------------------------------------------------------
# Output DTO
# ---------------------------------------------------------------------------


class OrderOutputDTO(BaseModel):
    """Immutable DTO for order API responses.

    ``products`` is ``None`` for the metadata-only variant.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    customer_id: int
    products: Optional[List[ProductOutputDTO]] = None
    order_date: datetime
    shipping_address: str
    total_price: Decimal
    order_status: str

    @classmethod
    def from_entity(cls, order: Order, include_products: bool = True) -> OrderOutputDTO:
        """Build an output DTO from an Order model instance.

        Assumes ``product_links`` are prefetched when products are included.
        """
        products = None
        if include_products:
            products = [ProductOutputDTO.from_entity(p) for p in order.products]
        return cls(
            id=order.id,
            customer_id=order.customer_id,
            products=products,
            order_date=order.order_date,
            shipping_address=order.shipping_address,
            total_price=order.total_price,
            order_status=str(order.order_status),
        )

    @classmethod
    def with_products(cls, order: Order) -> OrderOutputDTO:
        return cls.from_entity(order, include_products=True)

    @classmethod
    def without_products(cls, order: Order) -> OrderOutputDTO:
        return cls.from_entity(order, include_products=False)
