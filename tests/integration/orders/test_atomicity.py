"""Order creation is all-or-nothing across customer, products and links."""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import patch

import pytest
from django.db import IntegrityError

from modules.core.exceptions import StorageConflict
from modules.customers.dtos import CreateCustomerDTO
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.customers.services import CustomerService
from modules.orders.dtos import CreateOrderDTO
from modules.orders.models import Order, OrderProduct
from modules.orders.repositories import OrderDjangoRepository
from modules.orders.services import OrderService
from modules.products.exceptions import ProductNotFound
from modules.products.repositories.django_repository import ProductDjangoRepository

pytestmark = pytest.mark.integration


@pytest.fixture()
def customer_repo():
    return CustomerDjangoRepository()


@pytest.fixture()
def service(customer_repo):
    return OrderService(
        order_repository=OrderDjangoRepository(),
        customer_repository=customer_repo,
        product_repository=ProductDjangoRepository(),
    )


def _dto(customer_id, product_ids):
    return CreateOrderDTO(
        customer_id=customer_id,
        products=[{"id": pid} for pid in product_ids],
        shipping_address="1 Main St",
        total_price=Decimal("10.00"),
    )


class TestAllOrNothing:
    def test_one_missing_product_writes_nothing(self, service, customer_repo, make_product):
        customer = CustomerService(customer_repo).create_customer(
            CreateCustomerDTO(
                first_name="John",
                last_name="Doe",
                email="john@x.com",
                phone_number="+1234567890",
            )
        )
        assert customer.id > 0
        existing = make_product()

        with patch.object(
            customer_repo, "find_active_by_id", wraps=customer_repo.find_active_by_id
        ) as lookup:
            with pytest.raises(ProductNotFound):
                service.create_order(_dto(customer.id, [existing.id, existing.id + 1000]))

        lookup.assert_called_once_with(customer.id)
        assert not Order.objects.exists()
        assert not OrderProduct.objects.exists()

    def test_soft_deleted_product_counts_as_missing(self, service, make_customer, make_product):
        kept = make_product()
        gone = make_product()
        gone.delete()

        with pytest.raises(ProductNotFound, match=str(gone.id)):
            service.create_order(_dto(make_customer().id, [kept.id, gone.id]))

        assert not Order.objects.exists()

    def test_link_write_failure_rolls_back_order(self, service, make_customer, make_product):
        product = make_product()
        with patch.object(
            OrderProduct.objects, "bulk_create", side_effect=IntegrityError("boom")
        ):
            with pytest.raises(StorageConflict):
                service.create_order(_dto(make_customer().id, [product.id]))

        assert not Order.objects.exists()

    def test_success_writes_every_link(self, service, make_customer, make_product):
        products = [make_product(name=f"p{i}") for i in range(3)]

        result = service.create_order(_dto(make_customer().id, [p.id for p in products]))

        assert OrderProduct.objects.filter(order_id=result.id).count() == 3
        assert [p.id for p in result.products] == [p.id for p in products]
