"""Unit tests for ProductService."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from modules.core.exceptions import RequestValidationError
from modules.core.pagination import Page, PageRequest
from modules.products.dtos import CreateProductDTO, ProductOutputDTO, UpdateProductDTO
from modules.products.exceptions import ProductNotFound
from modules.products.models import Product
from modules.products.services import ProductService

pytestmark = pytest.mark.unit

CREATED = datetime(2026, 1, 1, tzinfo=timezone.utc)


@pytest.fixture()
def mock_repo():
    return MagicMock()


@pytest.fixture()
def service(mock_repo):
    return ProductService(repository=mock_repo)


def _product(**overrides) -> Product:
    defaults = {
        "id": 1,
        "name": "Widget",
        "description": "A widget",
        "price": Decimal("9.99"),
        "quantity_in_stock": 5,
        "created_at": CREATED,
    }
    defaults.update(overrides)
    return Product(**defaults)


def _persist(product: Product) -> Product:
    if product.id is None:
        product.id = 10
        product.created_at = CREATED
    return product


class TestListProducts:
    def test_maps_page_items(self, service, mock_repo):
        request = PageRequest(page=0, size=2)
        mock_repo.find_active_page.return_value = Page(
            items=[_product(id=1), _product(id=2)], page=0, size=2, total=3
        )

        page = service.list_products(request)

        mock_repo.find_active_page.assert_called_once_with(request)
        assert [dto.id for dto in page.items] == [1, 2]
        assert all(isinstance(dto, ProductOutputDTO) for dto in page.items)
        assert page.total_pages == 2

    def test_page_request_required(self, service, mock_repo):
        with pytest.raises(RequestValidationError, match="Page request mustn't be null"):
            service.list_products(None)
        mock_repo.find_active_page.assert_not_called()


class TestGetProduct:
    def test_success(self, service, mock_repo):
        mock_repo.find_active_by_id.return_value = _product(id=4)
        assert service.get_product(4).id == 4

    def test_not_found(self, service, mock_repo):
        mock_repo.find_active_by_id.return_value = None
        with pytest.raises(ProductNotFound, match="Product not found for id: 4"):
            service.get_product(4)

    def test_invalid_id(self, service, mock_repo):
        with pytest.raises(RequestValidationError, match="Product id must be positive"):
            service.get_product(-2)
        mock_repo.find_active_by_id.assert_not_called()


class TestCreateProduct:
    def test_success_defaults_description(self, service, mock_repo):
        mock_repo.save.side_effect = _persist

        result = service.create_product(CreateProductDTO(name="Widget", quantity_in_stock=1))

        assert result.id == 10
        assert result.description == ""
        saved = mock_repo.save.call_args.args[0]
        assert saved.description == ""

    def test_missing_request(self, service, mock_repo):
        with pytest.raises(RequestValidationError):
            service.create_product(None)
        mock_repo.save.assert_not_called()


class TestUpdateProduct:
    def test_full_replace(self, service, mock_repo):
        product = _product()
        mock_repo.find_active_by_id.return_value = product
        mock_repo.save.side_effect = _persist

        result = service.update_product(
            1, UpdateProductDTO(name="Gadget", price="1.50", quantity_in_stock=0)
        )

        assert result.name == "Gadget"
        assert result.description == ""
        assert result.price == Decimal("1.50")
        assert result.quantity_in_stock == 0
        mock_repo.save.assert_called_once_with(product)

    def test_not_found(self, service, mock_repo):
        mock_repo.find_active_by_id.return_value = None
        with pytest.raises(ProductNotFound):
            service.update_product(1, UpdateProductDTO(name="Gadget", quantity_in_stock=0))
        mock_repo.save.assert_not_called()


class TestSoftDeleteProduct:
    def test_marks_deleted(self, service, mock_repo):
        product = _product()
        mock_repo.find_active_by_id.return_value = product

        service.soft_delete_product(1)

        assert product.deleted is True
        mock_repo.save.assert_called_once_with(product)

    def test_missing_is_noop(self, service, mock_repo):
        mock_repo.find_active_by_id.return_value = None
        service.soft_delete_product(1)
        mock_repo.save.assert_not_called()
