"""Tests for ProductDjangoRepository against the test database."""

from __future__ import annotations

from decimal import Decimal

import pytest

from modules.core.pagination import PageRequest
from modules.products.repositories.django_repository import ProductDjangoRepository

pytestmark = pytest.mark.unit


@pytest.fixture()
def repo():
    return ProductDjangoRepository()


class TestFindActive:
    def test_find_by_id_skips_deleted(self, repo, make_product):
        product = make_product()
        assert repo.find_active_by_id(product.id) == product
        product.delete()
        assert repo.find_active_by_id(product.id) is None

    def test_find_all_by_ids_returns_only_visible(self, repo, make_product):
        a = make_product(name="a")
        b = make_product(name="b")
        gone = make_product(name="gone")
        gone.delete()

        found = repo.find_all_active_by_ids([a.id, b.id, gone.id, 9999])

        assert sorted(p.id for p in found) == sorted([a.id, b.id])

    def test_find_all_by_ids_empty(self, repo, django_assert_num_queries):
        with django_assert_num_queries(0):
            assert repo.find_all_active_by_ids([]) == []

    def test_find_all_by_ids_single_query(self, repo, make_product, django_assert_num_queries):
        ids = [make_product().id for _ in range(3)]
        with django_assert_num_queries(1):
            repo.find_all_active_by_ids(ids)


class TestFindActivePage:
    def test_slices_and_counts(self, repo, make_product):
        products = [make_product(name=f"p{i}") for i in range(5)]
        products[0].delete()

        page = repo.find_active_page(PageRequest(page=1, size=2))

        assert page.total == 4
        assert [p.id for p in page.items] == [products[3].id, products[4].id]

    def test_sort_descending(self, repo, make_product):
        cheap = make_product(price=Decimal("1.00"))
        pricey = make_product(price=Decimal("99.00"))

        page = repo.find_active_page(PageRequest(sort=("-price",)))

        assert [p.id for p in page.items] == [pricey.id, cheap.id]

    def test_ties_broken_by_id(self, repo, make_product):
        first = make_product(name="same")
        second = make_product(name="same")

        page = repo.find_active_page(PageRequest(sort=("name",)))

        assert [p.id for p in page.items] == [first.id, second.id]

    def test_page_past_end_is_empty(self, repo, make_product):
        make_product()
        page = repo.find_active_page(PageRequest(page=5, size=10))
        assert page.items == []
        assert page.total == 1
