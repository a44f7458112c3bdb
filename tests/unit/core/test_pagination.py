"""Unit tests for PageRequest, Page and the DRF paging boundary."""

from __future__ import annotations

import pytest
from django.test import override_settings
from rest_framework.request import Request
from rest_framework.test import APIRequestFactory

from modules.core.exceptions import RequestValidationError
from modules.core.pagination import Page, PageRequest, SortFilter, ZeroBasedPagination

pytestmark = pytest.mark.unit

factory = APIRequestFactory()


class _ListView:
    ordering_fields = ["id", "name", "price"]
    ordering = ["id"]


def _request(**params) -> Request:
    return Request(factory.get("/api/v1/products/", params))


def _fields(exc_info) -> list[str]:
    return [v.field for v in exc_info.value.violations]


class TestPageRequest:
    def test_defaults(self):
        request = PageRequest()
        assert (request.page, request.size, request.sort) == (0, 10, ("id",))

    def test_offset(self):
        assert PageRequest(page=3, size=20).offset == 60

    def test_negative_page_rejected(self):
        with pytest.raises(RequestValidationError) as exc_info:
            PageRequest(page=-1)
        assert _fields(exc_info) == ["page"]

    @pytest.mark.parametrize("size", [0, -5, 101])
    def test_size_out_of_range_rejected(self, size):
        with pytest.raises(RequestValidationError) as exc_info:
            PageRequest(size=size)
        assert _fields(exc_info) == ["size"]

    @override_settings(MAX_PAGE_SIZE=5)
    def test_max_size_comes_from_settings(self):
        PageRequest(size=5)
        with pytest.raises(RequestValidationError):
            PageRequest(size=6)


class TestZeroBasedPagination:
    def test_empty_params_use_defaults(self):
        page_request = ZeroBasedPagination().get_page_request(_request(), _ListView())
        assert page_request == PageRequest(page=0, size=10, sort=("id",))

    def test_parses_values(self):
        page_request = ZeroBasedPagination().get_page_request(
            _request(page="2", size="5", sort="-price, name"), _ListView()
        )
        assert page_request == PageRequest(page=2, size=5, sort=("-price", "name"))

    def test_oversized_page_rejected_not_clamped(self):
        with pytest.raises(RequestValidationError) as exc_info:
            ZeroBasedPagination().get_page_request(_request(size="500"), _ListView())
        assert _fields(exc_info) == ["size"]

    def test_collects_every_violation(self):
        with pytest.raises(RequestValidationError) as exc_info:
            ZeroBasedPagination().get_page_request(
                _request(page="abc", size="0", sort="-secret"), _ListView()
            )
        assert sorted(_fields(exc_info)) == ["page", "size", "sort"]

    @override_settings(DEFAULT_PAGE_SIZE=3, MAX_PAGE_SIZE=4)
    def test_limits_come_from_settings(self):
        paginator = ZeroBasedPagination()
        assert paginator.get_page_request(_request(), _ListView()).size == 3
        with pytest.raises(RequestValidationError):
            paginator.get_page_request(_request(size="5"), _ListView())

    def test_envelope_and_links(self):
        paginator = ZeroBasedPagination()
        http_request = _request(page="1", size="2")
        paginator.get_page_request(http_request, _ListView())

        response = paginator.get_page_response(
            Page(items=["c", "d"], page=1, size=2, total=5), ["c", "d"]
        )

        assert response.data["results"] == ["c", "d"]
        assert (response.data["count"], response.data["total_pages"]) == (5, 3)
        assert (response.data["page"], response.data["size"]) == (1, 2)
        assert "page=2" in response.data["next"]
        assert "page=0" in response.data["previous"]

    def test_no_links_on_single_page(self):
        paginator = ZeroBasedPagination()
        paginator.get_page_request(_request(), _ListView())
        response = paginator.get_page_response(Page(items=[1], page=0, size=10, total=1), [1])
        assert response.data["next"] is None
        assert response.data["previous"] is None


class TestSortFilter:
    def test_defaults_to_view_ordering(self):
        assert SortFilter().get_ordering(_request(), None, _ListView()) == ["id"]

    def test_unknown_field_reported(self):
        with pytest.raises(RequestValidationError) as exc_info:
            SortFilter().get_ordering(_request(sort="name,deleted"), None, _ListView())
        assert [v.message for v in exc_info.value.violations] == [
            "Unsupported sort field: deleted"
        ]


class TestPage:
    def test_total_pages_rounds_up(self):
        page = Page(items=[1, 2], page=0, size=2, total=5)
        assert page.total_pages == 3

    def test_empty_result(self):
        page = Page(items=[], page=0, size=10, total=0)
        assert page.total_pages == 0
        assert not page.has_next
        assert not page.has_previous

    def test_map_keeps_metadata(self):
        page = Page(items=[1, 2], page=1, size=2, total=4, sort=("-id",))
        mapped = page.map(str)
        assert mapped.items == ["1", "2"]
        assert (mapped.page, mapped.size, mapped.total, mapped.sort) == (1, 2, 4, ("-id",))
