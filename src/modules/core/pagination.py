"""Paging: the service-level contract and its DRF boundary.

Services consume a ``PageRequest`` and return a ``Page``; repositories
translate the request into ORDER BY / OFFSET / LIMIT.  Pages are
zero-based.

``ZeroBasedPagination`` reads ``?page=&size=`` at the HTTP boundary and
renders the response envelope; ``SortFilter`` reads ``?sort=`` against
the view's ``ordering_fields``.  Unlike DRF's defaults, both reject bad
values instead of silently falling back.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, List, Optional, Sequence, Tuple, TypeVar

from django.conf import settings
from rest_framework.filters import OrderingFilter
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response
from rest_framework.utils.urls import replace_query_param

from modules.core.exceptions import FieldViolation, RequestValidationError

T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True)
class PageRequest:
    """Which slice of a result set to return, and in what order.

    ``sort`` holds field names; a leading ``-`` means descending.
    """

    page: int = 0
    size: int = 10
    sort: Tuple[str, ...] = ("id",)

    def __post_init__(self) -> None:
        violations = _range_violations(self.page, self.size)
        if violations:
            raise RequestValidationError(violations)

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass(frozen=True)
class Page(Generic[T]):
    """One slice of an ordered result set."""

    items: List[T]
    page: int
    size: int
    total: int
    sort: Tuple[str, ...] = field(default=("id",))

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.size) if self.size else 0

    @property
    def has_next(self) -> bool:
        return self.page + 1 < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 0

    def map(self, fn: Callable[[T], R]) -> Page[R]:
        """Return the same page with every item converted by *fn*."""
        return Page(
            items=[fn(item) for item in self.items],
            page=self.page,
            size=self.size,
            total=self.total,
            sort=self.sort,
        )


# ---------------------------------------------------------------------------
# DRF boundary
# ---------------------------------------------------------------------------


class SortFilter(OrderingFilter):
    """``?sort=-price,name`` restricted to the view's ``ordering_fields``."""

    ordering_param = "sort"

    def remove_invalid_fields(self, queryset, fields, view, request):
        valid = super().remove_invalid_fields(queryset, fields, view, request)
        invalid = [term for term in fields if term and term not in valid]
        if invalid:
            raise RequestValidationError(
                [FieldViolation("sort", f"Unsupported sort field: {term}") for term in invalid]
            )
        return valid


class ZeroBasedPagination(PageNumberPagination):
    """Page-number pagination counted from 0, driven by a service ``Page``.

    The repository does the slicing, so instead of ``paginate_queryset``
    views call ``get_page_request`` to build the ``PageRequest`` and
    ``get_page_response`` to render the ``Page`` they got back.
    """

    page_query_param = "page"
    page_size_query_param = "size"
    sort_filter_class = SortFilter

    def __init__(self) -> None:
        self.page_size = settings.DEFAULT_PAGE_SIZE
        self.max_page_size = settings.MAX_PAGE_SIZE
        self.page: Optional[Page[Any]] = None

    def get_page_request(self, request, view) -> PageRequest:
        """Parse page, size and sort, reporting every bad parameter at once."""
        self.request = request
        violations: list[FieldViolation] = []

        page = self._collect(violations, self.get_page_number, request)
        size = self._collect(violations, self.get_page_size, request)
        sort = self._collect(
            violations, self.sort_filter_class().get_ordering, request, None, view
        )
        if violations:
            raise RequestValidationError(violations)
        return PageRequest(page=page, size=size, sort=tuple(sort or ("id",)))

    def get_page_number(self, request, paginator=None) -> int:
        number = self._int_param(request, self.page_query_param, 0)
        if number < 0:
            raise RequestValidationError.single("page", "page must be positive or zero")
        return number

    def get_page_size(self, request) -> int:
        size = self._int_param(request, self.page_size_query_param, self.page_size)
        if not 1 <= size <= self.max_page_size:
            raise RequestValidationError.single(
                "size", f"size must be between 1 and {self.max_page_size}"
            )
        return size

    def get_page_response(self, page: Page[Any], data: Sequence[Any]) -> Response:
        self.page = page
        return self.get_paginated_response(list(data))

    def get_paginated_response(self, data) -> Response:
        return Response(
            {
                "count": self.page.total,
                "next": self.get_next_link(),
                "previous": self.get_previous_link(),
                "page": self.page.page,
                "size": self.page.size,
                "total_pages": self.page.total_pages,
                "results": data,
            }
        )

    def get_next_link(self) -> Optional[str]:
        if not self.page.has_next:
            return None
        return self._page_link(self.page.page + 1)

    def get_previous_link(self) -> Optional[str]:
        if not self.page.has_previous:
            return None
        return self._page_link(min(self.page.page, max(self.page.total_pages, 1)) - 1)

    def _page_link(self, number: int) -> str:
        url = self.request.build_absolute_uri()
        return replace_query_param(url, self.page_query_param, number)

    def _int_param(self, request, name: str, default: int) -> int:
        raw = request.query_params.get(name)
        if raw in (None, ""):
            return default
        try:
            return int(raw)
        except ValueError:
            raise RequestValidationError.single(name, f"{name} must be an integer") from None

    @staticmethod
    def _collect(violations: list[FieldViolation], parse: Callable[..., Any], *args: Any) -> Any:
        try:
            return parse(*args)
        except RequestValidationError as exc:
            violations.extend(exc.violations)
            return None


def _range_violations(page: int, size: int) -> list[FieldViolation]:
    violations = []
    if page < 0:
        violations.append(FieldViolation("page", "page must be positive or zero"))
    if not 1 <= size <= settings.MAX_PAGE_SIZE:
        violations.append(
            FieldViolation("size", f"size must be between 1 and {settings.MAX_PAGE_SIZE}")
        )
    return violations
