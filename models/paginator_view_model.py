"""
Paginator view models.

Wraps a data source (ORM query, raw SQL or an in-memory list) and produces an
immutable Page for the requested page number, together with the page window
and the links a template needs to render the pager.

In a controller:

    page_number = request.args.get('page', 1)
    limit = request.args.get('size', 10)

    paginator = Paginator.from_request(request, session.query(Entry), limit)

    return render_template('entries.html', paginator=paginator,
                           page=paginator.page(page_number))
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping, Optional, Sequence, Tuple

from config import (
    PAGINATOR_LIMIT_MIN,
    PAGINATOR_LIMIT_MAX,
    PAGINATOR_WINDOW_MIN,
    PAGINATOR_WINDOW_MAX,
)
from db.adapters.data_sources import DataSource, as_data_source
from db.services.pagination_service import PaginationService, PaginationResult, PageIndex
from models.page_link import PageLinkBuilder

logger = logging.getLogger(__name__)


def _clamp(value: int, lower: int, upper: int) -> int:
    if value <= lower:
        return lower
    if value >= upper:
        return upper
    return value


@dataclass(frozen=True)
class PaginationConfig:
    """Items per page and pager size, clamped to their configured bounds."""
    items_per_page: int = 10
    display_window_size: int = 10

    min_items_per_page: int = field(default=PAGINATOR_LIMIT_MIN, repr=False)
    max_items_per_page: int = field(default=PAGINATOR_LIMIT_MAX, repr=False)
    min_window: int = field(default=PAGINATOR_WINDOW_MIN, repr=False)
    max_window: int = field(default=PAGINATOR_WINDOW_MAX, repr=False)

    def __post_init__(self):
        items_per_page = _clamp(int(self.items_per_page), self.min_items_per_page, self.max_items_per_page)
        window = _clamp(int(self.display_window_size), self.min_window, self.max_window)

        # Frozen dataclass: bypass __setattr__ to store the clamped values
        object.__setattr__(self, 'items_per_page', items_per_page)
        object.__setattr__(self, 'display_window_size', window)


class Page:
    """One page of items with its index bounds and navigation links."""

    def __init__(
        self,
        items: Sequence[Any],
        pagination: PaginationResult,
        index: PageIndex,
        paginator: "Paginator"
    ):
        self._items = tuple(items)
        self._pagination = pagination
        self._index = index
        self._paginator = paginator

    def __str__(self):
        return f"<Page {self.current_page} of {self._pagination.end_page}>"

    def __repr__(self):
        return (
            f"<Page(current_page={self.current_page}, "
            f"items={len(self._items)}, end_page={self._pagination.end_page})>"
        )

    def __len__(self):
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items)

    @property
    def items(self) -> Tuple[Any, ...]:
        return self._items

    @property
    def pagination(self) -> PaginationResult:
        return self._pagination

    @property
    def first_index(self) -> int:
        return self._index.first_index

    @property
    def last_index(self) -> int:
        return self._index.last_index

    # page numbers

    @property
    def current_page(self) -> int:
        return self._pagination.current_page

    def is_current(self, number) -> bool:
        """Return whether ``number`` is this page's number."""
        return self.current_page == number

    @property
    def has_prev_page(self) -> bool:
        return self.current_page > 1

    @property
    def has_next_page(self) -> bool:
        return self.current_page < self._pagination.end_page

    @property
    def prev_page(self) -> Optional[int]:
        """Previous page number, or None on the first page."""
        if self.has_prev_page:
            return self.current_page - 1
        return None

    @property
    def next_page(self) -> Optional[int]:
        """Next page number, or None on the end page."""
        if self.has_next_page:
            return self.current_page + 1
        return None

    # links

    def link_for(self, number) -> str:
        return self._paginator.link_for(number)

    @property
    def current_page_link(self) -> str:
        return self.link_for(self.current_page)

    @property
    def prev_page_link(self) -> str:
        """Link to the previous page; the page parameter is bare on the first page."""
        return self.link_for(self.prev_page)

    @property
    def next_page_link(self) -> str:
        """Link to the next page; the page parameter is bare on the end page."""
        return self.link_for(self.next_page)


class Paginator:
    """
    Paginates a data source for one request.

    Each call to ``page()`` validates the page number, counts and fetches the
    items, computes the page window and returns an immutable Page. Links are
    generated from the query parameters given at construction.
    """

    def __init__(
        self,
        data_source,
        items_per_page: int = 10,
        display_window_size: int = 10,
        query_params: Optional[Mapping[str, Any]] = None,
        fetch_join_collection: bool = False,
        service: Optional[PaginationService] = None
    ):
        """
        Args:
            data_source: DataSource, ORM Query or iterable of items
            items_per_page: Items per page, clamped to the configured bounds
            display_window_size: Page links in the pager, clamped to the configured bounds
            query_params: Query string parameters used to build page links
            fetch_join_collection: Count and fetch DISTINCT rows of an ORM query
            service: PaginationService instance (or None for default)
        """
        self.data_source: DataSource = as_data_source(
            data_source, fetch_join_collection=fetch_join_collection
        )
        self.config = PaginationConfig(items_per_page, display_window_size)
        self.query_params = dict(query_params or {})
        self.service = service or PaginationService()

        self._page_link: Optional[PageLinkBuilder] = None
        self._result: Optional[PaginationResult] = None

    @classmethod
    def from_request(cls, request, data_source, items_per_page: int = 10,
                     display_window_size: int = 10, **kwargs) -> "Paginator":
        """Create a paginator whose links keep the request's query string."""
        return cls(
            data_source,
            items_per_page=items_per_page,
            display_window_size=display_window_size,
            query_params=request.args.to_dict(),
            **kwargs
        )

    # API

    def page(self, number, total_count: Optional[int] = None) -> Page:
        """
        Return the Page for ``number``.

        Args:
            number: Requested page number (int or numeric string)
            total_count: Number of items across all pages; counted from the
                data source when omitted

        Raises:
            InvalidPageError: If number is not a positive integer
            EmptyPageError: If the data source has items but none on this page
        """
        current_page = self.service.parse_page_number(number)
        limit = self.config.items_per_page
        offset = self.service.calculate_offset(current_page, limit)

        if total_count is None:
            # SELECT COUNT() on the data source
            total_count = self.data_source.count()
        total_count = int(total_count)

        items = list(self.data_source.fetch(offset, limit))

        self.service.assert_result_count(total_count, len(items), page=current_page)

        result = self.service.compute_window(
            total_count, limit, self.config.display_window_size, current_page
        )
        index = self.service.compute_index(total_count, len(items), offset, limit)

        self._result = result
        logger.debug(f"Built page {current_page} of {result.end_page} with {len(items)} items")

        return Page(items, result, index, self)

    @property
    def result(self) -> PaginationResult:
        """Page window computed by the last ``page()`` call."""
        if self._result is None:
            raise RuntimeError("page() must be called before reading page numbers")
        return self._result

    def link_for(self, number) -> str:
        """Return the query string link for page ``number``."""
        if self._page_link is None:
            self._page_link = PageLinkBuilder(self.query_params)

        return self._page_link.link_for(number)

    @property
    def items_per_page(self) -> int:
        return self.config.items_per_page

    @property
    def display_window_size(self) -> int:
        return self.config.display_window_size

    @property
    def id_list(self):
        """Ids loaded by an IdListDataSource for the last page, if any."""
        return getattr(self.data_source, 'id_list', None)

    def calculate_offset(self, number: int) -> int:
        return self.service.calculate_offset(number, self.config.items_per_page)

    # page numbers of the last computed page

    @property
    def total_count(self) -> int:
        return self.result.total_count

    @property
    def can_paginate(self) -> bool:
        return self.result.can_paginate

    @property
    def show_start_ellipsis(self) -> bool:
        return self.result.show_start_ellipsis

    @property
    def show_end_ellipsis(self) -> bool:
        return self.result.show_end_ellipsis

    @property
    def show_start_link(self) -> bool:
        return self.result.show_start_link

    @property
    def show_end_link(self) -> bool:
        return self.result.show_end_link

    @property
    def page_range(self):
        return self.result.page_range

    @property
    def display_page_range(self):
        return self.result.display_page_range

    # links

    @property
    def first_page_link(self) -> str:
        return self.link_for(self.result.first_page)

    @property
    def last_page_link(self) -> str:
        return self.link_for(self.result.last_page)

    @property
    def start_page_link(self) -> str:
        return self.link_for(self.result.start_page)

    @property
    def end_page_link(self) -> str:
        return self.link_for(self.result.end_page)
