"""
Service for handling pagination logic.

Provides pure, testable pagination functions independent of HTTP/Flask context.
Only handles pagination math: the window of page links shown in the pager and
the 1-based item indexes of the current page.

If you see page 5 of 20 with a window of 5, the pager looks like:

    start prev ... 3 4 [5] 6 7 ... next end
"""

import logging
import math
import numbers
from dataclasses import dataclass
from typing import List, Optional

from models.errors import InvalidPageError, EmptyPageError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaginationResult:
    """Page numbers computed for one request. Immutable once built."""
    current_page: int
    total_count: int
    items_per_page: int
    display_window_size: int

    # Full range of pages
    start_page: int
    end_page: int

    # Pages displayed in the pager control
    first_page: int
    last_page: int

    @property
    def can_paginate(self) -> bool:
        """True when there is more than one page to move between."""
        return self.total_count != 0 and self.start_page != self.end_page

    @property
    def show_start_ellipsis(self) -> bool:
        """Pages are hidden between the start page and the window."""
        return self.first_page != self.start_page

    @property
    def show_end_ellipsis(self) -> bool:
        """Pages are hidden between the window and the end page."""
        return self.last_page != self.end_page

    @property
    def show_start_link(self) -> bool:
        """The start link is redundant on the start page and the page after it."""
        return self.current_page != self.start_page and self.current_page != self.start_page + 1

    @property
    def show_end_link(self) -> bool:
        """The end link is redundant on the end page and the page before it."""
        return self.current_page != self.end_page and self.current_page != self.end_page - 1

    @property
    def page_range(self) -> List[int]:
        """All page numbers from the start page to the end page."""
        return list(range(self.start_page, self.end_page + 1))

    @property
    def display_page_range(self) -> List[int]:
        """Page numbers displayed in the pager, first page to last page."""
        return list(range(self.first_page, self.last_page + 1))

    def offset_for(self, page: int) -> int:
        """Zero-based offset of the first item on ``page``."""
        return (page - 1) * self.items_per_page


@dataclass(frozen=True)
class PageIndex:
    """1-based inclusive item numbers of one page within the whole collection."""
    first_index: int
    last_index: int
    offset: int


class PaginationService:
    """Service for pagination window and index calculations."""

    def parse_page_number(self, number) -> int:
        """
        Validate a requested page number and return it as an int.

        Accepts ints and strings of digits ("3", " 3 "). Booleans, zero,
        negative numbers, non-integral numbers and any other string are
        rejected.

        Raises:
            InvalidPageError: If the value is not a positive integer
        """
        if isinstance(number, bool):
            raise InvalidPageError(page=number)

        if isinstance(number, numbers.Integral):
            page = int(number)
        elif isinstance(number, numbers.Real):
            if not float(number).is_integer():
                raise InvalidPageError(page=number)
            page = int(number)
        elif isinstance(number, str):
            try:
                page = int(number.strip())
            except ValueError:
                raise InvalidPageError(page=number)
        else:
            raise InvalidPageError(page=number)

        if page < 1:
            # page = 0 or page = -1
            raise InvalidPageError(page=number)

        return page

    def calculate_offset(self, page: int, items_per_page: int) -> int:
        """Zero-based offset of the first item on ``page``."""
        return (page - 1) * items_per_page

    def compute_window(
        self,
        total_count: int,
        items_per_page: int,
        display_window_size: int,
        current_page
    ) -> PaginationResult:
        """
        Compute the full page range and the displayed window of pages.

        Args:
            total_count: Number of items across all pages
            items_per_page: Items shown on one page (>= 1)
            display_window_size: Maximum number of page links in the pager (>= 1)
            current_page: Requested page number (positive integer)

        Returns:
            Fully populated PaginationResult

        Raises:
            InvalidPageError: If current_page is not a positive integer
        """
        current_page = self.parse_page_number(current_page)

        if items_per_page < 1:
            raise ValueError(f"items_per_page must be >= 1, got {items_per_page}")
        if display_window_size < 1:
            raise ValueError(f"display_window_size must be >= 1, got {display_window_size}")

        start_page = 1
        end_page = math.ceil(total_count / items_per_page)

        if end_page <= display_window_size:
            first_page = start_page
            last_page = end_page
        else:
            # Even sizes get one more page before the current page than after it
            after = (display_window_size - 1) // 2
            before = display_window_size - 1 - after

            first_page = current_page - before
            last_page = current_page + after

            if first_page <= 1:
                first_page = 1
                last_page = display_window_size
            elif last_page >= end_page:
                first_page = end_page - display_window_size + 1
                last_page = end_page

        logger.debug(
            f"Page window for page {current_page}: {first_page}..{last_page} "
            f"of {start_page}..{end_page} ({total_count} items)"
        )

        return PaginationResult(
            current_page=current_page,
            total_count=total_count,
            items_per_page=items_per_page,
            display_window_size=display_window_size,
            start_page=start_page,
            end_page=end_page,
            first_page=first_page,
            last_page=last_page,
        )

    def assert_result_count(
        self,
        total_count: int,
        result_count: int,
        page: Optional[int] = None
    ) -> None:
        """
        Reject a page past the end of a non-empty collection.

        Raises:
            EmptyPageError: If total_count is nonzero but the page has no items
        """
        if total_count != 0 and result_count == 0:
            raise EmptyPageError(page=page, total_count=total_count)

    def compute_index(
        self,
        total_count: int,
        result_count: int,
        offset: int,
        items_per_page: int
    ) -> PageIndex:
        """
        Compute the 1-based item numbers of a page.

        When the offset is at or past the total (the collection shrank
        between count and fetch), the offset snaps back to the start of the
        last page, so the indexes describe a different page than the one
        requested.

        Args:
            total_count: Number of items across all pages
            result_count: Number of items actually fetched for this page
            offset: Zero-based offset of the requested page
            items_per_page: Items shown on one page

        Returns:
            PageIndex with first_index, last_index and the offset used
        """
        if total_count <= offset:
            snapped = (total_count // items_per_page) * items_per_page
            if total_count:
                logger.warning(
                    f"Offset {offset} is past total count {total_count}, "
                    f"using offset {snapped}"
                )
            offset = snapped

        first_index = offset + 1

        if result_count < items_per_page:
            last_index = offset + result_count
        else:
            last_index = offset + items_per_page

        return PageIndex(first_index=first_index, last_index=last_index, offset=offset)
