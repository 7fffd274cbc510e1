"""Fixed-size pagination over a filtered record sequence."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

from expansion_browser.models import (
    CATEGORY_FILTERS,
    DEFAULT_PAGE_SIZE,
    FILTER_ALL,
    PageView,
    Record,
)

logger = logging.getLogger(__name__)


def total_pages(item_count: int, page_size: int) -> int:
    """Number of pages needed for item_count items (0 for an empty set)."""
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")
    return math.ceil(item_count / page_size)


def clamp_page(page: int, pages: int) -> int:
    """Clamp a page number into [1, max(1, pages)]."""
    return max(1, min(page, max(1, pages)))


def next_page(current_page: int, pages: int) -> int:
    """Advance one page; a no-op on the last page."""
    return clamp_page(current_page + 1, pages)


def previous_page(current_page: int) -> int:
    """Go back one page; a no-op on the first page."""
    return max(1, current_page - 1)


def paginate(
    filtered: Sequence[Record],
    page_size: int = DEFAULT_PAGE_SIZE,
    current_page: int = 1,
) -> PageView:
    """Slice one page out of the filtered set.

    The requested page is clamped into range first, so stale page numbers
    never produce an error.
    """
    pages = total_pages(len(filtered), page_size)
    page = clamp_page(current_page, pages)
    start = (page - 1) * page_size
    return PageView(
        items=list(filtered[start : start + page_size]),
        total_pages=pages,
        current_page=page,
        total_items=len(filtered),
        page_size=page_size,
    )


@dataclass(slots=True)
class QueryState:
    """Current category filter, search text, and page.

    Changing either filter resets the page to 1 so a page number never
    outlives the result set it was chosen for.
    """

    category_filter: str = FILTER_ALL
    search_text: str = ""
    current_page: int = 1

    def set_category_filter(self, category_filter: str) -> bool:
        """Set the category filter. Returns True if it changed."""
        if category_filter not in CATEGORY_FILTERS:
            raise ValueError(f"Unknown category filter: {category_filter!r}")
        if category_filter == self.category_filter:
            return False
        self.category_filter = category_filter
        self.current_page = 1
        return True

    def set_search_text(self, search_text: str) -> bool:
        """Set the search text. Returns True if it changed."""
        if search_text == self.search_text:
            return False
        self.search_text = search_text
        self.current_page = 1
        return True

    def go_next(self, pages: int) -> int:
        self.current_page = next_page(self.current_page, pages)
        logger.debug("Page -> %d/%d", self.current_page, pages)
        return self.current_page

    def go_previous(self) -> int:
        self.current_page = previous_page(self.current_page)
        logger.debug("Page -> %d", self.current_page)
        return self.current_page


__all__ = [
    "QueryState",
    "clamp_page",
    "next_page",
    "paginate",
    "previous_page",
    "total_pages",
]
