"""Client-held paging state for a single list view."""

import logging

from listpager.utils.page_window import PageLabel, compute_page_window
from listpager.utils.pagination import compute_total_pages, page_bounds

logger = logging.getLogger(__name__)


class PaginationState:
    """
    Current page, page size and item count of a list view.

    Derived fields are computed from the three stored values on every read,
    so they can never disagree with them. Navigation that would leave the
    valid page range is ignored rather than raised.
    """

    def __init__(self, items_per_page: int = 25, initial_page: int = 1, total_items: int = 0):
        if items_per_page < 1:
            raise ValueError("items_per_page must be at least 1")
        if initial_page < 1:
            raise ValueError("initial_page must be at least 1")
        if total_items < 0:
            raise ValueError("total_items must not be negative")
        self._current_page = initial_page
        self._items_per_page = items_per_page
        self._total_items = total_items

    def __repr__(self) -> str:
        return (
            f"<PaginationState page={self._current_page}/{self.total_pages} "
            f"per_page={self._items_per_page} total={self._total_items}>"
        )

    @property
    def current_page(self) -> int:
        return self._current_page

    @property
    def items_per_page(self) -> int:
        return self._items_per_page

    @property
    def total_items(self) -> int:
        return self._total_items

    @property
    def total_pages(self) -> int:
        return compute_total_pages(self._total_items, self._items_per_page)

    @property
    def start_index(self) -> int:
        return page_bounds(self._current_page, self._items_per_page, self._total_items)[0]

    @property
    def end_index(self) -> int:
        return page_bounds(self._current_page, self._items_per_page, self._total_items)[1]

    @property
    def has_next_page(self) -> bool:
        return self._current_page < self.total_pages

    @property
    def has_previous_page(self) -> bool:
        return self._current_page > 1

    @property
    def request_range(self) -> tuple[int, int]:
        """
        Inclusive row bounds to request for the current page.

        Unlike ``end_index`` this ignores ``total_items``: the count may be
        stale until the store answers, so the full page span is requested.
        """
        start = (self._current_page - 1) * self._items_per_page
        return start, start + self._items_per_page - 1

    def go_to_page(self, page: int) -> None:
        if 1 <= page <= self.total_pages:
            self._current_page = page

    def go_to_next_page(self) -> None:
        if self.has_next_page:
            self._current_page += 1

    def go_to_previous_page(self) -> None:
        if self.has_previous_page:
            self._current_page -= 1

    def go_to_first_page(self) -> None:
        self._current_page = 1

    def go_to_last_page(self) -> None:
        self._current_page = max(self.total_pages, 1)

    def set_items_per_page(self, items_per_page: int) -> None:
        """Change the page size and return to the first page."""
        if items_per_page < 1:
            raise ValueError("items_per_page must be at least 1")
        self._items_per_page = items_per_page
        self._current_page = 1

    def set_total_items(self, total_items: int) -> bool:
        """
        Record a new exact item count.

        If the active page no longer exists the state falls back to page 1.
        Returns True when that reset happened.

        The reset only applies while at least one page exists. A count of 0
        keeps the current page, so ``current_page`` can exceed
        ``max(total_pages, 1)`` then, and likewise for an ``initial_page``
        before the first count arrives. The derived indexes are 0 in both
        cases.
        """
        if total_items < 0:
            raise ValueError("total_items must not be negative")
        self._total_items = total_items
        total_pages = self.total_pages
        if total_pages > 0 and self._current_page > total_pages:
            logger.debug(
                f"Page {self._current_page} no longer exists ({total_pages} pages); resetting to 1"
            )
            self._current_page = 1
            return True
        return False

    def page_numbers(self) -> list[PageLabel]:
        """Page labels to render for the current state."""
        return compute_page_window(self._current_page, self.total_pages)
