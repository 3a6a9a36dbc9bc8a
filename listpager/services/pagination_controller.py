"""Keeps a list view's paging state in sync with a remote query store."""

import asyncio
import logging
from collections.abc import Callable, Iterable
from enum import Enum
from typing import Any

from listpager.exceptions import ListPagerError, StaleResponseDiscarded
from listpager.schemas.pagination import PaginationConfig
from listpager.schemas.query import FetchResult, FilterSpec, OrderSpec
from listpager.services.pagination_state import PaginationState
from listpager.services.query_fetcher import RemoteQueryFetcher
from listpager.utils.page_window import PageLabel

logger = logging.getLogger(__name__)


class FetchStatus(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    FAILED = "failed"


Listener = Callable[["PaginationController"], None]


class PaginationController:
    """
    Composition root of one paged list view.

    Every change to the page, page size, filters or order issues a new fetch.
    Fetches are numbered; only the response to the most recent one is
    applied, so a slow earlier response can never overwrite newer state.
    The exact count of a successful fetch is written into the paging state
    before its rows are published. If that count strands the active page,
    the state falls back to page 1 and the first page is fetched instead.

    All methods must be called from the event loop that runs the fetches.

    Usage:
        async with PaginationController(RemoteQueryFetcher(store)) as controller:
            await controller.wait()
            controller.go_to_next_page()
            await controller.wait()
    """

    def __init__(
        self,
        fetcher: RemoteQueryFetcher,
        filters: Iterable[FilterSpec] = (),
        order: OrderSpec | None = None,
        config: PaginationConfig | None = None,
    ):
        self.config = config or PaginationConfig()
        self.fetcher = fetcher
        self._state = PaginationState(
            items_per_page=self.config.items_per_page,
            initial_page=self.config.initial_page,
        )
        self._filters: tuple[FilterSpec, ...] = tuple(filters)
        self._order = order if order is not None else OrderSpec()
        self._enabled = self.config.enabled

        self.rows: list[Any] = []
        self.status = FetchStatus.IDLE
        self.error: ListPagerError | None = None

        self._sequence = 0
        self._tasks: set[asyncio.Task] = set()
        self._listeners: list[Listener] = []
        self._closed = False

    async def __aenter__(self) -> "PaginationController":
        self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    # Read access

    @property
    def pagination(self) -> PaginationState:
        """The paging state. Mutate it only through the controller."""
        return self._state

    @property
    def filters(self) -> tuple[FilterSpec, ...]:
        return self._filters

    @property
    def order(self) -> OrderSpec:
        return self._order

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def total_count(self) -> int:
        return self._state.total_items

    @property
    def is_loading(self) -> bool:
        return self.status is FetchStatus.FETCHING

    @property
    def page_window(self) -> list[PageLabel]:
        return self._state.page_numbers()

    def add_listener(self, listener: Listener) -> None:
        """Call ``listener(controller)`` whenever a fetch settles."""
        self._listeners.append(listener)

    # Triggers

    def start(self) -> asyncio.Task | None:
        """Issue the initial fetch."""
        return self._trigger()

    def go_to_page(self, page: int) -> None:
        """Go to ``page``; selecting the current page again re-fetches it."""
        self._state.go_to_page(page)
        if self._state.current_page == page:
            self._trigger()

    def go_to_next_page(self) -> None:
        self._navigate(self._state.go_to_next_page)

    def go_to_previous_page(self) -> None:
        self._navigate(self._state.go_to_previous_page)

    def go_to_first_page(self) -> None:
        self._navigate(self._state.go_to_first_page)

    def go_to_last_page(self) -> None:
        self._navigate(self._state.go_to_last_page)

    def set_items_per_page(self, items_per_page: int) -> None:
        if items_per_page not in self.config.items_per_page_options:
            raise ValueError(
                f"Page size {items_per_page} is not one of {self.config.items_per_page_options}"
            )
        self._navigate(lambda: self._state.set_items_per_page(items_per_page))

    def set_filters(self, filters: Iterable[FilterSpec]) -> None:
        filters = tuple(filters)
        if filters == self._filters:
            return
        self._filters = filters
        self._trigger()

    def set_order(self, order: OrderSpec) -> None:
        if order == self._order:
            return
        self._order = order
        self._trigger()

    def set_enabled(self, enabled: bool) -> None:
        was_enabled = self._enabled
        self._enabled = enabled
        if enabled and not was_enabled:
            self._trigger()

    async def refetch(self) -> None:
        """Re-fetch the current page and wait for the result."""
        self._trigger()
        await self.wait()

    async def wait(self) -> None:
        """Wait until no fetch is in flight, follow-up fetches included."""
        while self._tasks and not self._closed:
            await asyncio.gather(*list(self._tasks))

    def close(self) -> None:
        """Tear down: cancel in-flight fetches and ignore any late completion."""
        self._closed = True
        for task in list(self._tasks):
            task.cancel()

    async def aclose(self) -> None:
        tasks = list(self._tasks)
        self.close()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    # Internals

    def _navigate(self, mutation: Callable[[], None]) -> None:
        before = (self._state.current_page, self._state.items_per_page)
        mutation()
        after = (self._state.current_page, self._state.items_per_page)
        if after != before or self.status is FetchStatus.FAILED:
            self._trigger()

    def _trigger(self) -> asyncio.Task | None:
        if self._closed or not self._enabled:
            return None

        self._sequence += 1
        sequence = self._sequence
        self.status = FetchStatus.FETCHING

        task = asyncio.get_running_loop().create_task(
            self._run(sequence, self._filters, self._order, self._state.request_range)
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _run(
        self,
        sequence: int,
        filters: tuple[FilterSpec, ...],
        order: OrderSpec,
        row_range: tuple[int, int],
    ) -> None:
        logger.debug(f"Fetch #{sequence} for {self.fetcher.store.name}: rows {row_range[0]}-{row_range[1]}")
        outcome = await self.fetcher.fetch(filters, order, row_range)
        try:
            self._apply(sequence, outcome)
        except StaleResponseDiscarded as e:
            logger.debug(e.message)

    def _apply(self, sequence: int, outcome: FetchResult) -> None:
        if self._closed:
            return
        if sequence != self._sequence:
            raise StaleResponseDiscarded(sequence, self._sequence)

        if outcome.ok:
            if self._state.set_total_items(outcome.result.exact_total_count):
                # The page just fetched no longer exists; fetch page 1 instead.
                if self._trigger() is not None:
                    return
                # Disabled: settle with no rows until fetching resumes.
                self.rows = []
            else:
                self.rows = outcome.result.rows
            self.error = None
            self.status = FetchStatus.IDLE
        else:
            self.rows = []
            self._state.set_total_items(0)
            self.error = outcome.error
            self.status = FetchStatus.FAILED

        for listener in list(self._listeners):
            listener(self)
