"""
Incremental fetch controller for an infinitely scrolling product list.

Drives a ``PageSource`` one page at a time and accumulates the returned
products in request order. A view layer calls ``start()`` once per session
and ``load_more()`` whenever the user approaches the end of the loaded list.

Each session (initial start, and every ``reset()``) gets a new generation
number. A request remembers the generation it was issued under and its
outcome is dropped if the session was reset while it was in flight.
"""
from enum import Enum

import structlog

from src.application.interfaces.page_source import PageSource, PageSourceError
from src.domain.entities.page_request import SortSpec
from src.domain.entities.product import Product
from src.domain.enums.fetch_state import FetchState
from src.domain.state_machine.fetch_state_machine import FetchStateMachine

logger = structlog.get_logger(__name__)

_state_machine = FetchStateMachine()


class FeedViewStatus(str, Enum):
    """What the view should render below the product grid."""

    READY = "READY"
    LOADING = "LOADING"
    ERROR = "ERROR"
    COMPLETE = "COMPLETE"
    EMPTY = "EMPTY"


class IncrementalFetchController:
    def __init__(
        self,
        source: PageSource,
        *,
        page_size: int,
        sort: SortSpec | None = None,
    ) -> None:
        self._source = source
        self._page_size = page_size
        self._sort = sort or SortSpec()

        self._items: list[Product] = []
        self._cursor = 1
        self._state = FetchState.IDLE
        self._error: PageSourceError | None = None
        self._generation = 0
        self._requests_issued = 0

    # -------------------------------------------------------------------------
    # Observable state
    # -------------------------------------------------------------------------

    @property
    def items(self) -> tuple[Product, ...]:
        return tuple(self._items)

    @property
    def state(self) -> FetchState:
        return self._state

    @property
    def loading(self) -> bool:
        return self._state is FetchState.LOADING

    @property
    def error(self) -> PageSourceError | None:
        return self._error

    @property
    def has_next_page(self) -> bool:
        return self._state is not FetchState.EXHAUSTED

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def sort(self) -> SortSpec:
        return self._sort

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def view_status(self) -> FeedViewStatus:
        if self._state is FetchState.LOADING:
            return FeedViewStatus.LOADING
        if self._state is FetchState.ERROR:
            return FeedViewStatus.ERROR
        if self._state is FetchState.EXHAUSTED:
            return FeedViewStatus.COMPLETE if self._items else FeedViewStatus.EMPTY
        return FeedViewStatus.READY

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    async def start(self) -> bool:
        """Issue the initial load of the current session, at most once."""
        if self._requests_issued:
            return False
        return await self.load_more()

    async def load_more(self) -> bool:
        """
        Fetch the page at the cursor and append it.

        Returns True when a page was applied. No-op while a request is in
        flight or once the listing is exhausted.
        """
        if not _state_machine.can_transition(self._state, FetchState.LOADING):
            return False

        generation = self._generation
        page = self._cursor
        self._transition(FetchState.LOADING)
        self._error = None
        self._requests_issued += 1

        try:
            result = await self._source.fetch_page(
                page=page, page_size=self._page_size, sort=self._sort
            )
        except PageSourceError as exc:
            if generation != self._generation:
                logger.debug("stale_page_failure_discarded", page=page, generation=generation)
                return False
            self._error = exc
            self._transition(FetchState.ERROR)
            logger.warning("page_fetch_failed", page=page, sort=str(self._sort), error=str(exc))
            return False
        except BaseException:
            if generation == self._generation:
                self._state = FetchState.IDLE
            raise

        if generation != self._generation:
            logger.debug("stale_page_discarded", page=page, generation=generation)
            return False

        self._items.extend(result.items)
        if result.next_page is not None:
            self._cursor = result.next_page
        self._transition(FetchState.IDLE if result.has_next_page else FetchState.EXHAUSTED)

        logger.debug(
            "page_appended",
            page=page,
            received=len(result.items),
            accumulated=len(self._items),
            has_next_page=result.has_next_page,
        )
        return True

    def reset(self, sort: SortSpec | None = None) -> None:
        """Discard the session and start a new, empty one from page 1."""
        self._generation += 1
        if sort is not None:
            self._sort = sort
        self._items = []
        self._cursor = 1
        self._state = FetchState.IDLE
        self._error = None
        self._requests_issued = 0
        logger.debug("fetch_session_reset", generation=self._generation, sort=str(self._sort))

    async def change_sort(self, sort: SortSpec) -> bool:
        self.reset(sort)
        return await self.start()

    def _transition(self, new_state: FetchState) -> None:
        _state_machine.validate_transition(self._state, new_state)
        self._state = new_state


def describe_status(controller: IncrementalFetchController) -> str:
    """Human-readable status line for the bottom of the list."""
    status = controller.view_status
    if status is FeedViewStatus.LOADING:
        return "Loading more products..."
    if status is FeedViewStatus.ERROR:
        return "Something went wrong while loading products. Try again."
    if status is FeedViewStatus.COMPLETE:
        return (
            "You have reached the end of our catalog. "
            f"All {len(controller.items)} products loaded!"
        )
    if status is FeedViewStatus.EMPTY:
        return "No products found."
    return f"{len(controller.items)} products loaded. More available."
