"""Header search box behaviour: debounced querying and keyboard selection.

A UI layer embedding the portal search box owns one ``SearchSession``, feeds
it input events (``set_query``, ``key_down``, ``click_outside``, ``focus``)
and renders ``state``, ``results`` and ``selected_index``. The search callable
is usually ``SearchService.search``.

Everything runs on one asyncio event loop, so the session state needs no
locking. Each search issued gets a sequence token; a response is applied only
if its token is still the latest one, so a slow answer to an old query can
never replace the results of a newer one.
"""
import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable

from portal.config import settings
from portal.schemas.search import SearchResult
from portal.services.search_service import is_qualifying

logger = logging.getLogger(__name__)


class SearchState(str, Enum):
    CLOSED = "closed"
    LOADING = "open-loading"
    RESULTS = "open-results"
    EMPTY = "open-empty"


class Debouncer:
    """Trailing debounce: ``callback`` runs ``delay`` seconds after the last
    ``schedule()``. At most one timer is pending at a time."""

    def __init__(self, delay: float, callback: Callable[[], None]):
        self.delay = delay
        self._callback = callback
        self._handle: asyncio.TimerHandle | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def schedule(self):
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire)

    def cancel(self):
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self):
        self._handle = None
        self._callback()


class SearchSession:
    def __init__(
        self,
        search: Callable[[str], Awaitable[list[SearchResult]]],
        navigate: Callable[[str], None],
        debounce_seconds: float | None = None,
        min_query_length: int | None = None,
    ):
        self._search = search
        self._navigate = navigate
        self._min_query_length = (
            settings.search_min_query_length if min_query_length is None else min_query_length
        )
        delay = settings.search_debounce_seconds if debounce_seconds is None else debounce_seconds
        self._debouncer = Debouncer(delay, self._on_debounce)
        self._sequence = 0
        self._tasks: set[asyncio.Task] = set()

        self.query = ""
        self.results: list[SearchResult] = []
        self.selected_index = -1
        self.state = SearchState.CLOSED
        self.focused = False

    @property
    def is_open(self) -> bool:
        return self.state != SearchState.CLOSED

    @property
    def selected(self) -> SearchResult | None:
        if 0 <= self.selected_index < len(self.results):
            return self.results[self.selected_index]
        return None

    def set_query(self, text: str):
        self.query = text
        self._debouncer.schedule()

    def _on_debounce(self):
        query = self.query
        # Any newer decision supersedes searches still in flight
        self._sequence += 1
        if not is_qualifying(query, self._min_query_length):
            self.results = []
            self.selected_index = -1
            self.state = SearchState.CLOSED
            return

        self.state = SearchState.LOADING
        task = asyncio.ensure_future(self._run(query, self._sequence))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run(self, query: str, token: int):
        try:
            results = await self._search(query)
        except Exception:
            logger.exception("Search failed for %r", query)
            results = []

        if token != self._sequence:
            logger.debug("Discarding stale results for %r (token %s, latest %s)", query, token, self._sequence)
            return

        self.results = list(results)
        self.selected_index = -1
        # A panel dismissed while loading stays closed; focus() can reopen it
        if self.state == SearchState.LOADING:
            self.state = SearchState.RESULTS if self.results else SearchState.EMPTY

    def _close_and_reset(self):
        # Drop any search still in flight for the text being cleared
        self._sequence += 1
        self.state = SearchState.CLOSED
        self.set_query("")

    def key_down(self, key: str, ctrl: bool = False, meta: bool = False) -> bool:
        """Handle a key press; returns True when the key was consumed."""
        if (ctrl or meta) and key.lower() == "k":
            self.focus()
            return True

        if key == "Escape":
            self._close_and_reset()
            return True

        if self.state != SearchState.RESULTS:
            return False

        if key == "ArrowDown":
            if self.selected_index < len(self.results) - 1:
                self.selected_index += 1
            return True
        if key == "ArrowUp":
            self.selected_index = max(self.selected_index - 1, -1)
            return True
        if key == "Enter" and self.selected is not None:
            self._navigate(self.selected.target_url)
            self._close_and_reset()
            return True
        return False

    def click_outside(self):
        # Dismiss without touching the query text or the cached results
        self.state = SearchState.CLOSED

    def focus(self):
        self.focused = True
        if self.state == SearchState.CLOSED and self.results:
            self.state = SearchState.RESULTS

    def blur(self):
        self.focused = False

    async def wait_idle(self):
        """Wait until no debounce timer is pending and no search is running."""
        while self._debouncer.pending or self._tasks:
            if self._tasks:
                await asyncio.gather(*self._tasks, return_exceptions=True)
            else:
                await asyncio.sleep(self._debouncer.delay / 2 or 0.001)

    async def aclose(self):
        self._debouncer.cancel()
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._tasks.clear()
