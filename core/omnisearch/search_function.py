"""Instant local search with a debounced remote fallback."""

import asyncio
import operator
from datetime import timedelta
from typing import Awaitable, Callable, Generic, Iterable, Optional, Sequence, TypeVar, Union

import structlog

from omnisearch.config import get_settings
from omnisearch.exceptions import ConfigurationError, SearchFunctionClosedError
from omnisearch.models import SearchResult, SearchSource
from omnisearch.stream import ResultStream

logger = structlog.get_logger(__name__)

T = TypeVar("T")

RemoteSearchFunction = Callable[[str], Awaitable[Sequence[T]]]
MatchFunction = Callable[[T, str], bool]
EqualityFunction = Callable[[T, T], bool]


class SearchFunction(Generic[T]):
    """
    Search a local collection instantly and fall back to a remote lookup.

    Every call to `search()` emits the local matches right away. When there
    are none, a remote search is scheduled after the debounce interval; a
    newer query cancels the schedule, and results for a query that is no
    longer current are dropped.

    Must be driven from a running asyncio event loop whenever a remote
    search may be scheduled.
    """

    def __init__(
        self,
        remote_search_function: RemoteSearchFunction,
        match_function: MatchFunction,
        *,
        initial_data: Optional[Iterable[T]] = None,
        debounce_duration: Union[float, timedelta, None] = None,
        min_remote_query_length: Optional[int] = None,
        equality_function: Optional[EqualityFunction] = None,
    ):
        settings = get_settings()

        if isinstance(debounce_duration, timedelta):
            debounce_duration = debounce_duration.total_seconds()
        if debounce_duration is None:
            debounce_duration = settings.debounce_seconds
        if debounce_duration < 0:
            raise ConfigurationError("debounce_duration must not be negative")

        if min_remote_query_length is None:
            min_remote_query_length = settings.min_remote_query_length
        if min_remote_query_length < 0:
            raise ConfigurationError("min_remote_query_length must not be negative")

        self._remote_search_function = remote_search_function
        self._match_function = match_function
        self._equals = equality_function or operator.eq
        self._debounce_duration = float(debounce_duration)
        self._min_remote_query_length = min_remote_query_length

        self._local_data: list[T] = []
        self._merge(initial_data or [])

        self._results = ResultStream()
        self._debounce_timer: Optional[asyncio.TimerHandle] = None
        self._current_query = ""
        self._in_flight = 0
        self._tasks: set[asyncio.Task] = set()
        self._closed = False

    # ==========================================================================
    # Properties
    # ==========================================================================

    @property
    def results_stream(self) -> ResultStream[T]:
        """Stream of result snapshots."""
        return self._results

    @property
    def local_data(self) -> tuple[T, ...]:
        """Copy of the local collection in insertion order."""
        return tuple(self._local_data)

    @property
    def current_query(self) -> str:
        return self._current_query

    @property
    def is_loading(self) -> bool:
        """Whether a remote search is in flight."""
        return self._in_flight > 0

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def debounce_duration(self) -> float:
        """Debounce interval in seconds."""
        return self._debounce_duration

    @property
    def min_remote_query_length(self) -> int:
        return self._min_remote_query_length

    # ==========================================================================
    # Searching
    # ==========================================================================

    def search(self, query: str) -> SearchResult[T]:
        """
        Emit local matches for `query` and schedule a remote search on a miss.

        Returns the local snapshot that was emitted.
        """
        self._ensure_open()
        self._current_query = query
        self._cancel_timer()

        local_results = self._search_local_data(query)
        result = SearchResult(
            items=local_results,
            is_loading=False,
            query=query,
            source=SearchSource.LOCAL,
        )
        self._results.emit(result)

        if local_results:
            return result
        if not query or len(query) < self._min_remote_query_length:
            return result

        loop = asyncio.get_running_loop()
        self._debounce_timer = loop.call_later(
            self._debounce_duration, self._perform_remote_search, query
        )
        logger.debug(
            "Remote search scheduled",
            query=query,
            delay_ms=round(self._debounce_duration * 1000),
        )
        return result

    def force_remote_search(self, query: str) -> None:
        """Search remotely right away, even if local items match."""
        self._ensure_open()
        self._current_query = query
        self._cancel_timer()
        self._perform_remote_search(query)

    def _perform_remote_search(self, query: str) -> None:
        self._debounce_timer = None

        if self._closed:
            return
        if not query or len(query) < self._min_remote_query_length:
            return
        if query != self._current_query:
            return

        self._in_flight += 1
        self._results.emit(
            SearchResult(
                items=(),
                is_loading=True,
                query=query,
                source=SearchSource.REMOTE,
            )
        )
        logger.debug("Remote search started", query=query)

        task = asyncio.get_running_loop().create_task(self._run_remote_search(query))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run_remote_search(self, query: str) -> None:
        try:
            remote_results = list(await self._remote_search_function(query))
        except asyncio.CancelledError:
            self._in_flight -= 1
            raise
        except Exception as e:
            self._in_flight -= 1
            if self._is_stale(query):
                logger.debug("Discarding failed stale remote search", query=query)
                return
            message = str(e) or e.__class__.__name__
            logger.warning("Remote search failed", query=query, error=message)
            self._results.emit(
                SearchResult(
                    items=(),
                    is_loading=False,
                    error=message,
                    query=query,
                    source=SearchSource.REMOTE,
                )
            )
            return

        self._in_flight -= 1
        if self._is_stale(query):
            logger.debug("Discarding stale remote results", query=query)
            return

        added = self._merge(remote_results)
        logger.info(
            "Remote search finished",
            query=query,
            results=len(remote_results),
            added=added,
        )
        self._results.emit(
            SearchResult(
                items=remote_results,
                is_loading=False,
                query=query,
                source=SearchSource.REMOTE,
            )
        )

    def _is_stale(self, query: str) -> bool:
        return self._closed or query != self._current_query

    def _search_local_data(self, query: str) -> list[T]:
        if not query:
            return list(self._local_data)
        return [item for item in self._local_data if self._match_function(item, query)]

    # ==========================================================================
    # Local Collection
    # ==========================================================================

    def _contains(self, item: T) -> bool:
        return any(self._equals(existing, item) for existing in self._local_data)

    def _merge(self, items: Iterable[T]) -> int:
        added = 0
        for item in items:
            if not self._contains(item):
                self._local_data.append(item)
                added += 1
        return added

    def add_items(self, items: Iterable[T]) -> None:
        """Add items to the local collection, skipping ones already present."""
        self._merge(items)

    def clear_local_data(self) -> None:
        """Remove every item from the local collection."""
        self._local_data.clear()

    # ==========================================================================
    # Lifecycle
    # ==========================================================================

    def _cancel_timer(self) -> None:
        if self._debounce_timer is not None:
            self._debounce_timer.cancel()
            self._debounce_timer = None

    def _ensure_open(self) -> None:
        if self._closed:
            raise SearchFunctionClosedError("SearchFunction has been disposed")

    def dispose(self) -> None:
        """Cancel the pending remote search and close the result stream."""
        if self._closed:
            return
        self._cancel_timer()
        self._closed = True
        self._results.close()
        logger.debug("SearchFunction disposed", pending_fetches=len(self._tasks))

    def __enter__(self) -> "SearchFunction[T]":
        return self

    def __exit__(self, *args) -> None:
        self.dispose()
