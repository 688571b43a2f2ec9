"""Launcher search orchestration: text changes, navigation and execution."""

from __future__ import annotations

import logging
import time
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Iterable, List

from .cache import QueryCache
from .catalog import CatalogEntry
from .config import Config
from .cursor import Navigation, SelectionCursor
from .scoring import ScoringWeights, weights_from_config
from .search import ScoredMatch, SearchIndex, SearchResult
from .services.debounce_service import DebounceTimer
from .services.stats_service import SearchStats
from .utils import ensure_positive

logger = logging.getLogger(__name__)

ActionHandler = Callable[[object], None]


@dataclass(slots=True)
class _PendingSearch:
    generation: int
    query: str
    index: SearchIndex
    future: Future
    started: float


class SearchController:
    """Owns the index, the query cache and the selection cursor.

    Input arrives as direct method calls from whatever drives the event loop:
    :meth:`on_text_changed` with the full query string, :meth:`on_navigate`
    with a :class:`Navigation` command and :meth:`on_execute`. Rendering pulls
    :meth:`current_results` and :meth:`current_selection` when it redraws.

    With ``debounce_ms > 0`` text changes are held until :meth:`tick` sees the
    input settle. With a ``worker`` executor, :meth:`submit` scores off-thread
    and :meth:`poll` applies only the newest result.
    """

    def __init__(
        self,
        entries: Iterable[CatalogEntry] = (),
        *,
        config: Config | None = None,
        execute_action: ActionHandler | None = None,
        worker: Executor | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config if config is not None else Config()
        self.limit = ensure_positive(self.config.limit, "limit")
        self._weights: ScoringWeights = weights_from_config(self.config)
        self._index = SearchIndex(entries, weights=self._weights)
        self._cache: QueryCache[List[ScoredMatch]] = QueryCache()
        self._cursor = SelectionCursor(page_size=self.config.page_size)
        self._execute_action = execute_action
        self._clock = clock
        self._debounce = (
            DebounceTimer(self.config.debounce_ms, clock=clock)
            if self.config.debounce_ms > 0
            else None
        )
        self._worker = worker
        self._owns_worker = False
        self._generation = 0
        self._pending: _PendingSearch | None = None
        self._query = ""
        self._matches: List[ScoredMatch] = []
        self._results_index = self._index
        self.stats = SearchStats()
        self._run_query(self._query)

    @property
    def index(self) -> SearchIndex:
        return self._index

    @property
    def cache(self) -> QueryCache[List[ScoredMatch]]:
        return self._cache

    @property
    def query(self) -> str:
        return self._query

    @property
    def page_size(self) -> int:
        return self._cursor.page_size

    def rebuild(self, entries: Iterable[CatalogEntry]) -> None:
        """Replace the catalog wholesale and rerun the current query against it."""

        new_index = SearchIndex(entries, weights=self._weights)
        self._index = new_index
        self._generation += 1
        self._cache.clear()
        logger.info("Search index rebuilt with %d entries", len(new_index))
        self._run_query(self._query)

    def on_text_changed(self, query: str) -> bool:
        """Handle a text-change notification; return True if results were updated."""

        if self._debounce is not None:
            self._debounce.reset_with_query(query)
            return False
        return self._run_query(query)

    def tick(self, now: float | None = None) -> bool:
        """Run a debounced query once its interval elapsed; return True if it ran."""

        if self._debounce is None or not self._debounce.should_trigger(now):
            return False
        query = self._debounce.take_pending_query()
        if query is None:
            return False
        return self._run_query(query)

    def flush(self) -> bool:
        """Run a pending debounced query immediately (e.g. before executing)."""

        if self._debounce is None or not self._debounce.pending:
            return False
        query = self._debounce.take_pending_query()
        return query is not None and self._run_query(query)

    def on_navigate(self, command: Navigation | str) -> int | None:
        return self._cursor.apply(Navigation(command))

    def on_execute(self) -> object | None:
        """Hand the selected entry's action to the execution collaborator."""

        entry = self.selected_entry()
        if entry is None:
            return None
        logger.debug("Executing action for entry %s", entry.id)
        if self._execute_action is not None:
            self._execute_action(entry.action)
        return entry.action

    def current_matches(self) -> List[ScoredMatch]:
        return list(self._matches)

    def current_results(self) -> List[SearchResult]:
        return self._results_index.results_for(self._matches)

    def current_selection(self) -> int | None:
        return self._cursor.index

    def selected_entry(self) -> CatalogEntry | None:
        selection = self._cursor.index
        if selection is None:
            return None
        return self._results_index.entry(self._matches[selection].entry_index)

    def submit(self, query: str) -> bool:
        """Score *query* on the worker; return True when a search was scheduled."""

        if query in self._cache:
            return self._run_query(query)
        worker = self._ensure_worker()
        self._generation += 1
        index = self._index
        self._pending = _PendingSearch(
            generation=self._generation,
            query=query,
            index=index,
            future=worker.submit(index.search, query, self.limit),
            started=time.perf_counter(),
        )
        return True

    def poll(self) -> bool:
        """Apply a finished background search if it is still the newest request."""

        pending = self._pending
        if pending is None or not pending.future.done():
            return False
        self._pending = None
        if pending.generation != self._generation or pending.index is not self._index:
            logger.debug("Discarding superseded search for %r", pending.query)
            return False
        matches = pending.future.result()
        self.stats.record_search(time.perf_counter() - pending.started)
        self._cache.store(pending.query, matches)
        self._apply(pending.query, matches, pending.index)
        return True

    @property
    def has_pending(self) -> bool:
        return self._pending is not None

    def close(self) -> None:
        self._pending = None
        if self._worker is not None and self._owns_worker:
            self._worker.shutdown(wait=False, cancel_futures=True)
            self._worker = None
            self._owns_worker = False

    def __enter__(self) -> "SearchController":
        return self

    def __exit__(self, *_exc_info) -> None:
        self.close()

    def _ensure_worker(self) -> Executor:
        if self._worker is None:
            self._worker = ThreadPoolExecutor(max_workers=1, thread_name_prefix="lodestar-search")
            self._owns_worker = True
        return self._worker

    def _run_query(self, query: str) -> bool:
        index = self._index
        computed = False

        def compute(text: str) -> List[ScoredMatch]:
            nonlocal computed
            computed = True
            return index.search(text, self.limit)

        started = time.perf_counter()
        matches = self._cache.get_or_compute(query, compute)
        elapsed = time.perf_counter() - started
        self.stats.record_search(elapsed, cached=not computed)
        # A newer synchronous result supersedes anything still in flight.
        self._pending = None
        if not computed:
            return False
        logger.debug(
            "Scored %r against %d entries: %d matches in %.3fms",
            query,
            len(index),
            len(matches),
            elapsed * 1000,
        )
        self._apply(query, matches, index)
        return True

    def _apply(self, query: str, matches: List[ScoredMatch], index: SearchIndex) -> None:
        self._query = query
        self._matches = list(matches)
        self._results_index = index
        self._cursor.reset(len(self._matches))
