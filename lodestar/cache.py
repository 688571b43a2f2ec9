"""Single-slot memoization of the last query and its results."""

from __future__ import annotations

import logging
from typing import Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class QueryCache(Generic[T]):
    """Remember exactly one ``(query, results)`` pair.

    A repeated notification for the same query string (a modifier-only key
    press, a focus change) returns the stored results without rescoring. Any
    other query replaces the slot; there is no prefix reuse.
    """

    def __init__(self) -> None:
        self._query: str | None = None
        self._results: T | None = None
        self.hits = 0
        self.misses = 0

    @property
    def cached_query(self) -> str | None:
        return self._query

    def __contains__(self, query: object) -> bool:
        return self._query is not None and self._query == query

    def get_or_compute(self, query: str, compute_fn: Callable[[str], T]) -> T:
        if self._query is not None and self._query == query:
            self.hits += 1
            logger.debug("Query cache hit for %r", query)
            return self._results  # type: ignore[return-value]
        self.misses += 1
        results = compute_fn(query)
        self._query = query
        self._results = results
        return results

    def store(self, query: str, results: T) -> None:
        """Replace the slot with results computed elsewhere (background search)."""
        self._query = query
        self._results = results

    def clear(self) -> None:
        self._query = None
        self._results = None
