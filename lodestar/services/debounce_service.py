"""Time-based debounce for text-change notifications."""

from __future__ import annotations

import time
from typing import Callable

from ..utils import ensure_non_negative


class DebounceTimer:
    """Hold the latest query until the input has been quiet for *interval_ms*.

    The owning loop calls :meth:`should_trigger` once per frame; every new
    query restarts the interval.
    """

    def __init__(
        self,
        interval_ms: int,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.interval = ensure_non_negative(interval_ms, "interval_ms") / 1000.0
        self._clock = clock
        self._deadline: float | None = None
        self._pending_query: str | None = None

    @property
    def pending(self) -> bool:
        return self._pending_query is not None

    def reset_with_query(self, query: str, now: float | None = None) -> None:
        current = self._clock() if now is None else now
        self._deadline = current + self.interval
        self._pending_query = query

    def should_trigger(self, now: float | None = None) -> bool:
        if self._pending_query is None or self._deadline is None:
            return False
        current = self._clock() if now is None else now
        return current >= self._deadline

    def take_pending_query(self) -> str | None:
        query = self._pending_query
        self._pending_query = None
        self._deadline = None
        return query

    def cancel(self) -> None:
        self._pending_query = None
        self._deadline = None
