"""Running timing statistics for launcher searches."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class SearchStats:
    total_searches: int = 0
    cache_hits: int = 0
    scored_searches: int = 0
    total_time: float = 0.0
    fastest: float | None = None
    slowest: float | None = None

    def record_search(self, duration: float, *, cached: bool = False) -> None:
        """Record one search; cached searches count but do not affect timings."""
        self.total_searches += 1
        if cached:
            self.cache_hits += 1
            return
        self.scored_searches += 1
        self.total_time += duration
        if self.fastest is None or duration < self.fastest:
            self.fastest = duration
        if self.slowest is None or duration > self.slowest:
            self.slowest = duration

    @property
    def average(self) -> float:
        if not self.scored_searches:
            return 0.0
        return self.total_time / self.scored_searches

    def reset(self) -> None:
        self.total_searches = 0
        self.cache_hits = 0
        self.scored_searches = 0
        self.total_time = 0.0
        self.fastest = None
        self.slowest = None
