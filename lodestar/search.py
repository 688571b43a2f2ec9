"""In-memory search index over a catalog snapshot."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Iterable, List, Sequence

import numpy as np

from .catalog import CatalogEntry
from .errors import CatalogError
from .scoring import MatchRule, ScoringWeights, score_entry
from .text import Messages
from .utils import ensure_positive

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ScoredMatch:
    """Position of a matching entry in the index and its score."""

    entry_index: int
    score: float
    rule: MatchRule | None = None


@dataclass(frozen=True, slots=True)
class SearchResult:
    """Rendering view of a single match."""

    title: str
    subtitle: str | None
    score: float


class SearchIndex:
    """Immutable catalog snapshot with precomputed lowercase titles and keywords.

    The index is never edited in place: a catalog rebuild constructs a new
    instance, so a search running against an index always sees one consistent
    snapshot and the instance can be shared with a worker thread.
    """

    def __init__(
        self,
        entries: Iterable[CatalogEntry] = (),
        *,
        weights: ScoringWeights | None = None,
    ) -> None:
        self._entries: tuple[CatalogEntry, ...] = tuple(entries)
        self._check_unique_ids(self._entries)
        self._titles: tuple[str, ...] = tuple(entry.title.lower() for entry in self._entries)
        self._keywords: tuple[tuple[str, ...], ...] = tuple(
            tuple(keyword.lower() for keyword in entry.keywords) for entry in self._entries
        )
        self._base_weights: tuple[float, ...] = tuple(
            entry.base_weight for entry in self._entries
        )
        weight_array = np.asarray(self._base_weights, dtype=np.float64)
        # Stable sort keeps index order among equal weights.
        self._default_order: tuple[int, ...] = tuple(
            np.argsort(-weight_array, kind="stable").tolist()
        )
        self.weights = weights if weights is not None else ScoringWeights()
        self.indexed_at = time.time()
        logger.debug("Built search index with %d entries", len(self._entries))

    @classmethod
    def empty(cls, *, weights: ScoringWeights | None = None) -> "SearchIndex":
        return cls((), weights=weights)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> Sequence[CatalogEntry]:
        return self._entries

    def entry(self, position: int) -> CatalogEntry:
        return self._entries[position]

    def search(self, query: str, limit: int) -> List[ScoredMatch]:
        """Return at most *limit* matches for *query*, best first.

        An empty query yields the default ordering: descending base weight,
        ties broken by catalog position, each entry scored at its base weight.
        """

        ensure_positive(limit, "limit")
        if not self._entries:
            return []
        if not query:
            return [
                ScoredMatch(entry_index=position, score=self._base_weights[position])
                for position in self._default_order[:limit]
            ]

        needle = query.lower()
        weights = self.weights
        positions: list[int] = []
        scores: list[float] = []
        rules: list[MatchRule] = []
        for position, (title, keywords, base_weight) in enumerate(
            zip(self._titles, self._keywords, self._base_weights)
        ):
            match = score_entry(needle, title, keywords, base_weight, weights)
            if match is None:
                continue
            positions.append(position)
            scores.append(match.score)
            rules.append(match.rule)
        if not positions:
            return []
        # positions is ascending, so a stable sort on score breaks ties by index.
        order = np.argsort(-np.asarray(scores, dtype=np.float64), kind="stable")[:limit]
        return [
            ScoredMatch(
                entry_index=positions[idx],
                score=scores[idx],
                rule=rules[idx],
            )
            for idx in order.tolist()
        ]

    def results_for(self, matches: Sequence[ScoredMatch]) -> List[SearchResult]:
        """Project matches onto the (title, subtitle, score) rendering view."""

        results: list[SearchResult] = []
        for match in matches:
            entry = self._entries[match.entry_index]
            results.append(
                SearchResult(title=entry.title, subtitle=entry.subtitle, score=match.score)
            )
        return results

    @staticmethod
    def _check_unique_ids(entries: Sequence[CatalogEntry]) -> None:
        seen: set[str] = set()
        for entry in entries:
            if entry.id in seen:
                raise CatalogError(Messages.ERROR_DUPLICATE_ID.format(value=entry.id))
            seen.add(entry.id)
