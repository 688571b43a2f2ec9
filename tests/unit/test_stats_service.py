from __future__ import annotations

import pytest

from lodestar.services.stats_service import SearchStats


def test_scored_searches_update_timings():
    stats = SearchStats()
    stats.record_search(0.002)
    stats.record_search(0.006)

    assert stats.total_searches == 2
    assert stats.scored_searches == 2
    assert stats.fastest == pytest.approx(0.002)
    assert stats.slowest == pytest.approx(0.006)
    assert stats.average == pytest.approx(0.004)


def test_cached_searches_count_without_timing():
    stats = SearchStats()
    stats.record_search(0.010)
    stats.record_search(0.000001, cached=True)

    assert stats.total_searches == 2
    assert stats.cache_hits == 1
    assert stats.fastest == pytest.approx(0.010)
    assert stats.average == pytest.approx(0.010)


def test_average_without_scored_searches_is_zero():
    stats = SearchStats()
    stats.record_search(0.5, cached=True)
    assert stats.average == 0.0


def test_reset_clears_everything():
    stats = SearchStats()
    stats.record_search(0.01)
    stats.reset()
    assert stats == SearchStats()
