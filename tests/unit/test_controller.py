from __future__ import annotations

from concurrent.futures import Executor, Future

import pytest

from lodestar.catalog import CatalogEntry
from lodestar.config import Config
from lodestar.controller import SearchController
from lodestar.cursor import Navigation
from lodestar.search import SearchIndex, SearchResult


def _entry(entry_id: str, title: str, *, weight: float = 0.5, keywords=(), subtitle=None):
    return CatalogEntry(
        id=entry_id,
        title=title,
        subtitle=subtitle,
        keywords=tuple(keywords),
        action={"open": entry_id},
        base_weight=weight,
    )


@pytest.fixture
def catalog():
    return [
        _entry("chrome", "Google Chrome", subtitle="Web browser"),
        _entry("calc", "Calculator"),
        _entry("prefs", "System Preferences", keywords=("settings",)),
    ]


class ManualExecutor(Executor):
    """Executor that only runs submitted work when told to."""

    def __init__(self) -> None:
        self.jobs: list[tuple[Future, object, tuple]] = []

    def submit(self, fn, /, *args, **kwargs):
        future: Future = Future()
        self.jobs.append((future, fn, args))
        return future

    def run_all(self) -> None:
        for future, fn, args in self.jobs:
            if not future.done():
                future.set_result(fn(*args))
        self.jobs.clear()


def test_initial_state_shows_default_ordering(catalog):
    controller = SearchController(catalog)
    assert controller.query == ""
    assert [result.title for result in controller.current_results()] == [
        "Google Chrome",
        "Calculator",
        "System Preferences",
    ]
    assert controller.current_selection() == 0


def test_text_change_runs_search_and_resets_selection(catalog):
    controller = SearchController(catalog)
    controller.on_navigate(Navigation.move_next)
    assert controller.current_selection() == 1

    assert controller.on_text_changed("goog") is True

    assert controller.current_results() == [
        SearchResult(title="Google Chrome", subtitle="Web browser", score=1.0)
    ]
    assert controller.current_selection() == 0


def test_identical_query_is_scored_once(catalog, monkeypatch):
    calls: list[str] = []
    original = SearchIndex.search

    def counting_search(self, query, limit):
        calls.append(query)
        return original(self, query, limit)

    monkeypatch.setattr(SearchIndex, "search", counting_search)
    controller = SearchController(catalog)
    calls.clear()

    controller.on_text_changed("c")
    controller.on_navigate("next")
    assert controller.on_text_changed("c") is False

    assert calls == ["c"]
    # A collapsed notification does not replace results, so the selection stays.
    assert controller.current_selection() == 1
    assert controller.stats.cache_hits == 1


def test_no_results_puts_cursor_in_empty_state(catalog):
    controller = SearchController(catalog)
    controller.on_text_changed("xyz")
    assert controller.current_results() == []
    assert controller.current_selection() is None
    assert controller.on_navigate("next") is None
    assert controller.on_execute() is None


def test_empty_catalog_is_a_valid_state():
    controller = SearchController([])
    controller.on_text_changed("anything")
    assert controller.current_results() == []
    assert controller.current_selection() is None
    assert controller.selected_entry() is None


def test_navigation_clamps_at_the_end(catalog):
    controller = SearchController(catalog)
    for _ in range(5):
        controller.on_navigate(Navigation.move_next)
    assert controller.current_selection() == 2
    controller.on_navigate("home")
    assert controller.current_selection() == 0
    controller.on_navigate("end")
    assert controller.current_selection() == 2


def test_execute_hands_selected_action_to_collaborator(catalog):
    executed: list[object] = []
    controller = SearchController(catalog, execute_action=executed.append)
    controller.on_text_changed("c")
    controller.on_navigate("next")

    action = controller.on_execute()

    assert action == controller.selected_entry().action
    assert executed == [action]
    # Executing does not move the selection.
    assert controller.current_selection() == 1


def test_limit_comes_from_config():
    entries = [_entry(f"app-{i}", f"App {i}") for i in range(12)]
    controller = SearchController(entries, config=Config(limit=8))
    controller.on_text_changed("app")
    assert len(controller.current_results()) == 8


def test_scoring_weights_come_from_config(catalog):
    controller = SearchController(catalog, config=Config(prefix_bonus=0.1))
    controller.on_text_changed("goog")
    assert controller.current_results()[0].score == pytest.approx(0.6)


def test_rebuild_swaps_index_and_reruns_current_query(catalog):
    controller = SearchController(catalog)
    controller.on_text_changed("calc")
    controller.on_navigate("next")
    old_index = controller.index

    controller.rebuild([_entry("calc2", "Calculator Pro"), _entry("calc", "Calculator")])

    assert controller.index is not old_index
    assert [result.title for result in controller.current_results()] == [
        "Calculator Pro",
        "Calculator",
    ]
    assert controller.current_selection() == 0
    assert controller.selected_entry().id == "calc2"


def test_rebuild_invalidates_cached_results(catalog, monkeypatch):
    controller = SearchController(catalog)
    controller.on_text_changed("goog")
    controller.rebuild([])
    assert controller.current_results() == []
    controller.on_text_changed("goog")
    assert controller.current_results() == []


def test_debounced_text_changes_wait_for_tick(catalog):
    now = [0.0]
    controller = SearchController(
        catalog,
        config=Config(debounce_ms=150),
        clock=lambda: now[0],
    )

    assert controller.on_text_changed("g") is False
    now[0] = 0.1
    assert controller.on_text_changed("goog") is False
    assert controller.query == ""

    assert controller.tick(now=0.2) is False
    assert controller.tick(now=0.26) is True
    assert controller.query == "goog"
    assert [result.title for result in controller.current_results()] == ["Google Chrome"]
    assert controller.tick(now=1.0) is False


def test_flush_runs_pending_debounced_query(catalog):
    controller = SearchController(catalog, config=Config(debounce_ms=500), clock=lambda: 0.0)
    controller.on_text_changed("calc")
    assert controller.flush() is True
    assert controller.current_results()[0].title == "Calculator"
    assert controller.flush() is False


def test_background_search_applies_only_latest_request(catalog):
    worker = ManualExecutor()
    controller = SearchController(catalog, worker=worker)

    assert controller.submit("goog") is True
    assert controller.submit("calc") is True
    assert controller.poll() is False

    worker.run_all()

    assert controller.poll() is True
    assert controller.query == "calc"
    assert [result.title for result in controller.current_results()] == ["Calculator"]
    assert controller.has_pending is False


def test_background_result_is_discarded_after_rebuild(catalog):
    worker = ManualExecutor()
    controller = SearchController(catalog, worker=worker)

    controller.submit("goog")
    controller.rebuild([_entry("calc", "Calculator")])
    worker.run_all()

    assert controller.poll() is False
    assert controller.query == ""
    assert [result.title for result in controller.current_results()] == ["Calculator"]


def test_background_submit_of_cached_query_needs_no_worker(catalog):
    worker = ManualExecutor()
    controller = SearchController(catalog, worker=worker)
    controller.submit("goog")
    worker.run_all()
    controller.poll()

    assert controller.submit("goog") is False
    assert worker.jobs == []


def test_close_shuts_down_owned_worker(catalog):
    with SearchController(catalog) as controller:
        controller.submit("goog")
        worker = controller._worker
        assert worker is not None
    assert controller._worker is None
