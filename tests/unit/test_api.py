import json

import pytest

from lodestar import api as api_module
from lodestar import config as config_module
from lodestar.catalog import CatalogEntry
from lodestar.config import Config
from lodestar.errors import LodestarError
from lodestar.search import SearchResult


def _entries():
    return [
        CatalogEntry(id="chrome", title="Google Chrome", subtitle="Web browser"),
        CatalogEntry(id="calc", title="Calculator", keywords=("math",)),
        CatalogEntry(id="prefs", title="System Preferences", keywords=("settings",)),
    ]


def test_search_with_explicit_entries() -> None:
    results = api_module.search("goog", _entries())
    assert results == [SearchResult(title="Google Chrome", subtitle="Web browser", score=1.0)]


def test_search_top_limits_results() -> None:
    results = api_module.search("", _entries(), top=2)
    assert [result.title for result in results] == ["Google Chrome", "Calculator"]


def test_search_rejects_invalid_top() -> None:
    with pytest.raises(LodestarError, match="top"):
        api_module.search("goog", _entries(), top=0)


def test_search_accepts_config_mapping() -> None:
    results = api_module.search("goog", _entries(), config={"prefix_bonus": 0.25})
    assert results[0].score == pytest.approx(0.75)


def test_search_accepts_config_json_string() -> None:
    results = api_module.search("", _entries(), config='{"limit": 1}')
    assert len(results) == 1


def test_search_rejects_invalid_config() -> None:
    with pytest.raises(LodestarError, match="limit"):
        api_module.search("goog", _entries(), config={"limit": -1})


def test_search_with_debounce_config_still_returns_results() -> None:
    results = api_module.search("calc", _entries(), config=Config(debounce_ms=500))
    assert [result.title for result in results] == ["Calculator"]


def test_search_loads_catalog_file(tmp_path) -> None:
    catalog = tmp_path / "catalog.json"
    catalog.write_text(
        json.dumps([{"id": "notes", "title": "Notes", "keywords": ["memo"]}]),
        encoding="utf-8",
    )

    results = api_module.search("memo", catalog_path=catalog)

    assert [result.title for result in results] == ["Notes"]
    assert results[0].score == pytest.approx(0.5 + 0.2 * 4 / 4)


def test_search_can_include_builtins() -> None:
    results = api_module.search("reboot", include_builtins=True)
    assert [result.title for result in results] == ["Restart"]


def test_create_controller_wires_execute_action() -> None:
    executed = []
    controller = api_module.create_controller(_entries(), execute_action=executed.append)
    controller.on_text_changed("calc")
    controller.on_execute()
    assert executed == [None]
    assert controller.selected_entry().id == "calc"


def test_search_top_leaves_caller_config_untouched() -> None:
    cfg = Config(limit=8)

    results = api_module.search("", _entries(), top=2, config=cfg)

    assert len(results) == 2
    assert cfg.limit == 8


def test_create_controller_copies_caller_config() -> None:
    cfg = Config(limit=5)
    controller = api_module.create_controller(_entries(), config=cfg)
    assert controller.config == cfg
    assert controller.config is not cfg


def _store_config(config_dir, **values) -> None:
    with config_module.config_dir_context(config_dir):
        config_module.save_config(Config(**values))


def test_search_reads_stored_config_from_config_dir(tmp_path) -> None:
    _store_config(tmp_path / "cfg", limit=1)

    stored = api_module.search("", _entries(), use_config=True, config_dir=tmp_path / "cfg")
    ignored = api_module.search("", _entries(), config_dir=tmp_path / "cfg")

    assert len(stored) == 1
    assert len(ignored) == 3


def test_config_mapping_is_layered_over_stored_config(tmp_path) -> None:
    _store_config(tmp_path / "cfg", limit=1, prefix_bonus=0.1)

    results = api_module.search(
        "goog",
        _entries(),
        use_config=True,
        config_dir=tmp_path / "cfg",
        config={"prefix_bonus": 0.25},
    )

    assert results[0].score == pytest.approx(0.75)


def test_top_overrides_stored_limit(tmp_path) -> None:
    _store_config(tmp_path / "cfg", limit=1)

    results = api_module.search("", _entries(), top=2, use_config=True, config_dir=tmp_path / "cfg")

    assert len(results) == 2


def test_set_data_dir_redirects_stored_config(tmp_path, monkeypatch) -> None:
    monkeypatch.setattr(config_module, "CONFIG_DIR", config_module.CONFIG_DIR)
    monkeypatch.setattr(config_module, "CONFIG_FILE", config_module.CONFIG_FILE)
    _store_config(tmp_path / "data", limit=2)

    api_module.set_data_dir(tmp_path / "data")

    assert len(api_module.search("", _entries(), use_config=True)) == 2
