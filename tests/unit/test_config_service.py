from __future__ import annotations

import pytest

from lodestar import config as config_module
from lodestar.services.config_service import apply_config_updates, get_config_snapshot


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path, monkeypatch):
    config_dir = tmp_path / "config"
    monkeypatch.setattr(config_module, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(config_module, "CONFIG_FILE", config_dir / "config.json")


def test_no_updates_reports_unchanged():
    result = apply_config_updates()
    assert result.changed is False


def test_updates_are_persisted_and_flagged():
    result = apply_config_updates(
        prefix_bonus=0.7,
        limit=5,
        debounce_ms=150,
        catalog_path="/data/apps.json",
        include_builtins=False,
    )

    assert result.changed is True
    assert result.prefix_bonus_set is True
    assert result.limit_set is True
    assert result.debounce_set is True
    assert result.catalog_set is True
    assert result.builtins_set is True
    assert result.title_multiplier_set is False

    snapshot = get_config_snapshot()
    assert snapshot.prefix_bonus == 0.7
    assert snapshot.limit == 5
    assert snapshot.debounce_ms == 150
    assert snapshot.catalog_path == "/data/apps.json"
    assert snapshot.include_builtins is False


def test_clear_catalog_removes_path():
    apply_config_updates(catalog_path="/data/apps.json")

    result = apply_config_updates(clear_catalog=True)

    assert result.catalog_cleared is True
    assert get_config_snapshot().catalog_path is None


def test_invalid_update_raises_value_error():
    with pytest.raises(ValueError, match="page_size"):
        apply_config_updates(page_size=0)
