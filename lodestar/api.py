"""Public Python API for Lodestar."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Iterable

from .catalog import CatalogEntry
from .config import (
    Config,
    config_dir_context,
    config_from_json,
    load_config,
    set_config_dir,
)
from .controller import ActionHandler, SearchController
from .errors import LodestarError
from .search import SearchResult
from .services.catalog_service import resolve_catalog
from .utils import ensure_positive

ConfigInput = Config | Mapping[str, object] | str | None


def set_data_dir(path: Path | str | None) -> None:
    """Set the directory holding ``config.json`` for API calls and the CLI."""
    set_config_dir(path)


def _resolve_config(
    config: ConfigInput,
    *,
    use_config: bool = False,
    config_dir: Path | str | None = None,
    overrides: Mapping[str, object] | None = None,
) -> Config:
    """Return a fresh Config; the caller's instance is never modified.

    With *use_config* the stored ``config.json`` (from *config_dir* when given)
    is the base that mapping or JSON payloads are layered onto.
    """

    if isinstance(config, Config):
        base = config
        payload: Mapping[str, object] | str = {}
    else:
        if use_config:
            with config_dir_context(config_dir):
                base = load_config()
        else:
            base = Config()
        payload = config if config is not None else {}
    try:
        resolved = config_from_json(payload, base=base)
        if overrides:
            resolved = config_from_json(overrides, base=resolved)
    except ValueError as exc:
        raise LodestarError(str(exc)) from exc
    return resolved


def _resolve_entries(
    entries: Iterable[CatalogEntry] | None,
    catalog_path: Path | str | None,
    include_builtins: bool,
) -> list[CatalogEntry]:
    if entries is not None:
        return list(entries)
    return resolve_catalog(catalog_path, include_builtins=include_builtins)


def create_controller(
    entries: Iterable[CatalogEntry] | None = None,
    *,
    catalog_path: Path | str | None = None,
    include_builtins: bool = False,
    config: ConfigInput = None,
    use_config: bool = False,
    config_dir: Path | str | None = None,
    execute_action: ActionHandler | None = None,
) -> SearchController:
    """Build a controller from explicit entries or a catalog file."""

    return SearchController(
        _resolve_entries(entries, catalog_path, include_builtins),
        config=_resolve_config(config, use_config=use_config, config_dir=config_dir),
        execute_action=execute_action,
    )


def search(
    query: str,
    entries: Iterable[CatalogEntry] | None = None,
    *,
    top: int | None = None,
    catalog_path: Path | str | None = None,
    include_builtins: bool = False,
    config: ConfigInput = None,
    use_config: bool = False,
    config_dir: Path | str | None = None,
) -> list[SearchResult]:
    """Run a one-off search and return the rendered results."""

    overrides: dict[str, object] = {}
    if top is not None:
        try:
            overrides["limit"] = ensure_positive(top, "top")
        except ValueError as exc:
            raise LodestarError(str(exc)) from exc
    resolved = _resolve_config(
        config,
        use_config=use_config,
        config_dir=config_dir,
        overrides=overrides,
    )
    controller = SearchController(
        _resolve_entries(entries, catalog_path, include_builtins),
        config=resolved,
    )
    controller.on_text_changed(query)
    controller.flush()
    return controller.current_results()
