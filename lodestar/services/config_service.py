"""Logic helpers for the `lodestar config` command."""

from __future__ import annotations

from dataclasses import dataclass

from ..config import (
    Config,
    load_config,
    set_catalog_path,
    set_debounce_ms,
    set_include_builtins,
    set_keyword_multiplier,
    set_limit,
    set_page_size,
    set_prefix_bonus,
    set_title_multiplier,
)


@dataclass(slots=True)
class ConfigUpdateResult:
    prefix_bonus_set: bool = False
    title_multiplier_set: bool = False
    keyword_multiplier_set: bool = False
    limit_set: bool = False
    page_size_set: bool = False
    debounce_set: bool = False
    catalog_set: bool = False
    catalog_cleared: bool = False
    builtins_set: bool = False

    @property
    def changed(self) -> bool:
        return any(
            (
                self.prefix_bonus_set,
                self.title_multiplier_set,
                self.keyword_multiplier_set,
                self.limit_set,
                self.page_size_set,
                self.debounce_set,
                self.catalog_set,
                self.catalog_cleared,
                self.builtins_set,
            )
        )


def apply_config_updates(
    *,
    prefix_bonus: float | None = None,
    title_multiplier: float | None = None,
    keyword_multiplier: float | None = None,
    limit: int | None = None,
    page_size: int | None = None,
    debounce_ms: int | None = None,
    catalog_path: str | None = None,
    clear_catalog: bool = False,
    include_builtins: bool | None = None,
) -> ConfigUpdateResult:
    """Apply config mutations and report which fields were updated."""

    result = ConfigUpdateResult()
    if prefix_bonus is not None:
        set_prefix_bonus(prefix_bonus)
        result.prefix_bonus_set = True
    if title_multiplier is not None:
        set_title_multiplier(title_multiplier)
        result.title_multiplier_set = True
    if keyword_multiplier is not None:
        set_keyword_multiplier(keyword_multiplier)
        result.keyword_multiplier_set = True
    if limit is not None:
        set_limit(limit)
        result.limit_set = True
    if page_size is not None:
        set_page_size(page_size)
        result.page_size_set = True
    if debounce_ms is not None:
        set_debounce_ms(debounce_ms)
        result.debounce_set = True
    if catalog_path is not None:
        set_catalog_path(catalog_path)
        result.catalog_set = True
    if clear_catalog:
        set_catalog_path(None)
        result.catalog_cleared = True
    if include_builtins is not None:
        set_include_builtins(include_builtins)
        result.builtins_set = True
    return result


def get_config_snapshot() -> Config:
    """Return the current configuration dataclass."""

    return load_config()
