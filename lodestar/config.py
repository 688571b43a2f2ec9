"""Global configuration management for Lodestar."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from contextlib import contextmanager
from contextvars import ContextVar
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Dict

from .text import Messages

DEFAULT_CONFIG_DIR = Path(os.path.expanduser("~")) / ".lodestar"
CONFIG_DIR = DEFAULT_CONFIG_DIR
CONFIG_FILE = CONFIG_DIR / "config.json"
_CONFIG_DIR_OVERRIDE: ContextVar[Path | None] = ContextVar(
    "lodestar_config_dir_override",
    default=None,
)
DEFAULT_PREFIX_BONUS = 0.5
DEFAULT_TITLE_MULTIPLIER = 0.3
DEFAULT_KEYWORD_MULTIPLIER = 0.2
DEFAULT_LIMIT = 8
DEFAULT_PAGE_SIZE = 8
DEFAULT_DEBOUNCE_MS = 0
ENV_CATALOG = "LODESTAR_CATALOG"


@dataclass
class Config:
    prefix_bonus: float = DEFAULT_PREFIX_BONUS
    title_multiplier: float = DEFAULT_TITLE_MULTIPLIER
    keyword_multiplier: float = DEFAULT_KEYWORD_MULTIPLIER
    limit: int = DEFAULT_LIMIT
    page_size: int = DEFAULT_PAGE_SIZE
    debounce_ms: int = DEFAULT_DEBOUNCE_MS
    catalog_path: str | None = None
    include_builtins: bool = True


def _resolve_config_dir() -> Path:
    override = _CONFIG_DIR_OVERRIDE.get()
    return override if override is not None else CONFIG_DIR


def _resolve_config_file() -> Path:
    override = _CONFIG_DIR_OVERRIDE.get()
    if override is not None:
        return override / "config.json"
    return CONFIG_FILE


@contextmanager
def config_dir_context(path: Path | str | None):
    """Temporarily override the config directory for the current context."""

    if path is None:
        yield
        return
    dir_path = Path(path).expanduser().resolve()
    if dir_path.exists() and not dir_path.is_dir():
        raise NotADirectoryError(f"Path is not a directory: {dir_path}")
    token = _CONFIG_DIR_OVERRIDE.set(dir_path)
    try:
        yield
    finally:
        _CONFIG_DIR_OVERRIDE.reset(token)


def load_config() -> Config:
    config_file = _resolve_config_file()
    if not config_file.exists():
        return Config()
    raw = json.loads(config_file.read_text(encoding="utf-8"))
    return Config(
        prefix_bonus=float(raw.get("prefix_bonus", DEFAULT_PREFIX_BONUS)),
        title_multiplier=float(raw.get("title_multiplier", DEFAULT_TITLE_MULTIPLIER)),
        keyword_multiplier=float(
            raw.get("keyword_multiplier", DEFAULT_KEYWORD_MULTIPLIER)
        ),
        limit=max(int(raw.get("limit", DEFAULT_LIMIT)), 1),
        page_size=max(int(raw.get("page_size", DEFAULT_PAGE_SIZE)), 1),
        debounce_ms=max(int(raw.get("debounce_ms", DEFAULT_DEBOUNCE_MS)), 0),
        catalog_path=raw.get("catalog_path") or None,
        include_builtins=bool(raw.get("include_builtins", True)),
    )


def save_config(config: Config) -> None:
    config_dir = _resolve_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)
    data: Dict[str, Any] = {
        "prefix_bonus": config.prefix_bonus,
        "title_multiplier": config.title_multiplier,
        "keyword_multiplier": config.keyword_multiplier,
        "limit": config.limit,
        "page_size": config.page_size,
        "debounce_ms": config.debounce_ms,
        "include_builtins": bool(config.include_builtins),
    }
    if config.catalog_path:
        data["catalog_path"] = config.catalog_path
    config_file = _resolve_config_file()
    config_file.write_text(
        json.dumps(data, ensure_ascii=False, indent=2),
        encoding="utf-8",
    )


def set_config_dir(path: Path | str | None) -> None:
    global CONFIG_DIR, CONFIG_FILE
    if path is None:
        CONFIG_DIR = DEFAULT_CONFIG_DIR
    else:
        dir_path = Path(path).expanduser().resolve()
        if dir_path.exists() and not dir_path.is_dir():
            raise NotADirectoryError(f"Path is not a directory: {dir_path}")
        CONFIG_DIR = dir_path
    CONFIG_FILE = CONFIG_DIR / "config.json"


def config_from_json(
    payload: str | Mapping[str, object], *, base: Config | None = None
) -> Config:
    """Return a Config from a JSON string or mapping without saving it."""
    data = _coerce_config_payload(payload)
    config = Config() if base is None else _clone_config(base)
    _apply_config_payload(config, data)
    return config


def set_prefix_bonus(value: float) -> None:
    config = load_config()
    config.prefix_bonus = _coerce_weight(value, "prefix_bonus", DEFAULT_PREFIX_BONUS)
    save_config(config)


def set_title_multiplier(value: float) -> None:
    config = load_config()
    config.title_multiplier = _coerce_weight(
        value, "title_multiplier", DEFAULT_TITLE_MULTIPLIER
    )
    save_config(config)


def set_keyword_multiplier(value: float) -> None:
    config = load_config()
    config.keyword_multiplier = _coerce_weight(
        value, "keyword_multiplier", DEFAULT_KEYWORD_MULTIPLIER
    )
    save_config(config)


def set_limit(value: int) -> None:
    config = load_config()
    config.limit = _coerce_positive_int(value, "limit", DEFAULT_LIMIT)
    save_config(config)


def set_page_size(value: int) -> None:
    config = load_config()
    config.page_size = _coerce_positive_int(value, "page_size", DEFAULT_PAGE_SIZE)
    save_config(config)


def set_debounce_ms(value: int) -> None:
    config = load_config()
    config.debounce_ms = _coerce_non_negative_int(
        value, "debounce_ms", DEFAULT_DEBOUNCE_MS
    )
    save_config(config)


def set_catalog_path(value: str | None) -> None:
    config = load_config()
    config.catalog_path = _coerce_optional_str(value, "catalog_path")
    save_config(config)


def set_include_builtins(value: bool) -> None:
    config = load_config()
    config.include_builtins = bool(value)
    save_config(config)


def resolve_catalog_path(configured: str | None) -> Path | None:
    """Return the catalog file from config or environment, if any."""

    if configured:
        return Path(configured).expanduser()
    env_path = os.getenv(ENV_CATALOG)
    if env_path:
        return Path(env_path).expanduser()
    return None


def _coerce_config_payload(payload: str | Mapping[str, object]) -> Mapping[str, object]:
    if isinstance(payload, str):
        try:
            data = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise ValueError(Messages.ERROR_CONFIG_JSON_INVALID) from exc
    elif isinstance(payload, Mapping):
        data = dict(payload)
    else:
        raise ValueError(Messages.ERROR_CONFIG_JSON_INVALID)
    if not isinstance(data, Mapping):
        raise ValueError(Messages.ERROR_CONFIG_JSON_INVALID)
    return data


def _clone_config(config: Config) -> Config:
    return Config(
        prefix_bonus=config.prefix_bonus,
        title_multiplier=config.title_multiplier,
        keyword_multiplier=config.keyword_multiplier,
        limit=config.limit,
        page_size=config.page_size,
        debounce_ms=config.debounce_ms,
        catalog_path=config.catalog_path,
        include_builtins=config.include_builtins,
    )


def _apply_config_payload(config: Config, payload: Mapping[str, object]) -> None:
    if "prefix_bonus" in payload:
        config.prefix_bonus = _coerce_weight(
            payload["prefix_bonus"], "prefix_bonus", DEFAULT_PREFIX_BONUS
        )
    if "title_multiplier" in payload:
        config.title_multiplier = _coerce_weight(
            payload["title_multiplier"], "title_multiplier", DEFAULT_TITLE_MULTIPLIER
        )
    if "keyword_multiplier" in payload:
        config.keyword_multiplier = _coerce_weight(
            payload["keyword_multiplier"],
            "keyword_multiplier",
            DEFAULT_KEYWORD_MULTIPLIER,
        )
    if "limit" in payload:
        config.limit = _coerce_positive_int(payload["limit"], "limit", DEFAULT_LIMIT)
    if "page_size" in payload:
        config.page_size = _coerce_positive_int(
            payload["page_size"], "page_size", DEFAULT_PAGE_SIZE
        )
    if "debounce_ms" in payload:
        config.debounce_ms = _coerce_non_negative_int(
            payload["debounce_ms"], "debounce_ms", DEFAULT_DEBOUNCE_MS
        )
    if "catalog_path" in payload:
        config.catalog_path = _coerce_optional_str(
            payload["catalog_path"], "catalog_path"
        )
    if "include_builtins" in payload:
        config.include_builtins = _coerce_bool(
            payload["include_builtins"], "include_builtins"
        )


def _coerce_optional_str(value: object, field: str) -> str | None:
    if value is None:
        return None
    if isinstance(value, str):
        cleaned = value.strip()
        return cleaned or None
    raise ValueError(Messages.ERROR_CONFIG_VALUE_INVALID.format(field=field))


def _coerce_weight(value: object, field: str, default: float) -> float:
    if value is None:
        return default
    if isinstance(value, bool):
        raise ValueError(Messages.ERROR_CONFIG_VALUE_INVALID.format(field=field))
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        cleaned = value.strip()
        if not cleaned:
            return default
        try:
            number = float(cleaned)
        except ValueError as exc:
            raise ValueError(Messages.ERROR_CONFIG_VALUE_INVALID.format(field=field)) from exc
    else:
        raise ValueError(Messages.ERROR_CONFIG_VALUE_INVALID.format(field=field))
    if number < 0 or number != number:
        raise ValueError(Messages.ERROR_CONFIG_VALUE_INVALID.format(field=field))
    return number


def _coerce_int(value: object, field: str, default: int) -> int:
    if value is None:
        return default
    if isinstance(value, bool):
        raise ValueError(Messages.ERROR_CONFIG_VALUE_INVALID.format(field=field))
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        raise ValueError(Messages.ERROR_CONFIG_VALUE_INVALID.format(field=field))
    if isinstance(value, str):
        cleaned = value.strip()
        if not cleaned:
            return default
        try:
            return int(cleaned)
        except ValueError as exc:
            raise ValueError(Messages.ERROR_CONFIG_VALUE_INVALID.format(field=field)) from exc
    raise ValueError(Messages.ERROR_CONFIG_VALUE_INVALID.format(field=field))


def _coerce_positive_int(value: object, field: str, default: int) -> int:
    number = _coerce_int(value, field, default)
    if number < 1:
        raise ValueError(Messages.ERROR_CONFIG_VALUE_INVALID.format(field=field))
    return number


def _coerce_non_negative_int(value: object, field: str, default: int) -> int:
    number = _coerce_int(value, field, default)
    if number < 0:
        raise ValueError(Messages.ERROR_CONFIG_VALUE_INVALID.format(field=field))
    return number


def _coerce_bool(value: object, field: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        cleaned = value.strip().lower()
        if cleaned in {"true", "1", "yes", "on"}:
            return True
        if cleaned in {"false", "0", "no", "off"}:
            return False
    raise ValueError(Messages.ERROR_CONFIG_VALUE_INVALID.format(field=field))
