"""Catalog loading helpers sitting between discovery and the search index."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, Sequence

from ..catalog import CatalogEntry, builtin_entries, entry_from_mapping
from ..errors import CatalogError
from ..text import Messages

logger = logging.getLogger(__name__)


def load_catalog_file(path: Path | str) -> list[CatalogEntry]:
    """Read a JSON array of entry objects.

    Load failures never propagate: a missing or unreadable file yields an
    empty catalog and invalid entries are skipped, each with a warning.
    """

    catalog_path = Path(path).expanduser()
    if not catalog_path.exists():
        logger.warning(Messages.WARNING_CATALOG_MISSING.format(path=catalog_path))
        return []
    try:
        raw = json.loads(catalog_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.warning(
            Messages.WARNING_CATALOG_UNREADABLE.format(path=catalog_path, reason=exc)
        )
        return []
    if isinstance(raw, dict):
        raw = raw.get("entries", [])
    if not isinstance(raw, list):
        logger.warning(
            Messages.WARNING_CATALOG_UNREADABLE.format(
                path=catalog_path, reason="expected a list of entries"
            )
        )
        return []
    return entries_from_records(raw)


def entries_from_records(records: Sequence[object]) -> list[CatalogEntry]:
    """Convert decoded records into entries, skipping the ones that fail validation."""

    entries: list[CatalogEntry] = []
    for position, record in enumerate(records):
        try:
            entries.append(entry_from_mapping(record))  # type: ignore[arg-type]
        except CatalogError as exc:
            logger.warning(
                Messages.WARNING_CATALOG_ENTRY_SKIPPED.format(position=position, reason=exc)
            )
    return dedupe_entries(entries)


def dedupe_entries(entries: Iterable[CatalogEntry]) -> list[CatalogEntry]:
    """Keep the first entry for each id so the snapshot satisfies index uniqueness."""

    unique: list[CatalogEntry] = []
    seen: set[str] = set()
    for entry in entries:
        if entry.id in seen:
            logger.warning(Messages.ERROR_DUPLICATE_ID.format(value=entry.id))
            continue
        seen.add(entry.id)
        unique.append(entry)
    return unique


def resolve_catalog(
    path: Path | str | None,
    *,
    include_builtins: bool = True,
    platform: str | None = None,
) -> list[CatalogEntry]:
    """Return the built-in commands followed by the entries from *path*."""

    entries: list[CatalogEntry] = []
    if include_builtins:
        entries.extend(builtin_entries(platform))
    if path is not None:
        entries.extend(load_catalog_file(path))
    return dedupe_entries(entries)
