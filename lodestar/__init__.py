"""Lodestar package initialization."""

from __future__ import annotations

from .api import create_controller, search, set_data_dir
from .catalog import CatalogEntry, EntryKind, builtin_entries
from .controller import SearchController
from .cursor import Navigation, SelectionCursor
from .errors import CatalogError, LodestarError
from .search import ScoredMatch, SearchIndex, SearchResult

__all__ = [
    "__version__",
    "CatalogEntry",
    "CatalogError",
    "EntryKind",
    "LodestarError",
    "Navigation",
    "ScoredMatch",
    "SearchController",
    "SearchIndex",
    "SearchResult",
    "SelectionCursor",
    "builtin_entries",
    "create_controller",
    "get_version",
    "search",
    "set_data_dir",
]

__version__ = "0.1.0"


def get_version() -> str:
    """Return the current package version."""
    return __version__
