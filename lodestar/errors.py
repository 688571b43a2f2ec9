"""Exception types raised by the Lodestar public API."""

from __future__ import annotations


class LodestarError(ValueError):
    """Raised when the Lodestar public API input is invalid."""


class CatalogError(LodestarError):
    """Raised when a catalog entry cannot be built from its input."""
