"""Small validation helpers shared across modules."""

from __future__ import annotations

from pathlib import Path


def ensure_positive(value: int, name: str) -> int:
    """Validate that *value* is positive."""
    if value <= 0:
        raise ValueError(f"{name} must be greater than 0")
    return value


def ensure_non_negative(value: int, name: str) -> int:
    """Validate that *value* is zero or positive."""
    if value < 0:
        raise ValueError(f"{name} must be >= 0")
    return value


def format_path(path: Path, base: Path | None = None) -> str:
    """Return a user friendly representation of *path* relative to *base* when possible."""
    if base:
        try:
            relative = path.relative_to(base)
            return f"./{relative.as_posix()}"
        except ValueError:
            return str(path)
    return str(path)
