"""Keyboard selection state over the current result list."""

from __future__ import annotations

from enum import Enum

from .config import DEFAULT_PAGE_SIZE
from .utils import ensure_positive


class Navigation(str, Enum):
    move_next = "next"
    move_previous = "previous"
    home = "home"
    end = "end"
    page_up = "page-up"
    page_down = "page-down"


class SelectionCursor:
    """Highlighted row, either empty (``index is None``) or a valid position.

    Moves clamp at both ends instead of wrapping. Replacing the result list
    always resets the selection to the best match, since row identity is not
    stable across queries.
    """

    def __init__(self, page_size: int = DEFAULT_PAGE_SIZE) -> None:
        self.page_size = ensure_positive(page_size, "page_size")
        self._count = 0
        self._index: int | None = None

    @property
    def index(self) -> int | None:
        return self._index

    @property
    def count(self) -> int:
        return self._count

    @property
    def is_empty(self) -> bool:
        return self._index is None

    def reset(self, count: int) -> int | None:
        self._count = max(int(count), 0)
        self._index = 0 if self._count else None
        return self._index

    def move(self, delta: int) -> int | None:
        if self._index is None:
            return None
        self._index = min(max(self._index + delta, 0), self._count - 1)
        return self._index

    def apply(self, command: Navigation) -> int | None:
        if self._index is None:
            return None
        if command is Navigation.move_next:
            return self.move(1)
        if command is Navigation.move_previous:
            return self.move(-1)
        if command is Navigation.page_down:
            return self.move(self.page_size)
        if command is Navigation.page_up:
            return self.move(-self.page_size)
        if command is Navigation.home:
            self._index = 0
            return self._index
        if command is Navigation.end:
            self._index = self._count - 1
            return self._index
        raise ValueError(f"Unsupported navigation command: {command!r}")
