"""Catalog entry model and the built-in system commands."""

from __future__ import annotations

import sys
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from .errors import CatalogError
from .text import Messages

DEFAULT_BASE_WEIGHT = 0.5
BUILTIN_BASE_WEIGHT = 0.8


class EntryKind(str, Enum):
    application = "application"
    file = "file"
    directory = "directory"
    command = "command"
    plugin = "plugin"
    action = "action"


@dataclass(frozen=True, slots=True)
class CatalogEntry:
    """One searchable launcher item.

    ``action`` is carried verbatim for the execution collaborator and is never
    inspected by the search engine.
    """

    id: str
    title: str
    subtitle: str | None = None
    keywords: tuple[str, ...] = ()
    action: object = None
    base_weight: float = DEFAULT_BASE_WEIGHT
    kind: EntryKind = EntryKind.action

    def __post_init__(self) -> None:
        if not self.id:
            raise CatalogError(Messages.ERROR_ID_EMPTY)
        if not self.title or not self.title.strip():
            raise CatalogError(Messages.ERROR_TITLE_EMPTY)
        if isinstance(self.base_weight, bool):
            raise CatalogError(Messages.ERROR_WEIGHT_RANGE.format(value=self.base_weight))
        try:
            weight = float(self.base_weight)
        except (TypeError, ValueError) as exc:
            raise CatalogError(
                Messages.ERROR_WEIGHT_RANGE.format(value=self.base_weight)
            ) from exc
        if not 0.0 <= weight <= 1.0:
            raise CatalogError(Messages.ERROR_WEIGHT_RANGE.format(value=self.base_weight))
        if isinstance(self.keywords, str) or not isinstance(self.keywords, Iterable):
            raise CatalogError(
                Messages.ERROR_ENTRY_INVALID.format(reason="keywords must be a list")
            )
        keywords = tuple(self.keywords)
        if not all(isinstance(keyword, str) for keyword in keywords):
            raise CatalogError(
                Messages.ERROR_ENTRY_INVALID.format(reason="keywords must be strings")
            )
        object.__setattr__(self, "base_weight", weight)
        object.__setattr__(self, "keywords", keywords)


def entry_from_mapping(raw: Mapping[str, object]) -> CatalogEntry:
    """Build a :class:`CatalogEntry` from a plain mapping (e.g. decoded JSON)."""

    if not isinstance(raw, Mapping):
        raise CatalogError(Messages.ERROR_ENTRY_INVALID.format(reason="expected an object"))
    entry_id = raw.get("id")
    title = raw.get("title")
    if not isinstance(entry_id, str):
        raise CatalogError(Messages.ERROR_ID_EMPTY)
    if not isinstance(title, str):
        raise CatalogError(Messages.ERROR_TITLE_EMPTY)
    subtitle = raw.get("subtitle")
    if subtitle is not None and not isinstance(subtitle, str):
        raise CatalogError(Messages.ERROR_ENTRY_INVALID.format(reason="subtitle must be a string"))
    keywords = raw.get("keywords") or ()
    if isinstance(keywords, str) or not isinstance(keywords, Iterable):
        raise CatalogError(Messages.ERROR_ENTRY_INVALID.format(reason="keywords must be a list"))
    clean_keywords: list[str] = []
    for keyword in keywords:
        if not isinstance(keyword, str):
            raise CatalogError(
                Messages.ERROR_ENTRY_INVALID.format(reason="keywords must be strings")
            )
        if keyword.strip():
            clean_keywords.append(keyword)
    weight = raw.get("base_weight", DEFAULT_BASE_WEIGHT)
    if isinstance(weight, bool) or not isinstance(weight, (int, float)):
        raise CatalogError(Messages.ERROR_WEIGHT_RANGE.format(value=weight))
    return CatalogEntry(
        id=entry_id,
        title=title,
        subtitle=subtitle or None,
        keywords=tuple(clean_keywords),
        action=raw.get("action"),
        base_weight=float(weight),
        kind=_coerce_kind(raw.get("kind")),
    )


def _coerce_kind(value: object) -> EntryKind:
    if value is None:
        return EntryKind.action
    if isinstance(value, EntryKind):
        return value
    if isinstance(value, str):
        try:
            return EntryKind(value.strip().lower())
        except ValueError:
            pass
    allowed = ", ".join(kind.value for kind in EntryKind)
    raise CatalogError(Messages.ERROR_KIND_INVALID.format(value=value, allowed=allowed))


_SYSTEM_COMMANDS: tuple[tuple[str, str, str, tuple[str, ...]], ...] = (
    ("terminal", "Terminal", "Open terminal", ("shell", "console", "cli")),
    ("logout", "Logout", "Logout current user", ("sign out", "log off")),
    ("shutdown", "Shutdown", "Shutdown computer", ("power off", "turn off")),
    ("restart", "Restart", "Restart computer", ("reboot",)),
    ("sleep", "Sleep", "Put computer to sleep", ("suspend",)),
)

_PLATFORM_COMMANDS: dict[str, dict[str, str]] = {
    "darwin": {
        "terminal": "open -a Terminal",
        "logout": "osascript -e 'tell application \"System Events\" to log out'",
        "shutdown": "sudo shutdown -h now",
        "restart": "sudo shutdown -r now",
        "sleep": "pmset sleepnow",
    },
    "linux": {
        "terminal": "gnome-terminal",
        "logout": "gnome-session-quit --logout",
        "shutdown": "shutdown -h now",
        "restart": "shutdown -r now",
        "sleep": "systemctl suspend",
    },
    "win32": {
        "terminal": "cmd",
        "logout": "shutdown /l",
        "shutdown": "shutdown /s /t 0",
        "restart": "shutdown /r /t 0",
        "sleep": "rundll32.exe powrprof.dll,SetSuspendState 0,1,0",
    },
}


def builtin_entries(platform: str | None = None) -> list[CatalogEntry]:
    """Return the system commands every catalog carries."""

    platform_name = platform or sys.platform
    if platform_name.startswith("linux"):
        platform_name = "linux"
    commands = _PLATFORM_COMMANDS.get(platform_name, _PLATFORM_COMMANDS["linux"])
    return [
        CatalogEntry(
            id=f"cmd_{name}",
            title=title,
            subtitle=description,
            keywords=keywords,
            action={"command": commands[name]},
            base_weight=BUILTIN_BASE_WEIGHT,
            kind=EntryKind.command,
        )
        for name, title, description, keywords in _SYSTEM_COMMANDS
    ]
