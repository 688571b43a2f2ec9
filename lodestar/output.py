"""Helpers for formatting CLI output safely across terminals."""

from __future__ import annotations

import sys

from rich.console import Console


def _encoding_supports(text: str, encoding: str | None) -> bool:
    if not encoding:
        return False
    try:
        text.encode(encoding)
    except (LookupError, UnicodeEncodeError):
        return False
    return True


def supports_unicode_output(console: Console | None = None) -> bool:
    sample = "▶…"
    if console is not None and _encoding_supports(sample, console.encoding):
        return True
    return _encoding_supports(sample, sys.stdout.encoding)


def format_selection_marker(selected: bool, console: Console | None = None) -> str:
    if not selected:
        return ""
    if supports_unicode_output(console):
        return "[bold green]▶[/bold green]"
    return "[bold green]>[/bold green]"


def truncate(text: str | None, limit: int = 60, console: Console | None = None) -> str:
    if not text:
        return "-"
    snippet = text.strip()
    if len(snippet) <= limit:
        return snippet
    ellipsis = "…" if supports_unicode_output(console) else "..."
    return snippet[: limit - len(ellipsis)].rstrip() + ellipsis
