"""Command line interface for Lodestar."""

from __future__ import annotations

import json
from difflib import get_close_matches
from enum import Enum
from pathlib import Path
from typing import Sequence

import click
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from typer.core import TyperGroup

from . import __version__
from .config import Config, load_config, resolve_catalog_path, set_config_dir
from .controller import SearchController
from .output import format_selection_marker, truncate
from .search import SearchResult
from .services.catalog_service import resolve_catalog
from .services.config_service import apply_config_updates, get_config_snapshot
from .text import Messages, Styles
from .utils import ensure_positive, format_path

console = Console()


class DefaultSearchGroup(TyperGroup):
    """Treat unknown subcommands as search queries."""

    def resolve_command(
        self,
        ctx: click.Context,
        args: list[str],
    ) -> tuple[str | None, click.Command | None, list[str]]:
        # typer may raise a UsageError that is not click.UsageError.
        if args and self._is_query_token(ctx, args[0]):
            command = self.get_command(ctx, "search")
            if command is not None:
                return "search", command, list(args)
        return super().resolve_command(ctx, args)

    def _is_query_token(self, ctx: click.Context, token: str) -> bool:
        if token.startswith("-") or self.get_command(ctx, token) is not None:
            return False
        if getattr(self, "suggest_commands", True) and self.commands:
            # Near misses such as "serch" still get the "No such command" hint.
            matches = get_close_matches(token, list(self.commands.keys()), cutoff=0.8)
            if matches:
                return False
        return True


app = typer.Typer(
    help=Messages.APP_HELP,
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
    cls=DefaultSearchGroup,
)


class SearchOutputFormat(str, Enum):
    rich = "rich"
    porcelain = "porcelain"


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"Lodestar v{__version__}")
        raise typer.Exit()


def _parse_boolean(value: str) -> bool:
    token = value.strip().lower()
    if token in {"1", "true", "t", "yes", "y", "on"}:
        return True
    if token in {"0", "false", "f", "no", "n", "off"}:
        return False
    raise ValueError(Messages.ERROR_BOOLEAN_INVALID.format(value=value))


def _build_controller(
    config: Config,
    catalog: Path | None,
    no_builtins: bool,
) -> tuple[SearchController, Path | None]:
    catalog_path = catalog if catalog is not None else resolve_catalog_path(config.catalog_path)
    entries = resolve_catalog(
        catalog_path,
        include_builtins=bool(config.include_builtins) and not no_builtins,
    )
    return SearchController(entries, config=config), catalog_path


def _run_query(controller: SearchController, query: str) -> None:
    controller.on_text_changed(query)
    controller.flush()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    config_dir: Path | None = typer.Option(
        None,
        "--config-dir",
        help=Messages.HELP_CONFIG_DIR,
    ),
) -> None:
    """Global Typer callback for shared options."""
    if config_dir is not None:
        try:
            set_config_dir(config_dir)
        except NotADirectoryError as exc:
            raise typer.BadParameter(str(exc), param_hint="--config-dir") from exc


@app.command()
def search(
    query: str = typer.Argument("", help=Messages.HELP_QUERY),
    catalog: Path | None = typer.Option(
        None,
        "--catalog",
        "-c",
        help=Messages.HELP_CATALOG,
    ),
    top: int | None = typer.Option(None, "--top", "-k", help=Messages.HELP_SEARCH_TOP),
    no_builtins: bool = typer.Option(
        False,
        "--no-builtins",
        help=Messages.HELP_NO_BUILTINS,
    ),
    output_format: SearchOutputFormat = typer.Option(
        SearchOutputFormat.rich,
        "--format",
        help=Messages.HELP_SEARCH_FORMAT,
    ),
) -> None:
    """Search the catalog the way the launcher does on each keystroke."""
    config = load_config()
    if top is not None:
        try:
            config.limit = ensure_positive(top, "top")
        except ValueError as exc:
            raise typer.BadParameter(str(exc)) from exc

    controller, catalog_path = _build_controller(config, catalog, no_builtins)
    _run_query(controller, query)
    results = controller.current_results()

    if output_format == SearchOutputFormat.porcelain:
        _render_results_porcelain(results)
        return
    if catalog_path is not None:
        console.print(
            _styled(
                Messages.INFO_CATALOG_LOADED.format(
                    count=len(controller.index),
                    plural="y" if len(controller.index) == 1 else "ies",
                )
                + f" ({format_path(catalog_path.resolve(), Path.cwd())})",
                Styles.INFO,
            )
        )
    if not len(controller.index):
        console.print(_styled(Messages.INFO_CATALOG_EMPTY, Styles.WARNING))
        return
    if not results:
        console.print(_styled(Messages.INFO_NO_RESULTS, Styles.WARNING))
        return
    _render_results(results, query, controller.current_selection())


@app.command()
def pick(
    query: str = typer.Argument("", help=Messages.HELP_QUERY),
    catalog: Path | None = typer.Option(
        None,
        "--catalog",
        "-c",
        help=Messages.HELP_CATALOG,
    ),
    next_count: int = typer.Option(0, "--next", "-n", min=0, help=Messages.HELP_PICK_NEXT),
    no_builtins: bool = typer.Option(
        False,
        "--no-builtins",
        help=Messages.HELP_NO_BUILTINS,
    ),
) -> None:
    """Select a result and print its action descriptor as JSON."""
    config = load_config()
    controller, _ = _build_controller(config, catalog, no_builtins)
    _run_query(controller, query)
    for _ in range(next_count):
        controller.on_navigate("next")
    action = controller.on_execute()
    if controller.current_selection() is None:
        console.print(_styled(Messages.INFO_NOTHING_SELECTED, Styles.WARNING))
        raise typer.Exit(code=1)
    typer.echo(json.dumps(action, ensure_ascii=False, default=str))


@app.command()
def config(
    show: bool = typer.Option(False, "--show", help=Messages.HELP_SHOW_CONFIG),
    set_prefix_bonus_option: float | None = typer.Option(
        None,
        "--set-prefix-bonus",
        help=Messages.HELP_SET_PREFIX_BONUS,
    ),
    set_title_multiplier_option: float | None = typer.Option(
        None,
        "--set-title-multiplier",
        help=Messages.HELP_SET_TITLE_MULTIPLIER,
    ),
    set_keyword_multiplier_option: float | None = typer.Option(
        None,
        "--set-keyword-multiplier",
        help=Messages.HELP_SET_KEYWORD_MULTIPLIER,
    ),
    set_limit_option: int | None = typer.Option(
        None,
        "--set-limit",
        help=Messages.HELP_SET_LIMIT,
    ),
    set_page_size_option: int | None = typer.Option(
        None,
        "--set-page-size",
        help=Messages.HELP_SET_PAGE_SIZE,
    ),
    set_debounce_option: int | None = typer.Option(
        None,
        "--set-debounce-ms",
        help=Messages.HELP_SET_DEBOUNCE,
    ),
    set_catalog_option: str | None = typer.Option(
        None,
        "--set-catalog",
        help=Messages.HELP_SET_CATALOG,
    ),
    clear_catalog: bool = typer.Option(
        False,
        "--clear-catalog",
        help=Messages.HELP_CLEAR_CATALOG,
    ),
    set_builtins_option: str | None = typer.Option(
        None,
        "--set-builtins",
        help=Messages.HELP_SET_BUILTINS,
    ),
) -> None:
    """Manage Lodestar configuration."""
    include_builtins = None
    if set_builtins_option is not None:
        try:
            include_builtins = _parse_boolean(set_builtins_option)
        except ValueError as exc:
            raise typer.BadParameter(str(exc)) from exc

    try:
        updates = apply_config_updates(
            prefix_bonus=set_prefix_bonus_option,
            title_multiplier=set_title_multiplier_option,
            keyword_multiplier=set_keyword_multiplier_option,
            limit=set_limit_option,
            page_size=set_page_size_option,
            debounce_ms=set_debounce_option,
            catalog_path=set_catalog_option,
            clear_catalog=clear_catalog,
            include_builtins=include_builtins,
        )
    except ValueError as exc:
        console.print(_styled(str(exc), Styles.ERROR))
        raise typer.Exit(code=1)

    if updates.prefix_bonus_set:
        console.print(
            _styled(
                Messages.INFO_PREFIX_BONUS_SET.format(value=set_prefix_bonus_option),
                Styles.SUCCESS,
            )
        )
    if updates.title_multiplier_set:
        console.print(
            _styled(
                Messages.INFO_TITLE_MULTIPLIER_SET.format(value=set_title_multiplier_option),
                Styles.SUCCESS,
            )
        )
    if updates.keyword_multiplier_set:
        console.print(
            _styled(
                Messages.INFO_KEYWORD_MULTIPLIER_SET.format(
                    value=set_keyword_multiplier_option
                ),
                Styles.SUCCESS,
            )
        )
    if updates.limit_set:
        console.print(
            _styled(Messages.INFO_LIMIT_SET.format(value=set_limit_option), Styles.SUCCESS)
        )
    if updates.page_size_set:
        console.print(
            _styled(
                Messages.INFO_PAGE_SIZE_SET.format(value=set_page_size_option),
                Styles.SUCCESS,
            )
        )
    if updates.debounce_set:
        console.print(
            _styled(
                Messages.INFO_DEBOUNCE_SET.format(value=set_debounce_option),
                Styles.SUCCESS,
            )
        )
    if updates.catalog_set:
        console.print(
            _styled(Messages.INFO_CATALOG_SET.format(value=set_catalog_option), Styles.SUCCESS)
        )
    if updates.catalog_cleared:
        console.print(_styled(Messages.INFO_CATALOG_CLEARED, Styles.SUCCESS))
    if updates.builtins_set:
        console.print(
            _styled(
                Messages.INFO_BUILTINS_SET.format(
                    value="enabled" if include_builtins else "disabled"
                ),
                Styles.SUCCESS,
            )
        )

    if show or not updates.changed:
        cfg = get_config_snapshot()
        console.print(
            _styled(
                Messages.INFO_CONFIG_SUMMARY.format(
                    prefix=cfg.prefix_bonus,
                    title=cfg.title_multiplier,
                    keyword=cfg.keyword_multiplier,
                    limit=cfg.limit,
                    page=cfg.page_size,
                    debounce=cfg.debounce_ms,
                    catalog=cfg.catalog_path or "none",
                    builtins="yes" if cfg.include_builtins else "no",
                ),
                Styles.INFO,
            )
        )


def _render_results(
    results: Sequence[SearchResult],
    query: str,
    selection: int | None,
) -> None:
    console.print(_styled(Messages.TABLE_TITLE, Styles.TITLE))
    heading = escape(query) if query else Messages.TABLE_DEFAULT_ORDERING
    console.print(_styled(f"{Messages.TABLE_QUERY_PREFIX}{heading}", Styles.INFO))
    table = Table(show_header=True, header_style=Styles.TABLE_HEADER)
    table.add_column("", width=1)
    table.add_column(Messages.TABLE_HEADER_INDEX, justify="right")
    table.add_column(Messages.TABLE_HEADER_SCORE, justify="right")
    table.add_column(Messages.TABLE_HEADER_TITLE, overflow="fold")
    table.add_column(Messages.TABLE_HEADER_SUBTITLE, overflow="fold")
    for idx, result in enumerate(results):
        selected = idx == selection
        title = escape(result.title)
        if selected:
            title = _styled(title, Styles.SELECTED)
        table.add_row(
            format_selection_marker(selected, console),
            str(idx + 1),
            f"{result.score:.3f}",
            title,
            escape(truncate(result.subtitle, console=console)),
        )
    console.print(table)


def _escape_porcelain_field(value: str) -> str:
    return (
        value.replace("\\", "\\\\")
        .replace("\t", "\\t")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )


def _render_results_porcelain(results: Sequence[SearchResult]) -> None:
    for idx, result in enumerate(results, start=1):
        subtitle = result.subtitle if result.subtitle is not None else "-"
        fields = (
            str(idx),
            f"{result.score:.3f}",
            _escape_porcelain_field(result.title),
            _escape_porcelain_field(subtitle),
        )
        typer.echo("\t".join(fields))


def _styled(text: str, style: str) -> str:
    return f"[{style}]{text}[/{style}]"


def run(argv: list[str] | None = None) -> None:
    """Entry point wrapper allowing optional argument override."""
    if argv is None:
        app()
    else:
        app(args=list(argv))
