"""Centralized user-facing text for Lodestar CLI."""

from __future__ import annotations


class Styles:
    ERROR = "red"
    WARNING = "yellow"
    SUCCESS = "green"
    INFO = "dim"
    TITLE = "bold cyan"
    TABLE_HEADER = "bold magenta"
    SELECTED = "bold green"


class Messages:
    APP_HELP = "Lodestar – A fuzzy launcher search engine for apps, commands and actions."
    HELP_QUERY = "Text typed into the launcher; empty shows the default ordering."
    HELP_CATALOG = "JSON file holding the catalog entries to search."
    HELP_SEARCH_TOP = "Number of results to display."
    HELP_NO_BUILTINS = "Do not add the built-in system commands to the catalog."
    HELP_SEARCH_FORMAT = (
        "Output format (rich=table, porcelain=tab-separated lines for scripts)."
    )
    HELP_PICK_NEXT = "Move the selection down this many times before picking."
    HELP_SHOW_CONFIG = "Show current configuration."
    HELP_CONFIG_DIR = "Directory holding config.json (default: ~/.lodestar)."
    HELP_SET_PREFIX_BONUS = "Set the score bonus for title prefix matches."
    HELP_SET_TITLE_MULTIPLIER = "Set the multiplier for fuzzy title matches."
    HELP_SET_KEYWORD_MULTIPLIER = "Set the multiplier for fuzzy keyword matches."
    HELP_SET_LIMIT = "Set the default number of results."
    HELP_SET_PAGE_SIZE = "Set how many rows page-up/page-down move the selection."
    HELP_SET_DEBOUNCE = "Set the debounce interval in milliseconds (0 = search on every change)."
    HELP_SET_CATALOG = "Set the default catalog file."
    HELP_CLEAR_CATALOG = "Remove the default catalog file."
    HELP_SET_BUILTINS = "Include built-in system commands by default (true/false)."

    ERROR_TITLE_EMPTY = "Catalog entry title must not be empty."
    ERROR_ID_EMPTY = "Catalog entry id must not be empty."
    ERROR_WEIGHT_RANGE = "base_weight must be between 0 and 1 (got {value})."
    ERROR_ENTRY_INVALID = "Catalog entry is invalid: {reason}"
    ERROR_KIND_INVALID = "Unsupported entry kind '{value}'. Allowed values: {allowed}."
    ERROR_DUPLICATE_ID = "Duplicate catalog entry id '{value}'."
    ERROR_CONFIG_JSON_INVALID = "Config JSON must be an object."
    ERROR_CONFIG_VALUE_INVALID = "Config value for {field} is invalid."
    ERROR_BOOLEAN_INVALID = "Invalid boolean value '{value}'. Use true/false."

    WARNING_CATALOG_MISSING = "Catalog file {path} does not exist; using an empty catalog."
    WARNING_CATALOG_UNREADABLE = "Catalog file {path} could not be read ({reason}); using an empty catalog."
    WARNING_CATALOG_ENTRY_SKIPPED = "Skipping catalog entry #{position}: {reason}"

    INFO_NO_RESULTS = "No matching entries found."
    INFO_CATALOG_EMPTY = "Catalog contains no entries."
    INFO_NOTHING_SELECTED = "Nothing selected."
    INFO_CATALOG_LOADED = "Loaded {count} catalog entr{plural}."
    INFO_PREFIX_BONUS_SET = "Prefix bonus set to {value}."
    INFO_TITLE_MULTIPLIER_SET = "Title multiplier set to {value}."
    INFO_KEYWORD_MULTIPLIER_SET = "Keyword multiplier set to {value}."
    INFO_LIMIT_SET = "Default result limit set to {value}."
    INFO_PAGE_SIZE_SET = "Page size set to {value}."
    INFO_DEBOUNCE_SET = "Debounce interval set to {value} ms."
    INFO_CATALOG_SET = "Default catalog set to {value}."
    INFO_CATALOG_CLEARED = "Default catalog cleared."
    INFO_BUILTINS_SET = "Built-in commands {value}."
    INFO_CONFIG_SUMMARY = (
        "Prefix bonus: {prefix}\n"
        "Title multiplier: {title}\n"
        "Keyword multiplier: {keyword}\n"
        "Result limit: {limit}\n"
        "Page size: {page}\n"
        "Debounce: {debounce} ms\n"
        "Catalog: {catalog}\n"
        "Built-in commands: {builtins}"
    )

    TABLE_TITLE = "Lodestar search results"
    TABLE_HEADER_INDEX = "#"
    TABLE_HEADER_SCORE = "Score"
    TABLE_HEADER_TITLE = "Title"
    TABLE_HEADER_SUBTITLE = "Subtitle"
    TABLE_QUERY_PREFIX = "Query: "
    TABLE_DEFAULT_ORDERING = "(default ordering)"
