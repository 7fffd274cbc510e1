"""CLI/bootstrap helpers for the Expansion Browser application."""

from __future__ import annotations

import argparse
import logging
import logging.handlers
import os
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any, TextIO

from platformdirs import user_config_dir

from expansion_browser.action_messages import build_actionable_error
from expansion_browser.catalog import fetch_catalog_url, load_catalog_file
from expansion_browser.config import coerce_page_size, load_config
from expansion_browser.errors import CatalogLoadError
from expansion_browser.export import EXPORT_FORMATS
from expansion_browser.models import (
    CATEGORY_FILTERS,
    CATEGORY_LABELS,
    CONFIG_APP_NAME,
    FILTER_ALL,
    MAX_PAGE_SIZE,
    RECORD_CATEGORIES,
    Record,
    UserConfig,
)
from expansion_browser.query import count_by_category, filter_records

logger = logging.getLogger(__name__)

# Looked up in the working directory when no source is given, in order
DEFAULT_CATALOG_FILES = ("catalog.json", "catalog.csv")


def _resolve_input_file(input_path: Path) -> list[Record] | int:
    """Validate and parse an explicit catalog file. Returns records or exit code."""
    catalog_file = input_path.resolve()
    if not catalog_file.exists():
        print(f"Error: {catalog_file} not found", file=sys.stderr)
        return 1
    if catalog_file.is_dir():
        print(f"Error: {catalog_file} is a directory, not a file", file=sys.stderr)
        return 1
    if not os.access(catalog_file, os.R_OK):
        print(f"Error: {catalog_file} is not readable (permission denied)", file=sys.stderr)
        return 1
    try:
        return load_catalog_file(catalog_file)
    except CatalogLoadError as e:
        print(f"Error: Failed to load {catalog_file}: {e}", file=sys.stderr)
        return 1


def _resolve_catalog_url(url: str) -> list[Record] | int:
    """Fetch a remote catalog. Returns records or exit code."""
    try:
        return fetch_catalog_url(url)
    except CatalogLoadError as e:
        print(
            build_actionable_error(
                "download the catalog",
                why=str(e),
                next_step="check the URL and your network connection, or pass -i <file>",
            ),
            file=sys.stderr,
        )
        return 1


def _resolve_default_catalog(base_dir: Path) -> list[Record] | int:
    """Find a catalog file in the working directory. Returns records or exit code."""
    for name in DEFAULT_CATALOG_FILES:
        candidate = base_dir / name
        if candidate.exists():
            return _resolve_input_file(candidate)
    print(
        build_actionable_error(
            "find a catalog",
            why="no catalog.json or catalog.csv was found in the current directory",
            next_step="pass -i <file> or --catalog-url <url>",
        ),
        file=sys.stderr,
    )
    return 1


def _resolve_records(args: argparse.Namespace, base_dir: Path) -> list[Record] | int:
    """Resolve which catalog to load based on CLI args."""
    if args.input is not None:
        return _resolve_input_file(args.input)
    if args.catalog_url:
        return _resolve_catalog_url(args.catalog_url)
    return _resolve_default_catalog(base_dir)


def _configure_logging(debug: bool) -> None:
    """Configure logging. When debug=True, logs to file at DEBUG level."""
    if not debug:
        # Default: suppress all logging (TUI captures stderr)
        logging.disable(logging.CRITICAL)
        return

    log_dir = Path(user_config_dir(CONFIG_APP_NAME))
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "debug.log"

    handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    logging.root.addHandler(handler)
    logging.root.setLevel(logging.DEBUG)


def _configure_color_mode(color_mode: str) -> None:
    """Configure environment hints for terminal color behavior."""
    if color_mode == "never":
        os.environ["NO_COLOR"] = "1"
        os.environ.pop("FORCE_COLOR", None)
        return
    if color_mode == "always":
        os.environ["FORCE_COLOR"] = "1"
        os.environ.pop("NO_COLOR", None)
        return
    # auto
    os.environ.pop("FORCE_COLOR", None)


def _validate_interactive_tty() -> bool:
    """Return True when stdin/stdout are interactive terminals."""
    return bool(sys.stdin.isatty() and sys.stdout.isatty())


def _print_stats(records: list[Record], out: TextIO) -> None:
    """Print per-category record counts."""
    stats = count_by_category(records)
    print(f"Total expansions: {stats[FILTER_ALL]}", file=out)
    for category in RECORD_CATEGORIES:
        print(f"  {CATEGORY_LABELS[category]}: {stats[category]}", file=out)


def _write_export(
    records: list[Record], fmt: str, category: str, search: str, out: TextIO
) -> None:
    """Write the filtered set in the requested format to out."""
    filtered = filter_records(records, category, search)
    mime, formatter, _name = EXPORT_FORMATS[fmt]
    content = formatter(filtered)
    out.write(content if content.endswith("\n") else content + "\n")
    logger.debug("Headless %s export: %d/%d records", mime, len(filtered), len(records))


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        description="Browse, search and export a catalog of text-expansion shortcuts"
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "-i",
        "--input",
        type=Path,
        default=None,
        help="Catalog file (.json or .csv); default: catalog.json in the current directory",
    )
    source.add_argument(
        "--catalog-url",
        type=str,
        default=None,
        help="Download the catalog from this HTTP(S) URL",
    )
    parser.add_argument(
        "--no-restore",
        action="store_true",
        help="Start with a fresh session (ignore saved filter, search and page)",
    )
    parser.add_argument(
        "--page-size",
        type=int,
        default=None,
        help=f"Records per page (1-{MAX_PAGE_SIZE}; default: config value; not saved)",
    )
    parser.add_argument(
        "--export",
        choices=sorted(EXPORT_FORMATS),
        default=None,
        help="Write the filtered catalog to stdout in this format and exit",
    )
    parser.add_argument(
        "--category",
        choices=CATEGORY_FILTERS,
        default=FILTER_ALL,
        help="Category filter for --export (default: all)",
    )
    parser.add_argument(
        "--search",
        type=str,
        default="",
        help="Search text for --export (case-insensitive substring)",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Print per-language record counts and exit",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging to file (~/.config/expansion-browser/debug.log)",
    )
    parser.add_argument(
        "--color",
        choices=["auto", "always", "never"],
        default="auto",
        help="Color output mode for terminal UI (default: auto)",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable terminal colors (equivalent to --color never)",
    )
    parser.add_argument(
        "--ascii",
        action="store_true",
        help="Use ASCII-only row indicators for limited terminals",
    )
    return parser


def main(
    argv: list[str] | None = None,
    *,
    load_config_fn: Callable[[], UserConfig] = load_config,
    resolve_records_fn: Callable[
        [argparse.Namespace, Path], list[Record] | int
    ] = _resolve_records,
    configure_logging_fn: Callable[[bool], None] = _configure_logging,
    configure_color_mode_fn: Callable[[str], None] = _configure_color_mode,
    validate_interactive_tty_fn: Callable[[], bool] = _validate_interactive_tty,
    app_factory: Callable[..., Any] | None = None,
) -> int:
    """Main entry point. Returns exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    headless = args.export is not None or args.stats
    if not headless and (args.category != FILTER_ALL or args.search):
        print("Error: --category/--search require --export", file=sys.stderr)
        return 1

    color_mode = "never" if args.no_color else args.color
    configure_color_mode_fn(color_mode)
    configure_logging_fn(args.debug)
    logger.debug("expansion-browser starting, cwd=%s", Path.cwd())

    result = resolve_records_fn(args, Path.cwd())
    if isinstance(result, int):
        return result
    records = result

    if args.stats:
        _print_stats(records, sys.stdout)
        return 0
    if args.export is not None:
        _write_export(records, args.export, args.category, args.search, sys.stdout)
        return 0

    if not records:
        print(
            build_actionable_error(
                "start expansion-browser",
                why="the catalog contained no valid records",
                next_step="check the file contents or choose another catalog",
            ),
            file=sys.stderr,
        )
        return 1

    if not validate_interactive_tty_fn():
        print(
            "Error: expansion-browser requires an interactive TTY for the full UI.",
            file=sys.stderr,
        )
        print("Next steps:", file=sys.stderr)
        print("  - Run expansion-browser directly in a terminal session", file=sys.stderr)
        print("  - Use --export csv|json or --stats for non-interactive output", file=sys.stderr)
        return 2

    config = load_config_fn()
    # A --page-size override applies to this run only; the stored value is kept
    page_size = coerce_page_size(args.page_size) if args.page_size is not None else None

    if app_factory is None:
        from expansion_browser.app import ExpansionBrowser as _ExpansionBrowser

        app_factory = _ExpansionBrowser

    app = app_factory(
        records,
        config=config,
        restore_session=not args.no_restore,
        ascii_icons=args.ascii,
        page_size=page_size,
    )
    app.run()
    return 0


__all__ = [
    "DEFAULT_CATALOG_FILES",
    "_configure_color_mode",
    "_configure_logging",
    "_resolve_catalog_url",
    "_resolve_default_catalog",
    "_resolve_input_file",
    "_resolve_records",
    "_validate_interactive_tty",
    "build_parser",
    "main",
]
