"""Command-line front door for suttaviewer.

Parses CLI options, resolves the metadata location, and configures logging.
Then either prints search results or dispatches into the interactive viewer.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .corpus import DataSourceError, get_metadata_store
from .runtime import run_viewer
from .runtime.config import load_collection_codes, load_metadata_path, load_style_name
from .search import format_result, search
from .split_view import EDITIONS

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _edition_pair(value: str) -> tuple[str, str]:
    """argparse type for ``LEFT,RIGHT`` edition codes."""
    parts = [part.strip() for part in value.split(",")]
    if len(parts) != 2 or not all(parts):
        raise argparse.ArgumentTypeError(f"expected LEFT,RIGHT edition codes, got {value!r}")
    for code in parts:
        if code not in EDITIONS:
            raise argparse.ArgumentTypeError(f"unknown edition code {code!r} (choose from {', '.join(EDITIONS)})")
    return parts[0], parts[1]


def configure_logging(log_file: str | None, verbose: bool, interactive: bool) -> None:
    """Attach a root handler: the log file when given, stderr only outside the TUI."""
    level = logging.DEBUG if verbose else logging.INFO
    if log_file:
        logging.basicConfig(filename=log_file, level=level, format=LOG_FORMAT, encoding="utf-8")
    elif not interactive:
        logging.basicConfig(stream=sys.stderr, level=logging.DEBUG if verbose else logging.WARNING, format=LOG_FORMAT)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Browse and search the Nikaya sutta corpus in a terminal viewer."
    )
    parser.add_argument("path", nargs="?", default=None, help="Sutta file to open. Defaults to the navigator.")
    parser.add_argument("--metadata", default=None, help="Path to the sutta metadata JSON file.")
    parser.add_argument("--style", default=None, help="Pygments style name for document text.")
    parser.add_argument("--no-color", action="store_true", help="Disable colorized document text.")
    parser.add_argument("--search", metavar="QUERY", default=None, help="Print suttas matching QUERY and exit.")
    parser.add_argument("--scope", metavar="CODE", default=None, help="Limit --search to one collection (e.g. DN).")
    parser.add_argument(
        "--pair",
        type=_edition_pair,
        default=None,
        metavar="LEFT,RIGHT",
        help=f"Open PATH as a parallel view of two editions ({', '.join(EDITIONS)}).",
    )
    parser.add_argument("--log-file", default=None, help="Write log messages to this file.")
    parser.add_argument("--verbose", action="store_true", help="Log debug messages.")
    return parser


def print_search_results(metadata_path: Path, query: str, scope: str | None) -> None:
    """Print matching suttas one per line, raising ``SystemExit`` when none match."""
    if not query.strip():
        raise SystemExit("Search query is empty.")
    store = get_metadata_store(metadata_path, load_collection_codes())
    try:
        collections = store.load()
    except DataSourceError as exc:
        raise SystemExit(str(exc)) from exc
    matches = search(collections, scope, query) or []
    if not matches:
        raise SystemExit(f"No suttas match {query!r}.")
    for document in matches:
        sys.stdout.write(f"{format_result(document)}\t{document.path}\n")


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and run a search or the interactive viewer."""
    parser = build_parser()
    args = parser.parse_args(argv)
    interactive = args.search is None
    configure_logging(args.log_file, args.verbose, interactive)

    metadata_path = load_metadata_path(args.metadata)

    if args.search is not None:
        if args.path is not None or args.pair is not None:
            raise SystemExit("Cannot combine --search with PATH or --pair.")
        print_search_results(metadata_path, args.search, args.scope)
        return

    if args.scope is not None:
        raise SystemExit("--scope only applies to --search.")
    if args.pair is not None and args.path is None:
        raise SystemExit("--pair needs a sutta PATH to pair with.")

    path: Path | None = None
    if args.path is not None:
        path = Path(args.path).expanduser()
        if not path.is_file():
            raise SystemExit(f"Path not found: {path}")
        path = path.resolve()

    store = get_metadata_store(metadata_path, load_collection_codes())
    run_viewer(
        store,
        path=path,
        pair=args.pair,
        style=args.style or load_style_name(),
        no_color=args.no_color,
    )


if __name__ == "__main__":
    main()
