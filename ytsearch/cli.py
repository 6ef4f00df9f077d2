"""ytsearch command line interface.

Usage:
    ytsearch QUERY [--limit N | --pages N] [--safe-search] [--gl GL] [--hl HL]
             [--utc-offset MIN] [--format table|json|csv]
             [--save-continuation FILE]
    ytsearch QUERY --filters [--format table|json]
    ytsearch --resume FILE [--pages N] [--save-continuation FILE]
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from tabulate import tabulate

from ytsearch import api
from ytsearch.config import Settings
from ytsearch.exceptions import YTSearchError
from ytsearch.formatters import to_csv, to_json, to_table
from ytsearch.search.filters import FilterCatalog
from ytsearch.search.results import SearchResults

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ytsearch", description="Search YouTube from the command line."
    )
    parser.add_argument("query", nargs="?", help="search term or filter link")
    limits = parser.add_mutually_exclusive_group()
    limits.add_argument("--limit", type=int, help="maximum number of items")
    limits.add_argument("--pages", type=int, help="maximum number of pages")
    parser.add_argument("--safe-search", action="store_true", help="restricted mode")
    parser.add_argument("--gl", help="region, e.g. US")
    parser.add_argument("--hl", help="language, e.g. en")
    parser.add_argument("--utc-offset", type=int, help="UTC offset in minutes")
    parser.add_argument(
        "--format", choices=("table", "json", "csv"), default="table", dest="fmt"
    )
    parser.add_argument("--filters", action="store_true", help="list filters only")
    parser.add_argument(
        "--save-continuation",
        type=Path,
        metavar="FILE",
        help="write the continuation descriptor to FILE",
    )
    parser.add_argument(
        "--resume", type=Path, metavar="FILE", help="continue from a saved descriptor"
    )
    parser.add_argument("-v", "--verbose", action="count", default=0)
    return parser


def _configure_logging(verbosity: int) -> None:
    level = Settings.from_env().log_level
    if verbosity == 1:
        level = "INFO"
    elif verbosity > 1:
        level = "DEBUG"
    logging.basicConfig(
        level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )


def _search_options(args: argparse.Namespace) -> Dict[str, Any]:
    options: Dict[str, Any] = {"safe_search": args.safe_search}
    if args.limit is not None:
        options["limit"] = args.limit
    if args.pages is not None:
        options["pages"] = args.pages
    if args.gl:
        options["gl"] = args.gl
    if args.hl:
        options["hl"] = args.hl
    if args.utc_offset is not None:
        options["utc_offset_minutes"] = args.utc_offset
    return options


def _render_filters(catalog: FilterCatalog, fmt: str) -> str:
    if fmt == "json":
        return to_json(catalog)
    rows = [
        [category, item.name, "*" if item.active else "", item.url or ""]
        for category, group in catalog.items()
        for item in group.values()
    ]
    return tabulate(rows, headers=["category", "filter", "active", "url"], tablefmt="github")


def _render_results(results: SearchResults, fmt: str) -> str:
    if fmt == "json":
        return to_json(results)
    if fmt == "csv":
        return to_csv(results.items)
    lines: List[str] = []
    if results.corrected_query != results.original_query:
        lines.append(f"Showing results for {results.corrected_query!r}")
    lines.append(to_table(results.items))
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    """Run the command line interface and return the exit status."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if not args.query and not args.resume:
        parser.error("a query or --resume is required")

    try:
        if args.resume:
            descriptor = json.loads(args.resume.read_text(encoding="utf-8"))
            results = api.continue_request(descriptor, pages=args.pages or 1)
        elif args.filters:
            catalog = api.get_filters(args.query, retries=3, **_search_options(args))
            print(_render_filters(catalog, args.fmt))
            return 0
        else:
            results = api.search(args.query, **_search_options(args))
    except (YTSearchError, OSError, ValueError) as exc:
        logger.debug("Search failed", exc_info=True)
        print(f"ytsearch: error: {exc}", file=sys.stderr)
        return 1

    print(_render_results(results, args.fmt))

    if args.save_continuation:
        if results.continuation is None:
            print("ytsearch: no continuation available", file=sys.stderr)
        else:
            args.save_continuation.write_text(
                json.dumps(results.continuation.to_dict()), encoding="utf-8"
            )
    return 0


if __name__ == "__main__":
    sys.exit(main())
