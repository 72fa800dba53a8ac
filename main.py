"""CLI entrypoint: query the scholar search engine and print parsed papers."""

from __future__ import annotations

import argparse
import logging
import os
import sys

from dotenv import load_dotenv

from filters import apply
from formatter import format_records, format_target
from models import SearchQuery
from query_builder import build_citers_url, build_query
from scholar_parser import parse_citers, parse_results, parse_target_paper
from scholar_source import FetchError, LocalReadError, fetch, read_local


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return number


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line flags."""
    parser = argparse.ArgumentParser(description="Search the scholar engine and print matching papers")
    parser.add_argument("--title-only", action="store_true", help="Keep only papers whose title contains every search term")
    parser.add_argument("--json", action="store_true", help="Print results as a JSON array instead of text")
    parser.add_argument("--count", type=_positive_int, default=None, help="Maximum number of results to print")
    parser.add_argument("--words", nargs="+", default=[], metavar="WORD", help="Search words")
    parser.add_argument("--phrase", default=None, help="Exact phrase to search for")
    parser.add_argument("--authors", default=None, help="Restrict the search to these authors")
    parser.add_argument("--search-html", default=None, metavar="PATH", help="Parse a saved results page instead of fetching")
    parser.add_argument("--cite-html", default=None, metavar="PATH", help="Parse a saved \"cited by\" page instead of fetching")
    parser.add_argument(
        "--citers-of",
        type=_positive_int,
        default=None,
        metavar="CLUSTER_ID",
        help="Fetch the \"cited by\" listing of the paper with this cluster id",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    citer_mode = args.cite_html is not None or args.citers_of is not None
    has_terms = bool(args.words) or bool(args.phrase) or bool(args.authors)
    if not citer_mode and args.search_html is None and not has_terms:
        parser.error("at least one of --words, --phrase or --authors is required")

    return args


def build_search_query(args: argparse.Namespace) -> SearchQuery:
    return SearchQuery(
        words=tuple(args.words),
        phrase=args.phrase,
        authors=args.authors,
        title_only=args.title_only,
        max_count=args.count,
    )


def run(args: argparse.Namespace) -> str:
    """Run one query through fetch, parse, filter and format; return the output text."""
    query = build_search_query(args)
    mode = "json" if args.json else "text"

    if args.cite_html is not None or args.citers_of is not None:
        if args.cite_html is not None:
            html = read_local(args.cite_html)
        else:
            html = fetch(build_citers_url(args.citers_of))

        citers = apply(parse_citers(html), query)
        logging.info("Citer listing: %s records after filtering", len(citers))
        output = format_records(citers, mode)

        target = parse_target_paper(html)
        if target is not None and mode == "text":
            output = f"{format_target(target)}\n\n{output}" if output else format_target(target)
        return output

    if args.search_html is not None:
        html = read_local(args.search_html)
    else:
        html = fetch(build_query(query))

    papers = apply(parse_results(html), query)
    logging.info("Search results: %s records after filtering", len(papers))
    return format_records(papers, mode)


def log_level(verbose: bool) -> int:
    """DEBUG with --verbose, else LOG_LEVEL; unknown names fall back to INFO."""
    if verbose:
        return logging.DEBUG
    name = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    return logging.getLevelNamesMapping().get(name, logging.INFO)


def main(argv: list[str] | None = None) -> None:
    """Initialize config and execute one query."""
    load_dotenv()
    args = parse_args(argv)
    logging.basicConfig(level=log_level(args.verbose), format="%(asctime)s %(levelname)s %(message)s")

    try:
        output = run(args)
    except (FetchError, LocalReadError) as exc:
        logging.error("%s", exc)
        sys.exit(1)

    if output:
        print(output)


if __name__ == "__main__":
    main()
