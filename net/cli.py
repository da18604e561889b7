from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from config.settings import FETCH_MAX_CONCURRENCY, LOG_LEVEL
from framework.errors import AggregateFailure, InvalidArgument

from .fetcher import fetch_all


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m net",
        description="Fetch URLs with bounded concurrency, printing results in input order.",
    )
    parser.add_argument("urls", nargs="+", help="URLs to fetch.")
    parser.add_argument(
        "--concurrency",
        type=int,
        default=FETCH_MAX_CONCURRENCY,
        help="Maximum number of requests in flight at once.",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        responses = asyncio.run(fetch_all(args.urls, args.concurrency))
    except InvalidArgument as e:
        parser.error(str(e))
    except AggregateFailure as e:
        print(str(e), file=sys.stderr)
        for item in e.failed:
            print(f"[{item.index}] {args.urls[item.index]}: {item.error}", file=sys.stderr)
        return 1

    for url, resp in zip(args.urls, responses):
        print(f"{resp.status_code} {url}")
    return 0
