"""Command line entry point.

    python -m trendboard serve
    python -m trendboard scrape python --since weekly
"""

import argparse
import asyncio
import sys

from trendboard.errors import RemoteError, ValidationError
from trendboard.utils.config import get_settings


def _serve(args: argparse.Namespace) -> int:
    import uvicorn

    settings = get_settings()
    print(f"Open http://{settings.HOST}:{settings.PORT}/trending in your browser")
    uvicorn.run(
        "trendboard.api.app:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
    return 0


def _scrape(args: argparse.Namespace) -> int:
    from trendboard.scraper.fetcher import fetch_trending_response
    from trendboard.utils.logging_config import setup_logging

    setup_logging(use_json=True if args.json_logs else None)
    try:
        response = asyncio.run(fetch_trending_response(args.language, args.since))
    except (ValidationError, RemoteError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(response.model_dump_json(by_alias=True, indent=2))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="trendboard", description=__doc__.splitlines()[0])
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the trending API server")
    serve.set_defaults(handler=_serve)

    scrape = subparsers.add_parser("scrape", help="Scrape one trending page and print JSON")
    scrape.add_argument("language")
    scrape.add_argument("--since", default="daily")
    scrape.add_argument("--json-logs", action="store_true")
    scrape.set_defaults(handler=_scrape)

    args = parser.parse_args(argv)
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
