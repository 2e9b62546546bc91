# main.py

"""Entry point for the ShopWise price tracker CLI."""

import argparse
import asyncio
import logging
import sys

from src.config.logging_config import setup_logging
from src.config.settings import Settings

logger = logging.getLogger("shopwise.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="shopwise",
        description="Track product prices across visits.",
        epilog=f"Default store: {Settings.STORE_PATH}",
    )
    parser.add_argument(
        "--store",
        default=None,
        dest="store_path",
        help="Path of the JSON history store.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    track = sub.add_parser(
        "track", help="Record the current price of a product page.",
    )
    track.add_argument("url", help="Product page URL (must contain /dp/).")
    track.add_argument(
        "--html",
        default=None,
        dest="html_path",
        help="Parse a saved page instead of fetching the URL.",
    )

    show = sub.add_parser(
        "show", help="Show the trend and history of a tracked product.",
    )
    show.add_argument("product_id", help="Product id (ASIN).")
    show.add_argument(
        "--json",
        action="store_true",
        default=False,
        dest="as_json",
        help="Emit JSON instead of tables.",
    )

    sub.add_parser("list", help="List every tracked product.")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse arguments and dispatch to the matching runner."""
    from src.cli.runner import run_list, run_show, run_track

    log_file = setup_logging()
    logger.info("shopwise starting, log file: %s", log_file)

    args = _build_parser().parse_args(argv)

    if args.command == "track":
        coro = run_track(args.url, args.html_path, args.store_path)
    elif args.command == "show":
        coro = run_show(args.product_id, args.as_json, args.store_path)
    else:
        coro = run_list(args.store_path)

    try:
        exit_code = asyncio.run(coro)
    except Exception:
        logger.critical("Fatal error during %s", args.command, exc_info=True)
        raise
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
