# src/cli/runner.py

"""Headless CLI commands built on the async price tracker."""

import json
import logging
import sys
from pathlib import Path

from rich.console import Console

from src.cli.render import (
    history_table,
    products_table,
    result_to_dict,
    summary_panel,
)
from src.exceptions import TrackerError
from src.services.price_tracker import PriceTracker
from src.storage.history_store import HistoryStore
from src.storage.kv_store import JsonFileStore

logger = logging.getLogger("shopwise.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)


def build_tracker(store_path: str | None = None) -> PriceTracker:
    """Create a tracker backed by the JSON file store."""
    path = Path(store_path) if store_path else None
    return PriceTracker(HistoryStore(JsonFileStore(path)))


async def run_track(
    url: str,
    html_path: str | None = None,
    store_path: str | None = None,
) -> int:
    """Record the current price of *url* and print its summary."""
    tracker = build_tracker(store_path)
    try:
        if html_path is not None:
            html = Path(html_path).read_text(encoding="utf-8")
            result = await tracker.track_html(html, url)
        else:
            _err.print(f"[bold]Fetching:[/bold] {url}")
            result = await tracker.track_url(url)
    except (TrackerError, OSError) as exc:
        logger.error("Tracking %s failed: %s", url, exc)
        _err.print(f"[red]Tracking failed: {exc}[/red]")
        return 1

    Console().print(summary_panel(result))
    return 0


async def run_show(
    product_id: str,
    as_json: bool = False,
    store_path: str | None = None,
) -> int:
    """Print the summary and full history of a stored product."""
    tracker = build_tracker(store_path)
    try:
        result = await tracker.summary(product_id)
    except TrackerError as exc:
        logger.error("Loading %s failed: %s", product_id, exc)
        _err.print(f"[red]{exc}[/red]")
        return 1

    if result is None:
        _err.print(f"[yellow]No history for {product_id}.[/yellow]")
        return 1

    if as_json:
        json.dump(
            result_to_dict(result),
            sys.stdout,
            ensure_ascii=False,
            indent=2,
        )
        sys.stdout.write("\n")
        return 0

    console = Console()
    console.print(summary_panel(result))
    console.print(history_table(result.record))
    return 0


async def run_list(store_path: str | None = None) -> int:
    """Print every tracked product."""
    tracker = build_tracker(store_path)
    try:
        products = await tracker.history.load_table()
    except TrackerError as exc:
        logger.error("Loading history failed: %s", exc)
        _err.print(f"[red]{exc}[/red]")
        return 1

    if not products:
        _err.print("[yellow]No products tracked yet.[/yellow]")
        return 0

    Console().print(products_table(products))
    return 0
