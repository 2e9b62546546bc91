# src/cli/render.py

"""Rich renderables for trend summaries and price histories."""

from datetime import datetime
from typing import Any

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from src.models.analysis import AnalysisResult, TrendStatus
from src.models.product_record import ProductRecord
from src.services.price_tracker import TrackResult
from src.storage.history_store import HistoryTable

_STATUS_STYLES: dict[TrendStatus, str] = {
    TrendStatus.INSUFFICIENT_DATA: "blue",
    TrendStatus.STABLE: "blue",
    TrendStatus.DROPPED: "green",
    TrendStatus.INCREASED: "red",
}


def _percent(value: float | None) -> str:
    return f"{value:.1f}%" if value is not None else "n/a"


def headline(analysis: AnalysisResult) -> str:
    """One-line description of the latest price move."""
    status = analysis.status
    if status is TrendStatus.INSUFFICIENT_DATA:
        return "📊 Tracking started"
    if status is TrendStatus.STABLE:
        return f"✅ Price stable at ${analysis.current_price:.2f}"

    delta = analysis.delta_abs or 0.0
    pct = (
        abs(analysis.delta_percent)
        if analysis.delta_percent is not None
        else None
    )
    if status is TrendStatus.DROPPED:
        return f"📉 Price dropped ${abs(delta):.2f} ({_percent(pct)})"
    return f"📈 Price increased ${delta:.2f} ({_percent(pct)})"


def format_date(timestamp_ms: int) -> str:
    """Local calendar date of an epoch-millisecond timestamp."""
    return datetime.fromtimestamp(timestamp_ms / 1000).strftime("%Y-%m-%d")


def summary_panel(result: TrackResult) -> Panel:
    """Current price, trend headline and window extremes."""
    analysis = result.analysis
    style = _STATUS_STYLES[analysis.status]
    n = analysis.sample_count

    stats = Table.grid(padding=(0, 2))
    stats.add_column(style="dim")
    stats.add_column(justify="right", style="bold")
    stats.add_row("Current Price", f"${analysis.current_price:.2f}")
    stats.add_row("Lowest Seen", f"${analysis.lowest:.2f}")
    stats.add_row("Highest Seen", f"${analysis.highest:.2f}")
    stats.add_row("Tracked For", f"{n} visit{'s' if n != 1 else ''}")

    body = Table.grid()
    body.add_column()
    body.add_row(Text(result.record.title, style="bold"))
    body.add_row(Text(headline(analysis), style=style))
    body.add_row(stats)

    return Panel(
        body,
        title=f"🛒 ShopWise · {result.product_id}",
        border_style=style,
        expand=False,
    )


def history_table(record: ProductRecord) -> Table:
    """Full retained history, newest first."""
    table = Table(
        title="Price History",
        show_lines=False,
        title_style="bold cyan",
    )
    table.add_column("Date", style="dim")
    table.add_column("Price", justify="right", style="green")
    for point in reversed(record.history):
        table.add_row(format_date(point.timestamp), f"${point.price:.2f}")
    return table


def products_table(products: HistoryTable) -> Table:
    """One row per tracked product with its latest price."""
    table = Table(
        title="Tracked Products",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("ID", style="magenta")
    table.add_column("Title", max_width=60)
    table.add_column("Latest", justify="right", style="green")
    table.add_column("Samples", justify="right")
    table.add_column("URL", overflow="fold", style="dim")

    for product_id in sorted(products):
        record = products[product_id]
        latest = record.latest
        table.add_row(
            product_id,
            record.title[:60],
            f"${latest.price:.2f}" if latest else "—",
            str(len(record.history)),
            record.url,
        )
    return table


def result_to_dict(result: TrackResult) -> dict[str, Any]:
    """Plain-JSON form of a tracking result."""
    a = result.analysis
    return {
        "id": result.product_id,
        "title": result.record.title,
        "url": result.record.url,
        "analysis": {
            "status": a.status.value,
            "current_price": a.current_price,
            "previous_price": a.previous_price,
            "delta_abs": a.delta_abs,
            "delta_percent": a.delta_percent,
            "lowest": a.lowest,
            "highest": a.highest,
            "sample_count": a.sample_count,
        },
        "history": [p.to_dict() for p in result.record.history],
    }
