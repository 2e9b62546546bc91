# src/services/price_tracker.py

"""Wires page scraping, history persistence and trend analysis."""

import asyncio
import logging
from dataclasses import dataclass

from src.models.analysis import AnalysisResult
from src.models.observation import Observation
from src.models.product_record import ProductRecord
from src.scrapers.amazon_scraper import AmazonScraper
from src.scrapers.base_scraper import BaseScraper
from src.services.trend_analyzer import TrendAnalyzer
from src.storage.history_store import HistoryStore

logger = logging.getLogger("shopwise.tracker")


@dataclass
class TrackResult:
    """A product's stored record together with its trend summary."""

    product_id: str
    record: ProductRecord
    analysis: AnalysisResult


class PriceTracker:
    """Records page observations and reports the resulting trend."""

    def __init__(
        self,
        history: HistoryStore,
        scraper: BaseScraper | None = None,
    ) -> None:
        self.history = history
        self.scraper = scraper or AmazonScraper()

    async def _record(
        self, product_id: str, obs: Observation,
    ) -> TrackResult:
        record = await self.history.upsert_observation(product_id, obs)
        analysis = TrendAnalyzer.analyze(record.history)
        logger.info(
            "%s is %s (%d samples)",
            product_id,
            analysis.status.value,
            analysis.sample_count,
        )
        return TrackResult(product_id, record, analysis)

    async def track_html(
        self, html: str, url: str, timestamp: int | None = None,
    ) -> TrackResult:
        """Record the price found in an already-downloaded page."""
        product_id, obs = self.scraper.parse(html, url, timestamp)
        return await self._record(product_id, obs)

    async def track_url(self, url: str) -> TrackResult:
        """Fetch *url*, record its price and analyse the history."""
        product_id, obs = await asyncio.to_thread(self.scraper.scrape, url)
        return await self._record(product_id, obs)

    async def summary(self, product_id: str) -> TrackResult | None:
        """Analyse a stored product without recording anything."""
        record = await self.history.get_history(product_id)
        if record is None or not record.history:
            return None
        return TrackResult(
            product_id, record, TrendAnalyzer.analyze(record.history)
        )
