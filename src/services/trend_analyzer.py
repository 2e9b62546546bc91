# src/services/trend_analyzer.py

"""Trend summary over a product's retained price history."""

from collections.abc import Sequence

from src.exceptions import EmptyHistory
from src.models.analysis import AnalysisResult, TrendStatus
from src.models.product_record import PricePoint


class TrendAnalyzer:
    """Classify the latest price move and report window extremes."""

    @staticmethod
    def classify(delta_abs: float) -> TrendStatus:
        """Map the sign of a price change to a status."""
        if delta_abs < 0:
            return TrendStatus.DROPPED
        if delta_abs > 0:
            return TrendStatus.INCREASED
        return TrendStatus.STABLE

    @staticmethod
    def analyze(history: Sequence[PricePoint]) -> AnalysisResult:
        """Summarise an oldest-first history.

        Compares the last two points and takes min / max over the
        whole window. A single point yields ``INSUFFICIENT_DATA`` with
        no previous price or deltas. When the previous price is zero
        the percent change is ``None`` rather than infinite.

        Raises:
            EmptyHistory: *history* has no points.
        """
        if not history:
            raise EmptyHistory()

        prices = [p.price for p in history]
        current = prices[-1]
        lowest = min(prices)
        highest = max(prices)

        if len(prices) == 1:
            return AnalysisResult(
                status=TrendStatus.INSUFFICIENT_DATA,
                current_price=current,
                previous_price=None,
                delta_abs=None,
                delta_percent=None,
                lowest=lowest,
                highest=highest,
                sample_count=1,
            )

        previous = prices[-2]
        delta_abs = current - previous
        delta_percent = (
            delta_abs / previous * 100 if previous != 0 else None
        )
        return AnalysisResult(
            status=TrendAnalyzer.classify(delta_abs),
            current_price=current,
            previous_price=previous,
            delta_abs=delta_abs,
            delta_percent=delta_percent,
            lowest=lowest,
            highest=highest,
            sample_count=len(prices),
        )
