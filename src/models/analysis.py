# src/models/analysis.py

"""Derived trend summary returned by the analyzer."""

from dataclasses import dataclass
from enum import Enum


class TrendStatus(str, Enum):
    """Direction of the latest price change."""

    INSUFFICIENT_DATA = "insufficient_data"
    STABLE = "stable"
    DROPPED = "dropped"
    INCREASED = "increased"


@dataclass(frozen=True)
class AnalysisResult:
    """Price trend over a product's retained history.

    Deltas are exact; rounding belongs to whoever displays them.
    ``delta_percent`` is ``None`` when the previous price was zero.
    """

    status: TrendStatus
    current_price: float
    previous_price: float | None
    delta_abs: float | None
    delta_percent: float | None
    lowest: float
    highest: float
    sample_count: int
