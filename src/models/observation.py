# src/models/observation.py

"""Raw scrape result handed from the page parser to the history store."""

from dataclasses import dataclass


@dataclass
class Observation:
    """One price reading taken from a product page.

    ``timestamp`` is epoch milliseconds. Observations are never stored
    directly; the history store folds each one into a ``PricePoint``.
    """

    price: float
    timestamp: int
    title: str = ""
    url: str = ""
