# src/models/product_record.py

"""Persisted price history for a single product."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class PricePoint:
    """A retained ``(price, timestamp)`` sample, timestamp in epoch ms."""

    price: float
    timestamp: int

    def to_dict(self) -> dict[str, Any]:
        return {"price": self.price, "timestamp": self.timestamp}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PricePoint":
        """Build a point from its JSON form, ignoring unknown keys."""
        return cls(
            price=float(data["price"]),
            timestamp=int(data["timestamp"]),
        )


@dataclass
class ProductRecord:
    """Title, URL and bounded price history of one tracked product.

    ``history`` is oldest-first. ``title`` and ``url`` come from the
    first observation and are never overwritten afterwards.
    """

    title: str
    url: str
    history: list[PricePoint] = field(
        default_factory=lambda: list[PricePoint]()
    )

    @property
    def latest(self) -> PricePoint | None:
        """Most recent point, or ``None`` for an empty history."""
        return self.history[-1] if self.history else None

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "url": self.url,
            "history": [p.to_dict() for p in self.history],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProductRecord":
        """Build a record from its JSON form.

        Raises ``KeyError``, ``TypeError`` or ``ValueError`` when the
        payload does not have the persisted shape.
        """
        raw_history = data["history"]
        if not isinstance(raw_history, list):
            msg = "history must be a list"
            raise TypeError(msg)
        title, url = data["title"], data["url"]
        if not isinstance(title, str) or not isinstance(url, str):
            msg = "title and url must be strings"
            raise TypeError(msg)
        return cls(
            title=title,
            url=url,
            history=[PricePoint.from_dict(p) for p in raw_history],
        )
