# src/storage/history_store.py

"""Per-product price history persisted in a key-value store."""

import logging
import math
from typing import Any

from src.config.settings import Settings
from src.exceptions import InvalidObservation, StorageUnavailable
from src.models.observation import Observation
from src.models.product_record import PricePoint, ProductRecord
from src.storage.kv_store import KeyValueStore

logger = logging.getLogger("shopwise.history")

HistoryTable = dict[str, ProductRecord]


def serialize_table(table: HistoryTable) -> dict[str, Any]:
    """Encode a table as ``{"<id>": {title, url, history}}``."""
    return {pid: record.to_dict() for pid, record in table.items()}


def deserialize_table(data: Any) -> HistoryTable:
    """Decode the persisted products mapping.

    ``None`` (first run) yields an empty table. Raises ``ValueError``
    when the payload does not have the persisted shape.
    """
    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = "products must be a JSON object"
        raise ValueError(msg)
    table: HistoryTable = {}
    for pid, raw in data.items():
        try:
            table[str(pid)] = ProductRecord.from_dict(raw)
        except (KeyError, TypeError, ValueError) as exc:
            msg = f"Malformed record for '{pid}': {exc!r}"
            raise ValueError(msg) from exc
    return table


def validate_observation(product_id: str, obs: Observation) -> None:
    """Raise ``InvalidObservation`` unless the reading can be stored."""
    if not isinstance(product_id, str) or not product_id.strip():
        msg = "Product id must be a non-empty string"
        raise InvalidObservation(msg)
    price = obs.price
    if isinstance(price, bool) or not isinstance(price, (int, float)):
        msg = f"Price must be a number, got {price!r}"
        raise InvalidObservation(msg)
    try:
        value = float(price)
    except OverflowError as exc:
        msg = f"Price is too large to store, got {price!r}"
        raise InvalidObservation(msg) from exc
    if not math.isfinite(value) or value < 0:
        msg = f"Price must be a finite non-negative number, got {price!r}"
        raise InvalidObservation(msg)
    if isinstance(obs.timestamp, bool) or not isinstance(obs.timestamp, int):
        msg = f"Timestamp must be integer epoch ms, got {obs.timestamp!r}"
        raise InvalidObservation(msg)
    if not isinstance(obs.title, str) or not isinstance(obs.url, str):
        msg = "Title and url must be strings"
        raise InvalidObservation(msg)


class HistoryStore:
    """Owns the product id → record table inside a key-value store.

    Every upsert is a full read-modify-write of the table with one
    await for the read and one for the write. No lock is held across
    calls, so two concurrent upserts can lose one of the writes.
    """

    def __init__(
        self,
        store: KeyValueStore,
        key: str | None = None,
        history_limit: int | None = None,
    ) -> None:
        if key is None:
            key = Settings.STORAGE_KEY
        if history_limit is None:
            history_limit = Settings.HISTORY_LIMIT
        if not key:
            msg = "Storage key must be a non-empty string"
            raise ValueError(msg)
        if history_limit < 1:
            msg = f"history_limit must be at least 1, got {history_limit}"
            raise ValueError(msg)
        self._store = store
        self._key = key
        self._limit = history_limit

    async def load_table(self) -> HistoryTable:
        """Read and decode the whole table (empty on first run)."""
        try:
            raw = await self._store.get(self._key)
        except OSError as exc:
            msg = f"Cannot read '{self._key}': {exc}"
            raise StorageUnavailable(msg) from exc
        try:
            return deserialize_table(raw)
        except ValueError as exc:
            logger.error("Persisted history is corrupt: %s", exc)
            msg = f"Persisted history under '{self._key}' is corrupt"
            raise StorageUnavailable(msg) from exc

    async def upsert_observation(
        self, product_id: str, obs: Observation,
    ) -> ProductRecord:
        """Append *obs* to the product's history and persist the table.

        Creates the record on first sight, taking title and URL from
        *obs*. Keeps only the newest ``history_limit`` points.
        """
        validate_observation(product_id, obs)

        table = await self.load_table()

        record = table.get(product_id)
        if record is None:
            record = ProductRecord(title=obs.title, url=obs.url)
            table[product_id] = record
            logger.info("Started tracking %s (%s)", product_id, obs.title)

        record.history.append(
            PricePoint(price=float(obs.price), timestamp=obs.timestamp)
        )
        if len(record.history) > self._limit:
            dropped = len(record.history) - self._limit
            record.history = record.history[-self._limit:]
            logger.debug(
                "Trimmed %d oldest points for %s", dropped, product_id,
            )

        try:
            await self._store.set(self._key, serialize_table(table))
        except OSError as exc:
            msg = f"Cannot write '{self._key}': {exc}"
            raise StorageUnavailable(msg) from exc
        logger.info(
            "Recorded %s at %.2f (%d points)",
            product_id,
            obs.price,
            len(record.history),
        )
        return record

    async def get_history(self, product_id: str) -> ProductRecord | None:
        """Return the stored record, or ``None`` when never tracked."""
        table = await self.load_table()
        return table.get(product_id)
