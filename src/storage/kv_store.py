# src/storage/kv_store.py

"""Asynchronous key-value stores holding JSON documents."""

import asyncio
import copy
import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from src.config.settings import Settings
from src.exceptions import StorageUnavailable

logger = logging.getLogger("shopwise.kv_store")


class KeyValueStore(ABC):
    """Minimal async ``get`` / ``set`` contract over JSON values."""

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """Return the value stored under *key*, or ``None`` if absent."""
        ...

    @abstractmethod
    async def set(self, key: str, value: Any) -> None:
        """Replace the value stored under *key*."""
        ...


class MemoryStore(KeyValueStore):
    """Dict-backed store; values are deep-copied in both directions."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = copy.deepcopy(initial or {})

    async def get(self, key: str) -> Any | None:
        if key not in self._data:
            return None
        return copy.deepcopy(self._data[key])

    async def set(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)


class JsonFileStore(KeyValueStore):
    """All keys kept in one JSON document on disk.

    File I/O runs in a worker thread so callers keep a cooperative
    event loop. Writes land in a temp file that is renamed over the
    document, so a reader never sees a half-written file.
    """

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or Settings.STORE_PATH
        logger.debug("JsonFileStore using %s", self.path)

    def _read_document(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        with open(self.path, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            msg = f"{self.path} does not hold a JSON object"
            raise ValueError(msg)
        return data

    def _write_key(self, key: str, value: Any) -> None:
        document = self._read_document()
        document[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=".", suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    async def get(self, key: str) -> Any | None:
        try:
            document = await asyncio.to_thread(self._read_document)
        except (OSError, ValueError) as exc:
            logger.error(
                "Failed to read %s: %s", self.path, exc, exc_info=True,
            )
            msg = f"Cannot read store {self.path}: {exc}"
            raise StorageUnavailable(msg) from exc
        return document.get(key)

    async def set(self, key: str, value: Any) -> None:
        try:
            await asyncio.to_thread(self._write_key, key, value)
        except (OSError, ValueError, TypeError) as exc:
            logger.error(
                "Failed to write %s: %s", self.path, exc, exc_info=True,
            )
            msg = f"Cannot write store {self.path}: {exc}"
            raise StorageUnavailable(msg) from exc
        logger.debug("Wrote key '%s' to %s", key, self.path)
