# ABOUTME: JsonCollection binds one persistence key to a typed list of records.
# ABOUTME: Every save rewrites the whole JSON array under the key.

import json
import logging
from collections.abc import Callable, Iterable
from typing import Any, Generic, TypeVar

from shelves.storage.port import KeyValueStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class JsonCollection(Generic[T]):
    """A JSON array of records stored under a single key.

    decode/encode convert between the stored camelCase dicts and the
    dataclasses the stores work with.
    """

    def __init__(
        self,
        store: KeyValueStore,
        key: str,
        decode: Callable[[dict[str, Any]], T],
        encode: Callable[[T], dict[str, Any]],
    ) -> None:
        self._store = store
        self.key = key
        self._decode = decode
        self._encode = encode

    def load(self) -> list[T] | None:
        """Read the collection, or None when nothing is stored under the key.

        A value that is not a JSON array of objects is logged and read as an
        empty collection; the next save overwrites it.
        """
        raw = self._store.get(self.key)
        if raw is None:
            return None
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning("Unreadable JSON under %s, treating as empty: %s", self.key, exc)
            return []
        if not isinstance(data, list):
            logger.warning("Expected a JSON array under %s, got %s", self.key, type(data).__name__)
            return []
        return [self._decode(item) for item in data if isinstance(item, dict)]

    def load_or_empty(self) -> list[T]:
        """Read the collection, treating a missing key as empty."""
        items = self.load()
        return items if items is not None else []

    def save(self, items: Iterable[T]) -> None:
        """Replace the stored collection with items."""
        payload = [self._encode(item) for item in items]
        self._store.set(self.key, json.dumps(payload, ensure_ascii=False))

    def clear(self) -> None:
        """Remove the key entirely."""
        self._store.remove(self.key)
