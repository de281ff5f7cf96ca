# ABOUTME: KeyValueStore protocol: the synchronous get/set/remove port every record store uses.
# ABOUTME: Includes MemoryStore, an in-memory implementation with an optional byte quota.

from typing import Protocol, runtime_checkable


class StorageQuotaExceededError(Exception):
    """Raised when a write would exceed the store's capacity. Not recoverable locally."""


@runtime_checkable
class KeyValueStore(Protocol):
    """Protocol for the string key-value substrate behind all collections.

    Writes replace the whole value stored under a key. There are no
    transactions: writes under different keys are independent.
    """

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryStore:
    """Dict-backed KeyValueStore for tests and throwaway sessions.

    When quota_bytes is set, a write that would push the total size of all
    keys and values past it raises StorageQuotaExceededError and leaves the
    previous value in place.
    """

    def __init__(self, quota_bytes: int | None = None) -> None:
        self._data: dict[str, str] = {}
        self._quota = quota_bytes

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        if self._quota is not None:
            current = self._usage() - self._entry_size(key, self._data.get(key))
            needed = current + self._entry_size(key, value)
            if needed > self._quota:
                raise StorageQuotaExceededError(
                    f"Writing {key!r} needs {needed} bytes, quota is {self._quota}"
                )
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        """All stored keys, sorted."""
        return sorted(self._data)

    def _usage(self) -> int:
        return sum(self._entry_size(k, v) for k, v in self._data.items())

    @staticmethod
    def _entry_size(key: str, value: str | None) -> int:
        if value is None:
            return 0
        return len(key.encode("utf-8")) + len(value.encode("utf-8"))
