"""In-memory key/value backends with optional LRU eviction and TTL."""

import asyncio
import threading
import time
from collections import OrderedDict
from typing import Any


def _expiry(ttl: int | None) -> float | None:
    return time.monotonic() + ttl / 1000 if ttl else None


class _MemoryTable:
    """Unlocked storage shared by the sync and async memory backends."""

    def __init__(self, max_items: int | None) -> None:
        self._data: OrderedDict[str, tuple[Any, float | None]] = OrderedDict()
        self._max_items = max_items

    def get(self, key: str) -> Any | None:
        item = self._data.get(key)
        if item is None:
            return None
        value, expires_at = item
        if expires_at is not None and time.monotonic() >= expires_at:
            del self._data[key]
            return None
        self._data.move_to_end(key)  # LRU touch
        return value

    def set(self, key: str, value: Any, ttl: int | None) -> None:
        self._data[key] = (value, _expiry(ttl))
        self._data.move_to_end(key)
        if self._max_items and len(self._data) > self._max_items:
            self._data.popitem(last=False)

    def add(self, key: str, value: Any, ttl: int | None) -> bool:
        if self.get(key) is not None:
            return False
        self.set(key, value, ttl)
        return True

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()

    def __len__(self) -> int:
        return len(self._data)


class MemoryStore:
    """Sync in-memory backend, safe to share between threads.

    Values are stored by reference: mutating an object after storing it
    changes what later reads return.
    """

    def __init__(self, namespace: str = "default", *, max_items: int | None = None) -> None:
        self.namespace = namespace
        self.max_items = max_items
        self._table = _MemoryTable(max_items)
        self._lock = threading.Lock()

    def get(self, key: str) -> Any | None:
        """Get a value by key."""
        with self._lock:
            return self._table.get(key)

    def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        """Store a value."""
        with self._lock:
            self._table.set(key, value, ttl)

    def add(self, key: str, value: Any, ttl: int | None = None) -> bool:
        """Store a value if the key is absent."""
        with self._lock:
            return self._table.add(key, value, ttl)

    def delete(self, key: str) -> None:
        """Delete a key."""
        with self._lock:
            self._table.delete(key)

    def clear(self) -> None:
        """Clear all keys."""
        with self._lock:
            self._table.clear()

    def close(self) -> None:
        """Close the backend (no-op for memory)."""
        pass

    def __len__(self) -> int:
        with self._lock:
            return len(self._table)


class AsyncMemoryStore:
    """Async in-memory backend. Values are stored by reference."""

    def __init__(self, namespace: str = "default", *, max_items: int | None = None) -> None:
        self.namespace = namespace
        self.max_items = max_items
        self._table = _MemoryTable(max_items)
        self._lock = asyncio.Lock()

    async def get(self, key: str) -> Any | None:
        """Get a value by key."""
        async with self._lock:
            return self._table.get(key)

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        """Store a value."""
        async with self._lock:
            self._table.set(key, value, ttl)

    async def add(self, key: str, value: Any, ttl: int | None = None) -> bool:
        """Store a value if the key is absent."""
        async with self._lock:
            return self._table.add(key, value, ttl)

    async def delete(self, key: str) -> None:
        """Delete a key."""
        async with self._lock:
            self._table.delete(key)

    async def clear(self) -> None:
        """Clear all keys."""
        async with self._lock:
            self._table.clear()

    async def close(self) -> None:
        """Close the backend (no-op for memory)."""
        pass

    def __len__(self) -> int:
        return len(self._table)
