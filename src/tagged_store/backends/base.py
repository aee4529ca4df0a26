"""Key/value backend protocols.

A backend owns one namespace. Two backends built with different namespaces
never observe each other's keys, and clear() only empties its own namespace.
TTLs are in milliseconds; None means the key never expires.
A backend used for tag versions must never evict or expire keys.
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class KeyValueStore(Protocol):
    """Sync key/value backend interface."""

    namespace: str

    def get(self, key: str) -> Any | None:
        """Get a value by key, or None if it does not exist."""
        ...

    def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        """Store a value, overwriting any existing one."""
        ...

    def add(self, key: str, value: Any, ttl: int | None = None) -> bool:
        """Store a value only if the key is absent. Return True if stored."""
        ...

    def delete(self, key: str) -> None:
        """Delete a key. Missing keys are ignored."""
        ...

    def clear(self) -> None:
        """Remove every key in this backend's namespace."""
        ...

    def close(self) -> None:
        """Release backend resources."""
        ...


@runtime_checkable
class AsyncKeyValueStore(Protocol):
    """Async key/value backend interface."""

    namespace: str

    async def get(self, key: str) -> Any | None:
        """Get a value by key, or None if it does not exist."""
        ...

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        """Store a value, overwriting any existing one."""
        ...

    async def add(self, key: str, value: Any, ttl: int | None = None) -> bool:
        """Store a value only if the key is absent. Return True if stored."""
        ...

    async def delete(self, key: str) -> None:
        """Delete a key. Missing keys are ignored."""
        ...

    async def clear(self) -> None:
        """Remove every key in this backend's namespace."""
        ...

    async def close(self) -> None:
        """Release backend resources."""
        ...
