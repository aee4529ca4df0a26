"""Entity storage over a key/value backend.

Each entity is stored as a single envelope, ``{"value": ..., "tags": {...}}``,
so the value and its dependency snapshot are committed by one backend write.
"""

from collections.abc import Mapping
from typing import Any

from tagged_store.backends.base import AsyncKeyValueStore, KeyValueStore
from tagged_store.errors import SerializationError
from tagged_store.types import StoredEntity


def _entity(backend: object, key: str, raw: Any) -> StoredEntity | None:
    if raw is None:
        return None
    try:
        if not isinstance(raw, Mapping):
            raise TypeError(f"expected an envelope mapping, got {type(raw).__name__}")
        return StoredEntity.from_envelope(raw)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise SerializationError(
            type(backend).__name__, "decode entity", str(e), {"key": key}
        ) from e


class EntityStore:
    """Stores entities with their dependency snapshots. Knows nothing of tags."""

    def __init__(self, backend: KeyValueStore) -> None:
        self.backend = backend

    def get(self, key: str) -> StoredEntity | None:
        return _entity(self.backend, key, self.backend.get(key))

    def set(self, key: str, entity: StoredEntity, ttl: int | None = None) -> None:
        self.backend.set(key, entity.to_envelope(), ttl)

    def delete(self, key: str) -> None:
        self.backend.delete(key)

    def clear(self) -> None:
        self.backend.clear()

    def close(self) -> None:
        self.backend.close()


class AsyncEntityStore:
    """Async counterpart of EntityStore."""

    def __init__(self, backend: AsyncKeyValueStore) -> None:
        self.backend = backend

    async def get(self, key: str) -> StoredEntity | None:
        return _entity(self.backend, key, await self.backend.get(key))

    async def set(self, key: str, entity: StoredEntity, ttl: int | None = None) -> None:
        await self.backend.set(key, entity.to_envelope(), ttl)

    async def delete(self, key: str) -> None:
        await self.backend.delete(key)

    async def clear(self) -> None:
        await self.backend.clear()

    async def close(self) -> None:
        await self.backend.close()
