"""Async tagged store."""

import inspect
import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import Any, TypeVar, cast

from tagged_store.backends.factory import StoreSpec, lookup_async_store
from tagged_store.config import TaggedStoreConfig, resolve_backends
from tagged_store.duration import ttl_ms
from tagged_store.entities import AsyncEntityStore
from tagged_store.entry import EntryBuilder
from tagged_store.tags import AsyncTagManager
from tagged_store.types import Duration, StoredEntity, TagRef
from tagged_store.versions import AsyncVersionStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def _resolve(result: T | Awaitable[T]) -> T:
    """Await handler results that are awaitable, pass others through."""
    if inspect.isawaitable(result):
        return cast(T, await result)
    return cast(T, result)


class AsyncTaggedStore:
    """Async cache invalidated by tag versions. Mirrors TaggedStore."""

    def __init__(
        self,
        tag_store: StoreSpec = None,
        entity_store: StoreSpec = None,
        *,
        tag_namespace: str = "tags",
        entity_namespace: str = "entities",
        default_ttl: Duration | None = None,
    ) -> None:
        config = TaggedStoreConfig(
            tag_store=tag_store,
            entity_store=entity_store,
            tag_namespace=tag_namespace,
            entity_namespace=entity_namespace,
            default_ttl=default_ttl,
        )
        tag_backend, entity_backend = resolve_backends(config, lookup_async_store)
        self._versions = AsyncVersionStore(tag_backend)
        self.tag_manager = AsyncTagManager(self._versions)
        self._entities = AsyncEntityStore(entity_backend)
        self._default_ttl = ttl_ms(default_ttl)

    @classmethod
    def from_config(cls, config: TaggedStoreConfig) -> "AsyncTaggedStore":
        return cls(
            config.tag_store,
            config.entity_store,
            tag_namespace=config.tag_namespace,
            entity_namespace=config.entity_namespace,
            default_ttl=config.default_ttl,
        )

    async def read_tag(self, ref: TagRef) -> int:
        """Current version of a tag, created on first use."""
        return await self.tag_manager.read_tag(ref)

    async def read_tags(self, refs: TagRef | Iterable[TagRef]) -> dict[str, int]:
        """Current versions of several tags, keyed by tag name."""
        return await self.tag_manager.read_tags(refs)

    async def touch_tag(self, ref: TagRef) -> int:
        """Invalidate every entry that depends on the tag."""
        return await self.tag_manager.touch_tag(ref)

    async def write(
        self,
        key: str,
        value: Any,
        depends: TagRef | Iterable[TagRef] = (),
        *,
        expires_in: Duration | None = None,
    ) -> None:
        """Store a value together with the current versions of its tags."""
        snapshot = await self.tag_manager.read_tags(depends)
        await self._entities.set(
            key, StoredEntity(value, snapshot), self._ttl(expires_in)
        )
        logger.debug("Wrote %r depending on %d tag(s)", key, len(snapshot))

    async def read(self, key: str) -> Any | None:
        """Return the cached value, or None if it is missing or stale."""
        entity = await self._lookup(key)
        return None if entity is None else entity.value

    async def exist(self, key: str) -> bool:
        """True if read(key) would hit."""
        return await self._lookup(key) is not None

    async def fetch(
        self,
        key: str,
        on_miss: Callable[[], T | Awaitable[T]],
        depends: TagRef | Iterable[TagRef] = (),
        *,
        force: bool = False,
        expires_in: Duration | None = None,
    ) -> T:
        """Return the cached value, or compute it with on_miss and store it.

        on_miss may be a plain function or a coroutine function.
        """
        if not force:
            entity = await self._lookup(key)
            if entity is not None:
                return cast(T, entity.value)

        logger.debug("Fetch miss for %r, computing value", key)
        value = await _resolve(on_miss())
        await self.write(key, value, depends, expires_in=expires_in)
        return value

    async def tagged_fetch(
        self,
        key: str,
        on_miss: Callable[[EntryBuilder], T | Awaitable[T]],
        *,
        force: bool = False,
        expires_in: Duration | None = None,
    ) -> T:
        """Like fetch, but on_miss declares the dependencies as it computes."""
        if not force:
            entity = await self._lookup(key)
            if entity is not None:
                return cast(T, entity.value)

        logger.debug("Tagged fetch miss for %r, computing value", key)
        entry = EntryBuilder()
        value = await _resolve(on_miss(entry))
        await self.write(key, value, entry.tags, expires_in=expires_in)
        return value

    async def delete(self, key: str) -> None:
        """Remove an entry. Tags are not affected."""
        await self._entities.delete(key)

    async def clear(self) -> None:
        """Remove all entries. Tag versions are left untouched."""
        await self._entities.clear()
        logger.debug("Cleared entity store")

    async def close(self) -> None:
        """Close both backends."""
        await self._entities.close()
        await self._versions.close()

    def _ttl(self, expires_in: Duration | None) -> int | None:
        return self._default_ttl if expires_in is None else ttl_ms(expires_in)

    async def _lookup(self, key: str) -> StoredEntity | None:
        entity = await self._entities.get(key)
        if entity is None:
            return None
        current = await self.tag_manager.read_tags(entity.tags.keys())
        for name, version in entity.tags.items():
            if current[name] != version:
                logger.debug("Entry %r is stale: tag %r changed", key, name)
                return None
        return entity


def create_async_tagged_store(
    config: TaggedStoreConfig | None = None, **options: Any
) -> AsyncTaggedStore:
    """Create an async tagged store. See create_tagged_store."""
    if config is not None and options:
        raise TypeError("Pass either a TaggedStoreConfig or keyword options, not both")
    return AsyncTaggedStore.from_config(config or TaggedStoreConfig(**options))


__all__ = ["AsyncTaggedStore", "create_async_tagged_store"]
