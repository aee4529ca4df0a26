"""Sync tagged store."""

import logging
from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from tagged_store.backends.factory import StoreSpec, lookup_store
from tagged_store.config import TaggedStoreConfig, resolve_backends
from tagged_store.duration import ttl_ms
from tagged_store.entities import EntityStore
from tagged_store.entry import EntryBuilder
from tagged_store.tags import TagManager
from tagged_store.types import Duration, StoredEntity, TagRef
from tagged_store.versions import VersionStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TaggedStore:
    """Cache whose entries are invalidated by bumping the tags they depend on.

    Tag versions and entity values live in two separate backends, so clearing
    the entities never resets a tag.
    """

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
        tag_backend, entity_backend = resolve_backends(config, lookup_store)
        self._versions = VersionStore(tag_backend)
        self.tag_manager = TagManager(self._versions)
        self._entities = EntityStore(entity_backend)
        self._default_ttl = ttl_ms(default_ttl)

    @classmethod
    def from_config(cls, config: TaggedStoreConfig) -> "TaggedStore":
        return cls(
            config.tag_store,
            config.entity_store,
            tag_namespace=config.tag_namespace,
            entity_namespace=config.entity_namespace,
            default_ttl=config.default_ttl,
        )

    # -------------------------------------------------------------------------
    # Tags
    # -------------------------------------------------------------------------

    def read_tag(self, ref: TagRef) -> int:
        """Current version of a tag, created on first use."""
        return self.tag_manager.read_tag(ref)

    def read_tags(self, refs: TagRef | Iterable[TagRef]) -> dict[str, int]:
        """Current versions of several tags, keyed by tag name."""
        return self.tag_manager.read_tags(refs)

    def touch_tag(self, ref: TagRef) -> int:
        """Invalidate every entry that depends on the tag."""
        return self.tag_manager.touch_tag(ref)

    # -------------------------------------------------------------------------
    # Entities
    # -------------------------------------------------------------------------

    def write(
        self,
        key: str,
        value: Any,
        depends: TagRef | Iterable[TagRef] = (),
        *,
        expires_in: Duration | None = None,
    ) -> None:
        """Store a value together with the current versions of its tags."""
        snapshot = self.tag_manager.read_tags(depends)
        self._entities.set(key, StoredEntity(value, snapshot), self._ttl(expires_in))
        logger.debug("Wrote %r depending on %d tag(s)", key, len(snapshot))

    def read(self, key: str) -> Any | None:
        """Return the cached value, or None if it is missing or stale."""
        entity = self._lookup(key)
        return None if entity is None else entity.value

    def exist(self, key: str) -> bool:
        """True if read(key) would hit."""
        return self._lookup(key) is not None

    def fetch(
        self,
        key: str,
        on_miss: Callable[[], T],
        depends: TagRef | Iterable[TagRef] = (),
        *,
        force: bool = False,
        expires_in: Duration | None = None,
    ) -> T:
        """Return the cached value, or compute it with on_miss and store it."""
        if not force:
            entity = self._lookup(key)
            if entity is not None:
                return entity.value

        logger.debug("Fetch miss for %r, computing value", key)
        value = on_miss()
        self.write(key, value, depends, expires_in=expires_in)
        return value

    def tagged_fetch(
        self,
        key: str,
        on_miss: Callable[[EntryBuilder], T],
        *,
        force: bool = False,
        expires_in: Duration | None = None,
    ) -> T:
        """Like fetch, but on_miss declares the dependencies as it computes.

        on_miss receives an EntryBuilder and returns the value to cache.
        """
        if not force:
            entity = self._lookup(key)
            if entity is not None:
                return entity.value

        logger.debug("Tagged fetch miss for %r, computing value", key)
        entry = EntryBuilder()
        value = on_miss(entry)
        self.write(key, value, entry.tags, expires_in=expires_in)
        return value

    def delete(self, key: str) -> None:
        """Remove an entry. Tags are not affected."""
        self._entities.delete(key)

    def clear(self) -> None:
        """Remove all entries. Tag versions are left untouched."""
        self._entities.clear()
        logger.debug("Cleared entity store")

    def close(self) -> None:
        """Close both backends."""
        self._entities.close()
        self._versions.close()

    # -------------------------------------------------------------------------
    # Internal helpers
    # -------------------------------------------------------------------------

    def _ttl(self, expires_in: Duration | None) -> int | None:
        return self._default_ttl if expires_in is None else ttl_ms(expires_in)

    def _lookup(self, key: str) -> StoredEntity | None:
        """Load an entity and return it only if none of its tags moved."""
        entity = self._entities.get(key)
        if entity is None:
            return None
        current = self.tag_manager.read_tags(entity.tags.keys())
        for name, version in entity.tags.items():
            if current[name] != version:
                logger.debug("Entry %r is stale: tag %r changed", key, name)
                return None
        return entity


def create_tagged_store(
    config: TaggedStoreConfig | None = None, **options: Any
) -> TaggedStore:
    """Create a tagged store.

    Args:
        config: Full configuration. Mutually exclusive with ``options``.
        **options: TaggedStoreConfig fields, e.g.
            ``tag_store=("redis", {"url": ...}), entity_store="memory"``

    Returns:
        TaggedStore with read/write/fetch/tagged_fetch, tag and lifecycle methods

    Raises:
        ConfigurationError: if a backend is missing or the two overlap
    """
    if config is not None and options:
        raise TypeError("Pass either a TaggedStoreConfig or keyword options, not both")
    return TaggedStore.from_config(config or TaggedStoreConfig(**options))


__all__ = ["TaggedStore", "create_tagged_store"]
