"""tagged_store - tag-versioned cache invalidation for Python."""

from contextlib import suppress

# Backends
from tagged_store.backends import (
    AsyncKeyValueStore,
    AsyncMemoryStore,
    KeyValueStore,
    MemoryStore,
    lookup_async_store,
    lookup_store,
)

# Stores
from tagged_store.async_store import AsyncTaggedStore, create_async_tagged_store
from tagged_store.config import TaggedStoreConfig
from tagged_store.duration import parse_duration
from tagged_store.entry import EntryBuilder

# Errors
from tagged_store.errors import (
    ConfigurationError,
    SerializationError,
    StoreError,
    TaggedStoreError,
)
from tagged_store.store import TaggedStore, create_tagged_store
from tagged_store.tags import AsyncTagManager, TagManager, resolve_tag_name

# Core types
from tagged_store.types import Duration, StoredEntity, Taggable, TagRef

# Optional backend imports - only available when dependencies are installed
with suppress(ImportError):
    from tagged_store.backends import AsyncRedisStore, RedisStore

with suppress(ImportError):
    from tagged_store.backends import AsyncHttpStore, HttpStore

__version__ = "0.1.0"

__all__ = [
    "AsyncHttpStore",
    "AsyncKeyValueStore",
    "AsyncMemoryStore",
    "AsyncRedisStore",
    "AsyncTagManager",
    "AsyncTaggedStore",
    "ConfigurationError",
    "Duration",
    "EntryBuilder",
    "HttpStore",
    "KeyValueStore",
    "MemoryStore",
    "RedisStore",
    "SerializationError",
    "StoreError",
    "StoredEntity",
    "TagManager",
    "TagRef",
    "Taggable",
    "TaggedStore",
    "TaggedStoreConfig",
    "TaggedStoreError",
    "create_async_tagged_store",
    "create_tagged_store",
    "lookup_async_store",
    "lookup_store",
    "parse_duration",
    "resolve_tag_name",
]
