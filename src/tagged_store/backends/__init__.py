"""Key/value backends for tagged_store."""

from contextlib import suppress

from tagged_store.backends.base import AsyncKeyValueStore, KeyValueStore
from tagged_store.backends.factory import lookup_async_store, lookup_store
from tagged_store.backends.memory import AsyncMemoryStore, MemoryStore

# Optional backends - only available when dependencies are installed
with suppress(ImportError):
    from tagged_store.backends.redis import AsyncRedisStore, RedisStore

with suppress(ImportError):
    from tagged_store.backends.http import AsyncHttpStore, HttpStore

__all__ = [
    "AsyncHttpStore",
    "AsyncKeyValueStore",
    "AsyncMemoryStore",
    "AsyncRedisStore",
    "HttpStore",
    "KeyValueStore",
    "MemoryStore",
    "RedisStore",
    "lookup_async_store",
    "lookup_store",
]
