"""Resolve backend specs into backend instances.

A spec is one of:

    MemoryStore("tags")                    # an instance, used as-is
    "memory"                               # a backend name
    ("redis", {"url": "redis://..."})      # a name plus constructor options

When built from a name, the backend receives ``namespace`` unless the options
already name one.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Mapping
from typing import Any

from tagged_store.backends.base import AsyncKeyValueStore, KeyValueStore
from tagged_store.backends.memory import AsyncMemoryStore, MemoryStore
from tagged_store.errors import ConfigurationError

logger = logging.getLogger(__name__)

StoreSpec = Any  # instance | str | tuple[str, Mapping[str, Any]]


def _memory(options: dict[str, Any]) -> MemoryStore:
    return MemoryStore(**options)


def _async_memory(options: dict[str, Any]) -> AsyncMemoryStore:
    return AsyncMemoryStore(**options)


def _redis(options: dict[str, Any]) -> KeyValueStore:
    import redis

    from tagged_store.backends.redis import RedisStore

    client = options.pop("client", None)
    if client is None:
        client = redis.Redis.from_url(options.pop("url", "redis://localhost:6379/0"))
    return RedisStore(client, **options)


def _async_redis(options: dict[str, Any]) -> AsyncKeyValueStore:
    import redis.asyncio

    from tagged_store.backends.redis import AsyncRedisStore

    client = options.pop("client", None)
    if client is None:
        client = redis.asyncio.Redis.from_url(
            options.pop("url", "redis://localhost:6379/0")
        )
    return AsyncRedisStore(client, **options)


def _http(options: dict[str, Any]) -> KeyValueStore:
    from tagged_store.backends.http import HttpStore

    return HttpStore(**options)


def _async_http(options: dict[str, Any]) -> AsyncKeyValueStore:
    from tagged_store.backends.http import AsyncHttpStore

    return AsyncHttpStore(**options)


_SYNC_BACKENDS: dict[str, Callable[[dict[str, Any]], Any]] = {
    "memory": _memory,
    "redis": _redis,
    "http": _http,
}

_ASYNC_BACKENDS: dict[str, Callable[[dict[str, Any]], Any]] = {
    "memory": _async_memory,
    "redis": _async_redis,
    "http": _async_http,
}


def _split(spec: StoreSpec) -> tuple[str, dict[str, Any]]:
    if isinstance(spec, str):
        return spec, {}
    if isinstance(spec, (tuple, list)) and len(spec) == 2 and isinstance(spec[0], str):
        name, options = spec
        if not isinstance(options, Mapping):
            raise ConfigurationError(
                "Backend options must be a mapping",
                details={"backend": name, "options": repr(options)},
            )
        return name, dict(options)
    raise ConfigurationError(
        "Unrecognized backend spec",
        details={"spec": repr(spec)},
    )


def _build(
    spec: StoreSpec,
    namespace: str | None,
    registry: dict[str, Callable[[dict[str, Any]], Any]],
) -> Any:
    name, options = _split(spec)
    factory = registry.get(name)
    if factory is None:
        raise ConfigurationError(
            f"Unknown backend: {name!r}",
            details={"backend": name, "available": sorted(registry)},
        )
    if namespace is not None:
        options.setdefault("namespace", namespace)
    try:
        store = factory(options)
    except TypeError as e:
        raise ConfigurationError(
            f"Invalid options for {name} backend: {e}",
            details={"backend": name, "options": sorted(options)},
        ) from e
    logger.debug("Built %s backend in namespace %r", name, store.namespace)
    return store


def lookup_store(spec: StoreSpec, *, namespace: str | None = None) -> KeyValueStore:
    """Resolve a sync backend spec."""
    if spec is None:
        raise ConfigurationError("No backend supplied")
    if isinstance(spec, KeyValueStore):
        if inspect.iscoroutinefunction(spec.get):
            raise ConfigurationError(
                "Async backend supplied to a sync store",
                details={"backend": type(spec).__name__},
            )
        return spec
    return _build(spec, namespace, _SYNC_BACKENDS)


def lookup_async_store(
    spec: StoreSpec, *, namespace: str | None = None
) -> AsyncKeyValueStore:
    """Resolve an async backend spec."""
    if spec is None:
        raise ConfigurationError("No backend supplied")
    if isinstance(spec, AsyncKeyValueStore):
        if not inspect.iscoroutinefunction(spec.get):
            raise ConfigurationError(
                "Sync backend supplied to an async store",
                details={"backend": type(spec).__name__},
            )
        return spec
    return _build(spec, namespace, _ASYNC_BACKENDS)
