"""Store configuration."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from tagged_store.backends.factory import StoreSpec
from tagged_store.errors import ConfigurationError
from tagged_store.types import Duration


@dataclass(frozen=True, slots=True)
class TaggedStoreConfig:
    """Backends and namespaces for a tagged store.

    ``tag_store`` and ``entity_store`` accept a backend instance, a backend
    name such as ``"memory"`` or ``"redis"``, or a ``(name, options)`` pair.
    The namespaces apply only to backends built from a name. The tag backend
    must keep every key: an evicted tag would be recreated at a lower version
    and revive entries that were already invalidated.
    """

    tag_store: StoreSpec = None
    entity_store: StoreSpec = None
    tag_namespace: str = "tags"
    entity_namespace: str = "entities"
    default_ttl: Duration | None = None  # entity TTL; tag versions never expire


def resolve_backends(
    config: TaggedStoreConfig,
    lookup: Callable[..., Any],
) -> tuple[Any, Any]:
    """Build the (tag, entity) backend pair, refusing overlapping storage."""
    if config.tag_store is None:
        raise ConfigurationError(
            "tag_store is required", details={"option": "tag_store"}
        )
    if config.entity_store is None:
        raise ConfigurationError(
            "entity_store is required", details={"option": "entity_store"}
        )

    tag_backend = lookup(config.tag_store, namespace=config.tag_namespace)
    entity_backend = lookup(config.entity_store, namespace=config.entity_namespace)

    if tag_backend is entity_backend:
        raise ConfigurationError(
            "tag_store and entity_store must be separate backends",
            details={"backend": type(tag_backend).__name__},
        )
    max_items = getattr(tag_backend, "max_items", None)
    if isinstance(max_items, int) and max_items > 0:
        raise ConfigurationError(
            "tag_store must not evict keys; drop max_items from the tag backend",
            details={
                "backend": type(tag_backend).__name__,
                "max_items": max_items,
            },
        )
    if tag_backend.namespace == entity_backend.namespace:
        raise ConfigurationError(
            "tag_store and entity_store must use different namespaces",
            details={"namespace": tag_backend.namespace},
        )
    return tag_backend, entity_backend
