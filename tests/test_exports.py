"""Tests for package exports."""

import tagged_store


def test_public_api_importable() -> None:
    """Test that the store API is importable from the package root."""
    from tagged_store import (
        AsyncTaggedStore,
        EntryBuilder,
        TaggedStore,
        TaggedStoreConfig,
        create_async_tagged_store,
        create_tagged_store,
    )

    assert TaggedStore is not None
    assert AsyncTaggedStore is not None
    assert EntryBuilder is not None
    assert TaggedStoreConfig is not None
    assert create_tagged_store is not None
    assert create_async_tagged_store is not None


def test_backends_importable() -> None:
    """Test that all backends are exported when their dependencies exist."""
    from tagged_store import (
        AsyncHttpStore,
        AsyncMemoryStore,
        AsyncRedisStore,
        HttpStore,
        MemoryStore,
        RedisStore,
    )

    assert MemoryStore is not None
    assert AsyncMemoryStore is not None
    assert RedisStore is not None
    assert AsyncRedisStore is not None
    assert HttpStore is not None
    assert AsyncHttpStore is not None


def test_all_names_resolve() -> None:
    for name in tagged_store.__all__:
        assert hasattr(tagged_store, name), name
