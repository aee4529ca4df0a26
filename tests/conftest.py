"""Shared pytest fixtures."""

import pytest

from tagged_store import AsyncMemoryStore, AsyncTaggedStore, MemoryStore, TaggedStore


@pytest.fixture
def tag_backend() -> MemoryStore:
    """Create a fresh tag-version backend for each test."""
    return MemoryStore("tags")


@pytest.fixture
def entity_backend() -> MemoryStore:
    """Create a fresh entity backend for each test."""
    return MemoryStore("entities")


@pytest.fixture
def store(tag_backend: MemoryStore, entity_backend: MemoryStore) -> TaggedStore:
    """Create a TaggedStore over two memory backends."""
    return TaggedStore(tag_backend, entity_backend)


@pytest.fixture
def async_store() -> AsyncTaggedStore:
    """Create an AsyncTaggedStore over two async memory backends."""
    return AsyncTaggedStore(AsyncMemoryStore("tags"), AsyncMemoryStore("entities"))
