"""Tests for the version and entity storage adapters."""

import pytest

from tagged_store import AsyncMemoryStore, MemoryStore, SerializationError, StoredEntity
from tagged_store.entities import AsyncEntityStore, EntityStore
from tagged_store.versions import AsyncVersionStore, VersionStore


class TestStoredEntity:
    """Tests for the entity envelope."""

    def test_envelope(self) -> None:
        entity = StoredEntity({"id": 1}, {"tag1": 10})
        assert entity.to_envelope() == {"value": {"id": 1}, "tags": {"tag1": 10}}

    def test_from_envelope_coerces_versions(self) -> None:
        entity = StoredEntity.from_envelope({"value": "v", "tags": {"tag1": "10"}})
        assert entity.tags == {"tag1": 10}

    def test_snapshot_detached(self) -> None:
        tags = {"tag1": 10}
        entity = StoredEntity("v", tags)
        tags["tag1"] = 11
        assert entity.tags == {"tag1": 10}


class TestVersionStore:
    """Tests for VersionStore."""

    def test_missing(self) -> None:
        assert VersionStore(MemoryStore("tags")).get("abc") is None

    def test_create_only_once(self) -> None:
        versions = VersionStore(MemoryStore("tags"))
        assert versions.create("abc", 100) is True
        assert versions.create("abc", 200) is False
        assert versions.get("abc") == 100

    def test_set_overwrites(self) -> None:
        versions = VersionStore(MemoryStore("tags"))
        versions.create("abc", 100)
        versions.set("abc", 101)
        assert versions.get("abc") == 101

    def test_corrupt_version(self) -> None:
        backend = MemoryStore("tags")
        backend.set("abc", "not a number")
        with pytest.raises(SerializationError) as exc_info:
            VersionStore(backend).get("abc")
        assert exc_info.value.details["tag"] == "abc"


class TestEntityStore:
    """Tests for EntityStore."""

    def test_roundtrip(self) -> None:
        entities = EntityStore(MemoryStore("entities"))
        entities.set("abc", StoredEntity("test", {"tag1": 1}))
        assert entities.get("abc") == StoredEntity("test", {"tag1": 1})

    def test_missing(self) -> None:
        assert EntityStore(MemoryStore("entities")).get("abc") is None

    def test_delete_and_clear(self) -> None:
        entities = EntityStore(MemoryStore("entities"))
        entities.set("a", StoredEntity(1))
        entities.set("b", StoredEntity(2))
        entities.delete("a")
        assert entities.get("a") is None
        entities.clear()
        assert entities.get("b") is None

    def test_malformed_envelope(self) -> None:
        backend = MemoryStore("entities")
        backend.set("abc", "raw string")
        with pytest.raises(SerializationError) as exc_info:
            EntityStore(backend).get("abc")
        assert exc_info.value.details["key"] == "abc"

    def test_envelope_missing_tags(self) -> None:
        backend = MemoryStore("entities")
        backend.set("abc", {"value": 1})
        with pytest.raises(SerializationError):
            EntityStore(backend).get("abc")


class TestAsyncAdapters:
    """Tests for the async adapters."""

    async def test_versions(self) -> None:
        versions = AsyncVersionStore(AsyncMemoryStore("tags"))
        assert await versions.get("abc") is None
        assert await versions.create("abc", 5) is True
        assert await versions.create("abc", 6) is False
        await versions.set("abc", 7)
        assert await versions.get("abc") == 7

    async def test_entities(self) -> None:
        entities = AsyncEntityStore(AsyncMemoryStore("entities"))
        await entities.set("abc", StoredEntity("v", {"t": 1}), ttl=None)
        assert (await entities.get("abc")).value == "v"
        await entities.clear()
        assert await entities.get("abc") is None
