"""Tests for the async tagged store."""

import time

import pytest

from tagged_store import (
    AsyncMemoryStore,
    AsyncTaggedStore,
    ConfigurationError,
    EntryBuilder,
    MemoryStore,
    create_async_tagged_store,
)


class Comment:
    def cache_tag(self) -> str:
        return "tag1"


class TestAsyncConstruction:
    """Tests for building an async store."""

    def test_requires_both_stores(self) -> None:
        with pytest.raises(ConfigurationError):
            AsyncTaggedStore(tag_store=AsyncMemoryStore("tags"))
        with pytest.raises(ConfigurationError):
            AsyncTaggedStore(entity_store=AsyncMemoryStore("entities"))

    def test_rejects_sync_backend(self) -> None:
        with pytest.raises(ConfigurationError, match="Sync backend"):
            AsyncTaggedStore(MemoryStore("tags"), AsyncMemoryStore("entities"))

    async def test_from_backend_names(self) -> None:
        store = create_async_tagged_store(tag_store="memory", entity_store="memory")
        await store.write("abc", "test", depends=["tag1"])
        assert await store.read("abc") == "test"


class TestAsyncTags:
    """Tests for tag operations."""

    async def test_read_tag_not_after_now(self, async_store: AsyncTaggedStore) -> None:
        assert await async_store.read_tag("abc") <= int(time.time())

    async def test_touch_increments(self, async_store: AsyncTaggedStore) -> None:
        old = await async_store.read_tag("abc")
        await async_store.touch_tag("abc")
        assert await async_store.read_tag("abc") > old

    async def test_touch_taggable(self, async_store: AsyncTaggedStore) -> None:
        old = await async_store.read_tag("tag1")
        await async_store.touch_tag(Comment())
        assert await async_store.read_tag("tag1") > old

    async def test_read_tags(self, async_store: AsyncTaggedStore) -> None:
        tag1 = await async_store.read_tag("tag1")
        tags = await async_store.read_tags(["tag1", "tag2"])
        assert set(tags) == {"tag1", "tag2"}
        assert tags["tag1"] == tag1


class TestAsyncEntities:
    """Tests for entity operations."""

    async def test_write_read_invalidate(self, async_store: AsyncTaggedStore) -> None:
        await async_store.write("abc", "test", depends=["tag1", "tag2"])
        assert await async_store.read("abc") == "test"
        await async_store.touch_tag("tag1")
        assert await async_store.read("abc") is None

    async def test_clear_keeps_tags(self, async_store: AsyncTaggedStore) -> None:
        version = await async_store.read_tag("abc")
        await async_store.write("abc_entity", "test", depends=["abc"])
        await async_store.clear()
        assert await async_store.read("abc_entity") is None
        assert await async_store.read_tag("abc") == version

    async def test_delete_and_exist(self, async_store: AsyncTaggedStore) -> None:
        await async_store.write("abc", "test")
        assert await async_store.exist("abc") is True
        await async_store.delete("abc")
        assert await async_store.exist("abc") is False


class TestAsyncFetch:
    """Tests for fetch and tagged_fetch."""

    async def test_fetch_with_coroutine_handler(
        self, async_store: AsyncTaggedStore
    ) -> None:
        calls = 0

        async def load() -> dict:
            nonlocal calls
            calls += 1
            return {"id": 1}

        assert await async_store.fetch("abc", load, depends=["user:1"]) == {"id": 1}
        assert await async_store.fetch("abc", load, depends=["user:1"]) == {"id": 1}
        assert calls == 1

        await async_store.touch_tag("user:1")
        await async_store.fetch("abc", load, depends=["user:1"])
        assert calls == 2

    async def test_fetch_with_plain_handler(
        self, async_store: AsyncTaggedStore
    ) -> None:
        assert await async_store.fetch("abc", lambda: "value") == "value"
        assert await async_store.read("abc") == "value"

    async def test_tagged_fetch(self, async_store: AsyncTaggedStore) -> None:
        async def load(entry: EntryBuilder) -> str:
            entry.depends("x")
            entry << "y"
            entry.concat(["x", "y"])
            return "value"

        assert await async_store.tagged_fetch("K", load) == "value"
        await async_store.touch_tag("z")
        assert await async_store.read("K") == "value"
        await async_store.touch_tag("x")
        assert await async_store.read("K") is None

    async def test_tagged_fetch_hit_skips_handler(
        self, async_store: AsyncTaggedStore
    ) -> None:
        await async_store.write("K", "cached")

        def load(entry: EntryBuilder) -> str:
            raise AssertionError("handler must not run on a hit")

        assert await async_store.tagged_fetch("K", load) == "cached"

    async def test_force(self, async_store: AsyncTaggedStore) -> None:
        await async_store.write("K", "old")
        assert await async_store.fetch("K", lambda: "new", force=True) == "new"
        assert await async_store.read("K") == "new"
