"""Tag version management.

A tag springs into existence the first time it is read, with the current Unix
time in seconds as its version. Touching a tag moves its version to
``max(now, old + 1)``, so versions strictly increase even when the clock stalls
or runs backwards, and entries snapshotted against the old version go stale.
"""

import logging
import time
from collections.abc import Iterable

from tagged_store.types import TagRef, Taggable
from tagged_store.versions import AsyncVersionStore, VersionStore

logger = logging.getLogger(__name__)


def resolve_tag_name(ref: TagRef) -> str:
    """Return the tag name for a raw name or a Taggable object."""
    if isinstance(ref, str):
        return ref
    if isinstance(ref, Taggable):
        name = ref.cache_tag()
        if not isinstance(name, str):
            raise TypeError(
                f"{type(ref).__name__}.cache_tag() must return str, "
                f"got {type(name).__name__}"
            )
        return name
    raise TypeError(f"Expected a tag name or Taggable, got {type(ref).__name__}")


def resolve_tag_names(refs: TagRef | Iterable[TagRef]) -> list[str]:
    """Resolve refs to distinct tag names, preserving first-seen order.

    A single name or Taggable is treated as a one-element collection.
    """
    if isinstance(refs, (str, Taggable)):
        refs = [refs]
    return list(dict.fromkeys(resolve_tag_name(ref) for ref in refs))


def _now() -> int:
    return int(time.time())


class TagManager:
    """Reads, lazily creates and bumps tag versions."""

    def __init__(self, versions: VersionStore) -> None:
        self._versions = versions

    def read_tag(self, ref: TagRef) -> int:
        """Return the current version of a tag, creating it if needed."""
        name = resolve_tag_name(ref)
        version = self._versions.get(name)
        if version is not None:
            return version

        version = _now()
        if self._versions.create(name, version):
            logger.debug("Created tag %r at version %d", name, version)
            return version

        # Another writer created it first; theirs is the baseline
        existing = self._versions.get(name)
        if existing is None:
            self._versions.set(name, version)
            return version
        return existing

    def read_tags(self, refs: TagRef | Iterable[TagRef]) -> dict[str, int]:
        """Return one version per distinct tag, creating missing tags one by one."""
        return {name: self.read_tag(name) for name in resolve_tag_names(refs)}

    def touch_tag(self, ref: TagRef) -> int:
        """Bump a tag so every entry depending on it becomes stale."""
        name = resolve_tag_name(ref)
        old = self.read_tag(name)
        new = max(_now(), old + 1)
        self._versions.set(name, new)
        logger.debug("Touched tag %r: %d -> %d", name, old, new)
        return new


class AsyncTagManager:
    """Async counterpart of TagManager."""

    def __init__(self, versions: AsyncVersionStore) -> None:
        self._versions = versions

    async def read_tag(self, ref: TagRef) -> int:
        """Return the current version of a tag, creating it if needed."""
        name = resolve_tag_name(ref)
        version = await self._versions.get(name)
        if version is not None:
            return version

        version = _now()
        if await self._versions.create(name, version):
            logger.debug("Created tag %r at version %d", name, version)
            return version

        existing = await self._versions.get(name)
        if existing is None:
            await self._versions.set(name, version)
            return version
        return existing

    async def read_tags(self, refs: TagRef | Iterable[TagRef]) -> dict[str, int]:
        """Return one version per distinct tag, creating missing tags one by one."""
        return {name: await self.read_tag(name) for name in resolve_tag_names(refs)}

    async def touch_tag(self, ref: TagRef) -> int:
        """Bump a tag so every entry depending on it becomes stale."""
        name = resolve_tag_name(ref)
        old = await self.read_tag(name)
        new = max(_now(), old + 1)
        await self._versions.set(name, new)
        logger.debug("Touched tag %r: %d -> %d", name, old, new)
        return new
