"""Tag version storage over a key/value backend."""

from typing import Any

from tagged_store.backends.base import AsyncKeyValueStore, KeyValueStore
from tagged_store.errors import SerializationError


def _version(backend: object, name: str, raw: Any) -> int | None:
    if raw is None:
        return None
    try:
        return int(raw)
    except (TypeError, ValueError) as e:
        raise SerializationError(
            type(backend).__name__, "decode tag version", str(e), {"tag": name}
        ) from e


class VersionStore:
    """Maps tag names to integer versions. Versions never expire."""

    def __init__(self, backend: KeyValueStore) -> None:
        self.backend = backend

    def get(self, name: str) -> int | None:
        return _version(self.backend, name, self.backend.get(name))

    def create(self, name: str, version: int) -> bool:
        """Store the version only if the tag does not exist yet."""
        return self.backend.add(name, version)

    def set(self, name: str, version: int) -> None:
        self.backend.set(name, version)

    def close(self) -> None:
        self.backend.close()


class AsyncVersionStore:
    """Async counterpart of VersionStore."""

    def __init__(self, backend: AsyncKeyValueStore) -> None:
        self.backend = backend

    async def get(self, name: str) -> int | None:
        return _version(self.backend, name, await self.backend.get(name))

    async def create(self, name: str, version: int) -> bool:
        """Store the version only if the tag does not exist yet."""
        return await self.backend.add(name, version)

    async def set(self, name: str, version: int) -> None:
        await self.backend.set(name, version)

    async def close(self) -> None:
        await self.backend.close()
