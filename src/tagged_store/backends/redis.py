"""Redis key/value backends."""

from __future__ import annotations

import json
from typing import Any

from redis.exceptions import RedisError

from tagged_store.errors import SerializationError, StoreError

_BACKEND = "redis"


def _encode(value: Any) -> str:
    """Serialize a value to JSON."""
    try:
        return json.dumps(value)
    except (TypeError, ValueError) as e:
        raise SerializationError(_BACKEND, "encode", str(e)) from e


def _decode(data: bytes | str) -> Any:
    """Deserialize JSON from Redis."""
    try:
        if isinstance(data, bytes):
            data = data.decode("utf-8")
        return json.loads(data)
    except ValueError as e:
        raise SerializationError(_BACKEND, "decode", str(e)) from e


def _failure(operation: str, key: str | None, error: RedisError) -> StoreError:
    details = {"key": key} if key is not None else None
    return StoreError(_BACKEND, operation, str(error), details)


class RedisStore:
    """Sync Redis backend. Keys live under "{namespace}:"."""

    def __init__(
        self,
        client: Any,  # redis.Redis
        *,
        namespace: str = "default",
    ) -> None:
        self._client = client
        self.namespace = namespace

    def _key(self, key: str) -> str:
        """Generate the full Redis key."""
        return f"{self.namespace}:{key}"

    def get(self, key: str) -> Any | None:
        """Get a value by key."""
        try:
            data = self._client.get(self._key(key))
        except RedisError as e:
            raise _failure("get", key, e) from e
        if data is None:
            return None
        return _decode(data)

    def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        """Store a value with optional expiration in milliseconds."""
        payload = _encode(value)
        try:
            self._client.set(self._key(key), payload, px=ttl or None)
        except RedisError as e:
            raise _failure("set", key, e) from e

    def add(self, key: str, value: Any, ttl: int | None = None) -> bool:
        """Store a value only if the key is absent (SET NX)."""
        payload = _encode(value)
        try:
            return bool(self._client.set(self._key(key), payload, px=ttl or None, nx=True))
        except RedisError as e:
            raise _failure("add", key, e) from e

    def delete(self, key: str) -> None:
        """Delete a key."""
        try:
            self._client.delete(self._key(key))
        except RedisError as e:
            raise _failure("delete", key, e) from e

    def clear(self) -> None:
        """Delete every key in this namespace."""
        cursor = 0
        pattern = f"{self.namespace}:*"
        try:
            while True:
                cursor, keys = self._client.scan(cursor, match=pattern, count=100)
                if keys:
                    self._client.delete(*keys)
                if cursor == 0:
                    break
        except RedisError as e:
            raise _failure("clear", None, e) from e

    def close(self) -> None:
        """Close the Redis connection."""
        self._client.close()


class AsyncRedisStore:
    """Async Redis backend. Keys live under "{namespace}:"."""

    def __init__(
        self,
        client: Any,  # redis.asyncio.Redis
        *,
        namespace: str = "default",
    ) -> None:
        self._client = client
        self.namespace = namespace

    def _key(self, key: str) -> str:
        """Generate the full Redis key."""
        return f"{self.namespace}:{key}"

    async def get(self, key: str) -> Any | None:
        """Get a value by key."""
        try:
            data = await self._client.get(self._key(key))
        except RedisError as e:
            raise _failure("get", key, e) from e
        if data is None:
            return None
        return _decode(data)

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        """Store a value with optional expiration in milliseconds."""
        payload = _encode(value)
        try:
            await self._client.set(self._key(key), payload, px=ttl or None)
        except RedisError as e:
            raise _failure("set", key, e) from e

    async def add(self, key: str, value: Any, ttl: int | None = None) -> bool:
        """Store a value only if the key is absent (SET NX)."""
        payload = _encode(value)
        try:
            stored = await self._client.set(
                self._key(key), payload, px=ttl or None, nx=True
            )
        except RedisError as e:
            raise _failure("add", key, e) from e
        return bool(stored)

    async def delete(self, key: str) -> None:
        """Delete a key."""
        try:
            await self._client.delete(self._key(key))
        except RedisError as e:
            raise _failure("delete", key, e) from e

    async def clear(self) -> None:
        """Delete every key in this namespace."""
        cursor: int = 0
        pattern = f"{self.namespace}:*"
        try:
            while True:
                result = await self._client.scan(cursor, match=pattern, count=100)
                cursor = result[0]
                keys = result[1]
                if keys:
                    await self._client.delete(*keys)
                if cursor == 0:
                    break
        except RedisError as e:
            raise _failure("clear", None, e) from e

    async def close(self) -> None:
        """Close the Redis connection."""
        await self._client.aclose()
