"""HTTP key/value backends.

Speaks a small JSON protocol: every operation is a POST to /v1/kv/<op> whose
body carries the backend namespace. Responses:

    get   -> {"found": bool, "value": ...}
    add   -> {"added": bool}
    set, delete, clear -> any JSON object
"""

from __future__ import annotations

import logging
from typing import Any, cast

import httpx

from tagged_store.errors import SerializationError, StoreError

logger = logging.getLogger(__name__)

_BACKEND = "http"


def _headers(api_key: str | None) -> dict[str, str]:
    headers = {"Content-Type": "application/json"}
    if api_key:
        headers["Authorization"] = f"Bearer {api_key}"
    return headers


def _check(operation: str, response: httpx.Response) -> dict[str, Any]:
    """Raise StoreError for non-success responses, else return the JSON body."""
    if not response.is_success:
        try:
            error = response.json().get("error", "Request failed")
        except ValueError:
            error = f"HTTP {response.status_code}"
        logger.warning(
            "KV service rejected %s: %s",
            operation,
            error,
            extra={"status_code": response.status_code},
        )
        raise StoreError(
            _BACKEND, operation, error, {"status_code": response.status_code}
        )
    try:
        return cast(dict[str, Any], response.json())
    except ValueError as e:
        raise StoreError(_BACKEND, operation, "invalid JSON response") from e


class HttpStore:
    """Sync HTTP backend."""

    def __init__(
        self,
        base_url: str,
        *,
        namespace: str = "default",
        api_key: str | None = None,
        timeout: float = 30.0,
        client: httpx.Client | None = None,
    ) -> None:
        self.namespace = namespace
        self._client = client or httpx.Client(
            base_url=base_url,
            headers=_headers(api_key),
            timeout=timeout,
        )

    def _request(self, operation: str, body: dict[str, Any]) -> dict[str, Any]:
        """Make a POST request to the KV service."""
        try:
            response = self._client.post(
                f"/v1/kv/{operation}", json={"namespace": self.namespace, **body}
            )
        except httpx.HTTPError as e:
            raise StoreError(_BACKEND, operation, str(e)) from e
        except TypeError as e:
            raise SerializationError(_BACKEND, operation, str(e)) from e
        return _check(operation, response)

    def get(self, key: str) -> Any | None:
        """Get a value by key."""
        data = self._request("get", {"key": key})
        if not data.get("found"):
            return None
        return data.get("value")

    def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        """Store a value."""
        self._request("set", {"key": key, "value": value, "ttl": ttl})

    def add(self, key: str, value: Any, ttl: int | None = None) -> bool:
        """Store a value if the key is absent."""
        data = self._request("add", {"key": key, "value": value, "ttl": ttl})
        return bool(data.get("added"))

    def delete(self, key: str) -> None:
        """Delete a key."""
        self._request("delete", {"key": key})

    def clear(self) -> None:
        """Clear every key in this namespace."""
        self._request("clear", {})

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()


class AsyncHttpStore:
    """Async HTTP backend."""

    def __init__(
        self,
        base_url: str,
        *,
        namespace: str = "default",
        api_key: str | None = None,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.namespace = namespace
        self._client = client or httpx.AsyncClient(
            base_url=base_url,
            headers=_headers(api_key),
            timeout=timeout,
        )

    async def _request(self, operation: str, body: dict[str, Any]) -> dict[str, Any]:
        """Make a POST request to the KV service."""
        try:
            response = await self._client.post(
                f"/v1/kv/{operation}", json={"namespace": self.namespace, **body}
            )
        except httpx.HTTPError as e:
            raise StoreError(_BACKEND, operation, str(e)) from e
        except TypeError as e:
            raise SerializationError(_BACKEND, operation, str(e)) from e
        return _check(operation, response)

    async def get(self, key: str) -> Any | None:
        """Get a value by key."""
        data = await self._request("get", {"key": key})
        if not data.get("found"):
            return None
        return data.get("value")

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        """Store a value."""
        await self._request("set", {"key": key, "value": value, "ttl": ttl})

    async def add(self, key: str, value: Any, ttl: int | None = None) -> bool:
        """Store a value if the key is absent."""
        data = await self._request("add", {"key": key, "value": value, "ttl": ttl})
        return bool(data.get("added"))

    async def delete(self, key: str) -> None:
        """Delete a key."""
        await self._request("delete", {"key": key})

    async def clear(self) -> None:
        """Clear every key in this namespace."""
        await self._request("clear", {})

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
