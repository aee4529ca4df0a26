"""Exception hierarchy for tagged_store.

Every error raised by the library derives from TaggedStoreError. A logical
cache miss is never an error: reads report it as None.
"""

from typing import Any


class TaggedStoreError(Exception):
    """Base exception for all tagged_store errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a plain dictionary."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(TaggedStoreError):
    """Raised when a store is built with missing or conflicting backends."""


class StoreError(TaggedStoreError):
    """Raised when a key/value backend fails to complete an operation."""

    def __init__(
        self,
        backend: str,
        operation: str,
        reason: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            f"{backend} backend failed to {operation}: {reason}",
            {"backend": backend, "operation": operation, **(details or {})},
        )
        self.backend = backend
        self.operation = operation


class SerializationError(StoreError):
    """Raised when a stored value cannot be encoded or decoded."""
