"""Core types for tagged_store."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Protocol, TypeAlias, runtime_checkable


@runtime_checkable
class Taggable(Protocol):
    """An object that knows the name of its own cache tag."""

    def cache_tag(self) -> str: ...


TagRef: TypeAlias = str | Taggable

Duration: TypeAlias = str | int | timedelta  # "30s", "5m", ms, or timedelta


@dataclass(frozen=True, slots=True)
class StoredEntity:
    """A cached value and the tag versions it was written against."""

    value: Any
    tags: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Detach from the caller's mapping so the snapshot cannot drift
        object.__setattr__(self, "tags", dict(self.tags))

    def to_envelope(self) -> dict[str, Any]:
        return {"value": self.value, "tags": dict(self.tags)}

    @classmethod
    def from_envelope(cls, envelope: Mapping[str, Any]) -> "StoredEntity":
        return cls(
            value=envelope["value"],
            tags={str(name): int(version) for name, version in envelope["tags"].items()},
        )
