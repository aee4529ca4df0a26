"""Dependency builder handed to tagged_fetch miss handlers."""

from collections.abc import Iterable, Iterator

from tagged_store.tags import resolve_tag_name, resolve_tag_names
from tagged_store.types import TagRef


class EntryBuilder:
    """Accumulates the tags an entry depends on while its value is computed.

    Example:
        def load(entry: EntryBuilder) -> dict:
            user = db.get_user(user_id)
            entry.depends(f"user:{user_id}")
            entry << f"team:{user.team_id}"
            entry.concat(f"post:{p.id}" for p in user.posts)
            return user.as_dict()

        store.tagged_fetch(f"profile:{user_id}", load)
    """

    def __init__(self) -> None:
        self._tags: dict[str, None] = {}

    def add(self, ref: TagRef) -> "EntryBuilder":
        """Add a single tag."""
        self._tags[resolve_tag_name(ref)] = None
        return self

    def depends(self, *refs: TagRef) -> "EntryBuilder":
        """Add one or more tags."""
        for ref in refs:
            self.add(ref)
        return self

    def concat(self, *groups: TagRef | Iterable[TagRef]) -> "EntryBuilder":
        """Merge tags given as names or as sequences of names."""
        for group in groups:
            for name in resolve_tag_names(group):
                self._tags[name] = None
        return self

    def __lshift__(self, ref: TagRef) -> "EntryBuilder":
        return self.add(ref)

    def __iter__(self) -> Iterator[str]:
        return iter(self._tags)

    def __len__(self) -> int:
        return len(self._tags)

    def __contains__(self, name: object) -> bool:
        return name in self._tags

    @property
    def tags(self) -> frozenset[str]:
        """The accumulated dependency set."""
        return frozenset(self._tags)

    def __repr__(self) -> str:
        return f"EntryBuilder({list(self._tags)!r})"
