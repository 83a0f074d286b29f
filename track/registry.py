"""Identity registry holding the tracker's frame-to-frame state."""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional

from contracts import BoundingBox
from exceptions import UnknownIdentityError


class IdentityRegistry:
    """Mapping of object ID to last known bounding box for one tracking session.

    The registry is only ever mutated through :meth:`replace`, which installs
    a complete next-state mapping in one step. Every replacement bumps
    ``version`` so a consumer holding a snapshot can tell it is stale.
    """

    def __init__(self, entries: Optional[Mapping[int, BoundingBox]] = None) -> None:
        self._entries: Dict[int, BoundingBox] = dict(entries or {})
        self._miss_counts: Dict[int, int] = {}
        self._version = 0

    @property
    def entries(self) -> Mapping[int, BoundingBox]:
        return MappingProxyType(self._entries)

    @property
    def miss_counts(self) -> Mapping[int, int]:
        return MappingProxyType(self._miss_counts)

    @property
    def version(self) -> int:
        return self._version

    def __contains__(self, object_id: object) -> bool:
        return object_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[int]:
        return iter(self._entries)

    def ids(self) -> List[int]:
        return sorted(self._entries)

    def get(self, object_id: int) -> BoundingBox:
        try:
            return self._entries[object_id]
        except KeyError:
            raise UnknownIdentityError(
                f"Object {object_id} is not in the registry", object_id=object_id
            ) from None

    def misses(self, object_id: int) -> int:
        return self._miss_counts.get(object_id, 0)

    def max_id(self) -> Optional[int]:
        return max(self._entries) if self._entries else None

    def snapshot(self) -> Dict[int, BoundingBox]:
        return dict(self._entries)

    def copy(self) -> "IdentityRegistry":
        """Independent registry with the same entries, miss counts and version."""
        clone = IdentityRegistry(self._entries)
        clone._miss_counts = dict(self._miss_counts)
        clone._version = self._version
        return clone

    def replace(
        self,
        entries: Mapping[int, BoundingBox],
        miss_counts: Optional[Mapping[int, int]] = None,
    ) -> None:
        """Install the next full mapping, dropping miss counts of removed IDs."""
        for object_id in entries:
            if not isinstance(object_id, int) or object_id < 0:
                raise ValueError(f"Object IDs must be non-negative integers, got {object_id!r}")
        self._entries = dict(entries)
        counts = miss_counts or {}
        self._miss_counts = {
            object_id: int(counts[object_id])
            for object_id in self._entries
            if counts.get(object_id)
        }
        self._version += 1
