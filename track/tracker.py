"""Tracking interfaces and assignment result containers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Mapping, Sequence, Tuple

from contracts import BoundingBox
from track.registry import IdentityRegistry


@dataclass(frozen=True)
class AssignmentResult:
    entries: Dict[int, BoundingBox]
    matched_ids: Tuple[int, ...]
    new_ids: Tuple[int, ...]
    evicted_ids: Tuple[int, ...]


class Tracker(ABC):
    @abstractmethod
    def assign(
        self,
        detections: Sequence[BoundingBox],
        entries: Mapping[int, BoundingBox],
    ) -> Dict[int, BoundingBox]:
        """Return the next ID -> box mapping for this frame's detections."""

    @abstractmethod
    def update(
        self, detections: Sequence[BoundingBox], registry: IdentityRegistry
    ) -> AssignmentResult:
        """Assign detections and install the result into the registry."""
