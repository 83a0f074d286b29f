"""Greedy nearest-centroid identity assignment."""

from __future__ import annotations

from typing import Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from contracts import BoundingBox
from log_config.logger import get_logger
from track.registry import IdentityRegistry
from track.tracker import AssignmentResult, Tracker

logger = get_logger(__name__)


class IdentityAssigner(Tracker):
    """Match each frame's detections to existing object IDs by centroid distance.

    All (existing ID, detection) pairs are ranked by Euclidean centroid
    distance, then by lower ID, then by lower detection index, and claimed
    greedily so that every ID and every detection is used at most once.
    Detections left over receive fresh IDs counting up from the largest ID
    in use (or from 0 on an empty registry).

    Args:
        max_misses: Consecutive unmatched frames an ID survives in
            :meth:`update` before it is evicted. ``None`` keeps stale
            entries indefinitely.
        max_match_distance_px: Largest centroid distance a match may span.
            ``None`` matches regardless of distance.
    """

    def __init__(
        self,
        max_misses: Optional[int] = None,
        max_match_distance_px: Optional[float] = None,
    ) -> None:
        if max_misses is not None and max_misses < 0:
            raise ValueError(f"max_misses must be >= 0, got {max_misses}")
        if max_match_distance_px is not None and max_match_distance_px <= 0:
            raise ValueError(
                f"max_match_distance_px must be positive, got {max_match_distance_px}"
            )
        self._max_misses = max_misses
        self._max_match_distance_px = max_match_distance_px

    @property
    def max_misses(self) -> Optional[int]:
        return self._max_misses

    @property
    def max_match_distance_px(self) -> Optional[float]:
        return self._max_match_distance_px

    def assign(
        self,
        detections: Sequence[BoundingBox],
        entries: Mapping[int, BoundingBox],
    ) -> Dict[int, BoundingBox]:
        return self._match(detections, entries).entries

    def update(
        self, detections: Sequence[BoundingBox], registry: IdentityRegistry
    ) -> AssignmentResult:
        result = self._match(detections, registry.entries)
        entries = dict(result.entries)
        matched = set(result.matched_ids)
        miss_counts: Dict[int, int] = {}
        evicted: List[int] = []

        for object_id in sorted(registry.entries):
            if object_id in matched:
                continue
            misses = registry.misses(object_id) + 1
            if self._max_misses is not None and misses > self._max_misses:
                del entries[object_id]
                evicted.append(object_id)
            else:
                miss_counts[object_id] = misses

        registry.replace(entries, miss_counts)

        if result.new_ids:
            logger.debug(f"New object IDs: {list(result.new_ids)}")
        if evicted:
            logger.debug(f"Evicted stale object IDs: {evicted}")

        return AssignmentResult(
            entries=registry.snapshot(),
            matched_ids=result.matched_ids,
            new_ids=result.new_ids,
            evicted_ids=tuple(evicted),
        )

    def _match(
        self,
        detections: Sequence[BoundingBox],
        entries: Mapping[int, BoundingBox],
    ) -> AssignmentResult:
        next_entries: Dict[int, BoundingBox] = dict(entries)
        if not detections:
            return AssignmentResult(
                entries=next_entries, matched_ids=(), new_ids=(), evicted_ids=()
            )

        matched: Dict[int, int] = {}
        if entries:
            matched = self._claim_pairs(detections, entries)
            for object_id, index in matched.items():
                next_entries[object_id] = detections[index]

        claimed = set(matched.values())
        next_id = max(entries) + 1 if entries else 0
        new_ids: List[int] = []
        for index, box in enumerate(detections):
            if index in claimed:
                continue
            next_entries[next_id] = box
            new_ids.append(next_id)
            next_id += 1

        return AssignmentResult(
            entries=next_entries,
            matched_ids=tuple(sorted(matched)),
            new_ids=tuple(new_ids),
            evicted_ids=(),
        )

    def _claim_pairs(
        self,
        detections: Sequence[BoundingBox],
        entries: Mapping[int, BoundingBox],
    ) -> Dict[int, int]:
        ids = sorted(entries)
        existing = np.array([entries[object_id].centroid for object_id in ids], dtype=float)
        incoming = np.array([box.centroid for box in detections], dtype=float)
        distances = np.linalg.norm(existing[:, None, :] - incoming[None, :, :], axis=2)

        pairs: List[Tuple[float, int, int]] = sorted(
            (float(distances[row, col]), ids[row], col)
            for row in range(len(ids))
            for col in range(len(detections))
        )

        matched: Dict[int, int] = {}
        used_detections = set()
        for distance, object_id, index in pairs:
            if len(matched) == len(ids) or len(used_detections) == len(detections):
                break
            if object_id in matched or index in used_detections:
                continue
            if self._max_match_distance_px is not None and distance > self._max_match_distance_px:
                # Pairs are sorted, nothing further can pass the gate
                break
            matched[object_id] = index
            used_detections.add(index)
        return matched
