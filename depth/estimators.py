"""Depth estimation policies for tracked obstacles."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Callable, Dict, Mapping, Optional, Tuple

from contracts import BoundingBox
from exceptions import DepthEstimationError, InvalidConfigError


class DepthEstimator(ABC):
    @abstractmethod
    def find_depth(self, object_id: int, box: BoundingBox) -> float:
        """Return the distance along the optical axis to a tracked object."""


class ConstantDepthEstimator(DepthEstimator):
    """Reports one fixed depth for every object, e.g. from a single range sensor."""

    def __init__(self, depth: float) -> None:
        if not math.isfinite(depth) or depth < 0:
            raise InvalidConfigError(f"Constant depth must be finite and >= 0, got {depth}")
        self._depth = float(depth)

    def find_depth(self, object_id: int, box: BoundingBox) -> float:
        return self._depth


class BoxHeightDepthEstimator(DepthEstimator):
    """Monocular estimate from an assumed real-world object height.

    Uses the pinhole relation ``z = f * H / h`` where ``h`` is the box
    height in pixels.
    """

    def __init__(self, object_height: float, focal_length_px: float) -> None:
        if not object_height > 0:
            raise InvalidConfigError(f"object_height must be positive, got {object_height}")
        if not focal_length_px > 0:
            raise InvalidConfigError(f"focal_length_px must be positive, got {focal_length_px}")
        self._object_height = float(object_height)
        self._focal_length_px = float(focal_length_px)

    def find_depth(self, object_id: int, box: BoundingBox) -> float:
        height_px = max(float(box.height), 1.0)
        return self._focal_length_px * self._object_height / height_px


class StereoDisparityDepthEstimator(DepthEstimator):
    """Depth from disparities measured by an external stereo matcher.

    Measurements are keyed by the detection box they belong to, so a box can
    be measured before the assigner has given it an ID. Boxes come either
    from :meth:`update_disparities` or from ``disparity_source``, a callable
    the stereo matcher provides that returns ``None`` for unmatched boxes.
    A tracked object carried forward on its stale box keeps its last depth.
    """

    MIN_DISPARITY_PX = 0.5

    def __init__(
        self,
        baseline: float,
        focal_length_px: float,
        disparity_source: Optional[Callable[[BoundingBox], Optional[float]]] = None,
    ) -> None:
        if not baseline > 0:
            raise InvalidConfigError(f"baseline must be positive, got {baseline}")
        if not focal_length_px > 0:
            raise InvalidConfigError(f"focal_length_px must be positive, got {focal_length_px}")
        self._baseline = float(baseline)
        self._focal_length_px = float(focal_length_px)
        self._disparity_source = disparity_source
        self._disparities: Dict[BoundingBox, float] = {}
        self._last_depths: Dict[int, Tuple[BoundingBox, float]] = {}

    def update_disparities(self, disparities: Mapping[BoundingBox, float]) -> None:
        """Replace the per-box disparity table with this frame's measurements."""
        self._disparities = {box: float(value) for box, value in disparities.items()}

    def find_depth(self, object_id: int, box: BoundingBox) -> float:
        disparity = self._disparities.get(box)
        if disparity is None and self._disparity_source is not None:
            disparity = self._disparity_source(box)
        if disparity is None:
            last = self._last_depths.get(object_id)
            if last is not None and last[0] == box:
                return last[1]
            raise DepthEstimationError(
                f"No disparity measured for object {object_id} at {box}", object_id=object_id
            )
        depth = self._focal_length_px * self._baseline / max(abs(disparity), self.MIN_DISPARITY_PX)
        self._last_depths[object_id] = (box, depth)
        return depth
