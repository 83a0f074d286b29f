"""Pinhole projection from pixel boxes to camera and vehicle frame offsets."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Mapping, Tuple

import numpy as np

from contracts import BoundingBox, Position3D
from depth.estimators import DepthEstimator
from exceptions import DepthEstimationError, InvalidGeometryConfigError, UnknownIdentityError


@dataclass(frozen=True)
class FieldOfView:
    horizontal_deg: float
    vertical_deg: float

    def __post_init__(self) -> None:
        for name, angle in (("horizontal", self.horizontal_deg), ("vertical", self.vertical_deg)):
            if not math.isfinite(angle) or not 0.0 < angle < 180.0:
                raise InvalidGeometryConfigError(
                    f"{name} field of view must be in (0, 180) degrees, got {angle}"
                )

    @property
    def half_tangents(self) -> Tuple[float, float]:
        half = np.deg2rad([self.horizontal_deg, self.vertical_deg]) / 2.0
        tan_h, tan_v = np.tan(half)
        return float(tan_h), float(tan_v)


@dataclass(frozen=True)
class CameraRigOffsets:
    """Camera mounting position relative to the vehicle reference point."""

    x_offset: float = 0.0
    y_offset: float = 0.0
    z_offset: float = 0.0

    def __post_init__(self) -> None:
        for value in (self.x_offset, self.y_offset, self.z_offset):
            if not math.isfinite(value):
                raise InvalidGeometryConfigError(f"Rig offsets must be finite, got {value}")


class GeometryModel:
    def __init__(
        self,
        fov: FieldOfView,
        offsets: CameraRigOffsets,
        depth_estimator: DepthEstimator,
    ) -> None:
        self._fov = fov
        self._offsets = offsets
        self._depth_estimator = depth_estimator
        self._tan_h, self._tan_v = fov.half_tangents

    @property
    def fov(self) -> FieldOfView:
        return self._fov

    @property
    def offsets(self) -> CameraRigOffsets:
        return self._offsets

    @property
    def depth_estimator(self) -> DepthEstimator:
        return self._depth_estimator

    def focal_lengths_px(self, frame_width: int, frame_height: int) -> Tuple[float, float]:
        _check_frame(frame_width, frame_height)
        return (frame_width / 2.0) / self._tan_h, (frame_height / 2.0) / self._tan_v

    def position_from_camera(
        self,
        object_id: int,
        entries: Mapping[int, BoundingBox],
        frame_width: int,
        frame_height: int,
    ) -> Position3D:
        _check_frame(frame_width, frame_height)
        if object_id not in entries:
            raise UnknownIdentityError(
                f"Object {object_id} is not being tracked", object_id=object_id
            )
        box = entries[object_id]
        z = float(self._depth_estimator.find_depth(object_id, box))
        if not math.isfinite(z) or z < 0:
            raise DepthEstimationError(
                f"Depth for object {object_id} must be finite and >= 0, got {z}",
                object_id=object_id,
            )

        half_w = frame_width / 2.0
        half_h = frame_height / 2.0
        cx, cy = box.centroid
        x = z * self._tan_h * (cx - half_w) / half_w
        y = z * self._tan_v * (cy - half_h) / half_h
        return Position3D(x=x, y=y, z=z)

    def dist_from_camera(
        self,
        entries: Mapping[int, BoundingBox],
        frame_width: int,
        frame_height: int,
    ) -> Dict[int, Position3D]:
        return {
            object_id: self.position_from_camera(object_id, entries, frame_width, frame_height)
            for object_id in entries
        }

    def dist_from_car(self, camera_positions: Mapping[int, Position3D]) -> Dict[int, Position3D]:
        offsets = self._offsets
        return {
            object_id: position.translated(offsets.x_offset, offsets.y_offset, offsets.z_offset)
            for object_id, position in camera_positions.items()
        }


def _check_frame(frame_width: int, frame_height: int) -> None:
    if frame_width <= 0 or frame_height <= 0:
        raise ValueError(f"Frame dimensions must be positive, got {frame_width}x{frame_height}")
