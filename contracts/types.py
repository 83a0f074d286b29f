"""Core data contracts for detection, tracking, and localization."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class Frame:
    camera_id: str
    frame_index: int
    t_capture_monotonic_ns: int
    image: Any
    width: int
    height: int


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned pixel rectangle; (x, y) is the top-left corner."""

    x: float
    y: float
    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(
                f"Bounding box extent must be non-negative, got {self.width}x{self.height}"
            )

    @classmethod
    def from_corners(cls, x1: float, y1: float, x2: float, y2: float) -> "BoundingBox":
        return cls(x=x1, y=y1, width=x2 - x1, height=y2 - y1)

    @property
    def centroid(self) -> Tuple[float, float]:
        return (self.x + self.width / 2.0, self.y + self.height / 2.0)


@dataclass(frozen=True)
class Position3D:
    x: float
    y: float
    z: float

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def translated(self, dx: float, dy: float, dz: float) -> "Position3D":
        return Position3D(x=self.x + dx, y=self.y + dy, z=self.z + dz)


@dataclass(frozen=True)
class FrameResult:
    frame_index: int
    entries: Dict[int, BoundingBox]
    camera_positions: Dict[int, Position3D]
    vehicle_positions: Dict[int, Position3D]
    evicted_ids: Tuple[int, ...] = field(default_factory=tuple)
