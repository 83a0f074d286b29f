"""Shared data contracts for obstacle tracking."""

from .types import (
    BoundingBox,
    Frame,
    FrameResult,
    Position3D,
)

__all__ = [
    "BoundingBox",
    "Frame",
    "FrameResult",
    "Position3D",
]
