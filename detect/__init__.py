"""Detection module."""

from .detector import Detector
from .simple_detector import CenterDetector, ReplayDetector

__all__ = [
    "Detector",
    "CenterDetector",
    "ReplayDetector",
]
