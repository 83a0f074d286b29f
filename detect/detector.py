"""Detector interface consumed by the tracking pipeline."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from contracts import BoundingBox, Frame


class Detector(ABC):
    @abstractmethod
    def detect(self, frame: Frame) -> List[BoundingBox]:
        """Return the obstacle bounding boxes found in a frame."""
