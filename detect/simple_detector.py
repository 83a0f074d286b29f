"""Simple detector implementations for simulated pipeline runs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping, Sequence

from contracts import BoundingBox, Frame

from .detector import Detector


class ReplayDetector(Detector):
    """Replays scripted boxes keyed by frame index."""

    def __init__(self, boxes_by_frame: Mapping[int, Sequence[BoundingBox]]) -> None:
        self._boxes_by_frame: Dict[int, List[BoundingBox]] = {
            int(index): list(boxes) for index, boxes in boxes_by_frame.items()
        }

    def detect(self, frame: Frame) -> List[BoundingBox]:
        return list(self._boxes_by_frame.get(frame.frame_index, []))


@dataclass(frozen=True)
class CenterDetector(Detector):
    box_width: float = 40.0
    box_height: float = 40.0

    def detect(self, frame: Frame) -> List[BoundingBox]:
        return [
            BoundingBox(
                x=(frame.width - self.box_width) / 2.0,
                y=(frame.height - self.box_height) / 2.0,
                width=self.box_width,
                height=self.box_height,
            )
        ]
