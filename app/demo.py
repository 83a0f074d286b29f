"""Minimal simulated tracking demo."""

from __future__ import annotations

import argparse
from pathlib import Path

from app.tracking_pipeline import build_pipeline
from configs.settings import DEFAULT_CONFIG_PATH, load_config
from contracts import BoundingBox, Frame
from detect.simple_detector import ReplayDetector
from log_config.logger import get_logger

logger = get_logger(__name__)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run a simulated obstacle tracking demo.")
    parser.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH)
    parser.add_argument("--frames", type=int, default=5)
    parser.add_argument("--step-px", type=float, default=8.0, help="Per-frame obstacle drift.")
    return parser.parse_args()


def scripted_boxes(frames: int, width: int, height: int, step_px: float) -> dict:
    """Two obstacles drifting toward each other, a third appearing mid-run."""
    script = {}
    for index in range(frames):
        boxes = [
            BoundingBox(x=width * 0.2 + index * step_px, y=height * 0.5, width=60, height=120),
            BoundingBox(x=width * 0.7 - index * step_px, y=height * 0.4, width=80, height=160),
        ]
        if index >= frames // 2:
            boxes.append(BoundingBox(x=width * 0.45, y=height * 0.6, width=40, height=90))
        script[index] = boxes
    return script


def main() -> None:
    args = parse_args()
    config = load_config(args.config)
    width, height = config.camera.width, config.camera.height

    detector = ReplayDetector(scripted_boxes(args.frames, width, height, args.step_px))
    pipeline = build_pipeline(config, detector)

    frames = (
        Frame(
            camera_id="front",
            frame_index=index,
            t_capture_monotonic_ns=index * 33_000_000,
            image=None,
            width=width,
            height=height,
        )
        for index in range(args.frames)
    )
    for result in pipeline.run(frames):
        for object_id, position in sorted(result.vehicle_positions.items()):
            logger.info(
                f"frame={result.frame_index} id={object_id} "
                f"x={position.x:.2f} y={position.y:.2f} z={position.z:.2f}"
            )


if __name__ == "__main__":
    main()
