"""Per-frame orchestration: detection, identity assignment, and localization."""

from __future__ import annotations

import time
from typing import Callable, Iterable, Iterator, Optional, Sequence

from configs.settings import AppConfig
from contracts import BoundingBox, Frame, FrameResult
from depth.estimators import (
    BoxHeightDepthEstimator,
    ConstantDepthEstimator,
    DepthEstimator,
    StereoDisparityDepthEstimator,
)
from detect.detector import Detector
from exceptions import DetectionError, InvalidConfigError, ObstacleTrackerError
from geometry.model import GeometryModel
from log_config.logger import get_logger, log_performance
from track.assigner import IdentityAssigner
from track.registry import IdentityRegistry
from track.tracker import Tracker

logger = get_logger(__name__)


class TrackingPipeline:
    """Runs one tracking session over a sequence of frames.

    The pipeline owns its :class:`IdentityRegistry` exclusively. Each frame
    is processed to completion (detect, assign, localize) before the next
    one starts, and the registry is replaced exactly once per frame.
    """

    def __init__(
        self,
        detector: Detector,
        assigner: Tracker,
        geometry: GeometryModel,
        registry: Optional[IdentityRegistry] = None,
        frame_budget_ms: float = 33.0,
    ) -> None:
        self._detector = detector
        self._assigner = assigner
        self._geometry = geometry
        self._registry = registry if registry is not None else IdentityRegistry()
        self._frame_budget_ms = frame_budget_ms
        self._frames_processed = 0

    @property
    def registry(self) -> IdentityRegistry:
        return self._registry

    @property
    def geometry(self) -> GeometryModel:
        return self._geometry

    @property
    def frames_processed(self) -> int:
        return self._frames_processed

    def reset(self) -> None:
        """Start a new session with an empty registry."""
        logger.info(f"Resetting tracking session after {self._frames_processed} frames")
        self._registry = IdentityRegistry()
        self._frames_processed = 0

    def step(self, frame: Frame) -> FrameResult:
        try:
            detections = self._detector.detect(frame)
        except ObstacleTrackerError:
            raise
        except Exception as e:
            logger.error(f"Detection failed on frame {frame.frame_index}: {type(e).__name__}: {e}")
            raise DetectionError(f"Detector failed on frame {frame.frame_index}: {e}") from e
        return self.process(detections, frame.width, frame.height, frame_index=frame.frame_index)

    def process(
        self,
        detections: Sequence[BoundingBox],
        frame_width: int,
        frame_height: int,
        frame_index: Optional[int] = None,
    ) -> FrameResult:
        start = time.perf_counter()
        if frame_index is None:
            frame_index = self._frames_processed

        # Work on a copy so a failed frame leaves the session state untouched
        candidate = self._registry.copy()
        assignment = self._assigner.update(detections, candidate)
        try:
            camera_positions = self._geometry.dist_from_camera(
                candidate.entries, frame_width, frame_height
            )
        except ObstacleTrackerError as e:
            logger.error(f"Localization failed on frame {frame_index}: {e}")
            raise
        vehicle_positions = self._geometry.dist_from_car(camera_positions)
        self._registry = candidate
        self._frames_processed += 1

        elapsed_ms = (time.perf_counter() - start) * 1000.0
        log_performance(f"frame {frame_index} tracking", elapsed_ms, self._frame_budget_ms)
        logger.debug(
            f"frame={frame_index} detections={len(detections)} tracked={len(assignment.entries)} "
            f"new={list(assignment.new_ids)} evicted={list(assignment.evicted_ids)}"
        )

        return FrameResult(
            frame_index=frame_index,
            entries=assignment.entries,
            camera_positions=camera_positions,
            vehicle_positions=vehicle_positions,
            evicted_ids=assignment.evicted_ids,
        )

    def run(self, frames: Iterable[Frame]) -> Iterator[FrameResult]:
        for frame in frames:
            yield self.step(frame)


def build_depth_estimator(
    config: AppConfig,
    disparity_source: Optional[Callable[[BoundingBox], Optional[float]]] = None,
) -> DepthEstimator:
    depth = config.depth
    fov = config.camera.field_of_view()
    tan_h, tan_v = fov.half_tangents

    if depth.method == "constant":
        return ConstantDepthEstimator(depth.constant_depth)
    if depth.method == "box_height":
        if depth.object_height is None:
            raise InvalidConfigError("depth.object_height is required for box_height depth")
        focal = depth.focal_length_px or (config.camera.height / 2.0) / tan_v
        return BoxHeightDepthEstimator(depth.object_height, focal)
    if depth.method == "stereo":
        if depth.baseline is None:
            raise InvalidConfigError("depth.baseline is required for stereo depth")
        focal = depth.focal_length_px or (config.camera.width / 2.0) / tan_h
        return StereoDisparityDepthEstimator(depth.baseline, focal, disparity_source=disparity_source)
    raise InvalidConfigError(f"Unsupported depth method: {depth.method}")


def build_pipeline(
    config: AppConfig,
    detector: Detector,
    depth_estimator: Optional[DepthEstimator] = None,
    disparity_source: Optional[Callable[[BoundingBox], Optional[float]]] = None,
) -> TrackingPipeline:
    """Wire a pipeline from configuration.

    A custom depth estimator overrides the configured one. ``disparity_source``
    feeds per-box disparities to the stereo depth method.
    """
    geometry = GeometryModel(
        fov=config.camera.field_of_view(),
        offsets=config.rig.offsets(),
        depth_estimator=depth_estimator or build_depth_estimator(config, disparity_source),
    )
    assigner = IdentityAssigner(
        max_misses=config.tracking.max_misses,
        max_match_distance_px=config.tracking.max_match_distance_px,
    )
    logger.info(
        f"Tracking pipeline ready: depth={type(geometry.depth_estimator).__name__} "
        f"max_misses={config.tracking.max_misses}"
    )
    return TrackingPipeline(
        detector=detector,
        assigner=assigner,
        geometry=geometry,
        frame_budget_ms=config.tracking.frame_budget_ms,
    )
