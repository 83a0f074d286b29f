"""Custom exception classes for the obstacle tracker."""

from __future__ import annotations

from typing import Optional


class ObstacleTrackerError(Exception):
    """Base exception for all obstacle tracker errors."""

    pass


class ConfigError(ObstacleTrackerError):
    """Base exception for configuration errors."""

    pass


class InvalidConfigError(ConfigError):
    """Raised when configuration file is invalid or corrupted."""

    pass


class ConfigValidationError(ConfigError):
    """Raised when configuration fails schema validation."""

    def __init__(self, message: str, validation_errors: Optional[list] = None):
        self.validation_errors = validation_errors or []
        super().__init__(message)


class InvalidGeometryConfigError(ConfigError):
    """Raised when field-of-view or rig offsets are physically meaningless."""

    pass


class TrackingError(ObstacleTrackerError):
    """Base exception for identity tracking errors."""

    pass


class UnknownIdentityError(TrackingError):
    """Raised when a query names an object ID that is not being tracked."""

    def __init__(self, message: str, object_id: Optional[int] = None):
        self.object_id = object_id
        super().__init__(message)


class DepthEstimationError(ObstacleTrackerError):
    """Raised when a depth estimator returns an unusable value."""

    def __init__(self, message: str, object_id: Optional[int] = None):
        self.object_id = object_id
        super().__init__(message)


class DetectionError(ObstacleTrackerError):
    """Raised when the external detector fails on a frame."""

    pass
