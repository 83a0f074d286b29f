"""Configuration loading for the obstacle tracker."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from configs.validator import validate_config_file
from exceptions import ConfigError, InvalidConfigError
from geometry.model import CameraRigOffsets, FieldOfView
from log_config.logger import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "default.yaml"


@dataclass(frozen=True)
class CameraConfig:
    width: int
    height: int
    horizontal_fov_deg: float
    vertical_fov_deg: float

    def field_of_view(self) -> FieldOfView:
        return FieldOfView(
            horizontal_deg=self.horizontal_fov_deg,
            vertical_deg=self.vertical_fov_deg,
        )


@dataclass(frozen=True)
class RigConfig:
    x_offset: float = 0.0
    y_offset: float = 0.0
    z_offset: float = 0.0

    def offsets(self) -> CameraRigOffsets:
        return CameraRigOffsets(
            x_offset=self.x_offset,
            y_offset=self.y_offset,
            z_offset=self.z_offset,
        )


@dataclass(frozen=True)
class TrackingConfig:
    max_misses: Optional[int] = None
    max_match_distance_px: Optional[float] = None
    frame_budget_ms: float = 33.0


@dataclass(frozen=True)
class DepthConfig:
    method: str = "constant"
    constant_depth: float = 10.0
    object_height: Optional[float] = None  # Assumed obstacle height for box_height
    focal_length_px: Optional[float] = None  # Derived from the FOV when unset
    baseline: Optional[float] = None  # Stereo baseline for the stereo method


@dataclass(frozen=True)
class AppConfig:
    camera: CameraConfig
    rig: RigConfig
    tracking: TrackingConfig
    depth: DepthConfig


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> AppConfig:
    """Load and validate configuration from YAML file.

    Args:
        path: Path to configuration file

    Returns:
        Validated AppConfig instance

    Raises:
        ConfigError: If configuration is invalid or cannot be loaded
    """
    logger.info(f"Loading configuration from {path}")
    return config_from_dict(validate_config_file(path))


def config_from_dict(data: dict) -> AppConfig:
    """Build an AppConfig from an already validated dictionary."""
    try:
        camera = CameraConfig(**data["camera"])
        rig = RigConfig(**data["rig"])
        tracking = TrackingConfig(**data["tracking"])
        depth = DepthConfig(**data["depth"])

        # Fail at load time on physically meaningless geometry
        camera.field_of_view()
        rig.offsets()

        config = AppConfig(camera=camera, rig=rig, tracking=tracking, depth=depth)
    except ConfigError:
        raise
    except (KeyError, TypeError, ValueError) as e:
        logger.error(f"Failed to construct configuration objects: {e}")
        raise InvalidConfigError(f"Failed to construct configuration: {e}")

    logger.info(
        f"Configuration loaded successfully: {config.depth.method} depth, "
        f"FOV {camera.horizontal_fov_deg}x{camera.vertical_fov_deg} deg"
    )
    return config
