"""Camera geometry module."""

from .model import CameraRigOffsets, FieldOfView, GeometryModel

__all__ = ["CameraRigOffsets", "FieldOfView", "GeometryModel"]
