"""Depth estimation module."""

from .estimators import (
    BoxHeightDepthEstimator,
    ConstantDepthEstimator,
    DepthEstimator,
    StereoDisparityDepthEstimator,
)

__all__ = [
    "BoxHeightDepthEstimator",
    "ConstantDepthEstimator",
    "DepthEstimator",
    "StereoDisparityDepthEstimator",
]
