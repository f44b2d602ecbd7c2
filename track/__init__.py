"""Temporal and feature tracking module."""

from .config import DeltaConfig, OpticalFlowConfig
from .optical_flow import (
    OpticalFlowTracker,
    TrackingState,
    depth_to_tracking_image,
    detect_features,
    propagate_features,
)
from .temporal_delta import TemporalDeltaTracker, TemporalState

__all__ = [
    "DeltaConfig",
    "OpticalFlowConfig",
    "OpticalFlowTracker",
    "TemporalDeltaTracker",
    "TemporalState",
    "TrackingState",
    "depth_to_tracking_image",
    "detect_features",
    "propagate_features",
]
