"""Shared data contracts for depth frame conversion and tracking."""

from .types import (
    COLOR_BYTES_PER_PIXEL,
    COLOR_CHANNELS,
    COLOR_DTYPE,
    DEPTH_BYTES_PER_PIXEL,
    DEPTH_DTYPE,
    INVALID_DEPTH,
    DeltaFrameResult,
    FrameStatus,
    RawFrameBuffer,
    Resolution,
    TrackingResult,
    resolution_to_size,
)

__all__ = [
    "COLOR_BYTES_PER_PIXEL",
    "COLOR_CHANNELS",
    "COLOR_DTYPE",
    "DEPTH_BYTES_PER_PIXEL",
    "DEPTH_DTYPE",
    "INVALID_DEPTH",
    "DeltaFrameResult",
    "FrameStatus",
    "RawFrameBuffer",
    "Resolution",
    "TrackingResult",
    "resolution_to_size",
]
