"""Capture module."""

from .decoders import (
    allocate_color_matrix,
    allocate_depth_matrix,
    decode_color_buffer,
    decode_depth_buffer,
)
from .depth_sensor import DepthSensor
from .simulated_sensor import SimulatedDepthSensor, pack_color, pack_depth
from .validation import verify_size

__all__ = [
    "DepthSensor",
    "SimulatedDepthSensor",
    "allocate_color_matrix",
    "allocate_depth_matrix",
    "decode_color_buffer",
    "decode_depth_buffer",
    "pack_color",
    "pack_depth",
    "verify_size",
]
