"""Colorization module."""

from .colorizer import DARK_PIXEL_THRESHOLD, colorize_depth, count_dark_pixels
from .colormaps import (
    DepthColorMap,
    get_colormap,
    jet_colormap,
    kinect_colormap,
    kinect_depth_to_rgb,
)

__all__ = [
    "DARK_PIXEL_THRESHOLD",
    "DepthColorMap",
    "colorize_depth",
    "count_dark_pixels",
    "get_colormap",
    "jet_colormap",
    "kinect_colormap",
    "kinect_depth_to_rgb",
]
