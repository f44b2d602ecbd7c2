"""Holds the latest sensor buffers and converts them to OpenCV matrices.

Every public method reports a :class:`FrameStatus` (or a result object that
carries one) instead of raising, so callers can treat "no frame yet" as a
normal condition. Internally the conversion functions raise
:class:`FrameError` subclasses, which are mapped to statuses here.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from capture.decoders import (
    allocate_color_matrix,
    allocate_depth_matrix,
    decode_color_buffer,
    decode_depth_buffer,
)
from capture.validation import verify_size
from colorize.colorizer import colorize_depth
from colorize.colormaps import DepthColorMap, kinect_colormap
from contracts import (
    DeltaFrameResult,
    FrameStatus,
    RawFrameBuffer,
    Resolution,
    TrackingResult,
)
from exceptions import FrameError
from log_config.logger import get_logger
from track.optical_flow import OpticalFlowTracker
from track.temporal_delta import TemporalDeltaTracker

logger = get_logger(__name__)


def _empty(resolution: Resolution) -> RawFrameBuffer:
    return RawFrameBuffer(data=b"", pitch=0, resolution=resolution)


class FrameHelper:
    def __init__(
        self,
        depth_resolution: Resolution = Resolution.RES_320x240,
        color_resolution: Resolution = Resolution.RES_640x480,
        colormap: Optional[DepthColorMap] = None,
    ) -> None:
        self._depth_resolution = Resolution(depth_resolution)
        self._color_resolution = Resolution(color_resolution)
        self._colormap = colormap or kinect_colormap()
        self._depth_buffer = _empty(self._depth_resolution)
        self._color_buffer = _empty(self._color_resolution)

    @property
    def depth_resolution(self) -> Resolution:
        return self._depth_resolution

    @property
    def color_resolution(self) -> Resolution:
        return self._color_resolution

    @property
    def colormap(self) -> DepthColorMap:
        return self._colormap

    def update_depth_frame(self, buffer: RawFrameBuffer) -> None:
        self._depth_buffer = buffer
        self._depth_resolution = buffer.resolution

    def update_color_frame(self, buffer: RawFrameBuffer) -> None:
        self._color_buffer = buffer
        self._color_resolution = buffer.resolution

    def allocate_depth_matrix(self) -> np.ndarray:
        return allocate_depth_matrix(*self._depth_resolution.size)

    def allocate_color_matrix(self) -> np.ndarray:
        return allocate_color_matrix(*self._color_resolution.size)

    def allocate_depth_rgba_matrix(self) -> np.ndarray:
        return allocate_color_matrix(*self._depth_resolution.size)

    def get_color_data(self, out: np.ndarray) -> FrameStatus:
        """Copy the latest color frame into ``out`` (H x W x 4, uint8)."""
        try:
            decode_color_buffer(self._color_buffer, out)
        except FrameError as e:
            logger.debug(f"Color frame unavailable: {e}")
            return e.status
        return FrameStatus.SUCCESS

    def get_depth_data(self, out: np.ndarray) -> FrameStatus:
        """Copy the latest depth frame into ``out`` (H x W, uint16)."""
        try:
            decode_depth_buffer(self._depth_buffer, out)
        except FrameError as e:
            logger.debug(f"Depth frame unavailable: {e}")
            return e.status
        return FrameStatus.SUCCESS

    def get_depth_data_as_rgba(self, out: np.ndarray) -> FrameStatus:
        """Colorize the latest depth frame into ``out``."""
        depth = self.allocate_depth_matrix()
        status = self.get_depth_data(depth)
        if not status.ok:
            return status
        try:
            colorize_depth(depth, out, self._colormap)
        except FrameError as e:
            logger.debug(f"Depth colorization rejected: {e}")
            return e.status
        return FrameStatus.SUCCESS

    def get_depth_delta_as_rgba(
        self,
        out: np.ndarray,
        tracker: TemporalDeltaTracker,
        depth: Optional[np.ndarray] = None,
    ) -> DeltaFrameResult:
        """Feed the latest depth frame to ``tracker`` and colorize its combined delta.

        Pass ``depth`` when the frame has already been decoded with
        :meth:`get_depth_data`; the buffer is then not read again.
        """
        if depth is None:
            depth = self.allocate_depth_matrix()
            status = self.get_depth_data(depth)
            if not status.ok:
                return DeltaFrameResult(status=status, warmed_up=tracker.state.warmed_up)
        try:
            return tracker.colorize(depth, out)
        except FrameError as e:
            logger.debug(f"Delta colorization rejected: {e}")
            return DeltaFrameResult(status=e.status, warmed_up=tracker.state.warmed_up)

    def track_depth_features(
        self, tracker: OpticalFlowTracker, depth: Optional[np.ndarray] = None
    ) -> TrackingResult:
        """Run ``tracker`` on an 8-bit cast of the latest (or given) depth frame."""
        if depth is None:
            depth = self.allocate_depth_matrix()
            status = self.get_depth_data(depth)
            if not status.ok:
                return TrackingResult(status=status, points=tracker.points)
        return tracker.update_depth(depth)

    def verify_size(self, matrix: np.ndarray, resolution: Resolution) -> FrameStatus:
        try:
            verify_size(matrix, resolution)
        except FrameError as e:
            logger.debug(f"Size check failed: {e}")
            return e.status
        return FrameStatus.SUCCESS
