"""Simulated depth sensor for pipeline testing."""

from __future__ import annotations

from typing import Callable, Optional

import numpy as np

from contracts import (
    COLOR_BYTES_PER_PIXEL,
    DEPTH_BYTES_PER_PIXEL,
    RawFrameBuffer,
    Resolution,
)

from .depth_sensor import DepthSensor

DepthGenerator = Callable[[int, int, int], np.ndarray]


def moving_box_depth(frame_index: int, width: int, height: int) -> np.ndarray:
    """Flat wall at 2000 mm with a closer box sliding left to right."""
    depth = np.full((height, width), 2000 << 3, dtype=np.uint16)
    box = max(width // 8, 2)
    x0 = (frame_index * 4) % max(width - box, 1)
    y0 = height // 2 - box // 2
    depth[y0 : y0 + box, x0 : x0 + box] = 900 << 3
    return depth


class SimulatedDepthSensor(DepthSensor):
    """Emits pitched depth/color buffers the way a real sensor driver would.

    Each row is padded with ``row_padding`` bytes so consumers exercise
    the pitch path. Until :meth:`open` is called both streams report a
    pitch of zero.
    """

    def __init__(
        self,
        depth_resolution: Resolution = Resolution.RES_320x240,
        color_resolution: Resolution = Resolution.RES_640x480,
        row_padding: int = 16,
        generator: Optional[DepthGenerator] = None,
    ) -> None:
        self._depth_resolution = Resolution(depth_resolution)
        self._color_resolution = Resolution(color_resolution)
        self._row_padding = row_padding
        self._generator = generator or moving_box_depth
        self._frame_index = 0
        self._open = False

    @property
    def frame_index(self) -> int:
        return self._frame_index

    def open(self) -> None:
        self._open = True

    def read_depth(self) -> RawFrameBuffer:
        if not self._open:
            return RawFrameBuffer(data=b"", pitch=0, resolution=self._depth_resolution)
        width, height = self._depth_resolution.size
        self._frame_index += 1
        depth = self._generator(self._frame_index, width, height)
        return pack_depth(depth, self._depth_resolution, self._row_padding)

    def read_color(self) -> RawFrameBuffer:
        if not self._open:
            return RawFrameBuffer(data=b"", pitch=0, resolution=self._color_resolution)
        width, height = self._color_resolution.size
        # Dark blue-gray BGRX pattern
        image = np.zeros((height, width, COLOR_BYTES_PER_PIXEL), dtype=np.uint8)
        image[:, :, 0] = 40
        image[:, :, 1] = 30
        image[:, :, 2] = 20
        image[:, :, 3] = 255
        return _pack(image.reshape(height, width * COLOR_BYTES_PER_PIXEL),
                     self._row_padding, self._color_resolution)

    def close(self) -> None:
        self._open = False


def _pack(rows: np.ndarray, padding: int, resolution: Resolution) -> RawFrameBuffer:
    height, row_bytes = rows.shape
    pitch = row_bytes + padding
    padded = np.zeros((height, pitch), dtype=np.uint8)
    padded[:, :row_bytes] = rows
    return RawFrameBuffer(data=padded.tobytes(), pitch=pitch, resolution=resolution)


def pack_depth(depth: np.ndarray, resolution: Resolution, padding: int = 0) -> RawFrameBuffer:
    """Pack a dense depth matrix into a pitched raw buffer."""
    height, width = depth.shape
    rows = np.ascontiguousarray(depth, dtype="<u2").view(np.uint8).reshape(height, width * DEPTH_BYTES_PER_PIXEL)
    return _pack(rows, padding, Resolution(resolution))


def pack_color(image: np.ndarray, resolution: Resolution, padding: int = 0) -> RawFrameBuffer:
    """Pack a dense 4-channel image into a pitched raw buffer."""
    height, width = image.shape[:2]
    rows = np.ascontiguousarray(image, dtype=np.uint8).reshape(height, width * COLOR_BYTES_PER_PIXEL)
    return _pack(rows, padding, Resolution(resolution))
