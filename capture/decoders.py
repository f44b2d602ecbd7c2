"""Copy pitched sensor buffers into dense numpy matrices.

Row pitch handling lives here and nowhere else: the decoders build a strided
view over the raw bytes and copy it into the caller's dense matrix, so every
later stage works with plain contiguous arrays.
"""

from __future__ import annotations

import numpy as np

from contracts import (
    COLOR_BYTES_PER_PIXEL,
    COLOR_CHANNELS,
    COLOR_DTYPE,
    DEPTH_BYTES_PER_PIXEL,
    DEPTH_DTYPE,
    RawFrameBuffer,
)
from exceptions import InvalidFrameSizeError, NoFrameDataError


def _pitched_view(
    buffer: RawFrameBuffer, dtype: np.dtype, bytes_per_pixel: int, channels: int
) -> np.ndarray:
    if not buffer.has_data:
        raise NoFrameDataError("No frame data available (row pitch is 0)", buffer.resolution)

    width, height = buffer.width, buffer.height
    row_bytes = width * bytes_per_pixel
    if buffer.pitch < row_bytes:
        raise InvalidFrameSizeError(
            f"Row pitch {buffer.pitch} is smaller than row size {row_bytes} for {width}x{height}",
            buffer.resolution,
        )
    # The last row does not need trailing padding.
    required = buffer.pitch * (height - 1) + row_bytes
    if len(buffer.data) < required:
        raise InvalidFrameSizeError(
            f"Buffer holds {len(buffer.data)} bytes, need {required} for {width}x{height} "
            f"at pitch {buffer.pitch}",
            buffer.resolution,
        )

    item = np.dtype(dtype).itemsize
    if channels == 1:
        shape = (height, width)
        strides = (buffer.pitch, item)
    else:
        shape = (height, width, channels)
        strides = (buffer.pitch, item * channels, item)
    return np.ndarray(shape=shape, dtype=dtype, buffer=buffer.data, strides=strides)


def _check_output(out: np.ndarray, shape: tuple, dtype: np.dtype, buffer: RawFrameBuffer) -> None:
    if out.shape != shape or out.dtype != dtype:
        raise InvalidFrameSizeError(
            f"Output matrix {out.shape}/{out.dtype} does not match expected {shape}/{np.dtype(dtype)}",
            buffer.resolution,
        )


def decode_depth_buffer(buffer: RawFrameBuffer, out: np.ndarray) -> np.ndarray:
    """Copy a pitched little-endian 16-bit depth buffer into ``out``.

    Args:
        buffer: Raw depth buffer borrowed from the sensor
        out: Caller-allocated ``(height, width)`` uint16 matrix

    Returns:
        ``out``, filled in place

    Raises:
        NoFrameDataError: If the buffer pitch is zero; ``out`` is untouched
        InvalidFrameSizeError: If the buffer or ``out`` has the wrong size
    """
    view = _pitched_view(buffer, np.dtype("<u2"), DEPTH_BYTES_PER_PIXEL, 1)
    _check_output(out, (buffer.height, buffer.width), np.dtype(DEPTH_DTYPE), buffer)
    np.copyto(out, view)
    return out


def decode_color_buffer(buffer: RawFrameBuffer, out: np.ndarray) -> np.ndarray:
    """Copy a pitched 4-byte-per-pixel color buffer into ``out``.

    Channel order is preserved byte for byte (B, G, R, X for the usual
    sensor color stream).

    Raises:
        NoFrameDataError: If the buffer pitch is zero; ``out`` is untouched
        InvalidFrameSizeError: If the buffer or ``out`` has the wrong size
    """
    view = _pitched_view(buffer, np.dtype(COLOR_DTYPE), COLOR_BYTES_PER_PIXEL, COLOR_CHANNELS)
    _check_output(out, (buffer.height, buffer.width, COLOR_CHANNELS), np.dtype(COLOR_DTYPE), buffer)
    np.copyto(out, view)
    return out


def allocate_depth_matrix(width: int, height: int) -> np.ndarray:
    return np.zeros((height, width), dtype=DEPTH_DTYPE)


def allocate_color_matrix(width: int, height: int) -> np.ndarray:
    return np.zeros((height, width, COLOR_CHANNELS), dtype=COLOR_DTYPE)
