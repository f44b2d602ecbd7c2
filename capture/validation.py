"""Matrix size verification against sensor resolutions."""

from __future__ import annotations

import numpy as np

from contracts import Resolution, resolution_to_size
from exceptions import InvalidFrameSizeError


def verify_size(matrix: np.ndarray, resolution: Resolution) -> None:
    """Check that ``matrix`` has the canonical dimensions of ``resolution``.

    Raises:
        InvalidFrameSizeError: If height or width differ
    """
    resolution = Resolution(resolution)
    width, height = resolution_to_size(resolution)
    if matrix.ndim < 2:
        raise InvalidFrameSizeError(
            f"Expected a 2-D matrix for {resolution.value}, got shape {matrix.shape}", resolution
        )
    actual_height, actual_width = matrix.shape[:2]
    if actual_height != height or actual_width != width:
        raise InvalidFrameSizeError(
            f"Matrix is {actual_width}x{actual_height}, expected {width}x{height}", resolution
        )
