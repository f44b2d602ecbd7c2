"""Per-pixel depth colorization into RGBA matrices."""

from __future__ import annotations

import numpy as np

from colorize.colormaps import DepthColorMap
from contracts import COLOR_CHANNELS, COLOR_DTYPE, INVALID_DEPTH
from exceptions import InvalidFrameSizeError

VALID_ALPHA = 1
DARK_PIXEL_THRESHOLD = 127 * 3


def check_rgba_output(depth: np.ndarray, out: np.ndarray) -> None:
    expected = depth.shape + (COLOR_CHANNELS,)
    if out.shape != expected or out.dtype != COLOR_DTYPE:
        raise InvalidFrameSizeError(
            f"RGBA output {out.shape}/{out.dtype} does not match depth {depth.shape}"
        )


def colorize_depth(depth: np.ndarray, out: np.ndarray, colormap: DepthColorMap) -> np.ndarray:
    """Write ``colormap(depth)`` into ``out`` as RGBA.

    Invalid samples become (0, 0, 0, 0); every other pixel gets the mapped
    RGB with alpha pinned to 1.
    """
    check_rgba_output(depth, out)
    out[..., :3] = colormap.lookup(depth)
    out[..., 3] = VALID_ALPHA
    out[depth == INVALID_DEPTH] = 0
    return out


def count_dark_pixels(
    depth: np.ndarray,
    colormap: DepthColorMap,
    threshold: int = DARK_PIXEL_THRESHOLD,
) -> int:
    """Count valid pixels whose colorized R+G+B falls below ``threshold``."""
    dark = colormap.brightness[depth] < threshold
    dark &= depth != INVALID_DEPTH
    return int(np.count_nonzero(dark))
