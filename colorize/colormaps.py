"""Depth-to-RGB mappings expressed as 16-bit lookup tables."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Tuple

import cv2
import numpy as np

DEPTH_LEVELS = 1 << 16
PLAYER_INDEX_BITS = 3
PLAYER_INDEX_MASK = (1 << PLAYER_INDEX_BITS) - 1

DepthToRgb = Callable[[int], Tuple[int, int, int]]


@dataclass(frozen=True)
class DepthColorMap:
    """Precomputed RGB value for every possible 16-bit depth sample."""

    name: str
    table: np.ndarray  # (65536, 3) uint8, RGB order

    def __post_init__(self) -> None:
        if self.table.shape != (DEPTH_LEVELS, 3) or self.table.dtype != np.uint8:
            raise ValueError(
                f"Colormap table must be ({DEPTH_LEVELS}, 3) uint8, got {self.table.shape} {self.table.dtype}"
            )

    @classmethod
    def from_function(cls, fn: DepthToRgb, name: str = "custom") -> "DepthColorMap":
        """Build a table by evaluating a scalar mapping once per sample value."""
        table = np.array([fn(value) for value in range(DEPTH_LEVELS)], dtype=np.uint8)
        return cls(name=name, table=table)

    def lookup(self, depth: np.ndarray) -> np.ndarray:
        return self.table[depth]

    @property
    def brightness(self) -> np.ndarray:
        """Sum of the three channels for every sample value."""
        return self.table.sum(axis=1, dtype=np.uint16)


def kinect_depth_to_rgb(sample: int) -> Tuple[int, int, int]:
    """Shade one packed depth sample, tinted by its player index.

    The upper 13 bits hold depth in millimetres and the low 3 bits the
    player index. Nearer surfaces are brighter; the intensity wraps every
    4095 mm.
    """
    table = _kinect_table(np.array([sample], dtype=np.uint32))
    r, g, b = table[0]
    return int(r), int(g), int(b)


def _kinect_table(values: np.ndarray) -> np.ndarray:
    real_depth = values >> PLAYER_INDEX_BITS
    player = values & PLAYER_INDEX_MASK
    intensity = 255 - ((256 * real_depth // 0x0FFF) & 0xFF)
    half = intensity // 2
    quarter = intensity // 4
    zero = np.zeros_like(intensity)
    full = np.full_like(intensity, 255)

    channels = {
        0: (half, half, half),
        1: (intensity, zero, zero),
        2: (zero, intensity, zero),
        3: (quarter, intensity, intensity),
        4: (intensity, intensity, quarter),
        5: (intensity, quarter, intensity),
        6: (half, half, intensity),
        7: (full - half, full - half, full - half),
    }
    table = np.zeros((len(values), 3), dtype=np.uint8)
    for index, (r, g, b) in channels.items():
        mask = player == index
        table[mask, 0] = r[mask]
        table[mask, 1] = g[mask]
        table[mask, 2] = b[mask]
    return table


def kinect_colormap() -> DepthColorMap:
    values = np.arange(DEPTH_LEVELS, dtype=np.uint32)
    return DepthColorMap(name="kinect", table=_kinect_table(values))


def jet_colormap(min_depth: int = 0, max_depth: int = 4095 << PLAYER_INDEX_BITS) -> DepthColorMap:
    """OpenCV JET ramp stretched across ``[min_depth, max_depth]``."""
    if max_depth <= min_depth:
        raise ValueError(f"max_depth ({max_depth}) must be greater than min_depth ({min_depth})")
    values = np.arange(DEPTH_LEVELS, dtype=np.float32)
    scaled = np.clip((values - min_depth) * (255.0 / (max_depth - min_depth)), 0, 255)
    gray = scaled.astype(np.uint8).reshape(-1, 1)
    bgr = cv2.applyColorMap(gray, cv2.COLORMAP_JET).reshape(-1, 3)
    rgb = np.ascontiguousarray(bgr[:, ::-1])
    return DepthColorMap(name="jet", table=rgb)


COLORMAPS = {
    "kinect": kinect_colormap,
    "jet": jet_colormap,
}


def get_colormap(name: str, **kwargs) -> DepthColorMap:
    try:
        factory = COLORMAPS[name]
    except KeyError:
        raise ValueError(f"Unknown colormap '{name}', expected one of {sorted(COLORMAPS)}") from None
    return factory(**kwargs)
