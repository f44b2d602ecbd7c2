"""Tests for depth colorization and colormaps."""

from __future__ import annotations

import numpy as np
import pytest

from colorize import (
    DepthColorMap,
    colorize_depth,
    count_dark_pixels,
    get_colormap,
    jet_colormap,
    kinect_colormap,
    kinect_depth_to_rgb,
)
from contracts import INVALID_DEPTH
from exceptions import InvalidFrameSizeError


@pytest.fixture(scope="module")
def kinect():
    return kinect_colormap()


def random_depth(shape=(48, 64), invalid_fraction=0.2, seed=7) -> np.ndarray:
    rng = np.random.default_rng(seed)
    depth = rng.integers(0, INVALID_DEPTH, size=shape, dtype=np.uint16)
    depth[rng.random(shape) < invalid_fraction] = INVALID_DEPTH
    return depth


@pytest.mark.parametrize("seed", [0, 1, 2])
def test_sentinel_transparent_and_alpha_pinned(kinect, seed):
    depth = random_depth(seed=seed)
    out = np.full(depth.shape + (4,), 77, dtype=np.uint8)

    colorize_depth(depth, out, kinect)

    invalid = depth == INVALID_DEPTH
    assert invalid.any()
    assert np.all(out[invalid] == 0)
    assert np.all(out[~invalid][:, 3] == 1)


def test_rgb_matches_scalar_mapping(kinect):
    depth = np.array([[0, 8, 2000 << 3, (2000 << 3) | 1, (1500 << 3) | 7]], dtype=np.uint16)
    out = np.zeros((1, 5, 4), dtype=np.uint8)

    colorize_depth(depth, out, kinect)

    for x, sample in enumerate(depth[0]):
        assert tuple(out[0, x, :3]) == kinect_depth_to_rgb(int(sample))


def test_kinect_player_tints():
    # Zero depth is full intensity; player 0 shades gray at half intensity.
    assert kinect_depth_to_rgb(0) == (127, 127, 127)
    assert kinect_depth_to_rgb(1) == (255, 0, 0)
    assert kinect_depth_to_rgb(2) == (0, 255, 0)
    near = kinect_depth_to_rgb(100 << 3)
    far = kinect_depth_to_rgb(3000 << 3)
    assert sum(near) > sum(far)


def test_from_function_builds_full_table():
    colormap = DepthColorMap.from_function(lambda v: (v & 0xFF, (v >> 8) & 0xFF, 5), name="bytes")

    assert colormap.table.shape == (65536, 3)
    assert tuple(colormap.table[0x1234]) == (0x34, 0x12, 5)


def test_table_shape_enforced():
    with pytest.raises(ValueError):
        DepthColorMap(name="bad", table=np.zeros((10, 3), dtype=np.uint8))


def test_jet_colormap_ramps():
    colormap = jet_colormap(0, 1000)

    assert tuple(colormap.table[0]) != tuple(colormap.table[1000])
    assert tuple(colormap.table[1000]) == tuple(colormap.table[60000])


def test_unknown_colormap_rejected():
    with pytest.raises(ValueError, match="Unknown colormap"):
        get_colormap("plasma")


def test_output_shape_mismatch(kinect):
    depth = np.zeros((10, 10), dtype=np.uint16)

    with pytest.raises(InvalidFrameSizeError):
        colorize_depth(depth, np.zeros((10, 11, 4), dtype=np.uint8), kinect)
    with pytest.raises(InvalidFrameSizeError):
        colorize_depth(depth, np.zeros((10, 10, 3), dtype=np.uint8), kinect)


def test_count_dark_pixels_skips_invalid():
    colormap = DepthColorMap.from_function(lambda v: (0, 0, 0) if v >= 100 else (255, 255, 255))
    depth = np.array([[0, 50, 100, 200], [INVALID_DEPTH, 99, 1000, INVALID_DEPTH]], dtype=np.uint16)

    assert count_dark_pixels(depth, colormap) == 3


def test_zero_delta_is_not_dark(kinect):
    depth = np.zeros((20, 20), dtype=np.uint16)

    assert count_dark_pixels(depth, kinect) == 0
