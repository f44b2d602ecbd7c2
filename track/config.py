from __future__ import annotations

from dataclasses import dataclass

from colorize.colorizer import DARK_PIXEL_THRESHOLD


@dataclass(frozen=True)
class DeltaConfig:
    # False keeps the previous frame frozen at its initial snapshot, matching
    # the legacy frame helper output.
    advance_previous: bool = True
    dark_threshold: int = DARK_PIXEL_THRESHOLD


@dataclass(frozen=True)
class OpticalFlowConfig:
    max_corners: int = 20
    quality_level: float = 0.05
    min_distance: float = 5.0
    block_size: int = 3
    win_size: int = 15
    max_level: int = 2
    criteria_max_iter: int = 10
    criteria_eps: float = 0.03
    drop_lost_features: bool = False
    gray_scale: float = 1.0 / 256.0
    downsample: int = 1
