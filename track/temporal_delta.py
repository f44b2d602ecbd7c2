"""Difference-of-differences motion image over a fixed frame cadence."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import cv2
import numpy as np

from colorize.colorizer import check_rgba_output, colorize_depth, count_dark_pixels
from colorize.colormaps import DepthColorMap, kinect_colormap
from contracts import DEPTH_DTYPE, DeltaFrameResult, FrameStatus
from exceptions import InvalidFrameSizeError
from log_config.logger import get_logger
from track.config import DeltaConfig

logger = get_logger(__name__)

SHORT_CADENCE = 2
LONG_CADENCE = 4


@dataclass
class TemporalState:
    """Rolling snapshots for one depth channel.

    ``delta_1`` is refreshed every second frame and ``delta_2`` every fourth.
    Both start as zeros, so output before the first ``delta_2`` refresh is
    well defined but carries no motion information.
    """

    frame_count: int = 0
    frames_seen: int = 0
    delta_1: Optional[np.ndarray] = None
    delta_2: Optional[np.ndarray] = None
    previous: Optional[np.ndarray] = None
    delta_1_updates: int = 0
    delta_2_updates: int = 0

    @property
    def shape(self) -> Optional[tuple[int, int]]:
        return None if self.previous is None else self.previous.shape

    @property
    def warmed_up(self) -> bool:
        return self.delta_2_updates > 0

    def reset(self) -> None:
        self.frame_count = 0
        self.frames_seen = 0
        self.delta_1 = None
        self.delta_2 = None
        self.previous = None
        self.delta_1_updates = 0
        self.delta_2_updates = 0

    def allocate(self, shape: tuple[int, int]) -> None:
        self.delta_1 = np.zeros(shape, dtype=DEPTH_DTYPE)
        self.delta_2 = np.zeros(shape, dtype=DEPTH_DTYPE)
        self.previous = np.zeros(shape, dtype=DEPTH_DTYPE)


class TemporalDeltaTracker:
    """Turns a depth stream into a combined delta image plus an anomaly count.

    Subtraction saturates at zero the way unsigned 16-bit OpenCV arithmetic
    does, so only increases in depth (surfaces moving away) register.
    """

    def __init__(
        self,
        config: Optional[DeltaConfig] = None,
        colormap: Optional[DepthColorMap] = None,
        state: Optional[TemporalState] = None,
    ) -> None:
        self._config = config or DeltaConfig()
        self._colormap = colormap or kinect_colormap()
        self.state = state or TemporalState()

    @property
    def config(self) -> DeltaConfig:
        return self._config

    def reset(self) -> None:
        self.state.reset()

    def update(self, depth: np.ndarray) -> np.ndarray:
        """Advance the cadence by one frame and return ``delta_2 - delta_1``."""
        if depth.ndim != 2 or depth.dtype != DEPTH_DTYPE:
            raise InvalidFrameSizeError(f"Expected 2-D uint16 depth, got {depth.shape} {depth.dtype}")

        state = self.state
        if state.shape != depth.shape:
            if state.shape is not None:
                logger.info(f"Depth size changed {state.shape} -> {depth.shape}, resetting delta state")
                state.reset()
            state.allocate(depth.shape)

        state.frame_count += 1
        state.frames_seen += 1
        if state.frame_count % SHORT_CADENCE == 0:
            state.delta_1 = cv2.subtract(depth, state.previous)
            state.delta_1_updates += 1
        if state.frame_count % LONG_CADENCE == 0:
            state.delta_2 = cv2.subtract(depth, state.previous)
            state.delta_2_updates += 1
            state.frame_count = 0

        combined = cv2.subtract(state.delta_2, state.delta_1)

        if self._config.advance_previous:
            np.copyto(state.previous, depth)
        return combined

    def colorize(self, depth: np.ndarray, out: np.ndarray) -> DeltaFrameResult:
        """Update with ``depth`` and write the colorized combined delta to ``out``.

        A mis-sized ``out`` is rejected before the cadence advances, so the
        frame can be resubmitted.
        """
        check_rgba_output(depth, out)
        combined = self.update(depth)
        colorize_depth(combined, out, self._colormap)
        anomaly_count = count_dark_pixels(combined, self._colormap, self._config.dark_threshold)
        if not self.state.warmed_up:
            logger.debug(f"Delta tracker warming up ({self.state.frames_seen}/{LONG_CADENCE} frames)")
        return DeltaFrameResult(
            status=FrameStatus.SUCCESS,
            anomaly_count=anomaly_count,
            warmed_up=self.state.warmed_up,
        )
