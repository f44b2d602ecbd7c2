"""Single-channel pipeline: decode, delta colorize, and feature tracking."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Optional

import numpy as np

from app.frame_helper import FrameHelper
from configs.settings import AppConfig
from contracts import DeltaFrameResult, RawFrameBuffer, TrackingResult
from log_config.logger import get_logger, log_performance
from track.optical_flow import OpticalFlowTracker
from track.temporal_delta import TemporalDeltaTracker

logger = get_logger(__name__)


@dataclass(frozen=True)
class FrameReport:
    frame_index: int
    delta: DeltaFrameResult
    tracking: TrackingResult
    rgba: np.ndarray
    elapsed_ms: float


class DepthPipeline:
    """Owns the per-channel tracker state.

    Calls must come from one thread; each :meth:`process` call finishes all
    work for its frame before returning.
    """

    def __init__(
        self,
        helper: Optional[FrameHelper] = None,
        delta_tracker: Optional[TemporalDeltaTracker] = None,
        flow_tracker: Optional[OpticalFlowTracker] = None,
        frame_budget_ms: float = 33.0,
    ) -> None:
        self.helper = helper or FrameHelper()
        self.delta_tracker = delta_tracker or TemporalDeltaTracker(colormap=self.helper.colormap)
        self.flow_tracker = flow_tracker or OpticalFlowTracker()
        self._frame_budget_ms = frame_budget_ms
        self._frame_index = 0

    @classmethod
    def from_config(cls, config: AppConfig) -> "DepthPipeline":
        colormap = config.colorize.build()
        helper = FrameHelper(
            depth_resolution=config.sensor.depth_resolution,
            color_resolution=config.sensor.color_resolution,
            colormap=colormap,
        )
        return cls(
            helper=helper,
            delta_tracker=TemporalDeltaTracker(config=config.delta, colormap=colormap),
            flow_tracker=OpticalFlowTracker(config=config.optical_flow),
            frame_budget_ms=config.telemetry.frame_budget_ms,
        )

    @property
    def frame_index(self) -> int:
        return self._frame_index

    def reset(self) -> None:
        self.delta_tracker.reset()
        self.flow_tracker.reset()
        self._frame_index = 0

    def process(self, depth_buffer: RawFrameBuffer, out: Optional[np.ndarray] = None) -> FrameReport:
        start = time.perf_counter()
        self.helper.update_depth_frame(depth_buffer)
        rgba = out if out is not None else self.helper.allocate_depth_rgba_matrix()

        # Decode once; both trackers read the same matrix.
        depth = self.helper.allocate_depth_matrix()
        status = self.helper.get_depth_data(depth)
        if status.ok:
            delta = self.helper.get_depth_delta_as_rgba(rgba, self.delta_tracker, depth=depth)
        else:
            delta = DeltaFrameResult(status=status, warmed_up=self.delta_tracker.state.warmed_up)

        if delta.ok:
            tracking = self.helper.track_depth_features(self.flow_tracker, depth=depth)
            self._frame_index += 1
        else:
            tracking = TrackingResult(status=delta.status, points=self.flow_tracker.points)

        elapsed_ms = (time.perf_counter() - start) * 1000.0
        log_performance(f"depth frame {self._frame_index}", elapsed_ms, self._frame_budget_ms)
        return FrameReport(
            frame_index=self._frame_index,
            delta=delta,
            tracking=tracking,
            rgba=rgba,
            elapsed_ms=elapsed_ms,
        )
