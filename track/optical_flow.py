"""Sparse feature tracking across depth frames with pyramidal Lucas-Kanade."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import cv2
import numpy as np

from contracts import FrameStatus, TrackingResult
from log_config.logger import get_logger
from track.config import OpticalFlowConfig

logger = get_logger(__name__)


def _empty_points() -> np.ndarray:
    return np.empty((0, 1, 2), dtype=np.float32)


@dataclass
class TrackingState:
    previous_gray: Optional[np.ndarray] = None
    points: np.ndarray = field(default_factory=_empty_points)
    failures: int = 0

    def reset(self) -> None:
        self.previous_gray = None
        self.points = _empty_points()
        self.failures = 0


def depth_to_tracking_image(depth: np.ndarray, scale: float = 1.0 / 256.0, downsample: int = 1) -> np.ndarray:
    """Cast a 16-bit depth matrix to an 8-bit intensity image.

    ``downsample`` shrinks both axes by an integer factor with area
    averaging.
    """
    gray = cv2.convertScaleAbs(depth, alpha=scale)
    if downsample > 1:
        height, width = gray.shape[:2]
        size = (max(width // downsample, 1), max(height // downsample, 1))
        gray = cv2.resize(gray, size, interpolation=cv2.INTER_AREA)
    return gray


def detect_features(gray: np.ndarray, config: OpticalFlowConfig) -> TrackingResult:
    """Find up to ``max_corners`` Shi-Tomasi corners in ``gray``."""
    try:
        corners = cv2.goodFeaturesToTrack(
            gray,
            maxCorners=config.max_corners,
            qualityLevel=config.quality_level,
            minDistance=config.min_distance,
            blockSize=config.block_size,
        )
    except cv2.error as e:
        return TrackingResult(status=FrameStatus.ALGORITHM_FAILURE, reason=f"feature detection failed: {e}")

    if corners is None:
        points = _empty_points()
    else:
        points = corners.reshape(-1, 1, 2).astype(np.float32)
    return TrackingResult(status=FrameStatus.SUCCESS, points=points, seeded=True)


def propagate_features(
    prev_gray: np.ndarray,
    gray: np.ndarray,
    points: np.ndarray,
    config: OpticalFlowConfig,
) -> TrackingResult:
    """Move ``points`` from ``prev_gray`` into ``gray`` with pyramidal LK flow."""
    criteria = (
        cv2.TERM_CRITERIA_EPS | cv2.TERM_CRITERIA_COUNT,
        int(config.criteria_max_iter),
        float(config.criteria_eps),
    )
    try:
        next_points, status, errors = cv2.calcOpticalFlowPyrLK(
            prev_gray,
            gray,
            points,
            None,
            winSize=(int(config.win_size), int(config.win_size)),
            maxLevel=int(config.max_level),
            criteria=criteria,
        )
    except cv2.error as e:
        return TrackingResult(status=FrameStatus.ALGORITHM_FAILURE, points=points, reason=f"optical flow failed: {e}")

    if next_points is None or not np.all(np.isfinite(next_points)):
        return TrackingResult(
            status=FrameStatus.ALGORITHM_FAILURE,
            points=points,
            reason="optical flow produced no finite points",
        )
    return TrackingResult(
        status=FrameStatus.SUCCESS,
        points=next_points.reshape(-1, 1, 2).astype(np.float32),
        status_mask=status.reshape(-1).astype(np.uint8),
        errors=errors.reshape(-1).astype(np.float32),
    )


class OpticalFlowTracker:
    """Seeds corners once, then carries them frame to frame.

    Failures inside OpenCV never escape :meth:`update`; they are logged and
    the prior feature set is kept. The current frame always becomes the
    reference for the next call.
    """

    def __init__(
        self,
        config: Optional[OpticalFlowConfig] = None,
        state: Optional[TrackingState] = None,
    ) -> None:
        self._config = config or OpticalFlowConfig()
        self.state = state or TrackingState()

    @property
    def config(self) -> OpticalFlowConfig:
        return self._config

    @property
    def points(self) -> np.ndarray:
        return self.state.points

    def reset(self) -> None:
        self.state.reset()

    def update_depth(self, depth: np.ndarray) -> TrackingResult:
        gray = depth_to_tracking_image(depth, self._config.gray_scale, self._config.downsample)
        return self.update(gray)

    def update(self, gray: np.ndarray) -> TrackingResult:
        state = self.state
        if len(state.points) == 0 or state.previous_gray is None:
            result = detect_features(gray, self._config)
            if result.ok:
                logger.debug(f"Seeded {result.num_points} features (max {self._config.max_corners})")
        else:
            result = propagate_features(state.previous_gray, gray, state.points, self._config)
            if result.ok and self._config.drop_lost_features and result.status_mask is not None:
                keep = result.status_mask.astype(bool)
                result = TrackingResult(
                    status=result.status,
                    points=result.points[keep],
                    status_mask=result.status_mask[keep],
                    errors=result.errors[keep] if result.errors is not None else None,
                )

        if result.ok:
            state.points = result.points
        else:
            state.failures += 1
            logger.warning(f"Feature tracking skipped, keeping {len(state.points)} previous features: {result.reason}")
            result = TrackingResult(
                status=result.status,
                points=state.points,
                reason=result.reason,
            )

        state.previous_gray = gray.copy()
        return result
