"""Core data contracts for raw buffers, decoded matrices, and per-frame results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

import numpy as np

INVALID_DEPTH = 65535
DEPTH_DTYPE = np.uint16
COLOR_DTYPE = np.uint8
COLOR_CHANNELS = 4
DEPTH_BYTES_PER_PIXEL = 2
COLOR_BYTES_PER_PIXEL = 4


class Resolution(str, Enum):
    RES_80x60 = "80x60"
    RES_320x240 = "320x240"
    RES_640x480 = "640x480"
    RES_1280x960 = "1280x960"

    @property
    def size(self) -> Tuple[int, int]:
        """Canonical (width, height) for this resolution."""
        width, height = self.value.split("x")
        return int(width), int(height)

    @property
    def width(self) -> int:
        return self.size[0]

    @property
    def height(self) -> int:
        return self.size[1]


def resolution_to_size(resolution: Resolution) -> Tuple[int, int]:
    return Resolution(resolution).size


class FrameStatus(str, Enum):
    SUCCESS = "SUCCESS"
    NO_DATA = "NO_DATA"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    ALGORITHM_FAILURE = "ALGORITHM_FAILURE"

    @property
    def ok(self) -> bool:
        return self is FrameStatus.SUCCESS


@dataclass(frozen=True)
class RawFrameBuffer:
    """Read-only view of a sensor buffer.

    ``pitch`` is bytes per row and may exceed width times pixel size when the
    sensor pads rows for alignment. A pitch of zero means no frame has been
    delivered yet.
    """

    data: bytes
    pitch: int
    resolution: Resolution

    @property
    def width(self) -> int:
        return self.resolution.width

    @property
    def height(self) -> int:
        return self.resolution.height

    @property
    def has_data(self) -> bool:
        return self.pitch != 0


@dataclass(frozen=True)
class DeltaFrameResult:
    """Outcome of colorizing a difference-of-differences depth image.

    The anomaly count travels beside the status rather than inside it, so a
    count of zero is never confused with a failure.
    """

    status: FrameStatus
    anomaly_count: Optional[int] = None
    warmed_up: bool = False

    @property
    def ok(self) -> bool:
        return self.status.ok


@dataclass(frozen=True)
class TrackingResult:
    status: FrameStatus
    points: np.ndarray = field(default_factory=lambda: np.empty((0, 1, 2), dtype=np.float32))
    status_mask: Optional[np.ndarray] = None
    errors: Optional[np.ndarray] = None
    reason: Optional[str] = None
    seeded: bool = False

    @property
    def ok(self) -> bool:
        return self.status.ok

    @property
    def num_points(self) -> int:
        return int(len(self.points))

    @property
    def num_tracked(self) -> int:
        """Number of points the flow step reported as found."""
        if self.status_mask is None:
            return self.num_points
        return int(np.count_nonzero(self.status_mask))
