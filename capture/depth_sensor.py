"""Sensor abstraction for raw depth and color buffer sources."""

from __future__ import annotations

from abc import ABC, abstractmethod

from contracts import RawFrameBuffer


class DepthSensor(ABC):
    @abstractmethod
    def open(self) -> None:
        """Start streaming."""

    @abstractmethod
    def read_depth(self) -> RawFrameBuffer:
        """Return the latest depth buffer; pitch is 0 when none is ready."""

    @abstractmethod
    def read_color(self) -> RawFrameBuffer:
        """Return the latest color buffer; pitch is 0 when none is ready."""

    @abstractmethod
    def close(self) -> None:
        """Stop streaming."""
