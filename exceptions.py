"""Custom exception classes for DepthVis."""

from __future__ import annotations

from typing import Optional

from contracts.types import FrameStatus


class DepthVisError(Exception):
    """Base exception for all DepthVis errors."""

    pass


class FrameError(DepthVisError):
    """Base exception for frame conversion errors.

    Every frame error maps onto a result code so the frame helper can report
    it to callers that expect status values instead of exceptions.
    """

    status: FrameStatus = FrameStatus.INVALID_ARGUMENT

    def __init__(self, message: str, resolution: Optional[object] = None):
        self.resolution = resolution
        super().__init__(message)


class NoFrameDataError(FrameError):
    """Raised when the source buffer has no frame yet (row pitch is zero)."""

    status = FrameStatus.NO_DATA


class InvalidFrameSizeError(FrameError):
    """Raised when a matrix or buffer does not match the expected dimensions."""

    status = FrameStatus.INVALID_ARGUMENT


class ConfigError(DepthVisError):
    """Base exception for configuration errors."""

    pass


class InvalidConfigError(ConfigError):
    """Raised when configuration file is invalid or corrupted."""

    pass


class ConfigValidationError(ConfigError):
    """Raised when configuration fails schema validation."""

    def __init__(self, message: str, validation_errors: Optional[list] = None):
        self.validation_errors = validation_errors or []
        super().__init__(message)
