"""Configuration loading for the depth visualization pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from colorize.colormaps import DepthColorMap, get_colormap
from configs.validator import validate_config
from contracts import Resolution
from exceptions import InvalidConfigError
from log_config.logger import get_logger
from track.config import DeltaConfig, OpticalFlowConfig

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).with_name("default.yaml")


@dataclass(frozen=True)
class SensorConfig:
    depth_resolution: Resolution = Resolution.RES_320x240
    color_resolution: Resolution = Resolution.RES_640x480
    row_padding: int = 16  # Simulated sensor only


@dataclass(frozen=True)
class ColorizeConfig:
    colormap: str = "kinect"
    min_depth: Optional[int] = None  # Only used by ramp colormaps
    max_depth: Optional[int] = None

    def __post_init__(self) -> None:
        if self.min_depth is not None and self.max_depth is not None and self.max_depth <= self.min_depth:
            raise ValueError(f"max_depth ({self.max_depth}) must be greater than min_depth ({self.min_depth})")

    def build(self) -> DepthColorMap:
        kwargs = {}
        if self.colormap != "kinect":
            if self.min_depth is not None:
                kwargs["min_depth"] = self.min_depth
            if self.max_depth is not None:
                kwargs["max_depth"] = self.max_depth
        return get_colormap(self.colormap, **kwargs)


@dataclass(frozen=True)
class TelemetryConfig:
    frame_budget_ms: float = 33.0


@dataclass(frozen=True)
class AppConfig:
    sensor: SensorConfig = field(default_factory=SensorConfig)
    colorize: ColorizeConfig = field(default_factory=ColorizeConfig)
    delta: DeltaConfig = field(default_factory=DeltaConfig)
    optical_flow: OpticalFlowConfig = field(default_factory=OpticalFlowConfig)
    telemetry: TelemetryConfig = field(default_factory=TelemetryConfig)


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> AppConfig:
    """Load and validate configuration from YAML file.

    Args:
        path: Path to configuration file

    Returns:
        Validated AppConfig instance

    Raises:
        ConfigError: If configuration is invalid or cannot be loaded
    """
    try:
        logger.info(f"Loading configuration from {path}")
        if not path.exists():
            raise InvalidConfigError(f"Configuration file not found: {path}")

        data = yaml.safe_load(path.read_text()) or {}

        # Fills schema defaults in place
        validate_config(data)

    except yaml.YAMLError as e:
        logger.error(f"Failed to parse YAML configuration: {e}")
        raise InvalidConfigError(f"Failed to parse configuration file: {e}")

    try:
        sensor_data = data["sensor"]
        sensor = SensorConfig(
            depth_resolution=Resolution(sensor_data["depth_resolution"]),
            color_resolution=Resolution(sensor_data["color_resolution"]),
            row_padding=int(sensor_data["row_padding"]),
        )
        colorize = ColorizeConfig(**data["colorize"])
        delta = DeltaConfig(**data["delta"])
        optical_flow = OpticalFlowConfig(**data["optical_flow"])
        telemetry = TelemetryConfig(**data["telemetry"])
    except (KeyError, TypeError, ValueError) as e:
        logger.error(f"Failed to construct configuration objects: {e}")
        raise InvalidConfigError(f"Failed to construct configuration: {e}")

    config = AppConfig(
        sensor=sensor,
        colorize=colorize,
        delta=delta,
        optical_flow=optical_flow,
        telemetry=telemetry,
    )
    logger.info(
        f"Configuration loaded successfully: depth {sensor.depth_resolution.value}, "
        f"colormap {colorize.colormap}, {optical_flow.max_corners} features"
    )
    return config
