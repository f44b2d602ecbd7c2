"""Minimal simulated depth pipeline demo."""

from __future__ import annotations

import argparse
from pathlib import Path

from app.pipeline import DepthPipeline
from capture import SimulatedDepthSensor
from configs.settings import DEFAULT_CONFIG_PATH, load_config
from log_config.logger import configure_logging, get_logger

logger = get_logger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run a simulated depth visualization demo.")
    parser.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH)
    parser.add_argument("--frames", type=int, default=12)
    parser.add_argument("--log-dir", type=Path, default=None, help="Also write log files to this directory")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_dir)
    config = load_config(args.config)

    sensor = SimulatedDepthSensor(
        depth_resolution=config.sensor.depth_resolution,
        color_resolution=config.sensor.color_resolution,
        row_padding=config.sensor.row_padding,
    )
    pipeline = DepthPipeline.from_config(config)

    # One read before open() exercises the no-data path.
    report = pipeline.process(sensor.read_depth())
    logger.info(f"before open: delta={report.delta.status.value}")

    sensor.open()
    for _ in range(args.frames):
        report = pipeline.process(sensor.read_depth())
        logger.info(
            f"frame={report.frame_index} anomalies={report.delta.anomaly_count} "
            f"warmed_up={report.delta.warmed_up} features={report.tracking.num_points} "
            f"tracked={report.tracking.num_tracked} tracking={report.tracking.status.value}"
        )
    sensor.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
