from pathlib import Path

import pytest

from configs.settings import DEFAULT_CONFIG_PATH, load_config
from configs.validator import validate_config
from contracts import Resolution
from exceptions import ConfigValidationError, InvalidConfigError


def test_load_config() -> None:
    config = load_config(DEFAULT_CONFIG_PATH)

    assert config.sensor.depth_resolution is Resolution.RES_320x240
    assert config.delta.dark_threshold == 127 * 3
    assert config.delta.advance_previous is True
    assert config.optical_flow.max_corners == 20
    assert config.optical_flow.quality_level == pytest.approx(0.05)
    assert config.optical_flow.min_distance == pytest.approx(5.0)
    assert config.colorize.build().name == "kinect"


def test_missing_sections_use_defaults(tmp_path: Path) -> None:
    path = tmp_path / "partial.yaml"
    path.write_text("optical_flow:\n  max_corners: 7\n")

    config = load_config(path)

    assert config.optical_flow.max_corners == 7
    assert config.optical_flow.win_size == 15
    assert config.sensor.color_resolution is Resolution.RES_640x480
    assert config.telemetry.frame_budget_ms == pytest.approx(33.0)


def test_jet_colormap_range_from_config(tmp_path: Path) -> None:
    path = tmp_path / "jet.yaml"
    path.write_text("colorize:\n  colormap: jet\n  min_depth: 100\n  max_depth: 5000\n")

    colormap = load_config(path).colorize.build()

    assert colormap.name == "jet"
    assert colormap.table.shape == (65536, 3)


def test_inverted_depth_range_rejected_at_load(tmp_path: Path) -> None:
    path = tmp_path / "inverted.yaml"
    path.write_text("colorize:\n  colormap: jet\n  min_depth: 5000\n  max_depth: 100\n")

    with pytest.raises(InvalidConfigError, match="max_depth"):
        load_config(path)


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(InvalidConfigError, match="not found"):
        load_config(tmp_path / "nope.yaml")


def test_malformed_yaml_raises(tmp_path: Path) -> None:
    path = tmp_path / "broken.yaml"
    path.write_text("sensor: [unclosed\n")

    with pytest.raises(InvalidConfigError):
        load_config(path)


def test_schema_violations_are_collected() -> None:
    data = {
        "sensor": {"depth_resolution": "123x45"},
        "optical_flow": {"max_corners": 0},
    }

    with pytest.raises(ConfigValidationError) as excinfo:
        validate_config(data)

    errors = excinfo.value.validation_errors
    assert len(errors) == 2
    assert any("depth_resolution" in msg for msg in errors)
    assert any("max_corners" in msg for msg in errors)
