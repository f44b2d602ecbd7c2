"""Configuration validation using JSON Schema."""

from __future__ import annotations

from typing import Any, Dict

import jsonschema
from jsonschema import Draft7Validator, validators

from exceptions import ConfigValidationError
from log_config.logger import get_logger

logger = get_logger(__name__)

RESOLUTIONS = ["80x60", "320x240", "640x480", "1280x960"]

# JSON Schema for default.yaml configuration
CONFIG_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "properties": {
        "sensor": {
            "type": "object",
            "default": {},
            "properties": {
                "depth_resolution": {"type": "string", "enum": RESOLUTIONS, "default": "320x240"},
                "color_resolution": {"type": "string", "enum": RESOLUTIONS, "default": "640x480"},
                "row_padding": {"type": "integer", "minimum": 0, "maximum": 256, "default": 16},
            },
        },
        "colorize": {
            "type": "object",
            "default": {},
            "properties": {
                "colormap": {"type": "string", "enum": ["kinect", "jet"], "default": "kinect"},
                "min_depth": {"type": ["integer", "null"], "minimum": 0, "maximum": 65534, "default": None},
                "max_depth": {"type": ["integer", "null"], "minimum": 1, "maximum": 65535, "default": None},
            },
        },
        "delta": {
            "type": "object",
            "default": {},
            "properties": {
                "advance_previous": {"type": "boolean", "default": True},
                "dark_threshold": {"type": "integer", "minimum": 0, "maximum": 766, "default": 381},
            },
        },
        "optical_flow": {
            "type": "object",
            "default": {},
            "properties": {
                "max_corners": {"type": "integer", "minimum": 1, "maximum": 1000, "default": 20},
                "quality_level": {"type": "number", "exclusiveMinimum": 0.0, "maximum": 1.0, "default": 0.05},
                "min_distance": {"type": "number", "minimum": 0.0, "default": 5.0},
                "block_size": {"type": "integer", "minimum": 2, "maximum": 31, "default": 3},
                "win_size": {"type": "integer", "minimum": 3, "maximum": 101, "default": 15},
                "max_level": {"type": "integer", "minimum": 0, "maximum": 8, "default": 2},
                "criteria_max_iter": {"type": "integer", "minimum": 1, "maximum": 1000, "default": 10},
                "criteria_eps": {"type": "number", "exclusiveMinimum": 0.0, "default": 0.03},
                "drop_lost_features": {"type": "boolean", "default": False},
                "gray_scale": {"type": "number", "exclusiveMinimum": 0.0, "default": 0.00390625},
                "downsample": {"type": "integer", "minimum": 1, "maximum": 16, "default": 1},
            },
        },
        "telemetry": {
            "type": "object",
            "default": {},
            "properties": {
                "frame_budget_ms": {"type": "number", "minimum": 1, "maximum": 5000, "default": 33.0},
            },
        },
    },
}


def extend_with_default(validator_class):
    """Extend JSON Schema validator to set default values."""
    validate_properties = validator_class.VALIDATORS["properties"]

    def set_defaults(validator, properties, instance, schema):
        for prop, subschema in properties.items():
            if "default" in subschema:
                default = subschema["default"]
                instance.setdefault(prop, dict(default) if isinstance(default, dict) else default)

        for error in validate_properties(validator, properties, instance, schema):
            yield error

    return validators.extend(validator_class, {"properties": set_defaults})


DefaultValidatingValidator = extend_with_default(Draft7Validator)


def validate_config(config: Dict[str, Any]) -> None:
    """Validate configuration against JSON Schema, filling defaults in place.

    Args:
        config: Configuration dictionary

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    try:
        validator = DefaultValidatingValidator(CONFIG_SCHEMA)
        errors = list(validator.iter_errors(config))

        if errors:
            error_messages = []
            for error in errors:
                path = " -> ".join(str(p) for p in error.path) if error.path else "root"
                error_messages.append(f"{path}: {error.message}")

            logger.error(f"Configuration validation failed with {len(errors)} errors")
            for msg in error_messages:
                logger.error(f"  - {msg}")

            raise ConfigValidationError(
                f"Configuration validation failed with {len(errors)} error(s). See logs for details.",
                validation_errors=error_messages,
            )

        logger.info("Configuration validation passed")

    except jsonschema.exceptions.SchemaError as e:
        logger.error(f"Invalid schema: {e}")
        raise ConfigValidationError(f"Invalid schema definition: {e}")


__all__ = ["validate_config", "CONFIG_SCHEMA", "RESOLUTIONS"]
