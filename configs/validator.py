"""Configuration validation using JSON Schema."""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any, Dict

import jsonschema
import yaml
from jsonschema import Draft7Validator, validators

from exceptions import ConfigValidationError, InvalidConfigError
from log_config.logger import get_logger

logger = get_logger(__name__)

# Range checks on the field of view and rig offsets live in geometry.model,
# which raises InvalidGeometryConfigError for them.
CONFIG_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["camera", "rig"],
    "properties": {
        "camera": {
            "type": "object",
            "required": ["horizontal_fov_deg", "vertical_fov_deg"],
            "properties": {
                "width": {"type": "integer", "minimum": 1, "default": 1280},
                "height": {"type": "integer", "minimum": 1, "default": 720},
                "horizontal_fov_deg": {"type": "number"},
                "vertical_fov_deg": {"type": "number"},
            },
        },
        "rig": {
            "type": "object",
            "properties": {
                "x_offset": {"type": "number", "default": 0.0},
                "y_offset": {"type": "number", "default": 0.0},
                "z_offset": {"type": "number", "default": 0.0},
            },
        },
        "tracking": {
            "type": "object",
            "default": {},
            "properties": {
                "max_misses": {"type": ["integer", "null"], "minimum": 0, "default": None},
                "max_match_distance_px": {
                    "type": ["number", "null"],
                    "exclusiveMinimum": 0,
                    "default": None,
                },
                "frame_budget_ms": {"type": "number", "exclusiveMinimum": 0, "default": 33.0},
            },
        },
        "depth": {
            "type": "object",
            "default": {},
            "properties": {
                "method": {
                    "type": "string",
                    "enum": ["constant", "box_height", "stereo"],
                    "default": "constant",
                },
                "constant_depth": {"type": "number", "minimum": 0, "default": 10.0},
                "object_height": {"type": "number", "exclusiveMinimum": 0},
                "focal_length_px": {"type": ["number", "null"], "exclusiveMinimum": 0, "default": None},
                "baseline": {"type": "number", "exclusiveMinimum": 0},
            },
            "allOf": [
                {
                    "if": {"properties": {"method": {"const": "box_height"}}, "required": ["method"]},
                    "then": {"required": ["object_height"]},
                },
                {
                    "if": {"properties": {"method": {"const": "stereo"}}, "required": ["method"]},
                    "then": {"required": ["baseline"]},
                },
            ],
        },
    },
}


def extend_with_default(validator_class):
    """Extend JSON Schema validator to set default values."""
    validate_properties = validator_class.VALIDATORS["properties"]

    def set_defaults(validator, properties, instance, schema):
        if isinstance(instance, dict):
            for prop, subschema in properties.items():
                if "default" in subschema:
                    instance.setdefault(prop, copy.deepcopy(subschema["default"]))

        for error in validate_properties(validator, properties, instance, schema):
            yield error

    return validators.extend(validator_class, {"properties": set_defaults})


DefaultValidatingValidator = extend_with_default(Draft7Validator)


def validate_config(config: Dict[str, Any]) -> None:
    """Validate configuration against JSON Schema, filling in defaults.

    Args:
        config: Configuration dictionary (mutated in place with defaults)

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


def validate_config_file(path: Path) -> Dict[str, Any]:
    """Read a YAML configuration file and validate it.

    Args:
        path: Path to configuration file

    Returns:
        The parsed configuration with schema defaults filled in

    Raises:
        InvalidConfigError: If the file is missing or is not valid YAML
        ConfigValidationError: If the contents fail schema validation
    """
    if not path.exists():
        logger.error(f"Configuration file not found: {path}")
        raise InvalidConfigError(f"Configuration file not found: {path}")

    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse YAML configuration: {e}")
        raise InvalidConfigError(f"Failed to parse configuration file: {e}")

    # An empty file parses to None; validate it as an empty mapping
    if data is None:
        data = {}
    validate_config(data)
    return data


__all__ = ["validate_config", "validate_config_file", "CONFIG_SCHEMA"]
