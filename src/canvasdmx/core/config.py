"""
Configuration Schema - JSON schema validation for canvasdmx config dicts
"""
import json
import logging
from typing import Any, Dict, List, Tuple

from jsonschema import Draft7Validator

from .logger import CanvasDmxLogger, get_logger
from ..constants import (
    COLOR_CHANNEL_MARKERS, DEFAULT_CANVAS_HEIGHT, DEFAULT_CANVAS_WIDTH,
    DEFAULT_CHANNEL_PATTERN, DEFAULT_LOG_DIR, DEFAULT_MAX_LOG_FILES,
    DEFAULT_RESPONSE, DEFAULT_START_CHANNEL, DEFAULT_TEMPERATURE,
    DMX_CHANNELS_PER_UNIVERSE,
)

logger = get_logger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

CONFIG_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["canvas", "output"],
    "properties": {
        "canvas": {
            "type": "object",
            "required": ["width", "height"],
            "properties": {
                "width": {
                    "type": "integer",
                    "minimum": 1,
                    "description": "Canvas width in pixels"
                },
                "height": {
                    "type": "integer",
                    "minimum": 1,
                    "description": "Canvas height in pixels"
                }
            },
            "additionalProperties": False
        },
        "output": {
            "type": "object",
            "required": ["channel_pattern"],
            "properties": {
                "channel_pattern": {
                    "type": "string",
                    "minLength": 1,
                    "description": "Per-LED channel pattern, e.g. 'rgb' or 'drgbsc'"
                },
                "start_channel": {
                    "type": "integer",
                    "minimum": 0,
                    "description": "Channel of LED 0's first pattern character"
                },
                "default_values": {
                    "type": "object",
                    "propertyNames": {"minLength": 1, "maxLength": 1},
                    "additionalProperties": {
                        "type": "integer",
                        "minimum": 0,
                        "maximum": 255
                    },
                    "description": "Fixed values for non-color pattern characters"
                },
                "frame_length": {
                    "type": "integer",
                    "minimum": 1,
                    "maximum": DMX_CHANNELS_PER_UNIVERSE,
                    "description": "Length of frames built by build_dmx_frame"
                }
            },
            "additionalProperties": False
        },
        "correction": {
            "type": "object",
            "properties": {
                "response": {
                    "type": "number",
                    "exclusiveMinimum": 0,
                    "description": "Power-law exponent (1.0 = linear)"
                },
                "temperature": {
                    "type": "number",
                    "minimum": -1.0,
                    "maximum": 1.0,
                    "description": "White temperature shift (negative = warmer)"
                },
                "custom_curve": {
                    "type": ["array", "null"],
                    "items": {"type": "number", "minimum": 0.0, "maximum": 1.0},
                    "minItems": 2,
                    "description": "Lookup curve replacing the exponent"
                }
            },
            "additionalProperties": False
        },
        "logging": {
            "type": "object",
            "properties": {
                "level": {"type": "string", "enum": LOG_LEVELS},
                "console_level": {"type": "string", "enum": LOG_LEVELS},
                "log_dir": {"type": "string", "minLength": 1},
                "max_log_files": {"type": "integer", "minimum": 0},
                "debug_modules": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Logger name patterns forced to DEBUG"
                }
            },
            "additionalProperties": False
        }
    }
}


class ConfigValidator:
    """Validates config dicts against CONFIG_SCHEMA."""

    def __init__(self):
        self.validator = Draft7Validator(CONFIG_SCHEMA)

    def validate(self, config: Dict[str, Any]) -> Tuple[bool, List[str]]:
        """
        Validate a configuration.

        Args:
            config: Configuration dictionary

        Returns:
            Tuple[bool, List[str]]: (is_valid, error_messages)
        """
        errors = []

        for error in sorted(self.validator.iter_errors(config), key=lambda e: [str(p) for p in e.path]):
            path = ".".join(str(p) for p in error.path) if error.path else "root"
            errors.append(f"{path}: {error.message}")

        if isinstance(config, dict):
            errors.extend(self._custom_validations(config))

        is_valid = len(errors) == 0

        if not is_valid:
            logger.error(f"Config validation failed: {len(errors)} error(s)")
            for error in errors:
                logger.error(f"  - {error}")
        else:
            logger.debug("Config validation passed")

        return is_valid, errors

    def _custom_validations(self, config: Dict[str, Any]) -> List[str]:
        """
        Checks the schema cannot express.

        Returns:
            List[str]: Error messages
        """
        errors = []

        output = config.get("output")
        if not isinstance(output, dict):
            return errors

        pattern = output.get("channel_pattern", "")
        defaults = output.get("default_values", {})
        if not isinstance(pattern, str) or not isinstance(defaults, dict):
            return errors

        for char in defaults:
            if char in COLOR_CHANNEL_MARKERS:
                errors.append(f"output.default_values: '{char}' is a color channel and cannot have a default")
            elif char not in pattern:
                errors.append(f"output.default_values: '{char}' does not appear in pattern '{pattern}'")

        return errors

    def get_schema(self) -> Dict[str, Any]:
        return CONFIG_SCHEMA

    def get_default_config(self) -> Dict[str, Any]:
        """
        Default configuration (RGB fixtures on a 1024x768 canvas).

        Returns:
            Dict[str, Any]: A fresh, valid config dict
        """
        return {
            "canvas": {
                "width": DEFAULT_CANVAS_WIDTH,
                "height": DEFAULT_CANVAS_HEIGHT
            },
            "output": {
                "channel_pattern": DEFAULT_CHANNEL_PATTERN,
                "start_channel": DEFAULT_START_CHANNEL,
                "default_values": {},
                "frame_length": DMX_CHANNELS_PER_UNIVERSE
            },
            "correction": {
                "response": DEFAULT_RESPONSE,
                "temperature": DEFAULT_TEMPERATURE,
                "custom_curve": None
            },
            "logging": {
                "level": "INFO",
                "console_level": "WARNING",
                "log_dir": DEFAULT_LOG_DIR,
                "max_log_files": DEFAULT_MAX_LOG_FILES,
                "debug_modules": []
            }
        }


def get_default_config() -> Dict[str, Any]:
    return ConfigValidator().get_default_config()


def get_schema() -> Dict[str, Any]:
    return CONFIG_SCHEMA


def validate_config_file(config_path: str) -> Tuple[bool, List[str], Dict[str, Any]]:
    """
    Load and validate a JSON config file.

    Args:
        config_path: Path to the config file

    Returns:
        Tuple[bool, List[str], Dict]: (is_valid, errors, config_dict)
    """
    validator = ConfigValidator()

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config = json.load(f)
    except FileNotFoundError:
        return False, [f"Config file not found: {config_path}"], {}
    except json.JSONDecodeError as e:
        return False, [f"JSON parse error: {e}"], {}

    is_valid, errors = validator.validate(config)
    return is_valid, errors, config


def configure_logging(config: Dict[str, Any]):
    """
    Install log handlers from a config's 'logging' section.

    Returns:
        Path of the log file
    """
    section = config.get("logging", {})
    log_level = getattr(logging, section.get("level", "INFO").upper(), logging.INFO)
    console_level = getattr(logging, section.get("console_level", "WARNING").upper(), logging.WARNING)

    canvas_logger = CanvasDmxLogger()
    log_file = canvas_logger.setup_logging(
        log_dir=section.get("log_dir", DEFAULT_LOG_DIR),
        log_level=log_level,
        console_level=console_level,
        max_log_files=section.get("max_log_files", DEFAULT_MAX_LOG_FILES),
    )
    canvas_logger.apply_debug_modules(section.get("debug_modules", []))
    return log_file
