"""Configuration file parsing for the moving average accumulator."""

import logging
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from moving_average.utils.exceptions import ConfigurationError, NumericKindError

logger = logging.getLogger(__name__)

ACCUMULATOR_SECTION = "moving_average"
LOGGING_SECTION = "logging"


def load_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load and validate accumulator configuration from a YAML file.

    Parameters
    ----------
    config_path : Union[str, Path]
        Path to YAML configuration file

    Returns
    -------
    Dict[str, Any]
        Parsed configuration dictionary

    Raises
    ------
    ConfigurationError
        If configuration file is invalid or missing required fields

    Examples
    --------
    >>> config = load_config("config/moving_average.yaml")
    >>> print(config["moving_average"]["threshold"])
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigurationError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Error parsing YAML configuration: {e}")

    validate_config(config)

    logger.info(f"Loaded configuration from {config_path}")
    return config


def validate_config(config: Any) -> None:
    """
    Validate configuration structure and field types.

    Parameters
    ----------
    config : Any
        Configuration document to validate

    Raises
    ------
    ConfigurationError
        If required sections are missing or fields have the wrong type
    """
    if not isinstance(config, dict):
        raise ConfigurationError("Configuration must be a mapping")

    if ACCUMULATOR_SECTION not in config:
        raise ConfigurationError(f"Configuration must contain '{ACCUMULATOR_SECTION}' key")

    validate_accumulator_config(config[ACCUMULATOR_SECTION])

    if LOGGING_SECTION in config:
        validate_logging_config(config[LOGGING_SECTION])


def validate_accumulator_config(section: Any) -> None:
    """Validate the accumulator section."""
    # An empty section in YAML parses as None and means all defaults
    if section is None:
        return

    if not isinstance(section, dict):
        raise ConfigurationError(f"'{ACCUMULATOR_SECTION}' must be a mapping")

    threshold = section.get("threshold")
    if threshold is not None and (
        isinstance(threshold, bool) or not isinstance(threshold, (int, float))
    ):
        raise ConfigurationError(f"threshold must be a number, got {threshold!r}")

    track_mode = section.get("track_mode")
    if track_mode is not None and not isinstance(track_mode, bool):
        raise ConfigurationError(f"track_mode must be true or false, got {track_mode!r}")

    kind = section.get("kind")
    if kind is not None:
        from moving_average.accumulation.numeric_kind import NumericKind

        try:
            NumericKind.of(kind)
        except NumericKindError as e:
            raise ConfigurationError(f"Invalid numeric kind: {e}")


def validate_logging_config(logging_config: Any) -> None:
    """Validate logging configuration section."""
    if logging_config is None:
        return

    if not isinstance(logging_config, dict):
        raise ConfigurationError(f"'{LOGGING_SECTION}' must be a mapping")

    level = logging_config.get("level")
    if level is not None and not isinstance(logging.getLevelName(str(level).upper()), int):
        raise ConfigurationError(f"Unknown log level: {level}")

    for field in ("file", "format"):
        value = logging_config.get(field)
        if value is not None and not isinstance(value, str):
            raise ConfigurationError(f"logging.{field} must be a string, got {value!r}")


def get_nested_value(config: Dict[str, Any], key_path: str, default: Any = None) -> Any:
    """
    Get a value from nested dictionary using dot notation.

    Parameters
    ----------
    config : Dict[str, Any]
        Configuration dictionary
    key_path : str
        Dot-separated path to value (e.g., "moving_average.threshold")
    default : Any, optional
        Default value if key not found, by default None

    Returns
    -------
    Any
        Value at the specified path, or default if not found

    Examples
    --------
    >>> config = {"moving_average": {"threshold": 10.0}}
    >>> get_nested_value(config, "moving_average.threshold")
    10.0
    """
    keys = key_path.split(".")
    value = config

    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default

    return value
