"""Utility modules for the moving average accumulator."""

from moving_average.utils.config_parser import get_nested_value, load_config
from moving_average.utils.exceptions import (
    AccumulatorOverflowError,
    AccumulatorUnderflowError,
    ConfigurationError,
    CountOverflowError,
    MovingAverageError,
    ModeTrackingMismatchError,
    NegativeValueToUnsignedTypeError,
    NumericKindError,
    ThresholdReachedError,
)
from moving_average.utils.logging import configure_logging, get_logger, setup_logging

__all__ = [
    "load_config",
    "get_nested_value",
    "MovingAverageError",
    "ModeTrackingMismatchError",
    "NegativeValueToUnsignedTypeError",
    "AccumulatorOverflowError",
    "AccumulatorUnderflowError",
    "CountOverflowError",
    "ThresholdReachedError",
    "NumericKindError",
    "ConfigurationError",
    "setup_logging",
    "configure_logging",
    "get_logger",
]
