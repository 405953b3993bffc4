"""
Moving Average

Incremental statistics over a stream of numeric values.
Maintains a running mean, mode and count with an optional threshold on the mean.
"""

__version__ = "0.1.0"

from moving_average.utils.logging import configure_logging, get_logger, setup_logging
from moving_average.utils.config_parser import load_config
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
from moving_average.accumulation import (
    DEFAULT_THRESHOLD,
    Moving,
    NumericKind,
    merge_accumulators,
)

__all__ = [
    "Moving",
    "NumericKind",
    "DEFAULT_THRESHOLD",
    "merge_accumulators",
    "setup_logging",
    "configure_logging",
    "get_logger",
    "load_config",
    "MovingAverageError",
    "ModeTrackingMismatchError",
    "NegativeValueToUnsignedTypeError",
    "AccumulatorOverflowError",
    "AccumulatorUnderflowError",
    "CountOverflowError",
    "ThresholdReachedError",
    "NumericKindError",
    "ConfigurationError",
]
