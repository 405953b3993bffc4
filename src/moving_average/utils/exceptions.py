"""Custom exception classes for the moving average accumulator."""


class MovingAverageError(Exception):
    """Base exception class for the moving average accumulator."""

    pass


class NegativeValueToUnsignedTypeError(MovingAverageError):
    """Exception raised when a negative value is added to an unsigned numeric kind."""

    pass


class AccumulatorOverflowError(MovingAverageError):
    """Exception reserved for overflow of a bounded accumulator."""

    pass


class AccumulatorUnderflowError(MovingAverageError):
    """Exception reserved for underflow of a bounded accumulator."""

    pass


class CountOverflowError(MovingAverageError):
    """Exception reserved for exhaustion of a bounded observation count."""

    pass


class ThresholdReachedError(MovingAverageError):
    """
    Exception raised when the running mean reaches the configured threshold.

    The value that triggered it has already been committed, so ``mean`` and
    ``count`` describe the accumulator after the update.
    """

    def __init__(self, mean: float, count: int, threshold: float):
        super().__init__(
            f"Mean {mean} reached threshold {threshold} after {count} values"
        )
        self.mean = mean
        self.count = count
        self.threshold = threshold


class NumericKindError(MovingAverageError, TypeError):
    """Exception raised for unsupported numeric kinds or values of the wrong kind."""

    pass


class ConfigurationError(MovingAverageError):
    """Exception raised for configuration errors."""

    pass


class ModeTrackingMismatchError(MovingAverageError, ValueError):
    """Exception raised when merging an accumulator without a frequency table into one with it."""

    pass
