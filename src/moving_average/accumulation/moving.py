"""Running mean, mode and count accumulator over a stream of values."""

import logging
from numbers import Real
from typing import Any, Dict, Optional

import numpy as np

from moving_average.accumulation.numeric_kind import NumericKind
from moving_average.utils.config_parser import (
    ACCUMULATOR_SECTION,
    get_nested_value,
    validate_accumulator_config,
)
from moving_average.utils.exceptions import (
    MovingAverageError,
    ModeTrackingMismatchError,
    NegativeValueToUnsignedTypeError,
    NumericKindError,
    ThresholdReachedError,
)

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = float(np.finfo(np.float64).max)

# All NaN values share one frequency key; dict lookup matches it by identity
_NAN_KEY = float("nan")


class Moving:
    """
    Incremental accumulator of the mean, mode and count of a value stream.

    Values are folded in one at a time; the full history is never stored.
    The mean is updated with the running-mean recurrence
    ``mean += (value - mean) / count`` so no running sum is kept and large
    integer values cannot overflow. When mode tracking is enabled a frequency
    table keyed by the float value of each observation is kept as well.

    An accumulator is bound to a single numeric kind for its lifetime, either
    given up front or fixed by the first accepted value.

    The instance is not synchronised. Share it between threads only behind a
    caller-held lock.

    Attributes
    ----------
    threshold : float
        Mean at or above which ``add_with_result`` raises ThresholdReachedError
    track_mode : bool
        Whether the frequency table is maintained
    kind : NumericKind or None
        Numeric kind of the accumulated values, None until fixed

    Examples
    --------
    >>> moving = Moving()
    >>> moving.add(10)
    >>> moving.add(20)
    >>> moving == 15
    True
    >>> moving.count()
    2
    """

    # Makes numpy scalars defer comparisons against an accumulator
    __array_ufunc__ = None

    def __init__(
        self,
        threshold: Optional[float] = None,
        kind: Any = None,
        track_mode: bool = True,
    ):
        """
        Initialize the accumulator.

        Parameters
        ----------
        threshold : float, optional
            Mean at which ingestion starts signalling ThresholdReachedError.
            Defaults to the largest finite float, i.e. never reached.
        kind : Any, optional
            Numeric kind (``np.uint32``, ``"int16"``, ``float``, ...). If None
            the kind of the first accepted value is used.
        track_mode : bool, optional
            Maintain the frequency table needed by ``mode()``, by default True
        """
        self.threshold = DEFAULT_THRESHOLD if threshold is None else float(threshold)
        self.kind: Optional[NumericKind] = None if kind is None else NumericKind.of(kind)
        self.track_mode = track_mode

        self._count = 0
        self._mean = 0.0
        self._frequencies: Dict[float, int] = {}

    @classmethod
    def new_with_threshold(cls, threshold: float, **kwargs: Any) -> "Moving":
        """Create an accumulator that signals once the mean reaches ``threshold``."""
        return cls(threshold=threshold, **kwargs)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "Moving":
        """
        Create an accumulator from a configuration dictionary.

        Parameters
        ----------
        config : Dict[str, Any]
            Either a full configuration document as returned by ``load_config``
            or just its ``moving_average`` section

        Returns
        -------
        Moving
            Configured accumulator

        Raises
        ------
        ConfigurationError
            If the accumulator section is invalid

        Examples
        --------
        >>> moving = Moving.from_config({"moving_average": {"threshold": 10.0}})
        >>> moving.threshold
        10.0
        """
        if ACCUMULATOR_SECTION in config:
            section = config[ACCUMULATOR_SECTION]
        else:
            section = config
        validate_accumulator_config(section)
        section = section or {}

        return cls(
            threshold=get_nested_value(section, "threshold"),
            kind=get_nested_value(section, "kind"),
            track_mode=get_nested_value(section, "track_mode", True),
        )

    def _resolve_kind(self, value: Any) -> NumericKind:
        """Return the kind for ``value``, checking it against the bound kind."""
        if self.kind is None:
            return NumericKind.infer(value)
        if not self.kind.accepts(value):
            raise NumericKindError(
                f"Value {value!r} ({type(value).__name__}) is not of kind {self.kind}"
            )
        return self.kind

    def add_with_result(self, value: Any) -> float:
        """
        Add a value and return the updated mean.

        Parameters
        ----------
        value : Any
            Value of the accumulator's numeric kind

        Returns
        -------
        float
            Mean after the value has been added

        Raises
        ------
        NegativeValueToUnsignedTypeError
            If a negative value is given to an unsigned kind. Nothing is committed.
        ThresholdReachedError
            If the updated mean is at or above the threshold. The value has
            already been committed when this is raised.
        NumericKindError
            If the value does not belong to the accumulator's kind
        """
        kind = self._resolve_kind(value)
        value_f = kind.to_float(value)

        if not kind.signed and value_f < 0.0:
            logger.debug(f"Rejected negative value {value!r} for unsigned kind {kind}")
            raise NegativeValueToUnsignedTypeError(
                f"Cannot add negative value {value!r} to unsigned kind {kind}"
            )

        # The first accepted value fixes the kind
        self.kind = kind

        if self.track_mode:
            key = _NAN_KEY if np.isnan(value_f) else value_f
            self._frequencies[key] = self._frequencies.get(key, 0) + 1

        self._count += 1
        self._mean += (value_f - self._mean) / self._count

        return self._check_threshold()

    def add(self, value: Any) -> None:
        """
        Add a value, ignoring threshold and sign validation outcomes.

        NumericKindError still propagates, since it signals a value of the
        wrong kind rather than an accumulation outcome.
        """
        try:
            self.add_with_result(value)
        except NumericKindError:
            raise
        except MovingAverageError as e:
            logger.debug(f"Discarded outcome of add({value!r}): {e}")

    def merge(self, other: "Moving") -> float:
        """
        Merge another accumulator into this one.

        The result is the same as if every value added to ``other`` had been
        added here. The mean combines with the weighted form of the running
        mean recurrence and the frequency tables are summed.

        Parameters
        ----------
        other : Moving
            Accumulator of the same numeric kind

        Returns
        -------
        float
            Mean after the merge

        Raises
        ------
        NumericKindError
            If both accumulators have a kind and the kinds differ
        ModeTrackingMismatchError
            If this accumulator tracks the mode and a non-empty ``other``
            does not. Nothing is committed.
        ThresholdReachedError
            If the merged mean is at or above this accumulator's threshold,
            raised after the merge is committed
        """
        if not isinstance(other, Moving):
            raise NumericKindError(f"Cannot merge {type(other).__name__} into Moving")
        if self.kind is not None and other.kind is not None and self.kind != other.kind:
            raise NumericKindError(f"Cannot merge kind {other.kind} into kind {self.kind}")
        if self.track_mode and not other.track_mode and other._count > 0:
            raise ModeTrackingMismatchError(
                "Cannot merge an accumulator without mode tracking into one that tracks the mode"
            )

        if other._count == 0:
            return self._mean

        if self.kind is None:
            self.kind = other.kind

        total = self._count + other._count
        self._mean += (other._mean - self._mean) * other._count / total
        self._count = total

        if self.track_mode:
            for key, frequency in other._frequencies.items():
                if np.isnan(key):
                    key = _NAN_KEY
                self._frequencies[key] = self._frequencies.get(key, 0) + frequency

        return self._check_threshold()

    def _check_threshold(self) -> float:
        if self._mean >= self.threshold:
            logger.info(
                f"Mean {self._mean} reached threshold {self.threshold} after {self._count} values"
            )
            raise ThresholdReachedError(self._mean, self._count, self.threshold)
        return self._mean

    def mean(self) -> float:
        """Return the running mean, 0.0 before any value is added."""
        return self._mean

    def count(self) -> int:
        """Return the number of values added."""
        return self._count

    def mode(self) -> float:
        """
        Return the most frequent value added so far.

        - No values added: 0.0
        - Mode tracking disabled, or every value seen exactly once: the mean
        - One value with the highest frequency: that value
        - Several values tied for the highest frequency: the one closest to
          the mean, and among equally close values the smallest. A NaN key
          only wins when nothing else ties with it; when the mean is not
          finite all distances count as infinite and the smallest value wins

        Returns
        -------
        float
            Mode of the observed values

        Examples
        --------
        >>> moving = Moving()
        >>> for value in (10, 20, 10, 20, 1):
        ...     moving.add(value)
        >>> moving.mode()
        10.0
        """
        if self._count == 0:
            return 0.0
        if not self._frequencies:
            return self._mean

        max_frequency = max(self._frequencies.values())
        if max_frequency == 1:
            return self._mean

        modes = [value for value, frequency in self._frequencies.items() if frequency == max_frequency]
        if len(modes) == 1:
            return modes[0]

        # Only one NaN key exists, so a tie always leaves a non-NaN candidate
        candidates = [value for value in modes if not np.isnan(value)]

        def distance(value: float) -> float:
            gap = abs(value - self._mean)
            return np.inf if np.isnan(gap) else gap

        return min(candidates, key=lambda value: (distance(value), value))

    def frequencies(self) -> Dict[float, int]:
        """Return a copy of the value frequency table (empty when mode tracking is off)."""
        return dict(self._frequencies)

    def get_summary(self) -> Dict[str, Any]:
        """
        Get a summary of the accumulated statistics.

        Returns
        -------
        Dict[str, Any]
            Count, mean, mode, threshold, kind name and mode tracking flag
        """
        return {
            "count": self._count,
            "mean": self._mean,
            "mode": self.mode(),
            "threshold": self.threshold,
            "kind": None if self.kind is None else self.kind.name,
            "track_mode": self.track_mode,
        }

    def _coerce_other(self, other: Any) -> Optional[float]:
        """Return the float an operand compares as, or None if unsupported."""
        if isinstance(other, Moving):
            return other._mean
        if isinstance(other, (bool, np.bool_)):
            return None
        if isinstance(other, (Real, np.integer, np.floating)):
            return float(other)
        return None

    def __eq__(self, other: object) -> bool:
        value = self._coerce_other(other)
        if value is None:
            return NotImplemented
        return self._mean == value

    def __lt__(self, other: Any) -> bool:
        value = self._coerce_other(other)
        if value is None:
            return NotImplemented
        return self._mean < value

    def __le__(self, other: Any) -> bool:
        value = self._coerce_other(other)
        if value is None:
            return NotImplemented
        return self._mean <= value

    def __gt__(self, other: Any) -> bool:
        value = self._coerce_other(other)
        if value is None:
            return NotImplemented
        return self._mean > value

    def __ge__(self, other: Any) -> bool:
        value = self._coerce_other(other)
        if value is None:
            return NotImplemented
        return self._mean >= value

    # Mutable, so not hashable
    __hash__ = None  # type: ignore[assignment]

    def __iadd__(self, value: Any) -> "Moving":
        self.add(value)
        return self

    def __float__(self) -> float:
        return self._mean

    def __str__(self) -> str:
        return f"{self._mean}"

    def __repr__(self) -> str:
        kind = None if self.kind is None else self.kind.name
        return f"Moving(kind={kind}, count={self._count}, mean={self._mean})"
