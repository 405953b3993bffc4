"""Functions for merging accumulators."""

from typing import List

from moving_average.accumulation.moving import Moving
from moving_average.utils.exceptions import ThresholdReachedError


def merge_accumulators(accumulators: List[Moving]) -> Moving:
    """
    Merge multiple accumulators into a new accumulator.

    The inputs are left untouched. Threshold and mode tracking of the result
    are taken from the first accumulator.

    Parameters
    ----------
    accumulators : List[Moving]
        Accumulators of one numeric kind to merge

    Returns
    -------
    Moving
        Accumulator holding the combined count, mean and frequencies

    Raises
    ------
    ValueError
        If accumulators list is empty
    NumericKindError
        If the accumulators are of different kinds
    ModeTrackingMismatchError
        If the first accumulator tracks the mode and a later non-empty one does not

    Examples
    --------
    >>> acc1 = Moving()
    >>> acc2 = Moving()
    >>> acc1.add(10)
    >>> acc2.add(20)
    >>> merge_accumulators([acc1, acc2]).mean()
    15.0
    """
    if not accumulators:
        raise ValueError("Cannot merge empty list of accumulators")

    first = accumulators[0]
    merged = Moving(threshold=first.threshold, kind=first.kind, track_mode=first.track_mode)

    for acc in accumulators:
        try:
            merged.merge(acc)
        except ThresholdReachedError:
            # The merge is committed before the threshold is signalled
            pass

    return merged
