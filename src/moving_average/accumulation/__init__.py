"""Accumulation modules for running statistics."""

from moving_average.accumulation.merger import merge_accumulators
from moving_average.accumulation.moving import DEFAULT_THRESHOLD, Moving
from moving_average.accumulation.numeric_kind import NumericKind

__all__ = [
    "Moving",
    "NumericKind",
    "DEFAULT_THRESHOLD",
    "merge_accumulators",
]
