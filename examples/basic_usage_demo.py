#!/usr/bin/env python
"""
Example script demonstrating the moving average accumulator.

Shows running mean and mode tracking, threshold signalling, and building an
accumulator from the YAML configuration in config/moving_average.yaml.
"""

from pathlib import Path

import numpy as np

from moving_average import (
    Moving,
    NegativeValueToUnsignedTypeError,
    ThresholdReachedError,
    configure_logging,
    load_config,
    merge_accumulators,
)

CONFIG_PATH = Path(__file__).resolve().parent.parent / "config" / "moving_average.yaml"


def demonstrate_running_statistics():
    """Demonstrate mean, mode and count over a stream."""
    print("=" * 80)
    print("Moving Average - Running Statistics Demonstration")
    print("=" * 80)
    print()

    print("1. Streaming 1000 simulated sensor readings (uint16)...")
    rng = np.random.default_rng(42)
    readings = rng.integers(480, 520, size=1000, dtype=np.uint16)

    moving = Moving(kind=np.uint16)
    for reading in readings:
        moving += reading

    print(f"   - Count:          {moving.count()}")
    print(f"   - Running mean:   {moving}")
    print(f"   - numpy mean:     {np.mean(readings.astype(np.float64))}")
    print(f"   - Mode:           {moving.mode()}")
    print(f"   - Above 500?      {moving > 500}")
    print()


def demonstrate_threshold():
    """Demonstrate threshold signalling and sign validation."""
    print("=" * 80)
    print("Moving Average - Threshold Demonstration")
    print("=" * 80)
    print()

    print("2. Adding values until the mean reaches 10.0...")
    moving = Moving.new_with_threshold(10.0, kind="uint32")

    for value in (9, 15, 20):
        try:
            mean = moving.add_with_result(value)
            print(f"   - Added {value:>3}: mean {mean}")
        except ThresholdReachedError as e:
            print(f"   - Added {value:>3}: threshold reached, mean {e.mean} (committed)")
            break

    print()
    print("3. Feeding a negative value to an unsigned accumulator...")
    try:
        moving.add_with_result(-1)
    except NegativeValueToUnsignedTypeError as e:
        print(f"   - Rejected: {e}")
    print(f"   - Count unchanged: {moving.count()}")
    print()


def demonstrate_configured_accumulators():
    """Demonstrate configuration loading and merging per-chunk accumulators."""
    print("=" * 80)
    print("Moving Average - Configured Accumulators Demonstration")
    print("=" * 80)
    print()

    config = load_config(CONFIG_PATH)
    logger = configure_logging(config)
    logger.info("Building accumulators from configuration")

    print("4. Accumulating 3 chunks separately and merging...")
    chunks = []
    for chunk_id in range(3):
        acc = Moving.from_config(config)
        for value in range(chunk_id * 10, chunk_id * 10 + 10):
            acc.add(value)
        chunks.append(acc)
        print(f"   - Chunk {chunk_id + 1}: count {acc.count()}, mean {acc.mean()}")

    merged = merge_accumulators(chunks)
    print(f"   - Merged: {merged.get_summary()}")
    print()


def main():
    """Run all demonstrations."""
    print()
    print("#" * 80)
    print("# MOVING AVERAGE DEMONSTRATION")
    print("#" * 80)
    print()

    try:
        demonstrate_running_statistics()
        print()

        demonstrate_threshold()
        print()

        demonstrate_configured_accumulators()
        print()

        print("=" * 80)
        print("All demonstrations completed successfully!")
        print("=" * 80)
        print()

    except Exception as e:
        print(f"\nERROR: {e}")
        import traceback
        traceback.print_exc()
        return 1

    return 0


if __name__ == "__main__":
    exit(main())
