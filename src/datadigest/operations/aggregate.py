"""Bucketed frequency counts over fixed value ranges."""

from __future__ import annotations

from collections.abc import Sequence

from datadigest.constants import OVERFLOW_BUCKET, RANGE_BUCKETS
from datadigest.core.numeric import find_largest_group, round_to_two
from datadigest.core.types import AggregationResult


def classify_value(value: float) -> str:
    """Return the label of the bucket that holds ``value``."""
    for label, upper in RANGE_BUCKETS:
        if value <= upper:
            return label
    return OVERFLOW_BUCKET


def aggregate_data(data: Sequence[float], batch_size: int = 0) -> AggregationResult:
    """Count values per range bucket and express each count as a percentage.

    An empty dataset yields zero counts, ``0.0`` percentages and no largest
    group. Ties for the largest group go to the lowest range.
    """
    del batch_size
    ranges: dict[str, int] = {label: 0 for label, _ in RANGE_BUCKETS}
    ranges[OVERFLOW_BUCKET] = 0

    for value in data:
        ranges[classify_value(value)] += 1

    total = len(data)
    if total:
        percentages = {
            key: round_to_two((count / total) * 100.0) for key, count in ranges.items()
        }
    else:
        percentages = dict.fromkeys(ranges, 0.0)

    return AggregationResult(
        total_count=total,
        ranges=ranges,
        percentages=percentages,
        largest_group=find_largest_group(ranges),
    )
