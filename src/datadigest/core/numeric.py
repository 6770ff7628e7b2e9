"""Numeric helpers shared by the digest operations."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
import math

from datadigest.exceptions import ValidationError


def round_to_two(value: float) -> float:
    """Round to two decimals, half-up on the scaled value.

    The scaled value is truncated toward zero after adding 0.5, so negative
    inputs round toward zero at the half (``-1.235 -> -1.23``). Values too
    large to scale by 100 carry no fractional digits and are returned as is.
    """
    scaled = value * 100
    if not math.isfinite(scaled):
        return value
    return math.trunc(scaled + 0.5) / 100


def checked_sum(values: Iterable[float], what: str = "sum of values") -> float:
    """Return the sum of ``values``.

    Raises:
        ValidationError: If the sum leaves the float range.
    """
    total = sum(values)
    if not math.isfinite(total):
        raise ValidationError(f"{what} exceeds the float range")
    return total


def calculate_median(sorted_data: Sequence[float]) -> float:
    """Return the median of an ascending, non-empty sequence."""
    n = len(sorted_data)
    if n == 0:
        raise ValidationError("median of an empty sequence is undefined")
    if n % 2 == 0:
        return sorted_data[n // 2 - 1] / 2 + sorted_data[n // 2] / 2
    return sorted_data[n // 2]


def nearest_rank(
    sorted_data: Sequence[float], numerator: int, denominator: int
) -> float:
    """Return ``sorted_data[n * numerator // denominator]`` without interpolation."""
    n = len(sorted_data)
    if n == 0:
        raise ValidationError("percentile of an empty sequence is undefined")
    return sorted_data[n * numerator // denominator]


def require_batch_size(batch_size: int) -> int:
    """Validate ``batch_size`` before it is used to slice a dataset."""
    if isinstance(batch_size, bool) or not isinstance(batch_size, int):
        raise ValidationError(
            f"batch_size must be an int, got {type(batch_size).__name__}"
        )
    if batch_size < 1:
        raise ValidationError(f"batch_size must be >= 1, got {batch_size}")
    return batch_size


def iter_batches(
    data: Sequence[float], batch_size: int
) -> Iterator[tuple[int, Sequence[float]]]:
    """Yield ``(batch_number, batch)`` pairs over consecutive slices.

    Batches are numbered from 1; the final batch may be shorter.
    """
    require_batch_size(batch_size)
    for number, start in enumerate(range(0, len(data), batch_size), start=1):
        yield number, data[start : start + batch_size]


def find_largest_group(counts: Mapping[str, int]) -> str | None:
    """Return the key with the strictly largest count.

    Iteration order of ``counts`` decides ties: the first key to reach the
    maximum wins. Returns None when every count is zero.
    """
    max_count = 0
    max_key: str | None = None
    for key, count in counts.items():
        if count > max_count:
            max_count = count
            max_key = key
    return max_key
