"""Descriptive statistics over a whole dataset."""

from __future__ import annotations

from collections.abc import Sequence
import logging
import math

from datadigest.core.numeric import (
    calculate_median,
    checked_sum,
    nearest_rank,
    round_to_two,
)
from datadigest.core.types import AnalysisResult, EmptyAnalysisResult
from datadigest.exceptions import ValidationError

log = logging.getLogger(__name__)


def analyze_data(
    data: Sequence[float], batch_size: int = 0
) -> AnalysisResult | EmptyAnalysisResult:
    """Compute count, sum, mean, median, extrema and quartile estimates.

    ``batch_size`` is accepted for a uniform operation signature and ignored.
    The caller's sequence is never reordered; statistics come from a sorted
    copy. Quartiles are nearest-rank values at ``n // 4`` and ``3n // 4``.

    Raises:
        ValidationError: If the sum or the range leaves the float range.
    """
    del batch_size
    if not data:
        log.debug("Analyze received an empty dataset")
        return EmptyAnalysisResult()

    sorted_data = sorted(data)
    total = checked_sum(data)
    lowest = sorted_data[0]
    highest = sorted_data[-1]
    spread = highest - lowest
    if not math.isfinite(spread):
        raise ValidationError("range of values exceeds the float range")

    return AnalysisResult(
        count=len(data),
        sum=round_to_two(total),
        mean=round_to_two(total / len(data)),
        median=round_to_two(calculate_median(sorted_data)),
        min=lowest,
        max=highest,
        range=spread,
        percentile_25=nearest_rank(sorted_data, 1, 4),
        percentile_75=nearest_rank(sorted_data, 3, 4),
    )
