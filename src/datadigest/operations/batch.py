"""Per-batch summaries used by the transform operation."""

from __future__ import annotations

from collections.abc import Sequence

from datadigest.core.numeric import checked_sum, round_to_two
from datadigest.core.types import BatchSummary
from datadigest.exceptions import ValidationError


def process_batch(batch: Sequence[float], batch_number: int) -> BatchSummary:
    """Summarize one batch.

    Args:
        batch: A non-empty, contiguous slice of the dataset.
        batch_number: 1-based position of the batch in dataset order.

    Returns:
        A `BatchSummary` with the sum and average rounded to two decimals.

    Raises:
        ValidationError: If the batch is empty, the number is below 1, or the
            sum leaves the float range.
    """
    if not batch:
        raise ValidationError(f"batch {batch_number} is empty")
    if batch_number < 1:
        raise ValidationError(f"batch_number must be >= 1, got {batch_number}")

    total = checked_sum(batch, f"batch {batch_number} sum")
    return BatchSummary(
        batch_number=batch_number,
        size=len(batch),
        sum=round_to_two(total),
        average=round_to_two(total / len(batch)),
    )
