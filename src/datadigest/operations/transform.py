"""Batch-wise normalization of values to a 0-100 scale."""

from __future__ import annotations

from collections.abc import Sequence
import logging

from datadigest.constants import NORMALIZATION_DIVISOR, NORMALIZED_SCALE
from datadigest.core.numeric import iter_batches, require_batch_size, round_to_two
from datadigest.core.types import BatchSummary, TransformationResult
from datadigest.operations.batch import process_batch

log = logging.getLogger(__name__)


def normalize_value(value: float) -> float:
    """Map a value on the nominal 0-1000 scale to 0-100.

    Values above the scale clamp to 100; negative values are not clamped.
    """
    normalized = (value / NORMALIZATION_DIVISOR) * NORMALIZED_SCALE
    if normalized > NORMALIZED_SCALE:
        normalized = NORMALIZED_SCALE
    return round_to_two(normalized)


def transform_data(data: Sequence[float], batch_size: int) -> TransformationResult:
    """Normalize ``data`` batch by batch, summarizing each batch.

    Raises:
        ValidationError: If ``batch_size`` is below 1.
    """
    require_batch_size(batch_size)

    transformed: list[float] = []
    batches: list[BatchSummary] = []
    for number, batch in iter_batches(data, batch_size):
        batches.append(process_batch(batch, number))
        transformed.extend(normalize_value(value) for value in batch)

    log.debug("Transformed %d values in %d batches", len(transformed), len(batches))
    return TransformationResult(
        original_count=len(data),
        transformed=tuple(transformed),
        batch_results=tuple(batches),
    )
