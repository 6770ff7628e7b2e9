"""Core data types that flow through the digest pipeline.

This module defines the immutable structures that represent a run as it moves
through the processing stages, plus the tagged result variants produced by
the three operations. Each result variant serializes itself through
``to_dict()`` so the boundary sees one uniform mapping shape.
"""

from __future__ import annotations

from collections.abc import Mapping
import dataclasses
import math
import typing

from datadigest.constants import BUCKET_LABELS, EMPTY_ANALYSIS_MESSAGE
from datadigest.core.models import Operation

if typing.TYPE_CHECKING:
    from datadigest.config import FrozenConfig

# --- Minimal guard helpers ---


def _require(
    *,
    condition: bool,
    message: str,
    exc: type[Exception] = ValueError,
    field_name: str | None = None,
) -> None:
    """Centralized validation with optional field context for clearer errors."""
    if not condition:
        if field_name:
            raise exc(f"{field_name}: {message}")
        raise exc(message)


def _is_tuple_of(value: object, typ: type | tuple[type, ...]) -> bool:
    return isinstance(value, tuple) and all(isinstance(v, typ) for v in value)


def is_real_number(value: object) -> bool:
    """Return True for finite ints/floats, excluding bools."""
    if isinstance(value, bool) or not isinstance(value, int | float):
        return False
    return math.isfinite(value)


# --- Result Monad ---
# Stages return Success | Failure so the executor never needs broad
# try/except blocks around handlers.

TSuccess = typing.TypeVar("TSuccess")
TFailure = typing.TypeVar("TFailure", bound=Exception)


@dataclasses.dataclass(frozen=True, slots=True)
class Success[TSuccess]:
    """A successful result in the pipeline."""

    value: TSuccess


@dataclasses.dataclass(frozen=True, slots=True)
class Failure[TFailure]:
    """A failure in the pipeline, containing the error."""

    error: TFailure


Result = Success[TSuccess] | Failure[TFailure]

# --- Operation Results ---


@dataclasses.dataclass(frozen=True, slots=True)
class BatchSummary:
    """Sum and average over one contiguous batch."""

    batch_number: int
    size: int
    sum: float
    average: float

    def __post_init__(self) -> None:
        _require(
            condition=self.batch_number >= 1,
            message="must be >= 1",
            field_name="batch_number",
        )
        _require(condition=self.size >= 1, message="must be >= 1", field_name="size")

    def to_dict(self) -> dict[str, typing.Any]:
        return {
            "batch_number": self.batch_number,
            "size": self.size,
            "sum": self.sum,
            "average": self.average,
        }


@dataclasses.dataclass(frozen=True, slots=True)
class AnalysisResult:
    """Descriptive statistics over a non-empty dataset."""

    result_type: typing.ClassVar[str] = "analysis"

    count: int
    sum: float
    mean: float
    median: float
    min: float
    max: float
    range: float
    percentile_25: float
    percentile_75: float

    def __post_init__(self) -> None:
        _require(condition=self.count >= 1, message="must be >= 1", field_name="count")

    def to_dict(self) -> dict[str, typing.Any]:
        return {
            "type": self.result_type,
            "count": self.count,
            "sum": self.sum,
            "mean": self.mean,
            "median": self.median,
            "min": self.min,
            "max": self.max,
            "range": self.range,
            "percentile_25": self.percentile_25,
            "percentile_75": self.percentile_75,
        }


@dataclasses.dataclass(frozen=True, slots=True)
class EmptyAnalysisResult:
    """Analysis outcome for an empty dataset.

    This is a terminal, non-fatal result: it serializes to an ``error`` field
    only, with no statistics and no ``type`` tag.
    """

    error: str = EMPTY_ANALYSIS_MESSAGE

    def to_dict(self) -> dict[str, typing.Any]:
        return {"error": self.error}


@dataclasses.dataclass(frozen=True, slots=True)
class TransformationResult:
    """Normalized values plus per-batch summaries."""

    result_type: typing.ClassVar[str] = "transformation"

    original_count: int
    transformed: tuple[float, ...]
    batch_results: tuple[BatchSummary, ...]

    def __post_init__(self) -> None:
        _require(
            condition=_is_tuple_of(self.batch_results, BatchSummary),
            message="must be a tuple[BatchSummary, ...]",
            field_name="batch_results",
            exc=TypeError,
        )
        _require(
            condition=len(self.transformed) == self.original_count,
            message="length must equal original_count",
            field_name="transformed",
        )

    @property
    def batches_processed(self) -> int:
        return len(self.batch_results)

    def to_dict(self) -> dict[str, typing.Any]:
        return {
            "type": self.result_type,
            "original_count": self.original_count,
            "transformed": list(self.transformed),
            "batch_results": [b.to_dict() for b in self.batch_results],
            "batches_processed": self.batches_processed,
        }


@dataclasses.dataclass(frozen=True, slots=True)
class AggregationResult:
    """Bucketed counts and percentages over the fixed value ranges."""

    result_type: typing.ClassVar[str] = "aggregation"

    total_count: int
    ranges: Mapping[str, int]
    percentages: Mapping[str, float]
    largest_group: str | None

    def __post_init__(self) -> None:
        for name in ("ranges", "percentages"):
            _require(
                condition=tuple(getattr(self, name)) == BUCKET_LABELS,
                message=f"keys must be exactly {list(BUCKET_LABELS)}",
                field_name=name,
            )
        _require(
            condition=sum(self.ranges.values()) == self.total_count,
            message="bucket counts must sum to total_count",
            field_name="ranges",
        )

    def to_dict(self) -> dict[str, typing.Any]:
        return {
            "type": self.result_type,
            "total_count": self.total_count,
            "ranges": dict(self.ranges),
            "percentages": dict(self.percentages),
            "largest_group": self.largest_group,
        }


type OperationResult = (
    AnalysisResult | EmptyAnalysisResult | TransformationResult | AggregationResult
)

# --- Pipeline Commands ---


@dataclasses.dataclass(frozen=True, slots=True)
class InitialCommand:
    """The request as supplied by the caller.

    ``dataset`` is optional; when omitted the sample dataset is used.
    """

    config: FrozenConfig
    dataset: tuple[float, ...] | None = None


@dataclasses.dataclass(frozen=True, slots=True)
class LoadedCommand:
    """The request after the dataset has been validated."""

    config: FrozenConfig
    dataset: tuple[float, ...]

    def __post_init__(self) -> None:
        _require(
            condition=_is_tuple_of(self.dataset, float),
            message="must be a tuple[float, ...]",
            field_name="dataset",
            exc=TypeError,
        )


@dataclasses.dataclass(frozen=True, slots=True)
class ComputedCommand:
    """The request after its operation has run."""

    config: FrozenConfig
    dataset: tuple[float, ...]
    operation: Operation
    result: OperationResult


# --- Result Envelope ---

ENVELOPE_METADATA_KEYS: typing.Final[tuple[str, ...]] = (
    "user_id",
    "operation",
    "batch_size",
    "processed_at",
    "data_points",
    "debug_mode",
)


class ResultEnvelope(typing.TypedDict, total=False):
    """Serialized operation result annotated with run metadata.

    Operation-specific keys (``type``, ``count``, ``transformed`` ...) sit at
    the top level next to the metadata, as ``to_dict()`` produced them.
    """

    type: str
    error: str

    user_id: int
    operation: str
    batch_size: int
    processed_at: str
    data_points: int
    debug_mode: bool


def is_result_envelope(value: object) -> bool:
    """Return True when ``value`` has the shape of a ``ResultEnvelope``."""
    if not isinstance(value, dict):
        return False
    if not all(key in value for key in ENVELOPE_METADATA_KEYS):
        return False
    if not ("type" in value or "error" in value):
        return False
    return (
        isinstance(value["user_id"], int)
        and isinstance(value["batch_size"], int)
        and isinstance(value["data_points"], int)
        and isinstance(value["debug_mode"], bool)
        and isinstance(value["operation"], str)
        and isinstance(value["processed_at"], str)
    )
