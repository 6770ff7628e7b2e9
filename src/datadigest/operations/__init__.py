"""Operation registry and dispatcher.

The set of operations is fixed: every `Operation` member maps to exactly one
function with the signature ``(data, batch_size) -> OperationResult``.
Unknown tags fall back to ``analyze``.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
import logging
from types import MappingProxyType

from datadigest.core.models import Operation
from datadigest.core.numeric import require_batch_size
from datadigest.core.types import OperationResult
from datadigest.operations.aggregate import aggregate_data
from datadigest.operations.analyze import analyze_data
from datadigest.operations.batch import process_batch
from datadigest.operations.transform import transform_data

log = logging.getLogger(__name__)

type OperationFn = Callable[[Sequence[float], int], OperationResult]

DEFAULT_OPERATION = Operation.ANALYZE

OPERATIONS: Mapping[Operation, OperationFn] = MappingProxyType(
    {
        Operation.ANALYZE: analyze_data,
        Operation.TRANSFORM: transform_data,
        Operation.AGGREGATE: aggregate_data,
    }
)


def resolve_operation(tag: str | Operation) -> Operation:
    """Map a tag to an `Operation`, falling back to ``analyze``."""
    if isinstance(tag, Operation):
        return tag
    try:
        return Operation(tag)
    except ValueError:
        log.warning(
            "Unknown operation %r; falling back to %r", tag, DEFAULT_OPERATION.value
        )
        return DEFAULT_OPERATION


def run_operation(
    tag: str | Operation, data: Sequence[float], batch_size: int
) -> OperationResult:
    """Run the operation named by ``tag`` over ``data``.

    Raises:
        ValidationError: If ``batch_size`` is below 1.
    """
    require_batch_size(batch_size)
    operation = resolve_operation(tag)
    log.debug("Dispatching %s over %d values", operation.value, len(data))
    return OPERATIONS[operation](data, batch_size)


__all__ = [
    "DEFAULT_OPERATION",
    "OPERATIONS",
    "OperationFn",
    "aggregate_data",
    "analyze_data",
    "process_batch",
    "resolve_operation",
    "run_operation",
    "transform_data",
]
