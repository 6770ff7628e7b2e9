"""Numeric dataset digests: analysis, batch transformation and range aggregation."""

import importlib.metadata
import logging

from datadigest.config import FrozenConfig, ResolvedConfig, resolve_config
from datadigest.core.models import Operation
from datadigest.core.types import (
    AggregationResult,
    AnalysisResult,
    BatchSummary,
    EmptyAnalysisResult,
    Failure,
    InitialCommand,
    Result,
    ResultEnvelope,
    Success,
    TransformationResult,
)
from datadigest.exceptions import (
    ConfigurationError,
    DataDigestError,
    InvariantViolationError,
    PipelineError,
    ValidationError,
)
from datadigest.executor import DigestExecutor, create_executor, run_digest
from datadigest.operations import (
    aggregate_data,
    analyze_data,
    process_batch,
    run_operation,
    transform_data,
)
from datadigest.telemetry import InMemoryReporter, TelemetryContext, TelemetryReporter

try:
    __version__ = importlib.metadata.version("data-digest")
except importlib.metadata.PackageNotFoundError:
    __version__ = "development"

# Prevent 'No handler found' warnings when the consuming app has no logging configured.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [  # noqa: RUF022
    # Executor
    "DigestExecutor",
    "create_executor",
    "run_digest",
    # Operations
    "Operation",
    "analyze_data",
    "transform_data",
    "aggregate_data",
    "process_batch",
    "run_operation",
    # Configuration
    "resolve_config",
    "ResolvedConfig",
    "FrozenConfig",
    # Core types
    "InitialCommand",
    "Result",
    "Success",
    "Failure",
    "AnalysisResult",
    "EmptyAnalysisResult",
    "TransformationResult",
    "AggregationResult",
    "BatchSummary",
    "ResultEnvelope",
    # Telemetry
    "TelemetryContext",
    "TelemetryReporter",
    "InMemoryReporter",
    # Exceptions
    "DataDigestError",
    "ConfigurationError",
    "ValidationError",
    "PipelineError",
    "InvariantViolationError",
]
