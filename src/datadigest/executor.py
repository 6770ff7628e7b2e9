"""The primary user-facing entry point for a digest run.

The executor runs each stage in order and enforces one invariant: the final
value must be a `ResultEnvelope`-shaped dict. Stage failures surface as
`PipelineError` carrying the failing stage's name.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
import logging
from time import perf_counter
from typing import Any

from datadigest._dev_flags import dev_validate_enabled
from datadigest.config import FrozenConfig, resolve_config
from datadigest.core.types import (
    Failure,
    InitialCommand,
    ResultEnvelope,
    Success,
    is_result_envelope,
)
from datadigest.exceptions import InvariantViolationError, PipelineError
from datadigest.pipeline import DatasetSource, OperationHandler, ResultBuilder
from datadigest.pipeline.base import BaseHandler
from datadigest.telemetry import TelemetryContext, TelemetryReporter

log = logging.getLogger(__name__)


class DigestExecutor:
    """Executes commands through a pipeline of handlers.

    The default pipeline is ``DatasetSource -> OperationHandler ->
    ResultBuilder``. The optional ``validate`` flag turns on stricter
    dev-time checks in `ResultBuilder` and defaults to the
    ``DATADIGEST_VALIDATE=1`` environment toggle.
    """

    def __init__(
        self,
        config: FrozenConfig,
        pipeline_handlers: Iterable[BaseHandler[Any, Any, Any]] | None = None,
        *,
        validate: bool | None = None,
        reporters: Sequence[TelemetryReporter] = (),
    ):
        """Initialize the executor with configuration.

        Args:
            config: Configuration for the run.
            pipeline_handlers: Optional handlers overriding the default pipeline.
            validate: Enable dev-time validation (overrides DATADIGEST_VALIDATE).
            reporters: Telemetry reporters; ignored unless telemetry is enabled.
        """
        self.config = config
        self._validate_pipeline: bool = dev_validate_enabled(override=validate)
        self._reporters = tuple(reporters)
        handlers = list(
            pipeline_handlers
            if pipeline_handlers is not None
            else self._build_default_pipeline()
        )
        if not handlers:
            raise ValueError("Pipeline may not be empty; provide at least one handler.")
        self._pipeline = handlers

    def _build_default_pipeline(self) -> list[Any]:
        return [
            DatasetSource(),
            OperationHandler(),
            ResultBuilder(validate=self._validate_pipeline),
        ]

    def execute(self, command: InitialCommand) -> ResultEnvelope:
        """Execute a command through the pipeline.

        Args:
            command: The initial command (configuration and optional dataset).

        Returns:
            The result envelope produced by the final stage.

        Raises:
            PipelineError: If any stage returns a failure result.
            InvariantViolationError: If a stage breaks the handler contract.
        """
        if command.config.debug:
            log.info("Debug mode enabled")

        current: Any = command
        last_stage_name: str | None = None
        stage_durations: dict[str, float] = {}
        ctx = TelemetryContext(*self._reporters)

        with ctx.scope("digest", operation=str(command.config.operation)):
            for handler in self._pipeline:
                last_stage_name = type(handler).__name__
                start = perf_counter()
                with ctx.scope(last_stage_name):
                    result = handler.handle(current)
                stage_durations[last_stage_name] = perf_counter() - start

                # Guard: handlers must return Success|Failure
                if not isinstance(result, Success | Failure):
                    ctx.count("invariant_violation", stage=last_stage_name)
                    raise InvariantViolationError(
                        "Handler returned a non-Result value; "
                        "expected Success|Failure.",
                        stage_name=last_stage_name,
                    )

                if isinstance(result, Failure):
                    ctx.count("error", stage=last_stage_name)
                    raise PipelineError(
                        str(result.error), last_stage_name, result.error
                    )
                current = result.value

            if not is_result_envelope(current):
                ctx.count(
                    "invariant_violation",
                    stage=last_stage_name or "unknown_stage",
                )
                raise InvariantViolationError(
                    "Executor ended without a ResultEnvelope; ensure the final "
                    "stage produces the envelope (e.g., ResultBuilder).",
                    stage_name=last_stage_name,
                )

            ctx.metric("data_points", current["data_points"])
            if "batches_processed" in current:
                ctx.metric("batches_processed", current["batches_processed"])

        log.debug("Stage durations: %s", stage_durations)
        return current

    @property
    def stage_names(self) -> tuple[str, ...]:
        """Return the pipeline's stage names in execution order."""
        return tuple(type(h).__name__ for h in self._pipeline)


def create_executor(
    config: FrozenConfig | None = None,
    *,
    validate: bool | None = None,
    reporters: Sequence[TelemetryReporter] = (),
) -> DigestExecutor:
    """Create an executor, resolving configuration when none is given."""
    final_config = config if config is not None else resolve_config().to_frozen()
    return DigestExecutor(final_config, validate=validate, reporters=reporters)


def run_digest(
    dataset: Iterable[float] | None = None,
    *,
    config: FrozenConfig | None = None,
    **overrides: Any,
) -> ResultEnvelope:
    """Run one digest and return its envelope.

    Args:
        dataset: Values to process; the sample dataset is used when None.
        config: Frozen configuration. When None, configuration is resolved
            from the environment with ``overrides`` applied.
        **overrides: Programmatic config values (``operation``, ``batch_size``
            ...). Only used when ``config`` is None.

    Example:
        envelope = run_digest([10, 20, 30, 40], operation="transform", batch_size=2)
    """
    if config is None:
        config = resolve_config(overrides or None).to_frozen()
    data = tuple(dataset) if dataset is not None else None
    return create_executor(config).execute(InitialCommand(config=config, dataset=data))
