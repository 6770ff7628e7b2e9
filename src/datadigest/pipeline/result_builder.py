"""Result builder: serialize a computed result into a `ResultEnvelope`.

The envelope is the operation's ``to_dict()`` output with run metadata added
at the top level: ``user_id``, ``operation``, ``batch_size``,
``processed_at``, ``data_points`` and ``debug_mode``.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
import json
import logging

from datadigest._dev_flags import dev_validate_enabled
from datadigest.core.types import (
    ComputedCommand,
    Failure,
    Result,
    ResultEnvelope,
    Success,
)
from datadigest.exceptions import DataDigestError, InvariantViolationError
from datadigest.pipeline.base import BaseHandler

log = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


def format_timestamp(moment: datetime) -> str:
    """Format ``moment`` as an RFC 3339 timestamp with a ``Z`` suffix for UTC."""
    text = moment.isoformat(timespec="seconds")
    if text.endswith("+00:00"):
        return text.removesuffix("+00:00") + "Z"
    return text


class ResultBuilder(BaseHandler[ComputedCommand, ResultEnvelope, DataDigestError]):
    """Build `ResultEnvelope` dicts from computed commands.

    Attributes:
        validate: When True, the envelope must survive a strict JSON
            round-trip; otherwise the stage fails.
    """

    def __init__(
        self,
        *,
        validate: bool | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """Initialize the builder.

        Args:
            validate: Enable dev-time validation (overrides ``DATADIGEST_VALIDATE``).
            clock: Source of the ``processed_at`` timestamp.
        """
        self.validate = dev_validate_enabled(override=validate)
        self._clock = clock

    def handle(
        self, command: ComputedCommand
    ) -> Result[ResultEnvelope, DataDigestError]:
        config = command.config
        envelope: ResultEnvelope = {
            **command.result.to_dict(),  # type: ignore[typeddict-item]
            "user_id": config.user_id,
            "operation": command.operation.value,
            "batch_size": config.batch_size,
            "processed_at": format_timestamp(self._clock()),
            "data_points": len(command.dataset),
            "debug_mode": config.debug,
        }

        if self.validate:
            try:
                json.loads(json.dumps(envelope, allow_nan=False))
            except (TypeError, ValueError) as e:
                return Failure(
                    InvariantViolationError(
                        f"Result envelope is not JSON-serializable: {e}",
                        stage_name=type(self).__name__,
                    )
                )

        log.info(
            "Processing complete! Operation: %s, Results: %d items",
            envelope["operation"],
            len(envelope),
        )
        return Success(envelope)
