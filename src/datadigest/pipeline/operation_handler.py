"""Operation stage: run the configured digest operation."""

from __future__ import annotations

import logging

from datadigest.core.types import (
    ComputedCommand,
    Failure,
    LoadedCommand,
    Result,
    Success,
)
from datadigest.exceptions import DataDigestError
from datadigest.operations import resolve_operation, run_operation
from datadigest.pipeline.base import BaseHandler

log = logging.getLogger(__name__)


class OperationHandler(BaseHandler[LoadedCommand, ComputedCommand, DataDigestError]):
    """Dispatch the command's operation over its dataset.

    Errors raised by an operation come back as `Failure`; anything outside
    the `DataDigestError` hierarchy is wrapped in one first.
    """

    def handle(
        self, command: LoadedCommand
    ) -> Result[ComputedCommand, DataDigestError]:
        config = command.config
        operation = resolve_operation(config.operation)
        log.info(
            "Processing for user %d with batch size %d",
            config.user_id,
            config.batch_size,
        )
        try:
            result = run_operation(operation, command.dataset, config.batch_size)
        except DataDigestError as e:
            return Failure(e)
        except Exception as e:
            log.debug("Operation %s raised", operation.value, exc_info=True)
            return Failure(DataDigestError(f"{operation.value} failed: {e}"))
        return Success(
            ComputedCommand(
                config=config,
                dataset=command.dataset,
                operation=operation,
                result=result,
            )
        )
