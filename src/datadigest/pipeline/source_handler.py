"""Dataset source stage.

Turns an `InitialCommand` into a `LoadedCommand` whose dataset is a tuple of
finite floats. When the caller supplies no dataset the fixed sample dataset
is used.
"""

from __future__ import annotations

from collections.abc import Iterable
import json
import logging
from typing import Any

from datadigest.constants import SAMPLE_DATA
from datadigest.core.types import (
    Failure,
    InitialCommand,
    LoadedCommand,
    Result,
    Success,
    is_real_number,
)
from datadigest.exceptions import ValidationError
from datadigest.pipeline.base import BaseHandler

log = logging.getLogger(__name__)


def coerce_dataset(values: Iterable[Any]) -> tuple[float, ...]:
    """Return ``values`` as a tuple of floats.

    Raises:
        ValidationError: If any value is not a finite real number. Booleans
            are rejected even though they are ints.
    """
    dataset: list[float] = []
    for index, value in enumerate(values):
        if not is_real_number(value):
            raise ValidationError(
                f"dataset[{index}] must be a finite number, got {value!r}"
            )
        dataset.append(float(value))
    return tuple(dataset)


def load_dataset_json(text: str) -> tuple[float, ...]:
    """Parse a JSON array of numbers into a dataset.

    Raises:
        ValidationError: If the text is not a JSON array of finite numbers.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Failed to parse dataset JSON: {e}") from e
    if not isinstance(data, list):
        raise ValidationError(
            f"Dataset must be a JSON array, got {type(data).__name__}"
        )
    return coerce_dataset(data)


class DatasetSource(BaseHandler[InitialCommand, LoadedCommand, ValidationError]):
    """Validate the caller's dataset, or supply the sample dataset."""

    def __init__(self, sample: Iterable[float] = SAMPLE_DATA) -> None:
        """Initialize with the dataset used when a command carries none."""
        self._sample = coerce_dataset(sample)

    def handle(self, command: InitialCommand) -> Result[LoadedCommand, ValidationError]:
        if command.dataset is None:
            dataset = self._sample
            log.info("Generated %d data points", len(dataset))
        else:
            try:
                dataset = coerce_dataset(command.dataset)
            except ValidationError as e:
                return Failure(e)
            log.info("Received %d data points", len(dataset))
        return Success(LoadedCommand(config=command.config, dataset=dataset))
