"""Unit tests for operation dispatch."""

import logging

import pytest

from datadigest.core.models import Operation
from datadigest.core.types import (
    AggregationResult,
    AnalysisResult,
    TransformationResult,
)
from datadigest.exceptions import ValidationError
from datadigest.operations import OPERATIONS, resolve_operation, run_operation

pytestmark = pytest.mark.unit


def test_every_operation_is_registered():
    assert set(OPERATIONS) == set(Operation)


@pytest.mark.parametrize(
    ("tag", "expected"),
    [
        ("analyze", AnalysisResult),
        ("transform", TransformationResult),
        ("aggregate", AggregationResult),
        (Operation.TRANSFORM, TransformationResult),
    ],
)
def test_dispatches_by_tag(tag, expected):
    assert isinstance(run_operation(tag, [1.0, 2.0, 3.0], 2), expected)


def test_unknown_tag_falls_back_to_analyze(caplog):
    with caplog.at_level(logging.WARNING, logger="datadigest.operations"):
        assert resolve_operation("summarize") is Operation.ANALYZE
    assert "summarize" in caplog.text


def test_rejects_invalid_batch_size_for_every_operation():
    for operation in Operation:
        with pytest.raises(ValidationError):
            run_operation(operation, [1.0], 0)
