"""Unit tests for the transform operation."""

import pytest

from datadigest.core.types import BatchSummary
from datadigest.exceptions import ValidationError
from datadigest.operations import transform_data
from datadigest.operations.transform import normalize_value

pytestmark = pytest.mark.unit


def test_two_batches_of_two():
    result = transform_data([10, 20, 30, 40], 2)

    assert result.batches_processed == 2
    assert result.original_count == 4
    assert list(result.transformed) == [1.0, 2.0, 3.0, 4.0]
    assert result.batch_results[0] == BatchSummary(
        batch_number=1, size=2, sum=30, average=15
    )
    assert result.batch_results[1] == BatchSummary(
        batch_number=2, size=2, sum=70, average=35
    )


def test_final_batch_may_be_shorter():
    result = transform_data([1.0] * 7, 3)

    assert [b.size for b in result.batch_results] == [3, 3, 1]
    assert [b.batch_number for b in result.batch_results] == [1, 2, 3]


def test_single_batch_when_batch_size_exceeds_length():
    result = transform_data([100.0, 200.0], 10)
    assert result.batches_processed == 1
    assert list(result.transformed) == [10.0, 20.0]


def test_empty_dataset_has_no_batches():
    result = transform_data([], 5)

    assert result.to_dict() == {
        "type": "transformation",
        "original_count": 0,
        "transformed": [],
        "batch_results": [],
        "batches_processed": 0,
    }


@pytest.mark.parametrize("bad", [0, -3])
def test_rejects_batch_size_below_one(bad):
    with pytest.raises(ValidationError, match="batch_size"):
        transform_data([1.0, 2.0], bad)


class TestNormalizeValue:
    def test_scales_thousand_to_hundred(self):
        assert normalize_value(1000.0) == 100.0
        assert normalize_value(456.0) == 45.6

    def test_clamps_above_scale(self):
        assert normalize_value(2500.0) == 100.0

    def test_no_lower_clamp(self):
        # -5.0 rounds toward zero at the half: trunc(-500 + 0.5) / 100
        assert normalize_value(-50.0) == -4.99


def test_to_dict_serializes_batches():
    payload = transform_data([10.0, 20.0, 30.0], 2).to_dict()

    assert payload["batch_results"] == [
        {"batch_number": 1, "size": 2, "sum": 30.0, "average": 15.0},
        {"batch_number": 2, "size": 1, "sum": 30.0, "average": 30.0},
    ]
    assert payload["transformed"] == [1.0, 2.0, 3.0]


def test_huge_finite_values_clamp_and_keep_batch_totals():
    result = transform_data([1e307, 1.0], 2)

    assert list(result.transformed) == [100.0, 0.1]
    assert result.batch_results[0].sum == 1e307
    assert result.batch_results[0].average == 5e306


def test_batch_sum_overflow_is_a_validation_error():
    with pytest.raises(ValidationError, match="batch 1 sum"):
        transform_data([1.7e308, 1.7e308], 2)

    assert transform_data([1.7e308, 1.7e308], 1).batches_processed == 2
