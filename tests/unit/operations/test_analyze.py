"""Unit tests for the analyze operation."""

import pytest

from datadigest.core.types import AnalysisResult, EmptyAnalysisResult
from datadigest.exceptions import ValidationError
from datadigest.operations import analyze_data

pytestmark = pytest.mark.unit


def test_basic_statistics():
    result = analyze_data([1, 2, 3, 4, 5])

    assert isinstance(result, AnalysisResult)
    assert result.count == 5
    assert result.sum == 15
    assert result.mean == 3.0
    assert result.median == 3.0
    assert result.min == 1
    assert result.max == 5
    assert result.range == 4
    assert result.percentile_25 == 2
    assert result.percentile_75 == 4


def test_even_count_median_and_percentiles():
    result = analyze_data([4.0, 1.0, 3.0, 2.0])

    assert result.median == 2.5
    assert result.percentile_25 == 2.0  # sorted[4 // 4]
    assert result.percentile_75 == 4.0  # sorted[12 // 4]


def test_mean_is_rounded_to_two_decimals():
    assert analyze_data([1.0, 1.0, 2.0]).mean == 1.33
    assert analyze_data([2.0, 2.0, 1.0]).mean == 1.67


def test_min_max_range_are_not_rounded():
    result = analyze_data([0.125, 0.5])
    assert result.min == 0.125
    assert result.range == 0.375


def test_does_not_reorder_input():
    data = [5.0, 1.0, 4.0, 2.0]
    analyze_data(data)
    assert data == [5.0, 1.0, 4.0, 2.0]


def test_batch_size_is_ignored():
    assert analyze_data([1.0, 2.0], 0) == analyze_data([1.0, 2.0], 50)


def test_empty_dataset_reports_error_only():
    result = analyze_data([])

    assert isinstance(result, EmptyAnalysisResult)
    assert result.to_dict() == {"error": "no data to analyze"}


def test_to_dict_is_tagged():
    payload = analyze_data([1.0]).to_dict()
    assert payload["type"] == "analysis"
    assert set(payload) == {
        "type",
        "count",
        "sum",
        "mean",
        "median",
        "min",
        "max",
        "range",
        "percentile_25",
        "percentile_75",
    }


def test_huge_finite_value():
    result = analyze_data([1e307])

    assert result.sum == 1e307
    assert result.mean == 1e307
    assert result.median == 1e307
    assert result.range == 0.0


def test_huge_values_with_small_ones():
    result = analyze_data([1e307, -1e307, 2.5])

    assert result.sum == 2.5
    assert result.median == 2.5
    assert result.range == 2e307


@pytest.mark.parametrize(
    ("data", "message"),
    [
        ([1.7e308, 1.7e308], "sum of values"),
        ([-1.7e308, 1.7e308, 1.0], "range of values"),
    ],
)
def test_overflowing_totals_are_validation_errors(data, message):
    with pytest.raises(ValidationError, match=message):
        analyze_data(data)
