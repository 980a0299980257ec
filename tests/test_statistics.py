"""Mini README: Tests for the continuous percentile and summary helpers."""

from __future__ import annotations

import pytest

from salestracker.ledger import AnalyticsSummary, continuous_percentile, summarise


def test_continuous_percentile_interpolates_between_ranks() -> None:
    """Positions between two ranks should be weighted by the fractional part."""

    values = [10.0, 20.0, 30.0, 40.0, 50.0, 60.0, 70.0, 80.0, 90.0, 100.0]

    assert continuous_percentile(values, 0.5) == pytest.approx(55.0)
    assert continuous_percentile(values, 0.9) == pytest.approx(91.0)
    assert continuous_percentile(values, 0.0) == pytest.approx(10.0)
    assert continuous_percentile(values, 1.0) == pytest.approx(100.0)


def test_continuous_percentile_handles_small_inputs() -> None:
    """A single value is every percentile; an empty input yields zero."""

    assert continuous_percentile([42.0], 0.9) == pytest.approx(42.0)
    assert continuous_percentile([1.0, 3.0], 0.5) == pytest.approx(2.0)
    assert continuous_percentile([], 0.5) == 0.0


def test_continuous_percentile_rejects_out_of_range_fraction() -> None:
    with pytest.raises(ValueError):
        continuous_percentile([1.0, 2.0], 1.5)
    with pytest.raises(ValueError):
        continuous_percentile([1.0, 2.0], -0.1)


def test_summarise_sorts_unordered_amounts() -> None:
    """Summaries must not depend on the order amounts arrive in."""

    summary = summarise([100, 30, 10, 90, 50, 20, 80, 40, 70, 60])

    assert summary.count == 10
    assert summary.sum == pytest.approx(550.0)
    assert summary.average == pytest.approx(55.0)
    assert summary.median == pytest.approx(55.0)
    assert summary.percentile90 == pytest.approx(91.0)


def test_summarise_empty_window_is_all_zero() -> None:
    summary = summarise([])

    assert summary == AnalyticsSummary()
    assert summary.as_dict() == {
        "sum": 0.0,
        "average": 0.0,
        "count": 0,
        "median": 0.0,
        "percentile90": 0.0,
    }
