from __future__ import annotations

import pytest

from campus_forecast.domain.services.extrapolation import (
    TrendLabel,
    classify_window,
    consecutive_differences,
    extrapolate,
    next_value,
)


def test_consecutive_differences() -> None:
    assert consecutive_differences([1.0, 4.0, 2.0]) == [3.0, -2.0]
    assert consecutive_differences([5.0]) == []


@pytest.mark.parametrize(
    "window, expected",
    [
        ([1.0, 2.0, 3.0], TrendLabel.TREND),
        ([9.0, 7.0, 7.0], TrendLabel.TREND),
        ([1.0, 3.0, 2.0], TrendLabel.FLUCTUATING),
        ([4.0, 4.0, 4.0], TrendLabel.FLUCTUATING),
        ([4.0], TrendLabel.FLUCTUATING),
    ],
)
def test_classify_window(window: list[float], expected: TrendLabel) -> None:
    assert classify_window(window) == expected


def test_next_value_follows_trend() -> None:
    assert next_value([10.0, 20.0, 30.0]) == 40.0
    assert next_value([30.0, 20.0, 10.0]) == 0.0


def test_next_value_uses_mean_for_fluctuation() -> None:
    assert next_value([10.0, 30.0, 20.0]) == 20.0
    assert next_value([1.0, 2.0, 1.0]) == 1.33


def test_extrapolate_linear_series() -> None:
    assert extrapolate([100.0, 200.0, 300.0], 3) == [400.0, 500.0, 600.0]


def test_extrapolate_slides_window_over_predictions() -> None:
    # [1, 3, 2] fluctuates -> 2.0; [3, 2, 2] falls -> 1.5; [2, 2, 1.5] falls -> 1.25
    assert extrapolate([1.0, 3.0, 2.0], 3) == [2.0, 1.5, 1.25]


def test_extrapolate_flat_series_stays_flat() -> None:
    assert extrapolate([5.0, 5.0], 4) == [5.0, 5.0, 5.0, 5.0]


def test_extrapolate_allows_negative_values() -> None:
    assert extrapolate([10.0, 0.0], 2) == [-10.0, -20.0]


@pytest.mark.parametrize("seed, steps", [([1.0], 3), ([], 2), ([1.0, 2.0], 0)])
def test_extrapolate_returns_nothing_without_enough_input(
    seed: list[float], steps: int
) -> None:
    assert extrapolate(seed, steps) == []


def test_extrapolate_output_length_matches_steps() -> None:
    assert len(extrapolate([3.0, 1.0, 4.0, 1.0, 5.0], 7)) == 7


def test_extrapolate_rising_series() -> None:
    assert extrapolate([10.0, 20.0, 30.0, 40.0], 2) == [50.0, 60.0]


def test_extrapolate_alternating_series_recomputes_mean() -> None:
    # second window [20, 10, 20, 15] still fluctuates
    assert extrapolate([10.0, 20.0, 10.0, 20.0], 2) == [15.0, 16.25]
