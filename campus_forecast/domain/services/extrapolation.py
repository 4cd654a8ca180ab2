"""Trend classification and step-by-step extrapolation of numeric series."""

from enum import Enum
from statistics import mean
from typing import List, Sequence


class TrendLabel(str, Enum):
    """Local behaviour of a window of values."""

    TREND = "trend"
    FLUCTUATING = "fluctuating"


def consecutive_differences(values: Sequence[float]) -> List[float]:
    return [values[i] - values[i - 1] for i in range(1, len(values))]


def classify_window(values: Sequence[float]) -> TrendLabel:
    """Label a window as monotonic movement or fluctuation.

    A window is a trend when its consecutive differences never change sign
    and at least one of them is non-zero. Flat windows and windows with
    fewer than two values fluctuate.
    """
    diffs = consecutive_differences(values)
    if not diffs:
        return TrendLabel.FLUCTUATING

    rising = all(diff >= 0 for diff in diffs) and any(diff > 0 for diff in diffs)
    falling = all(diff <= 0 for diff in diffs) and any(diff < 0 for diff in diffs)
    if rising or falling:
        return TrendLabel.TREND
    return TrendLabel.FLUCTUATING


def next_value(window: Sequence[float]) -> float:
    """Predict the value following ``window``, rounded to 2 decimals."""
    if classify_window(window) == TrendLabel.TREND:
        value = window[-1] + mean(consecutive_differences(window))
    else:
        value = mean(window)
    return round(float(value), 2)


def extrapolate(seed: Sequence[float], steps: int) -> List[float]:
    """Produce ``steps`` future values from ``seed``.

    The window has the length of the seed and slides forward, so every
    prediction takes part in the computation of the following ones.
    """
    if len(seed) < 2 or steps < 1:
        return []

    window_size = len(seed)
    working = [float(value) for value in seed]
    predictions: List[float] = []
    for _ in range(steps):
        predicted = next_value(working[-window_size:])
        working.append(predicted)
        predictions.append(predicted)
    return predictions
