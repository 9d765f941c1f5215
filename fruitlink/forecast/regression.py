"""
Forecast maths: moving average and ordinary-least-squares trend.

Both estimators are fitted over the *whole* series. Time is 1-indexed
(x = 1..n), so the one-step-ahead prediction evaluates the trend line at
x = n + 1, and the i-th forward point at x = n + i.

Degenerate inputs never produce NaN:
  - empty series      → average 0, trend (slope 0, intercept 0)
  - single observation → zero denominator; slope 0, intercept = that price
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class LinearTrend:
    """Fitted line ``price = slope * x + intercept`` over 1-indexed time."""

    slope: float
    intercept: float
    n: int

    def at(self, x: float) -> float:
        """Evaluate the line at time index ``x``."""
        return self.slope * x + self.intercept

    def ahead(self, steps: int = 1) -> float:
        """Value ``steps`` periods after the last observation (x = n + steps)."""
        return self.at(self.n + steps)


def moving_average(prices: Sequence[float]) -> float:
    """Arithmetic mean of all prices; 0 for an empty series."""
    if not prices:
        return 0.0
    return sum(prices) / len(prices)


def fit_linear_trend(prices: Sequence[float]) -> LinearTrend:
    """Fit an OLS line to ``prices`` against x = 1..n.

    Uses the closed form::

        slope     = (n·Σxy − Σx·Σy) / (n·Σx² − (Σx)²)
        intercept = (Σy − slope·Σx) / n

    The denominator is zero exactly when n <= 1 (all x identical); slope is
    then taken as 0 so the line is flat through the mean.

    Args:
        prices: Observations in chronological order.

    Returns:
        ``LinearTrend`` carrying slope, intercept and n.
    """
    n = len(prices)
    if n == 0:
        return LinearTrend(slope=0.0, intercept=0.0, n=0)

    xs = range(1, n + 1)
    sum_x = sum(xs)
    sum_y = sum(prices)
    sum_xy = sum(x * y for x, y in zip(xs, prices))
    sum_x2 = sum(x * x for x in xs)

    denominator = n * sum_x2 - sum_x * sum_x
    slope = 0.0 if denominator == 0 else (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n
    return LinearTrend(slope=slope, intercept=intercept, n=n)


def linear_regression_predict(prices: Sequence[float]) -> float:
    """One-step-ahead OLS prediction; 0 for an empty series."""
    if not prices:
        return 0.0
    return fit_linear_trend(prices).ahead(1)


def blended_prediction(prices: Sequence[float]) -> float:
    """Mean of the moving average and the one-step regression prediction."""
    return (moving_average(prices) + linear_regression_predict(prices)) / 2
