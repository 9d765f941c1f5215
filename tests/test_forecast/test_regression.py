"""Tests for fruitlink.forecast.regression."""

from __future__ import annotations

import pytest

from fruitlink.forecast.regression import (
    LinearTrend,
    blended_prediction,
    fit_linear_trend,
    linear_regression_predict,
    moving_average,
)

APPLE = [1.20, 1.25, 1.22, 1.30, 1.28]


class TestMovingAverage:
    def test_mean_of_all_prices(self):
        assert moving_average(APPLE) == pytest.approx(1.25)

    def test_empty_series_is_zero(self):
        assert moving_average([]) == 0.0


class TestFitLinearTrend:
    def test_known_series(self):
        trend = fit_linear_trend(APPLE)
        assert trend.slope == pytest.approx(0.021)
        assert trend.intercept == pytest.approx(1.187)
        assert trend.n == 5

    def test_perfect_line_is_recovered(self):
        trend = fit_linear_trend([2.0, 4.0, 6.0, 8.0])
        assert trend.slope == pytest.approx(2.0)
        assert trend.intercept == pytest.approx(0.0)

    def test_single_observation_is_flat(self):
        trend = fit_linear_trend([3.5])
        assert trend.slope == 0.0
        assert trend.intercept == pytest.approx(3.5)
        assert trend.ahead(6) == pytest.approx(3.5)

    def test_empty_series(self):
        assert fit_linear_trend([]) == LinearTrend(slope=0.0, intercept=0.0, n=0)

    def test_ahead_evaluates_after_last_index(self):
        trend = LinearTrend(slope=1.0, intercept=0.5, n=5)
        assert trend.ahead(1) == pytest.approx(6.5)
        assert trend.ahead(3) == pytest.approx(8.5)


class TestPredictions:
    def test_one_step_regression(self):
        assert linear_regression_predict(APPLE) == pytest.approx(1.313)

    def test_blend_is_mean_of_both_estimators(self):
        assert blended_prediction(APPLE) == pytest.approx((1.25 + 1.313) / 2)

    def test_empty_series_predicts_zero(self):
        assert linear_regression_predict([]) == 0.0
        assert blended_prediction([]) == 0.0
