"""Tests for the phase-mean decomposition labelled SARIMA."""

import math

import pytest

from pricecast.modules.seasonal import seasonal_forecast_next, seasonal_means, seasonal_predict

PATTERN = [1.0, -2.0, 3.0, 0.5, -2.5]


def _seasonal_series(n: int, level: float = 100.0) -> list[float]:
    return [level + PATTERN[i % len(PATTERN)] for i in range(n)]


def test_perfect_seasonality_is_recovered():
    values = _seasonal_series(30)
    window = 4

    preds = seasonal_predict(values, window, seasonal_period=5)

    assert len(preds) == len(values)
    assert all(math.isnan(p) for p in preds[: window - 1])
    assert preds[window - 1 :] == pytest.approx(values[window - 1 :])


def test_window_below_two_is_raised_to_two():
    preds = seasonal_predict(_seasonal_series(10), 1, seasonal_period=5)
    assert math.isnan(preds[0])
    assert math.isfinite(preds[1])


def test_seasonal_means_per_phase():
    means = seasonal_means([1.0, 10.0, 3.0, 20.0, 5.0], 2)
    assert means == pytest.approx([3.0, 15.0])


def test_phase_without_samples_has_zero_mean():
    assert seasonal_means([4.0], 3) == [4.0, 0.0, 0.0]


def test_next_step_uses_next_phase():
    values = _seasonal_series(23)
    expected = 100.0 + PATTERN[23 % 5]
    assert seasonal_forecast_next(values, 3, seasonal_period=5) == pytest.approx(expected)


def test_next_step_is_nan_without_warm_up():
    assert math.isnan(seasonal_forecast_next([1.0], 3, seasonal_period=5))


def test_empty_series_returns_empty():
    assert seasonal_predict([], 3) == []
    assert math.isnan(seasonal_forecast_next([], 3))
