import math

import numpy as np
import pytest

from pricecast.modules.regression import fit_line, least_squares_predict


def test_linear_series_is_reproduced_one_step_ahead():
    values = [10 + 2 * i for i in range(12)]
    lookback = 4

    preds = least_squares_predict(values, lookback)

    assert all(math.isnan(p) for p in preds[: lookback - 1])
    for i in range(lookback - 1, len(values)):
        assert preds[i] == pytest.approx(10 + 2 * (i + 1))
    # last element is the forecast for the first unseen step
    assert preds[-1] == pytest.approx(10 + 2 * len(values))


def test_matches_brute_force_ols_per_window():
    values = [10, 12, 11, 13, 12, 14]
    lookback = 3

    preds = least_squares_predict(values, lookback)

    for i in range(lookback - 1, len(values)):
        xs = np.arange(i - lookback + 1, i + 1)
        slope, intercept = np.polyfit(xs, np.asarray(values[i - lookback + 1 : i + 1], dtype=float), 1)
        assert preds[i] == pytest.approx(slope * (i + 1) + intercept)


def test_fit_line_uses_raw_index():
    slope, intercept = fit_line([5, 6, 7], [1.0, 2.0, 3.0])
    assert slope == pytest.approx(1.0)
    assert intercept == pytest.approx(-4.0)


def test_singular_design_falls_back_to_mean():
    slope, intercept = fit_line([3, 3, 3], [1.0, 2.0, 6.0])
    assert slope == 0.0
    assert intercept == pytest.approx(3.0)


def test_constant_window_predicts_constant():
    preds = least_squares_predict([7.0] * 6, 3)
    assert preds[2:] == pytest.approx([7.0] * 4)


def test_rejects_lookback_below_two():
    with pytest.raises(ValueError, match="lookback must be at least 2"):
        least_squares_predict([1.0, 2.0, 3.0], 1)


def test_empty_series_returns_empty():
    assert least_squares_predict([], 3) == []
