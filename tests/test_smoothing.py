import math
import random

import pytest

from pricecast.modules.smoothing import exponential_moving_average, moving_average


def test_moving_average_scenario():
    out = moving_average([1, 2, 3, 4, 5, 6, 7, 8, 9, 10], 3)

    assert math.isnan(out[0]) and math.isnan(out[1])
    assert out[2:] == pytest.approx([2, 3, 4, 5, 6, 7, 8, 9])


@pytest.mark.parametrize("window", [1, 2, 3, 5, 8])
def test_moving_average_matches_brute_force(window):
    rng = random.Random(window)
    values = [rng.uniform(50, 150) for _ in range(40)]

    out = moving_average(values, window)

    assert len(out) == len(values)
    assert sum(1 for v in out if math.isnan(v)) == window - 1
    for i in range(window - 1, len(values)):
        expected = sum(values[i - window + 1 : i + 1]) / window
        assert out[i] == pytest.approx(expected)


def test_moving_average_window_longer_than_series():
    out = moving_average([1.0, 2.0], 5)
    assert len(out) == 2
    assert all(math.isnan(v) for v in out)


def test_moving_average_rejects_non_positive_window():
    with pytest.raises(ValueError, match="window must be positive"):
        moving_average([1.0, 2.0], 0)


def test_ema_alpha_one_is_identity():
    values = [3.0, 1.5, 7.25, 4.0, 9.0]
    assert exponential_moving_average(values, 1.0) == values


def test_ema_recursion_seeded_with_first_value():
    out = exponential_moving_average([10.0, 20.0, 20.0], 0.5)
    assert out == pytest.approx([10.0, 15.0, 17.5])


def test_ema_rejects_alpha_outside_unit_interval():
    with pytest.raises(ValueError):
        exponential_moving_average([1.0], 0.0)
    with pytest.raises(ValueError):
        exponential_moving_average([1.0], 1.5)


def test_empty_series_returns_empty():
    assert moving_average([], 3) == []
    assert exponential_moving_average([], 0.3) == []
