import math

import pytest

from pricecast.features.indicators import NEUTRAL_RSI, build_feature_matrix, rsi, simple_returns
from pricecast.features.stationarity import StationarityNormalizer


def test_rsi_strictly_increasing_saturates_at_100():
    values = [float(v) for v in range(1, 21)]
    out = rsi(values, 14)

    assert len(out) == 20
    assert all(math.isnan(v) for v in out[:14])
    assert out[14:] == [100.0] * 6


def test_rsi_flat_market_is_zero():
    out = rsi([5.0] * 10, 3)
    assert out[3:] == [0.0] * 7


def test_rsi_strictly_decreasing_is_zero():
    out = rsi([10.0, 9.0, 8.0, 7.0, 6.0], 2)
    assert out[2:] == pytest.approx([0.0, 0.0, 0.0])


def test_rsi_balanced_moves_score_fifty():
    out = rsi([1.0, 2.0, 1.0, 2.0, 1.0], 2)
    assert out[2:] == pytest.approx([50.0, 50.0, 50.0])


def test_rsi_ratio_formula():
    # gains 2 + 1, loss 1 over three differences
    out = rsi([10.0, 12.0, 11.0, 12.0], 3)
    assert out[3] == pytest.approx(100 - 100 / (1 + 3.0))


def test_rsi_short_and_empty_series():
    assert rsi([], 14) == []
    assert all(math.isnan(v) for v in rsi([1.0, 2.0], 14))


def test_rsi_rejects_bad_period():
    with pytest.raises(ValueError):
        rsi([1.0, 2.0], 0)


def test_simple_returns_start_at_zero():
    assert simple_returns([100.0, 110.0, 99.0]) == pytest.approx([0.0, 0.1, -0.1])


def test_feature_matrix_has_no_gaps():
    values = [100.0 + i for i in range(20)]
    rows = build_feature_matrix(values, ema_alpha=0.5, rsi_period=14)

    assert len(rows) == 20
    assert all(len(row) == 4 for row in rows)
    assert all(math.isfinite(x) for row in rows for x in row)
    assert rows[0] == [100.0, 0.0, 100.0, NEUTRAL_RSI]
    assert rows[-1][3] == 100.0


def test_normalizer_keeps_flat_column_at_unit_scale():
    normalizer = StationarityNormalizer()
    stats = normalizer.fit_columns([[1.0, 5.0], [3.0, 5.0]])

    assert stats[0].mean == 2.0
    assert stats[1].std == 1.0
    assert normalizer.normalize_row([3.0, 5.0], stats) == pytest.approx([3.0 / 2 ** 0.5 - 2.0 / 2 ** 0.5, 0.0])
    assert stats[0].denormalize(stats[0].normalize(7.5)) == pytest.approx(7.5)


def test_normalizer_tolerates_huge_values():
    stats = StationarityNormalizer().fit([1e200, -1e200])

    assert stats.mean == 0.0
    assert math.isinf(stats.std)
