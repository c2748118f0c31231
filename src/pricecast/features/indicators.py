import math
from typing import List, Sequence

from ..modules.smoothing import exponential_moving_average

NEUTRAL_RSI = 50.0


def rsi(values: Sequence[float], period: int = 14) -> List[float]:
    """
    Relative strength index from simple averages of gains and losses.

    Position ``i`` uses the ``period`` first differences ending at ``i``, so
    the first defined value sits at ``i == period``. A flat window scores 0
    and a window without losses scores 100.
    """
    if period < 1:
        raise ValueError(f"period must be positive, got {period}")
    out = [math.nan] * len(values)
    diffs = [values[i] - values[i - 1] for i in range(1, len(values))]
    for i in range(period, len(values)):
        window = diffs[i - period : i]
        avg_gain = sum(d for d in window if d > 0) / period
        avg_loss = sum(-d for d in window if d < 0) / period
        if avg_loss == 0:
            out[i] = 100.0 if avg_gain > 0 else 0.0
        else:
            out[i] = 100 - 100 / (1 + avg_gain / avg_loss)
    return out


def simple_returns(values: Sequence[float]) -> List[float]:
    out = [0.0] * len(values)
    for i in range(1, len(values)):
        prev = values[i - 1]
        out[i] = (values[i] - prev) / prev if prev else 0.0
    return out


def build_feature_matrix(
    values: Sequence[float], ema_alpha: float, rsi_period: int = 14
) -> List[List[float]]:
    """Rows of ``[close, return, ema, rsi]`` per position, warm-up gaps filled with neutral values."""
    ema = exponential_moving_average(values, ema_alpha)
    returns = simple_returns(values)
    oscillator = rsi(values, rsi_period)
    return [
        [close, ret, smooth, score if math.isfinite(score) else NEUTRAL_RSI]
        for close, ret, smooth, score in zip(values, returns, ema, oscillator)
    ]
