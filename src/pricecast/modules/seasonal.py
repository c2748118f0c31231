"""Additive seasonal decomposition with moving-average smoothing.

Exposed to users as "SARIMA" but it carries no autoregressive, integrated or
moving-average error terms: each phase ``i mod period`` gets its mean removed,
the residual is smoothed with a trailing moving average and the phase mean is
added back. Do not compare its output with a statistical SARIMA fit.
"""

import math
from typing import List, Sequence

from .smoothing import moving_average


def seasonal_means(values: Sequence[float], period: int) -> List[float]:
    if period < 1:
        raise ValueError(f"seasonal period must be positive, got {period}")
    sums = [0.0] * period
    counts = [0] * period
    for i, value in enumerate(values):
        sums[i % period] += value
        counts[i % period] += 1
    return [s / c if c else 0.0 for s, c in zip(sums, counts)]


def _smoothed_residuals(
    values: Sequence[float], window: int, period: int
) -> tuple[List[float], List[float]]:
    means = seasonal_means(values, period)
    residuals = [v - means[i % period] for i, v in enumerate(values)]
    return moving_average(residuals, max(2, window)), means


def seasonal_predict(values: Sequence[float], window: int, seasonal_period: int = 5) -> List[float]:
    if not values:
        return []
    smooth, means = _smoothed_residuals(values, window, seasonal_period)
    return [
        s + means[i % seasonal_period] if math.isfinite(s) else math.nan
        for i, s in enumerate(smooth)
    ]


def seasonal_forecast_next(values: Sequence[float], window: int, seasonal_period: int = 5) -> float:
    """Carry the last smoothed residual one step forward onto the next phase."""
    if not values:
        return math.nan
    smooth, means = _smoothed_residuals(values, window, seasonal_period)
    last = smooth[-1]
    if not math.isfinite(last):
        return math.nan
    return last + means[len(values) % seasonal_period]
