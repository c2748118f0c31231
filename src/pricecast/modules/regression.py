import math
from typing import List, Sequence, Tuple


def fit_line(xs: Sequence[float], ys: Sequence[float]) -> Tuple[float, float]:
    """Closed-form OLS; a singular design falls back to a flat line at the mean."""
    n = len(xs)
    if n == 0:
        return 0.0, math.nan
    sum_x = sum(xs)
    sum_y = sum(ys)
    sum_xy = sum(x * y for x, y in zip(xs, ys))
    sum_x2 = sum(x * x for x in xs)
    denom = n * sum_x2 - sum_x * sum_x
    slope = (n * sum_xy - sum_x * sum_y) / denom if denom != 0 else 0.0
    intercept = (sum_y - slope * sum_x) / n
    return slope, intercept


def least_squares_predict(values: Sequence[float], lookback: int) -> List[float]:
    """
    Sliding-window linear regression over (index, price).

    The value stored at position ``i`` is the line fitted on
    ``values[i-lookback+1 .. i]`` evaluated at ``x = i + 1``: a one-step-ahead
    forecast kept at the position that produced it. The last element is
    therefore the forecast for the first unseen step.
    """
    if lookback < 2:
        raise ValueError(f"lookback must be at least 2, got {lookback}")
    preds = [math.nan] * len(values)
    for i in range(lookback - 1, len(values)):
        xs = list(range(i - lookback + 1, i + 1))
        ys = [values[j] for j in xs]
        slope, intercept = fit_line(xs, ys)
        preds[i] = slope * (i + 1) + intercept
    return preds
