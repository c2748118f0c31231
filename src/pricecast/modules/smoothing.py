import math
from typing import List, Sequence


def moving_average(values: Sequence[float], window: int) -> List[float]:
    """Trailing mean over ``window`` points; NaN until the first full window."""
    if window < 1:
        raise ValueError(f"window must be positive, got {window}")
    out: List[float] = []
    running = 0.0
    for i, value in enumerate(values):
        running += value
        if i >= window:
            running -= values[i - window]
        out.append(running / window if i >= window - 1 else math.nan)
    return out


def exponential_moving_average(values: Sequence[float], alpha: float) -> List[float]:
    """Recursive EMA seeded with the first value, so no warm-up gap."""
    if not 0 < alpha <= 1:
        raise ValueError(f"alpha must be in (0, 1], got {alpha}")
    out: List[float] = []
    if not values:
        return out
    prev = values[0]
    out.append(prev)
    for value in values[1:]:
        prev = alpha * value + (1 - alpha) * prev
        out.append(prev)
    return out
