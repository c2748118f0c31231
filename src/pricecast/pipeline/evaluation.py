"""Accuracy metrics over aligned actual/predicted sequences.

Positions where either side is not finite are skipped, so a prediction series
with a NaN warm-up can be scored directly. No eligible positions gives NaN.
"""

import math
from dataclasses import asdict, dataclass
from typing import Dict, Iterator, Sequence, Tuple


@dataclass
class ModelMetrics:
    rmse: float
    mae: float
    mape: float  # percent

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


def _aligned(y_true: Sequence[float], y_pred: Sequence[float]) -> Iterator[Tuple[float, float]]:
    for yt, yp in zip(y_true, y_pred):
        if math.isfinite(yt) and math.isfinite(yp):
            yield yt, yp


def rmse(y_true: Sequence[float], y_pred: Sequence[float]) -> float:
    total, count = 0.0, 0
    for yt, yp in _aligned(y_true, y_pred):
        diff = yt - yp
        total += diff * diff
        count += 1
    return math.sqrt(total / count) if count else math.nan


def mae(y_true: Sequence[float], y_pred: Sequence[float]) -> float:
    total, count = 0.0, 0
    for yt, yp in _aligned(y_true, y_pred):
        total += abs(yt - yp)
        count += 1
    return total / count if count else math.nan


def mape(y_true: Sequence[float], y_pred: Sequence[float]) -> float:
    total, count = 0.0, 0
    for yt, yp in _aligned(y_true, y_pred):
        if yt == 0:
            continue
        total += abs((yt - yp) / yt)
        count += 1
    return total / count * 100 if count else math.nan


def evaluate(y_true: Sequence[float], y_pred: Sequence[float]) -> ModelMetrics:
    return ModelMetrics(rmse=rmse(y_true, y_pred), mae=mae(y_true, y_pred), mape=mape(y_true, y_pred))
