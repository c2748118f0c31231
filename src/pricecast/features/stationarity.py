import math
from dataclasses import dataclass
from typing import List, Sequence


@dataclass
class NormalizationStats:
    mean: float
    std: float

    def normalize(self, value: float) -> float:
        return (value - self.mean) / self.std

    def denormalize(self, value: float) -> float:
        return value * self.std + self.mean


class StationarityNormalizer:
    """Z-score scaling for network inputs and targets on raw price scales."""

    def fit(self, series: Sequence[float]) -> NormalizationStats:
        if not series:
            raise ValueError("series must not be empty")
        mean = sum(series) / len(series)
        variance = sum((x - mean) * (x - mean) for x in series) / max(len(series) - 1, 1)
        # a flat column keeps unit scale instead of dividing by zero
        std = math.sqrt(variance) or 1.0
        return NormalizationStats(mean=mean, std=std)

    def fit_columns(self, rows: Sequence[Sequence[float]]) -> List[NormalizationStats]:
        if not rows:
            raise ValueError("rows must not be empty")
        width = len(rows[0])
        return [self.fit([row[col] for row in rows]) for col in range(width)]

    @staticmethod
    def normalize_row(row: Sequence[float], stats: Sequence[NormalizationStats]) -> List[float]:
        return [s.normalize(x) for x, s in zip(row, stats)]
