# Feature engineering
from .stationarity import StationarityNormalizer, NormalizationStats
from .indicators import rsi, simple_returns, build_feature_matrix

__all__ = [
    "StationarityNormalizer",
    "NormalizationStats",
    "rsi",
    "simple_returns",
    "build_feature_matrix",
]
