from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, model_validator

from .config import DEFAULT_MODELS


class PredictRequest(BaseModel):
    symbol: str = "XAU"
    closes: List[float] = Field(..., min_length=1)
    dates: Optional[List[datetime]] = None
    interval: str = Field("1d", pattern="^(1d|1wk|1mo)$")
    models: List[str] = Field(default_factory=lambda: list(DEFAULT_MODELS))
    window: int = Field(5, ge=2)
    ema_alpha: Optional[float] = Field(None, gt=0, le=1)
    seasonal_period: int = Field(5, ge=1)
    lstm_lookback: int = Field(3, ge=1)
    train_ratio: float = Field(0.8, gt=0, lt=1)
    rsi_period: int = Field(14, ge=1)
    hidden_layers: int = Field(2, ge=1, le=4)
    hidden_units: int = Field(8, ge=1, le=64)
    epochs: int = Field(50, ge=0, le=500)
    learning_rate: float = Field(0.01, gt=0)
    seed: Optional[int] = None

    @model_validator(mode="after")
    def _dates_match_closes(self) -> "PredictRequest":
        if self.dates is not None and len(self.dates) != len(self.closes):
            raise ValueError("dates and closes must have the same length")
        return self


class MetricsResponse(BaseModel):
    rmse: Optional[float]
    mae: Optional[float]
    mape: Optional[float]


class PredictionPointResponse(BaseModel):
    date: Optional[datetime]
    actual: Optional[float]
    predicted: Optional[float]


class PredictResponse(BaseModel):
    symbol: str
    interval: str
    split_index: int
    metrics: Dict[str, MetricsResponse]
    predictions: Dict[str, List[PredictionPointResponse]]
    next_step_prediction: Dict[str, Optional[float]]
