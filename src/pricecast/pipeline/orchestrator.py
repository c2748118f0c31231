import logging
import math
import time
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from ..config import DEFAULT_MODELS, SUPPORTED_MODELS, ModelConfig
from ..data.schemas import TimelinePoint
from ..features.indicators import build_feature_matrix
from ..modules.nonlinear import (
    FeedForwardConfig,
    closed_form_forecast_next,
    fit_trained_lag_model,
    nonlinear_predict_closed_form,
)
from ..modules.regression import least_squares_predict
from ..modules.seasonal import seasonal_forecast_next, seasonal_predict
from ..modules.smoothing import exponential_moving_average, moving_average
from ..monitoring import MetricsSink
from .evaluation import ModelMetrics, evaluate

logger = logging.getLogger(__name__)

# (predictions, next-step forecast)
ModelOutput = Tuple[List[float], float]


@dataclass
class RunResult:
    predictions: Dict[str, List[float]] = field(default_factory=dict)
    metrics: Dict[str, ModelMetrics] = field(default_factory=dict)
    next_step_forecast: Dict[str, float] = field(default_factory=dict)
    split_index: int = 0


def _last(preds: List[float]) -> float:
    return preds[-1] if preds else math.nan


def _run_ma(series: List[float], config: ModelConfig) -> ModelOutput:
    preds = moving_average(series, config.window)
    return preds, _last(preds)


def _run_ema(series: List[float], config: ModelConfig) -> ModelOutput:
    preds = exponential_moving_average(series, config.alpha)
    return preds, _last(preds)


def _run_lr(series: List[float], config: ModelConfig) -> ModelOutput:
    preds = least_squares_predict(series, max(3, config.window))
    return preds, _last(preds)


def _run_sarima(series: List[float], config: ModelConfig) -> ModelOutput:
    preds = seasonal_predict(series, config.window, config.seasonal_period)
    return preds, seasonal_forecast_next(series, config.window, config.seasonal_period)


def _run_lstm(series: List[float], config: ModelConfig) -> ModelOutput:
    preds = nonlinear_predict_closed_form(series, config.lstm_lookback)
    return preds, closed_form_forecast_next(series, config.lstm_lookback)


def _run_lstm_trained(series: List[float], config: ModelConfig) -> ModelOutput:
    features = build_feature_matrix(series, config.alpha, config.rsi_period)
    net_cfg = FeedForwardConfig(
        layers=config.hidden_layers,
        units=config.hidden_units,
        epochs=config.epochs,
        learning_rate=config.learning_rate,
        seed=config.seed,
    )
    model = fit_trained_lag_model(features, series, config.lstm_lookback, net_cfg)
    if model is None:
        return [math.nan] * len(series), math.nan
    preds = [model.predict_at(features, i) for i in range(len(series))]
    return preds, model.forecast_next(features)


MODEL_RUNNERS: Dict[str, Callable[[List[float], ModelConfig], ModelOutput]] = {
    "ma": _run_ma,
    "ema": _run_ema,
    "lr": _run_lr,
    "sarima": _run_sarima,
    "lstm": _run_lstm,
    "lstm_trained": _run_lstm_trained,
}


def _validate_inputs(series: Sequence[float], models: Sequence[str]) -> List[float]:
    if not series:
        raise ValueError("series must not be empty")
    values: List[float] = []
    for i, value in enumerate(series):
        try:
            number = float(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"series[{i}] is not a number: {value!r}") from exc
        if not math.isfinite(number):
            raise ValueError(f"series[{i}] must be finite, got {value!r}")
        values.append(number)
    unknown = [m for m in models if m not in SUPPORTED_MODELS]
    if unknown:
        raise ValueError(f"Unknown model(s) {unknown}; expected any of {list(SUPPORTED_MODELS)}")
    return values


def run_models(
    series: Sequence[float],
    models: Sequence[str] = DEFAULT_MODELS,
    config: ModelConfig | None = None,
    metrics: MetricsSink | None = None,
) -> RunResult:
    """
    Run each requested model over the whole series and score it on the test tail.

    Predictions always cover every position so they line up with the input;
    metrics only look at positions from ``split_index`` on. The next-step value
    is the last prediction for models whose output is already one step ahead
    (or a persisted level), and an explicit extra step for the others.

    Raises:
        ValueError: On empty or non-finite series, unknown models or invalid config
    """
    cfg = config or ModelConfig()
    cfg.validate()
    values = _validate_inputs(series, models)
    sink = metrics or MetricsSink()

    split = int(math.floor(len(values) * cfg.train_ratio))
    actual_test = values[split:]
    result = RunResult(split_index=split)

    for name in dict.fromkeys(models):
        start = time.perf_counter()
        try:
            preds, next_value = MODEL_RUNNERS[name](values, cfg)
        except Exception as exc:
            sink.emit_error("model_failed", {"model": name, "detail": str(exc)})
            raise
        result.predictions[name] = preds
        result.metrics[name] = evaluate(actual_test, preds[split:])
        result.next_step_forecast[name] = next_value
        latency_ms = (time.perf_counter() - start) * 1000
        sink.emit_model_metrics(latency_ms=latency_ms, model=name, num_points=len(values))
        logger.debug("model=%s rmse=%s next=%s", name, result.metrics[name].rmse, next_value)

    logger.info(
        "Ran %d model(s) on %d points (split at %d)", len(result.predictions), len(values), split
    )
    return result


def _finite_or_none(value: float) -> Optional[float]:
    return value if value is not None and math.isfinite(value) else None


def prediction_timeline(
    result: RunResult,
    series: Sequence[float],
    timestamps: Optional[Sequence[datetime]] = None,
    step: timedelta = timedelta(days=1),
) -> Dict[str, List[TimelinePoint]]:
    """
    Chart rows per model: one per observed point plus a trailing next-step row.

    Undefined predictions become ``None`` so the chart shows a gap. Without
    timestamps every row is dated ``None``.
    """
    dates: List[Optional[datetime]] = (
        list(timestamps) if timestamps is not None else [None] * len(series)
    )
    if len(series) != len(dates):
        raise ValueError(f"series has {len(series)} values but timestamps has {len(dates)} entries")
    timeline: Dict[str, List[TimelinePoint]] = {}
    for name, preds in result.predictions.items():
        rows = [
            TimelinePoint(date=ts, actual=actual, predicted=_finite_or_none(pred))
            for ts, actual, pred in zip(dates, series, preds)
        ]
        if dates:
            last = dates[-1]
            rows.append(
                TimelinePoint(
                    date=last + step if last is not None else None,
                    actual=None,
                    predicted=_finite_or_none(result.next_step_forecast.get(name, math.nan)),
                )
            )
        timeline[name] = rows
    return timeline


def interval_step(interval: str) -> timedelta:
    """Calendar spacing used for the next-step row: 1d, 1wk or 1mo."""
    steps = {"1d": 1, "1wk": 7, "1mo": 30}
    if interval not in steps:
        raise ValueError(f"Unsupported interval {interval!r}; expected one of {list(steps)}")
    return timedelta(days=steps[interval])
