import math
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from .api_schemas import PredictRequest
from .config import ModelConfig
from .data.schemas import TimelinePoint
from .monitoring import MetricsSink
from .pipeline.evaluation import ModelMetrics
from .pipeline.orchestrator import RunResult, interval_step, prediction_timeline, run_models


def predict_endpoint(
    payload: Dict[str, Any],
    metrics: MetricsSink | None = None,
) -> Dict[str, Any]:
    """Validate a predict payload, run the requested models and return a JSON-safe result."""

    request = PredictRequest.model_validate(payload)
    cfg = _build_config(request)
    try:
        result = run_models(request.closes, request.models, cfg, metrics=metrics)
    except Exception as exc:
        if metrics is not None:
            metrics.emit_error("predict_failed", {"detail": str(exc)})
        raise
    timeline = prediction_timeline(
        result, request.closes, request.dates, step=interval_step(request.interval)
    )
    return _serialize_result(request, result, timeline)


def _build_config(request: PredictRequest) -> ModelConfig:
    return ModelConfig(
        window=request.window,
        ema_alpha=request.ema_alpha,
        seasonal_period=request.seasonal_period,
        lstm_lookback=request.lstm_lookback,
        train_ratio=request.train_ratio,
        rsi_period=request.rsi_period,
        hidden_layers=request.hidden_layers,
        hidden_units=request.hidden_units,
        epochs=request.epochs,
        learning_rate=request.learning_rate,
        seed=request.seed,
    )


def _json_number(value: float) -> Optional[float]:
    # JSON has no NaN; an undefined value goes out as null
    return value if math.isfinite(value) else None


def _serialize_metrics(metrics: ModelMetrics) -> Dict[str, Optional[float]]:
    return {name: _json_number(value) for name, value in metrics.to_dict().items()}


def _serialize_timeline(rows: List[TimelinePoint]) -> List[Dict[str, Any]]:
    return [asdict(row) for row in rows]


def _serialize_result(
    request: PredictRequest,
    result: RunResult,
    timeline: Dict[str, List[TimelinePoint]],
) -> Dict[str, Any]:
    return {
        "symbol": request.symbol.upper(),
        "interval": request.interval,
        "split_index": result.split_index,
        "metrics": {name: _serialize_metrics(m) for name, m in result.metrics.items()},
        "predictions": {name: _serialize_timeline(rows) for name, rows in timeline.items()},
        "next_step_prediction": {
            name: _json_number(value) for name, value in result.next_step_forecast.items()
        },
    }
