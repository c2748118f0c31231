import pytest

import pricecast.api as api
from pricecast.api import predict_endpoint
from pricecast.monitoring import LoggingMetricsSink


def test_api_predict_basic():
    payload = {"closes": [float(v) for v in range(1, 21)], "models": ["ma", "ema"], "window": 3}
    result = predict_endpoint(payload)

    assert result["split_index"] == 16
    assert set(result["predictions"]) == {"ma", "ema"}
    assert result["metrics"]["ma"]["rmse"] == pytest.approx(1.0)
    assert result["next_step_prediction"]["ma"] == pytest.approx(19.0)
    assert all(row["date"] is None for row in result["predictions"]["ma"])


def test_api_undefined_metrics_become_none():
    payload = {"closes": [1.0, 2.0, 3.0], "models": ["ma"], "window": 10}
    result = predict_endpoint(payload)

    assert result["metrics"]["ma"] == {"rmse": None, "mae": None, "mape": None}
    assert result["next_step_prediction"]["ma"] is None


def test_error_hook_is_called():
    calls = {}

    class RecordingMetrics:
        def emit_model_metrics(self, **kwargs):
            calls.setdefault("models", []).append(kwargs["model"])

        def emit_error(self, name, detail):
            calls["error"] = name

    with pytest.raises(ValueError):
        predict_endpoint({"closes": [1.0, 2.0], "models": ["nope"]}, metrics=RecordingMetrics())

    assert calls["error"] == "predict_failed"


def test_logging_metrics_sink_no_error(caplog):
    sink = LoggingMetricsSink()
    with caplog.at_level("INFO", logger="pricecast.metrics"):
        sink.emit_model_metrics(latency_ms=10.0, model="ma", num_points=10)
        sink.emit_error("test_error", {"detail": "msg"})

    assert "model=ma" in caplog.text
    assert "test_error" in caplog.text


def test_api_passes_split_and_rsi_settings(monkeypatch):
    seen = {}
    real_run_models = api.run_models

    def recording_run_models(series, models, config, metrics=None):
        seen["config"] = config
        return real_run_models(series, models, config, metrics=metrics)

    monkeypatch.setattr(api, "run_models", recording_run_models)
    payload = {"closes": [float(v) for v in range(1, 21)], "models": ["ma"], "train_ratio": 0.5, "rsi_period": 5}

    result = predict_endpoint(payload)

    assert result["split_index"] == 10
    assert seen["config"].rsi_period == 5
    assert seen["config"].train_ratio == 0.5
