import logging
from dataclasses import dataclass
from typing import Dict


@dataclass
class MetricsSink:
    """Interface for run telemetry; the default discards everything."""

    def emit_model_metrics(
        self,
        latency_ms: float,
        model: str,
        num_points: int,
        status: str = "ok",
    ) -> None:
        return

    def emit_error(self, name: str, detail: Dict[str, str]) -> None:
        return


class LoggingMetricsSink(MetricsSink):
    """Logs per-model run metrics to standard logging for dev/debug."""

    def __init__(self) -> None:
        self._logger = logging.getLogger("pricecast.metrics")

    def emit_model_metrics(
        self,
        latency_ms: float,
        model: str,
        num_points: int,
        status: str = "ok",
    ) -> None:
        self._logger.info(
            "model_metrics latency_ms=%.2f model=%s points=%s status=%s",
            latency_ms,
            model,
            num_points,
            status,
        )

    def emit_error(self, name: str, detail: Dict[str, str]) -> None:
        self._logger.error("model_error name=%s detail=%s", name, detail)


__all__ = ["MetricsSink", "LoggingMetricsSink"]
