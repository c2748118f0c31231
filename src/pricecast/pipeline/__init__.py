# Pipeline orchestration
from .evaluation import ModelMetrics, evaluate, mae, mape, rmse
from .orchestrator import RunResult, interval_step, prediction_timeline, run_models

__all__ = [
    "ModelMetrics",
    "evaluate",
    "mae",
    "mape",
    "rmse",
    "RunResult",
    "interval_step",
    "prediction_timeline",
    "run_models",
]
