"pricecast: price forecasting and evaluation core for the metals/stock dashboard."

from .config import ModelConfig
from .pipeline.orchestrator import RunResult, run_models

__all__ = [
    "ModelConfig",
    "RunResult",
    "run_models",
]
