import math
import os
from dataclasses import dataclass
from typing import Optional, Tuple


SUPPORTED_MODELS: Tuple[str, ...] = ("ma", "ema", "lr", "sarima", "lstm", "lstm_trained")
DEFAULT_MODELS: Tuple[str, ...] = ("ma", "ema", "lr")


def _getenv_int(key: str, default: int) -> int:
    val = os.getenv(key, "").strip()
    return int(val) if val.lstrip("-").isdigit() else default


def _getenv_float(key: str, default: Optional[float]) -> Optional[float]:
    val = os.getenv(key, "").strip()
    if not val:
        return default
    try:
        return float(val)
    except ValueError:
        return default


@dataclass
class ModelConfig:
    """Numeric knobs shared by every model in a run."""

    window: int = 5
    ema_alpha: Optional[float] = None  # None derives 2 / (window + 1)
    seasonal_period: int = 5
    lstm_lookback: int = 3
    train_ratio: float = 0.8
    rsi_period: int = 14
    # Trained network; epochs * rows * units dominates the cost of a run
    hidden_layers: int = 2
    hidden_units: int = 8
    epochs: int = 50
    learning_rate: float = 0.01
    seed: Optional[int] = None

    def validate(self) -> None:
        """
        Validate configuration parameters.

        Raises:
            ValueError: If any parameter is invalid
        """
        if self.window < 2:
            raise ValueError(f"window must be at least 2, got {self.window}")

        if self.ema_alpha is not None and not (0 < self.ema_alpha <= 1):
            raise ValueError(f"ema_alpha must be in (0, 1], got {self.ema_alpha}")

        if self.seasonal_period <= 0:
            raise ValueError(f"seasonal_period must be positive, got {self.seasonal_period}")

        if self.lstm_lookback <= 0:
            raise ValueError(f"lstm_lookback must be positive, got {self.lstm_lookback}")

        if not (0 < self.train_ratio < 1):
            raise ValueError(f"train_ratio must be in (0, 1), got {self.train_ratio}")

        if self.rsi_period <= 0:
            raise ValueError(f"rsi_period must be positive, got {self.rsi_period}")

        if self.hidden_layers <= 0:
            raise ValueError(f"hidden_layers must be positive, got {self.hidden_layers}")

        if self.hidden_units <= 0:
            raise ValueError(f"hidden_units must be positive, got {self.hidden_units}")

        if self.epochs < 0:
            raise ValueError(f"epochs must be non-negative, got {self.epochs}")

        if not math.isfinite(self.learning_rate) or self.learning_rate <= 0:
            raise ValueError(f"learning_rate must be positive, got {self.learning_rate}")

    @property
    def alpha(self) -> float:
        if self.ema_alpha is not None:
            return self.ema_alpha
        return 2 / (self.window + 1)

    @classmethod
    def from_env(cls) -> "ModelConfig":
        """Build a config from PRICECAST_* environment variables."""
        defaults = cls()
        seed_raw = os.getenv("PRICECAST_SEED", "").strip()
        return cls(
            window=_getenv_int("PRICECAST_WINDOW", defaults.window),
            ema_alpha=_getenv_float("PRICECAST_EMA_ALPHA", defaults.ema_alpha),
            seasonal_period=_getenv_int("PRICECAST_SEASONAL_PERIOD", defaults.seasonal_period),
            lstm_lookback=_getenv_int("PRICECAST_LSTM_LOOKBACK", defaults.lstm_lookback),
            train_ratio=_getenv_float("PRICECAST_TRAIN_RATIO", defaults.train_ratio),
            rsi_period=_getenv_int("PRICECAST_RSI_PERIOD", defaults.rsi_period),
            hidden_layers=_getenv_int("PRICECAST_HIDDEN_LAYERS", defaults.hidden_layers),
            hidden_units=_getenv_int("PRICECAST_HIDDEN_UNITS", defaults.hidden_units),
            epochs=_getenv_int("PRICECAST_EPOCHS", defaults.epochs),
            learning_rate=_getenv_float("PRICECAST_LEARNING_RATE", defaults.learning_rate),
            seed=int(seed_raw) if seed_raw.lstrip("-").isdigit() else defaults.seed,
        )
