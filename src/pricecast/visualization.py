"""
Visualization of model predictions against actual prices.

Draws:
- Actual close prices
- One prediction line per model (gaps where a prediction is undefined)
- The train/test split position
- Next-step forecasts one interval past the last observation
"""

from datetime import datetime, timedelta
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np

MODEL_COLORS: Dict[str, str] = {
    "actual": "#94a3b8",
    "ma": "#7c3aed",
    "ema": "#0ea5e9",
    "lr": "#ef4444",
    "sarima": "#059669",
    "lstm": "#f59e0b",
    "lstm_trained": "#d946ef",
}


def plot_predictions(
    timestamps: Sequence[datetime],
    actual: Sequence[float],
    predictions: Dict[str, List[float]],
    split_index: int,
    next_step: Optional[Dict[str, float]] = None,
    step: timedelta = timedelta(days=1),
    symbol: str = "XAU",
    save_path: Optional[Path] = None,
    show: bool = True,
) -> Path:
    """
    Create a chart of actual prices and model predictions.

    Args:
        timestamps: Timestamp of every observed point
        actual: Observed close prices
        predictions: Model name to prediction series, aligned with ``actual``
        split_index: First position of the test range
        next_step: Model name to next-step forecast
        step: Spacing between the last observation and the next-step point
        symbol: Symbol shown in the title
        save_path: Path to save image (default: predictions_SYMBOL_YYYYMMDD_HHMMSS.png)
        show: Whether to display the plot

    Returns:
        Path to saved image
    """
    fig, ax = plt.subplots(figsize=(14, 8))

    ax.plot(
        timestamps,
        actual,
        color=MODEL_COLORS["actual"],
        linewidth=2,
        label="Actual",
        zorder=5,
    )

    for name, preds in predictions.items():
        # NaN leaves a gap in the line
        series = np.asarray(preds, dtype=float)
        ax.plot(
            timestamps,
            series,
            color=MODEL_COLORS.get(name),
            linewidth=1.5,
            label=name.upper(),
            zorder=4,
        )

    if next_step and timestamps:
        next_ts = timestamps[-1] + step
        for name, value in next_step.items():
            if not np.isfinite(value):
                continue
            ax.scatter([next_ts], [value], color=MODEL_COLORS.get(name), s=40, zorder=6)

    if 0 < split_index < len(timestamps):
        ax.axvline(
            x=timestamps[split_index],
            color="gray",
            linestyle="--",
            linewidth=1.5,
            alpha=0.7,
            label="Train/Test Split",
        )

    ax.set_xlabel("Date", fontsize=12, fontweight="bold")
    ax.set_ylabel("Price", fontsize=12, fontweight="bold")
    ax.set_title(f"{symbol} Model Predictions", fontsize=14, fontweight="bold", pad=20)
    plt.xticks(rotation=45, ha="right")
    ax.grid(True, alpha=0.3, linestyle="--", linewidth=0.5)
    ax.legend(loc="upper left", fontsize=10, framealpha=0.9)
    plt.tight_layout()

    if save_path is None:
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        save_path = Path(f"predictions_{symbol.replace('/', '_')}_{stamp}.png")

    save_path = Path(save_path)
    save_path.parent.mkdir(parents=True, exist_ok=True)
    plt.savefig(save_path, dpi=150, bbox_inches="tight")

    if show:
        plt.show()
    else:
        plt.close(fig)

    return save_path
