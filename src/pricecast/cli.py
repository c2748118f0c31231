import argparse
import logging
import math

from dotenv import load_dotenv

from .config import DEFAULT_MODELS, SUPPORTED_MODELS, ModelConfig
from .data.csv_connector import CsvPriceConnector
from .monitoring import LoggingMetricsSink
from .pipeline.orchestrator import interval_step, run_models

# Load environment variables from .env file
load_dotenv()


def _fmt(value: float) -> str:
    return f"{value:,.4f}" if math.isfinite(value) else "n/a"


def build_parser() -> argparse.ArgumentParser:
    defaults = ModelConfig.from_env()
    parser = argparse.ArgumentParser(description="Run pricecast models over a CSV price history.")
    parser.add_argument("csv_path", help="CSV file with date/timestamp and close columns")
    parser.add_argument("--symbol", help="Only use rows with this symbol column value")
    parser.add_argument(
        "--models",
        nargs="+",
        choices=SUPPORTED_MODELS,
        default=list(DEFAULT_MODELS),
        help="Models to run",
    )
    parser.add_argument("--window", type=int, default=defaults.window, help="Smoothing/regression window")
    parser.add_argument("--ema-alpha", type=float, default=defaults.ema_alpha)
    parser.add_argument("--seasonal-period", type=int, default=defaults.seasonal_period)
    parser.add_argument("--lstm-lookback", type=int, default=defaults.lstm_lookback)
    parser.add_argument("--train-ratio", type=float, default=defaults.train_ratio)
    parser.add_argument(
        "--rsi-period", type=int, default=defaults.rsi_period, help="RSI period for trained network features"
    )
    parser.add_argument("--hidden-layers", type=int, default=defaults.hidden_layers)
    parser.add_argument("--hidden-units", type=int, default=defaults.hidden_units)
    parser.add_argument("--epochs", type=int, default=defaults.epochs)
    parser.add_argument("--learning-rate", type=float, default=defaults.learning_rate)
    parser.add_argument("--seed", type=int, default=defaults.seed, help="Random seed for the trained network")
    parser.add_argument("--interval", choices=["1d", "1wk", "1mo"], default="1d")
    parser.add_argument("--verbose", action="store_true", help="Log per-model latency")
    parser.add_argument("--plot", action="store_true", help="Generate and display a prediction chart")
    parser.add_argument("--plot-save", help="Path to save chart image (default: auto-generated filename)")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    history = CsvPriceConnector(args.csv_path).load_history(args.symbol)
    config = ModelConfig(
        window=args.window,
        ema_alpha=args.ema_alpha,
        seasonal_period=args.seasonal_period,
        lstm_lookback=args.lstm_lookback,
        train_ratio=args.train_ratio,
        rsi_period=args.rsi_period,
        hidden_layers=args.hidden_layers,
        hidden_units=args.hidden_units,
        epochs=args.epochs,
        learning_rate=args.learning_rate,
        seed=args.seed,
    )
    closes = history.closes()
    result = run_models(closes, args.models, config, metrics=LoggingMetricsSink())

    print(f"{history.symbol}: {len(closes)} points, test range starts at {result.split_index}")
    print(f"{'model':<14}{'rmse':>14}{'mae':>14}{'mape %':>12}{'next':>16}")
    for name, m in result.metrics.items():
        print(
            f"{name:<14}{_fmt(m.rmse):>14}{_fmt(m.mae):>14}{_fmt(m.mape):>12}"
            f"{_fmt(result.next_step_forecast[name]):>16}"
        )

    if args.plot or args.plot_save:
        from .visualization import plot_predictions

        chart_path = plot_predictions(
            timestamps=history.timestamps(),
            actual=closes,
            predictions=result.predictions,
            split_index=result.split_index,
            next_step=result.next_step_forecast,
            step=interval_step(args.interval),
            symbol=history.symbol,
            save_path=args.plot_save,
            show=args.plot,
        )
        print(f"Chart saved to: {chart_path}")


if __name__ == "__main__":
    main()
