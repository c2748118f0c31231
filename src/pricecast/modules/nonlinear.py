"""Lagged-window predictors shown to users under the "LSTM" label.

Neither variant is recurrent. The closed-form variant is a ridge regression on
lag windows with a tanh squash toward the window mean; the trained variant is a
small dense network fitted with per-sample SGD.
"""

import logging
import math
import random
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from ..features.stationarity import NormalizationStats, StationarityNormalizer

logger = logging.getLogger(__name__)

RIDGE_LAMBDA = 1e-3


@dataclass
class LagRegression:
    """Ridge weights over ``lookback`` lagged prices (oldest first)."""

    weights: List[float]
    lookback: int

    def raw(self, window: Sequence[float]) -> float:
        return sum(w * x for w, x in zip(self.weights, window))

    def predict_window(self, window: Sequence[float]) -> float:
        raw = self.raw(window)
        baseline = sum(window) / len(window)
        gap = raw - baseline
        # pulls outliers toward the local mean without flipping direction
        return baseline + math.tanh(gap) * abs(gap)


def _lag_design(values: Sequence[float], lookback: int) -> Tuple[List[List[float]], List[float]]:
    design: List[List[float]] = []
    targets: List[float] = []
    for i in range(lookback, len(values)):
        design.append(list(values[i - lookback : i]))
        targets.append(values[i])
    return design, targets


def fit_lag_regression(values: Sequence[float], lookback: int) -> Optional[LagRegression]:
    """Solve ``(XᵀX + λI) w = Xᵀy`` over every complete lag window, or None if there is none."""
    m = max(1, lookback)
    design, targets = _lag_design(values, m)
    if not design:
        return None
    xtx = [[0.0 for _ in range(m)] for _ in range(m)]
    xty = [0.0 for _ in range(m)]
    for row, y in zip(design, targets):
        for a in range(m):
            xty[a] += row[a] * y
            for b in range(m):
                xtx[a][b] += row[a] * row[b]
    for i in range(m):
        xtx[i][i] += RIDGE_LAMBDA
    return LagRegression(weights=_gaussian_solve(xtx, xty), lookback=m)


def _gaussian_solve(matrix: List[List[float]], vector: List[float]) -> List[float]:
    """Gauss-Jordan elimination with partial pivoting; a zero pivot leaves its weight at 0."""
    n = len(vector)
    aug = [list(row) + [vector[i]] for i, row in enumerate(matrix)]
    for i in range(n):
        best = max(range(i, n), key=lambda r: abs(aug[r][i]))
        if best != i:
            aug[i], aug[best] = aug[best], aug[i]
        pivot = aug[i][i]
        if not pivot:
            continue
        for j in range(i, n + 1):
            aug[i][j] /= pivot
        for k in range(n):
            if k == i:
                continue
            factor = aug[k][i]
            for j in range(i, n + 1):
                aug[k][j] -= factor * aug[i][j]
    solution = []
    for i in range(n):
        value = aug[i][-1]
        solution.append(value if math.isfinite(value) else 0.0)
    return solution


def nonlinear_predict_closed_form(values: Sequence[float], lookback: int) -> List[float]:
    if not values:
        return []
    preds = [math.nan] * len(values)
    model = fit_lag_regression(values, lookback)
    if model is None:
        return preds
    m = model.lookback
    for i in range(m, len(values)):
        preds[i] = model.predict_window(values[i - m : i])
    return preds


def closed_form_forecast_next(values: Sequence[float], lookback: int) -> float:
    model = fit_lag_regression(values, lookback)
    if model is None:
        return math.nan
    return model.predict_window(values[len(values) - model.lookback :])


@dataclass
class FeedForwardConfig:
    layers: int = 2
    units: int = 8
    epochs: int = 50
    learning_rate: float = 0.01
    seed: Optional[int] = None
    init_scale: float = 0.1


@dataclass
class DenseLayer:
    weights: List[List[float]]  # one row of input weights per unit
    biases: List[float]

    def forward(self, x: Sequence[float]) -> List[float]:
        return [
            math.tanh(sum(w * xi for w, xi in zip(row, x)) + b)
            for row, b in zip(self.weights, self.biases)
        ]


class FeedForwardNetwork:
    """
    Dense tanh network with a linear output unit, trained by per-sample SGD.

    The gradient is approximate. The hidden layer that feeds the output unit
    receives the exact error signal ``error * w_out * (1 - a^2)``. Every deeper
    hidden layer uses its own activations in place of the signal
    back-propagated through the layer above: ``delta = error * a * (1 - a^2)``.
    Weight updates still multiply by the previous layer's activations. With a
    single hidden layer the update is the exact gradient.
    """

    def __init__(self, input_size: int, config: FeedForwardConfig | None = None) -> None:
        if input_size <= 0:
            raise ValueError(f"input_size must be positive, got {input_size}")
        self.config = config or FeedForwardConfig()
        if self.config.layers <= 0 or self.config.units <= 0:
            raise ValueError("network needs at least one hidden layer with one unit")
        self._rng = random.Random(self.config.seed)
        sizes = [input_size] + [self.config.units] * self.config.layers
        self.hidden = [self._init_layer(sizes[k], sizes[k + 1]) for k in range(self.config.layers)]
        self.out_weights = [self._uniform() for _ in range(self.config.units)]
        self.out_bias = self._uniform()

    def _uniform(self) -> float:
        scale = self.config.init_scale
        return self._rng.uniform(-scale, scale)

    def _init_layer(self, n_in: int, n_out: int) -> DenseLayer:
        return DenseLayer(
            weights=[[self._uniform() for _ in range(n_in)] for _ in range(n_out)],
            biases=[self._uniform() for _ in range(n_out)],
        )

    def forward(self, x: Sequence[float]) -> Tuple[List[List[float]], float]:
        """Return the activations of every layer (input first) and the output."""
        activations = [list(x)]
        for layer in self.hidden:
            activations.append(layer.forward(activations[-1]))
        out = sum(w * a for w, a in zip(self.out_weights, activations[-1])) + self.out_bias
        return activations, out

    def predict(self, x: Sequence[float]) -> float:
        return self.forward(x)[1]

    def hidden_deltas(self, activations: List[List[float]], error: float) -> List[List[float]]:
        top = activations[-1]
        deltas: List[List[float]] = [[] for _ in self.hidden]
        deltas[-1] = [error * w * (1 - a * a) for w, a in zip(self.out_weights, top)]
        for depth in range(len(self.hidden) - 2, -1, -1):
            # approximate: own activations stand in for the upstream gradient
            acts = activations[depth + 1]
            deltas[depth] = [error * a * (1 - a * a) for a in acts]
        return deltas

    def train_step(self, x: Sequence[float], target: float) -> float:
        """One SGD update; returns the squared error seen before the update."""
        lr = self.config.learning_rate
        activations, pred = self.forward(x)
        error = pred - target
        deltas = self.hidden_deltas(activations, error)
        top = activations[-1]
        self.out_weights = [w - lr * error * a for w, a in zip(self.out_weights, top)]
        self.out_bias -= lr * error
        for depth, layer in enumerate(self.hidden):
            inputs = activations[depth]
            for k, delta in enumerate(deltas[depth]):
                row = layer.weights[k]
                for j, xj in enumerate(inputs):
                    row[j] -= lr * delta * xj
                layer.biases[k] -= lr * delta
        return error * error

    def fit(self, rows: Sequence[Sequence[float]], targets: Sequence[float]) -> List[float]:
        """Train for ``config.epochs`` passes; returns the mean squared error of each epoch."""
        order = list(range(len(rows)))
        losses: List[float] = []
        for _ in range(self.config.epochs):
            self._rng.shuffle(order)
            total = 0.0
            for idx in order:
                total += self.train_step(rows[idx], targets[idx])
            losses.append(total / max(len(order), 1))
        return losses


@dataclass
class TrainedLagModel:
    network: FeedForwardNetwork
    lookback: int
    feature_stats: List[NormalizationStats]
    target_stats: NormalizationStats
    losses: List[float] = field(default_factory=list)

    def window_features(self, feature_matrix: Sequence[Sequence[float]], end: int) -> List[float]:
        flat: List[float] = []
        for row in feature_matrix[end - self.lookback : end]:
            flat.extend(StationarityNormalizer.normalize_row(row, self.feature_stats))
        return flat

    def predict_at(self, feature_matrix: Sequence[Sequence[float]], end: int) -> float:
        """Predict the target at ``end`` from rows ``end-lookback .. end-1``."""
        if end < self.lookback:
            return math.nan
        out = self.target_stats.denormalize(self.network.predict(self.window_features(feature_matrix, end)))
        return out if math.isfinite(out) else math.nan

    def forecast_next(self, feature_matrix: Sequence[Sequence[float]]) -> float:
        return self.predict_at(feature_matrix, len(feature_matrix))


def _check_feature_matrix(feature_matrix: Sequence[Sequence[float]], targets: Sequence[float]) -> int:
    if len(feature_matrix) != len(targets):
        raise ValueError(
            f"feature_matrix has {len(feature_matrix)} rows but targets has {len(targets)} values"
        )
    if not feature_matrix:
        return 0
    width = len(feature_matrix[0])
    if width == 0 or any(len(row) != width for row in feature_matrix):
        raise ValueError("feature_matrix rows must be non-empty and of equal width")
    return width


def fit_trained_lag_model(
    feature_matrix: Sequence[Sequence[float]],
    targets: Sequence[float],
    lookback: int,
    config: FeedForwardConfig | None = None,
) -> Optional[TrainedLagModel]:
    if lookback < 1:
        raise ValueError(f"lookback must be positive, got {lookback}")
    width = _check_feature_matrix(feature_matrix, targets)
    if len(feature_matrix) <= lookback:
        return None
    cfg = config or FeedForwardConfig()
    normalizer = StationarityNormalizer()
    # the last row only feeds the step past the end, never a training window
    feature_stats = normalizer.fit_columns(feature_matrix[:-1])
    target_stats = normalizer.fit(targets[lookback:])
    model = TrainedLagModel(
        network=FeedForwardNetwork(lookback * width, cfg),
        lookback=lookback,
        feature_stats=feature_stats,
        target_stats=target_stats,
    )
    rows = [model.window_features(feature_matrix, i) for i in range(lookback, len(feature_matrix))]
    scaled = [target_stats.normalize(y) for y in targets[lookback:]]
    model.losses = model.network.fit(rows, scaled)
    if model.losses:
        logger.debug(
            "trained lag network rows=%d epochs=%d final_mse=%.6f",
            len(rows),
            cfg.epochs,
            model.losses[-1],
        )
    return model


def nonlinear_predict_trained(
    feature_matrix: Sequence[Sequence[float]],
    targets: Sequence[float],
    lookback: int,
    layers: int = 2,
    units: int = 8,
    epochs: int = 50,
    learning_rate: float = 0.01,
    random_seed: Optional[int] = None,
) -> List[float]:
    config = FeedForwardConfig(
        layers=layers,
        units=units,
        epochs=epochs,
        learning_rate=learning_rate,
        seed=random_seed,
    )
    model = fit_trained_lag_model(feature_matrix, targets, lookback, config)
    preds = [math.nan] * len(feature_matrix)
    if model is None:
        return preds
    for i in range(lookback, len(feature_matrix)):
        preds[i] = model.predict_at(feature_matrix, i)
    return preds
