# Forecast models
from .smoothing import moving_average, exponential_moving_average
from .regression import fit_line, least_squares_predict
from .seasonal import seasonal_predict, seasonal_forecast_next
from .nonlinear import (
    FeedForwardConfig,
    FeedForwardNetwork,
    closed_form_forecast_next,
    fit_lag_regression,
    fit_trained_lag_model,
    nonlinear_predict_closed_form,
    nonlinear_predict_trained,
)

__all__ = [
    "moving_average",
    "exponential_moving_average",
    "fit_line",
    "least_squares_predict",
    "seasonal_predict",
    "seasonal_forecast_next",
    "FeedForwardConfig",
    "FeedForwardNetwork",
    "closed_form_forecast_next",
    "fit_lag_regression",
    "fit_trained_lag_model",
    "nonlinear_predict_closed_form",
    "nonlinear_predict_trained",
]
