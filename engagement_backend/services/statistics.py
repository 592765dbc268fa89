"""
Statistical primitives for the predictive analytics engine.

This module holds the leaf-level numeric building blocks that the metric
forecasters, alert generator and recommendation generator are composed from:

- linear_regression: closed-form ordinary least squares with R²
- weighted_moving_average: weighted mean of recent values
- detect_seasonality: lag-based autocorrelation scan for a dominant period
- mean: arithmetic mean with an empty-input default

Every function is pure and absorbs degenerate input (too short, zero
variance, mismatched lengths) by returning a documented neutral value
rather than raising.

Dependencies:
    - numpy: vectorised sums and array arithmetic
"""

from dataclasses import dataclass
from typing import Sequence

import numpy as np


# =============================================================================
# Constants
# =============================================================================

# Largest lag examined by the seasonality scan (one week of daily samples)
MAX_SEASONALITY_LAG: int = 7

# Series shorter than this never report a seasonal period
MIN_SEASONALITY_LENGTH: int = 7


# =============================================================================
# Result Types
# =============================================================================


@dataclass(frozen=True)
class RegressionResult:
    """
    Fitted line y = slope * x + intercept and its coefficient of determination.
    """
    slope: float
    intercept: float
    r2: float

    def predict(self, x: float) -> float:
        """Evaluate the fitted line at x."""
        return self.slope * x + self.intercept


# =============================================================================
# Helpers
# =============================================================================


def mean(values: Sequence[float]) -> float:
    """
    Calculate arithmetic mean of values.

    Returns:
        Mean value, or 0.0 if the sequence is empty.
    """
    if len(values) == 0:
        return 0.0
    return float(np.mean(np.asarray(values, dtype=np.float64)))


# =============================================================================
# Linear Regression
# =============================================================================


def linear_regression(x: Sequence[float], y: Sequence[float]) -> RegressionResult:
    """
    Fit a straight line to (x, y) pairs using closed-form ordinary least squares.

    slope     = (nΣxy − ΣxΣy) / (nΣx² − (Σx)²)
    intercept = (Σy − slope·Σx) / n
    r2        = 1 − SSres / SStot

    Args:
        x: Independent variable, typically the day index 0..n-1.
        y: Metric values, same length as x.

    Returns:
        RegressionResult with slope, intercept and r2.

    Edge Cases:
        - Lengths differ or fewer than 2 points: RegressionResult(0, 0, 0)
        - Constant y (SStot = 0): r2 is exactly 0, not 1
        - All x equal (zero denominator): slope 0, intercept = mean(y)

    Example:
        >>> fit = linear_regression([0, 1, 2, 3], [1, 3, 5, 7])
        >>> fit.slope, fit.intercept, fit.r2
        (2.0, 1.0, 1.0)
    """
    n = len(x)
    if n != len(y) or n < 2:
        return RegressionResult(slope=0.0, intercept=0.0, r2=0.0)

    x_arr = np.asarray(x, dtype=np.float64)
    y_arr = np.asarray(y, dtype=np.float64)

    sum_x = float(np.sum(x_arr))
    sum_y = float(np.sum(y_arr))
    sum_xy = float(np.sum(x_arr * y_arr))
    sum_x2 = float(np.sum(x_arr * x_arr))

    denominator = n * sum_x2 - sum_x * sum_x
    if denominator == 0:
        slope = 0.0
    else:
        slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n

    # Constant series: report no explanatory power
    if np.all(y_arr == y_arr[0]):
        return RegressionResult(slope=float(slope), intercept=float(intercept), r2=0.0)

    y_mean = sum_y / n
    residuals = y_arr - (slope * x_arr + intercept)
    ss_res = float(np.sum(residuals ** 2))
    ss_tot = float(np.sum((y_arr - y_mean) ** 2))
    r2 = 0.0 if ss_tot == 0 else 1.0 - (ss_res / ss_tot)

    return RegressionResult(slope=float(slope), intercept=float(intercept), r2=float(r2))


# =============================================================================
# Weighted Moving Average
# =============================================================================


def weighted_moving_average(data: Sequence[float], weights: Sequence[float]) -> float:
    """
    Combine values with the supplied weights: Σ(data·weights) / Σweights.

    Returns 0.0 when the lengths differ or the weights sum to zero (or less).

    Example:
        >>> weighted_moving_average([10, 20, 30], [1, 2, 3])
        23.333333333333332
    """
    if len(data) != len(weights):
        return 0.0

    data_arr = np.asarray(data, dtype=np.float64)
    weight_arr = np.asarray(weights, dtype=np.float64)

    weight_sum = float(np.sum(weight_arr))
    if weight_sum <= 0:
        return 0.0

    return float(np.sum(data_arr * weight_arr)) / weight_sum


# =============================================================================
# Seasonality Detection
# =============================================================================


def detect_seasonality(data: Sequence[float]) -> int:
    """
    Find the dominant period of a daily series by scanning autocorrelation lags.

    For each lag in 1..min(7, n/2) the normalized autocovariance is computed
    against the global mean and population variance of the whole series (not
    per-lag statistics). The lag with the largest absolute correlation wins.

    This is a heuristic signal used to annotate forecasts with an advisory
    factor; it never adjusts forecast values.

    Args:
        data: Metric values ordered chronologically.

    Returns:
        The winning lag, or 0 when the series is shorter than 7 samples, has
        zero variance, or no lag shows any correlation.

    Example:
        >>> weekly = [100, 80, 80, 80, 80, 80, 40] * 4
        >>> detect_seasonality(weekly)
        7
    """
    n = len(data)
    if n < MIN_SEASONALITY_LENGTH:
        return 0

    values = np.asarray(data, dtype=np.float64)
    series_mean = float(np.mean(values))
    deviations = values - series_mean
    variance = float(np.sum(deviations ** 2)) / n

    if variance == 0:
        return 0

    max_correlation = 0.0
    seasonality = 0
    max_lag = int(min(MAX_SEASONALITY_LAG, n / 2))

    for lag in range(1, max_lag + 1):
        count = n - lag
        if count <= 0:
            continue

        covariance = float(np.sum(deviations[lag:] * deviations[:-lag]))
        correlation = covariance / (count * variance)

        if abs(correlation) > abs(max_correlation):
            max_correlation = correlation
            seasonality = lag

    return seasonality
