"""
Metric forecasters: attendance volume, conversion rate and response time.

Each forecaster extracts one numeric column from the historical series,
regresses it against the implicit day index 0..n-1 and projects the fitted
line forward:

    next day   = slope · n        + intercept
    next week  = slope · (n + 7)  + intercept
    next month = slope · (n + 30) + intercept   (attendance only)

Projections are floored at 0 (conversion is also capped at 1 before being
scaled to a percentage). Confidence is the fit's R² clamped to [0.5, 0.95].
Trend labels come from comparing the slope with a per-metric threshold.

Factors are advisory strings shown in the dashboard (Portuguese, matching
the rest of the UI) and are never consumed programmatically.
"""

import math
from typing import List, Sequence

from engagement_backend.models.enums import ResponseTimeTrend, Trend
from engagement_backend.models.schemas import (
    AttendancePrediction,
    ConversionPrediction,
    HistoricalDataPoint,
    ResponseTimePrediction,
)
from engagement_backend.services.statistics import detect_seasonality, linear_regression


# =============================================================================
# Constants
# =============================================================================

NEXT_WEEK_OFFSET: int = 7
NEXT_MONTH_OFFSET: int = 30

MIN_CONFIDENCE: float = 0.5
MAX_CONFIDENCE: float = 0.95

ATTENDANCE_TREND_THRESHOLD: float = 5.0
CONVERSION_TREND_THRESHOLD: float = 0.01
RESPONSE_TIME_TREND_THRESHOLD: float = 1.0

HIGH_RELIABILITY_R2: float = 0.7
CONSISTENT_CONVERSION_R2: float = 0.6

FACTOR_GROWING_TREND = 'Tendência crescente nos últimos dias'
FACTOR_SEASONALITY = 'Padrão sazonal detectado'
FACTOR_HIGH_RELIABILITY = 'Alta confiabilidade do modelo'
FACTOR_CONVERSION_IMPROVING = 'Melhoria na taxa de conversão'
FACTOR_CONVERSION_CONSISTENT = 'Padrão consistente de conversão'
FACTOR_RESPONSE_TIME_FALLING = 'Tempo de resposta em queda'

# Fixed values returned when response time is not forecast from data
PLACEHOLDER_RESPONSE_NEXT_DAY: float = 180.0
PLACEHOLDER_RESPONSE_NEXT_WEEK: float = 175.0
PLACEHOLDER_RESPONSE_CONFIDENCE: float = 0.8


# =============================================================================
# Helpers
# =============================================================================


def clamp_confidence(r2: float) -> float:
    """Clamp a goodness-of-fit value into the reported confidence range."""
    return min(MAX_CONFIDENCE, max(MIN_CONFIDENCE, r2))


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer with .5 going up (not banker's rounding).

    Raises:
        ValueError: value is infinite or NaN.
    """
    if not math.isfinite(value):
        raise ValueError(f"Cannot round non-finite value: {value}")
    return int(math.floor(value + 0.5))


def daily_conversion_rates(series: Sequence[HistoricalDataPoint]) -> List[float]:
    """
    Per-day conversion ratio conversions / attendances, 0 on days without attendances.
    """
    return [
        point.conversions / point.attendances if point.attendances > 0 else 0.0
        for point in series
    ]


def classify_trend(slope: float, threshold: float) -> Trend:
    """increasing above +threshold, decreasing below -threshold, else stable."""
    if slope > threshold:
        return Trend.INCREASING
    if slope < -threshold:
        return Trend.DECREASING
    return Trend.STABLE


# =============================================================================
# Attendance
# =============================================================================


def predict_attendances(
    series: Sequence[HistoricalDataPoint],
    trend_threshold: float = ATTENDANCE_TREND_THRESHOLD,
) -> AttendancePrediction:
    """
    Forecast daily conversation volume for tomorrow, next week and next month.

    Args:
        series: Historical samples ordered by date.
        trend_threshold: Slope (attendances/day) beyond which the trend is
            increasing or decreasing. Default 5.

    Returns:
        AttendancePrediction with rounded, non-negative projections.

    Example:
        >>> # attendances = 50 + 3 * day for 10 days
        >>> prediction = predict_attendances(series)
        >>> prediction.nextDay, prediction.trend
        (80, <Trend.STABLE: 'stable'>)
    """
    attendances = [float(point.attendances) for point in series]
    days = list(range(len(attendances)))
    n = len(attendances)

    fit = linear_regression(days, attendances)

    factors: List[str] = []
    if fit.slope > 0:
        factors.append(FACTOR_GROWING_TREND)
    if detect_seasonality(attendances) > 0:
        factors.append(FACTOR_SEASONALITY)
    if fit.r2 > HIGH_RELIABILITY_R2:
        factors.append(FACTOR_HIGH_RELIABILITY)

    return AttendancePrediction(
        nextDay=max(0, round_half_up(fit.predict(n))),
        nextWeek=max(0, round_half_up(fit.predict(n + NEXT_WEEK_OFFSET))),
        nextMonth=max(0, round_half_up(fit.predict(n + NEXT_MONTH_OFFSET))),
        confidence=clamp_confidence(fit.r2),
        trend=classify_trend(fit.slope, trend_threshold),
        factors=factors,
    )


# =============================================================================
# Conversion
# =============================================================================


def predict_conversion(
    series: Sequence[HistoricalDataPoint],
    trend_threshold: float = CONVERSION_TREND_THRESHOLD,
) -> ConversionPrediction:
    """
    Forecast the conversion rate, returned as a percentage.

    The regression runs on the per-day ratio conversions/attendances.
    Projections are clamped to [0, 1] and then multiplied by 100.

    Args:
        series: Historical samples ordered by date.
        trend_threshold: Ratio slope per day beyond which the trend is
            increasing or decreasing. Default 0.01.
    """
    rates = daily_conversion_rates(series)
    n = len(rates)

    fit = linear_regression(list(range(n)), rates)

    next_day = min(1.0, max(0.0, fit.predict(n)))
    next_week = min(1.0, max(0.0, fit.predict(n + NEXT_WEEK_OFFSET)))

    factors: List[str] = []
    if fit.slope > 0:
        factors.append(FACTOR_CONVERSION_IMPROVING)
    if fit.r2 > CONSISTENT_CONVERSION_R2:
        factors.append(FACTOR_CONVERSION_CONSISTENT)

    return ConversionPrediction(
        nextDay=next_day * 100,
        nextWeek=next_week * 100,
        confidence=clamp_confidence(fit.r2),
        trend=classify_trend(fit.slope, trend_threshold),
        factors=factors,
    )


# =============================================================================
# Response Time
# =============================================================================


def predict_response_time(
    series: Sequence[HistoricalDataPoint],
    trend_threshold: float = RESPONSE_TIME_TREND_THRESHOLD,
) -> ResponseTimePrediction:
    """
    Forecast mean response time in seconds.

    A falling response time is an improvement: slope below -threshold is
    'improving', above +threshold is 'worsening'.

    Args:
        series: Historical samples ordered by date.
        trend_threshold: Seconds per day. Default 1.0.
    """
    response_times = [float(point.responseTime) for point in series]
    n = len(response_times)

    fit = linear_regression(list(range(n)), response_times)

    if fit.slope < -trend_threshold:
        trend = ResponseTimeTrend.IMPROVING
    elif fit.slope > trend_threshold:
        trend = ResponseTimeTrend.WORSENING
    else:
        trend = ResponseTimeTrend.STABLE

    factors: List[str] = []
    if fit.slope < 0:
        factors.append(FACTOR_RESPONSE_TIME_FALLING)
    if fit.r2 > HIGH_RELIABILITY_R2:
        factors.append(FACTOR_HIGH_RELIABILITY)

    return ResponseTimePrediction(
        nextDay=max(0.0, fit.predict(n)),
        nextWeek=max(0.0, fit.predict(n + NEXT_WEEK_OFFSET)),
        confidence=clamp_confidence(fit.r2),
        trend=trend,
        factors=factors,
    )


def placeholder_response_time_forecast() -> ResponseTimePrediction:
    """
    Fixed response-time forecast used by the first dashboard release.

    Kept for deployments configured with RESPONSE_TIME_MODE=placeholder.
    """
    return ResponseTimePrediction(
        nextDay=PLACEHOLDER_RESPONSE_NEXT_DAY,
        nextWeek=PLACEHOLDER_RESPONSE_NEXT_WEEK,
        confidence=PLACEHOLDER_RESPONSE_CONFIDENCE,
        trend=ResponseTimeTrend.IMPROVING,
        factors=[],
    )
