"""
Pytest test module for the metric forecasters.

Test Categories:
- TestPredictAttendances: projections, trend thresholds, factors
- TestPredictConversion: ratio regression, clamping, zero-attendance days
- TestPredictResponseTime: regression path and placeholder
- TestHelpers: rounding, confidence clamp, trend classification
"""

import pytest

from engagement_backend.models.enums import ResponseTimeTrend, Trend
from engagement_backend.services.forecasting import (
    FACTOR_CONVERSION_CONSISTENT,
    FACTOR_CONVERSION_IMPROVING,
    FACTOR_GROWING_TREND,
    FACTOR_HIGH_RELIABILITY,
    FACTOR_RESPONSE_TIME_FALLING,
    FACTOR_SEASONALITY,
    clamp_confidence,
    classify_trend,
    daily_conversion_rates,
    placeholder_response_time_forecast,
    predict_attendances,
    predict_conversion,
    predict_response_time,
    round_half_up,
)
from engagement_backend.tests.factories import make_point, make_series


# =============================================================================
# Attendance
# =============================================================================


class TestPredictAttendances:

    def test_linear_growth_below_threshold_is_stable(self, linear_growth_series) -> None:
        """Slope 3 does not exceed the default threshold of 5."""
        prediction = predict_attendances(linear_growth_series)

        assert prediction.trend == Trend.STABLE
        assert prediction.nextDay == 80
        assert prediction.nextWeek == 101
        assert prediction.nextMonth == 170
        assert prediction.confidence == 0.95

    def test_linear_growth_factors(self, linear_growth_series) -> None:
        prediction = predict_attendances(linear_growth_series)
        assert FACTOR_GROWING_TREND in prediction.factors
        assert FACTOR_HIGH_RELIABILITY in prediction.factors

    def test_steep_growth_is_increasing(self) -> None:
        series = make_series(10, attendances=lambda i: 50 + 10 * i, conversions=lambda i: 5)
        assert predict_attendances(series).trend == Trend.INCREASING

    def test_steep_decline_is_decreasing_and_floored(self) -> None:
        series = make_series(10, attendances=lambda i: 200 - 20 * i, conversions=lambda i: 0)
        prediction = predict_attendances(series)

        assert prediction.trend == Trend.DECREASING
        assert prediction.nextDay == 0
        assert prediction.nextMonth == 0
        assert FACTOR_GROWING_TREND not in prediction.factors

    def test_custom_threshold(self, linear_growth_series) -> None:
        prediction = predict_attendances(linear_growth_series, trend_threshold=2.0)
        assert prediction.trend == Trend.INCREASING

    def test_constant_series(self, healthy_series) -> None:
        prediction = predict_attendances(healthy_series)

        assert prediction.nextDay == 100
        assert prediction.trend == Trend.STABLE
        assert prediction.confidence == 0.5
        assert prediction.factors == []

    def test_weekly_pattern_adds_seasonality_factor(self) -> None:
        weekly = [100, 80, 80, 80, 80, 80, 40] * 4
        series = make_series(28, attendances=lambda i: weekly[i], conversions=lambda i: 10)
        assert FACTOR_SEASONALITY in predict_attendances(series).factors

    def test_single_point_degrades_to_zero_fit(self) -> None:
        prediction = predict_attendances([make_point(0, attendances=120)])
        assert prediction.nextDay == 0
        assert prediction.trend == Trend.STABLE
        assert prediction.confidence == 0.5

    def test_empty_series(self) -> None:
        prediction = predict_attendances([])
        assert (prediction.nextDay, prediction.nextWeek, prediction.nextMonth) == (0, 0, 0)


# =============================================================================
# Conversion
# =============================================================================


class TestPredictConversion:

    def test_constant_rate(self, healthy_series) -> None:
        prediction = predict_conversion(healthy_series)

        assert prediction.nextDay == pytest.approx(25.0)
        assert prediction.nextWeek == pytest.approx(25.0)
        assert prediction.trend == Trend.STABLE
        assert prediction.confidence == 0.5

    def test_improving_rate(self) -> None:
        # rate = 0.10 + 0.02 * day
        series = make_series(10, attendances=lambda i: 100, conversions=lambda i: 10 + 2 * i)
        prediction = predict_conversion(series)

        assert prediction.trend == Trend.INCREASING
        assert prediction.nextDay == pytest.approx(30.0)
        assert FACTOR_CONVERSION_IMPROVING in prediction.factors
        assert FACTOR_CONVERSION_CONSISTENT in prediction.factors

    def test_projection_capped_at_100_percent(self) -> None:
        series = make_series(10, attendances=lambda i: 100, conversions=lambda i: 55 + 5 * i)
        prediction = predict_conversion(series)
        assert prediction.nextWeek == 100.0

    def test_projection_floored_at_zero(self) -> None:
        series = make_series(10, attendances=lambda i: 100, conversions=lambda i: 45 - 5 * i)
        prediction = predict_conversion(series)
        assert prediction.nextDay == 0.0
        assert prediction.trend == Trend.DECREASING

    def test_zero_attendance_days_count_as_zero_rate(self) -> None:
        series = [
            make_point(0, attendances=0, conversions=0),
            make_point(1, attendances=100, conversions=20),
        ]
        assert daily_conversion_rates(series) == [0.0, 0.2]


# =============================================================================
# Response Time
# =============================================================================


class TestPredictResponseTime:

    def test_falling_response_time_is_improving(self) -> None:
        series = make_series(10, response_time=lambda i: 300.0 - 10 * i)
        prediction = predict_response_time(series)

        assert prediction.trend == ResponseTimeTrend.IMPROVING
        assert prediction.nextDay == pytest.approx(200.0)
        assert prediction.nextWeek == pytest.approx(130.0)
        assert FACTOR_RESPONSE_TIME_FALLING in prediction.factors
        assert FACTOR_HIGH_RELIABILITY in prediction.factors

    def test_rising_response_time_is_worsening(self) -> None:
        series = make_series(10, response_time=lambda i: 100.0 + 5 * i)
        assert predict_response_time(series).trend == ResponseTimeTrend.WORSENING

    def test_small_slope_is_stable(self) -> None:
        series = make_series(10, response_time=lambda i: 150.0 + 0.5 * i)
        assert predict_response_time(series).trend == ResponseTimeTrend.STABLE

    def test_projection_floored_at_zero(self) -> None:
        series = make_series(10, response_time=lambda i: 110.0 - 10 * i)
        assert predict_response_time(series).nextWeek == 0.0

    def test_placeholder_forecast(self) -> None:
        prediction = placeholder_response_time_forecast()
        assert prediction.nextDay == 180.0
        assert prediction.nextWeek == 175.0
        assert prediction.confidence == 0.8
        assert prediction.trend == ResponseTimeTrend.IMPROVING


# =============================================================================
# Helpers
# =============================================================================


class TestHelpers:

    @pytest.mark.parametrize('value,expected', [
        (2.5, 3),
        (3.5, 4),
        (2.49, 2),
        (-0.5, 0),
    ])
    def test_round_half_up(self, value: float, expected: int) -> None:
        assert round_half_up(value) == expected

    @pytest.mark.parametrize('value', [float('inf'), float('-inf'), float('nan')])
    def test_round_half_up_rejects_non_finite(self, value: float) -> None:
        with pytest.raises(ValueError, match='non-finite'):
            round_half_up(value)

    @pytest.mark.parametrize('r2,expected', [
        (0.0, 0.5),
        (0.7, 0.7),
        (1.0, 0.95),
    ])
    def test_clamp_confidence(self, r2: float, expected: float) -> None:
        assert clamp_confidence(r2) == expected

    def test_classify_trend_is_strict(self) -> None:
        assert classify_trend(5.0, 5.0) == Trend.STABLE
        assert classify_trend(5.01, 5.0) == Trend.INCREASING
        assert classify_trend(-5.01, 5.0) == Trend.DECREASING
