"""
Temporal pattern aggregation: per-hour and per-day-of-week summaries.

Two aggregation sources are available:

Synthetic (default):
    Daily samples carry no hour-of-day information, so hourly aggregates are
    produced from a baseline-plus-noise model: business hours (08-18) draw
    from a higher baseline than off-hours, weekends from a lower baseline
    than weekdays. Noise comes from an injected numpy Generator so a seeded
    run is reproducible.

Series:
    group_daily_patterns() buckets the real input series by day of week with
    pandas. Days of the week absent from the series are reported with zero
    averages and zero confidence.

Output shape is fixed regardless of source: 24 HourlyTrend records (hour
0-23) and 7 DailyTrend records (0=Sunday .. 6=Saturday).

Dependencies:
    - numpy: random Generator for the synthetic model
    - pandas: day-of-week grouping of the input series
"""

from typing import List, Optional

import numpy as np
import pandas as pd

from engagement_backend.models.schemas import DailyTrend, HistoricalDataPoint, HourlyTrend


# =============================================================================
# Constants
# =============================================================================

HOURS_PER_DAY: int = 24
DAYS_PER_WEEK: int = 7

BUSINESS_HOURS_START: int = 8
BUSINESS_HOURS_END: int = 18  # inclusive

HOURLY_SAMPLES: int = 10
BUSINESS_HOUR_BASELINE: float = 15.0
OFF_HOUR_BASELINE: float = 5.0
HOURLY_NOISE: float = 10.0

DAILY_SAMPLES: int = 5
WEEKDAY_BASELINE: float = 80.0
WEEKEND_BASELINE: float = 30.0
DAILY_NOISE: float = 40.0

# Sunday=0, Saturday=6
WEEKEND_DAYS = (0, 6)


def _default_rng(rng: Optional[np.random.Generator]) -> np.random.Generator:
    return rng if rng is not None else np.random.default_rng()


# =============================================================================
# Synthetic Aggregates
# =============================================================================


def analyze_hourly_patterns(
    series: List[HistoricalDataPoint],
    rng: Optional[np.random.Generator] = None,
) -> List[HourlyTrend]:
    """
    Produce one HourlyTrend per hour of day from the baseline-plus-noise model.

    The series is accepted for interface symmetry with the daily aggregator;
    daily samples cannot be split by hour.

    Per hour:
        - 10 attendance samples of baseline + U(0, 10), baseline 15 during
          business hours (08-18) and 5 otherwise; averaged
        - averageConversion = 0.2 + U(0, 0.2)
        - averageResponseTime = 120 + U(0, 180)
        - confidence = 0.7 + U(0, 0.2)

    Args:
        series: Historical daily samples (unused by the synthetic model).
        rng: Random generator; a fresh unseeded generator when omitted.

    Returns:
        24 HourlyTrend records ordered by hour.
    """
    generator = _default_rng(rng)
    trends: List[HourlyTrend] = []

    for hour in range(HOURS_PER_DAY):
        is_business_hour = BUSINESS_HOURS_START <= hour <= BUSINESS_HOURS_END
        baseline = BUSINESS_HOUR_BASELINE if is_business_hour else OFF_HOUR_BASELINE
        samples = baseline + generator.random(HOURLY_SAMPLES) * HOURLY_NOISE

        trends.append(
            HourlyTrend(
                hour=hour,
                averageAttendances=float(np.mean(samples)),
                averageConversion=0.2 + float(generator.random()) * 0.2,
                averageResponseTime=120 + float(generator.random()) * 180,
                confidence=0.7 + float(generator.random()) * 0.2,
            )
        )

    return trends


def analyze_daily_patterns(
    series: List[HistoricalDataPoint],
    rng: Optional[np.random.Generator] = None,
) -> List[DailyTrend]:
    """
    Produce one DailyTrend per day of week from the baseline-plus-noise model.

    Per day:
        - 5 attendance samples of baseline + U(0, 40), baseline 30 on
          weekends and 80 on weekdays; averaged
        - averageConversion = 0.15 + U(0, 0.25)
        - averageResponseTime = 150 + U(0, 200)
        - confidence = 0.8 + U(0, 0.15)

    Returns:
        7 DailyTrend records ordered Sunday (0) to Saturday (6).
    """
    generator = _default_rng(rng)
    trends: List[DailyTrend] = []

    for day in range(DAYS_PER_WEEK):
        baseline = WEEKEND_BASELINE if day in WEEKEND_DAYS else WEEKDAY_BASELINE
        samples = baseline + generator.random(DAILY_SAMPLES) * DAILY_NOISE

        trends.append(
            DailyTrend(
                dayOfWeek=day,
                averageAttendances=float(np.mean(samples)),
                averageConversion=0.15 + float(generator.random()) * 0.25,
                averageResponseTime=150 + float(generator.random()) * 200,
                confidence=0.8 + float(generator.random()) * 0.15,
            )
        )

    return trends


# =============================================================================
# Series Grouping
# =============================================================================


def series_to_frame(series: List[HistoricalDataPoint]) -> pd.DataFrame:
    """
    Convert a historical series into a DataFrame with a derived conversion rate.

    Columns: date, attendances, conversions, responseTime, qualityScore,
    sentiment, conversion_rate (0 where attendances is 0).
    """
    frame = pd.DataFrame(
        [
            {
                'date': pd.Timestamp(point.date),
                'attendances': point.attendances,
                'conversions': point.conversions,
                'responseTime': point.responseTime,
                'qualityScore': point.qualityScore,
                'sentiment': point.sentiment,
            }
            for point in series
        ],
        columns=[
            'date', 'attendances', 'conversions', 'responseTime',
            'qualityScore', 'sentiment',
        ],
    )

    attendances = frame['attendances'].astype(float)
    frame['conversion_rate'] = np.where(
        attendances > 0,
        frame['conversions'].astype(float) / attendances.where(attendances > 0, 1.0),
        0.0,
    )
    return frame


def _grouping_confidence(sample_count: int) -> float:
    # One sample per weekday gives 0.6; four or more weeks reaches the cap
    if sample_count <= 0:
        return 0.0
    return min(0.95, 0.5 + 0.1 * sample_count)


def group_daily_patterns(series: List[HistoricalDataPoint]) -> List[DailyTrend]:
    """
    Group the input series by day of week and average each metric.

    pandas numbers weekdays Monday=0; they are shifted to Sunday=0 to match
    the dashboard. Confidence grows with the number of samples that fell on
    the weekday (0.5 + 0.1 per sample, capped at 0.95).

    Returns:
        7 DailyTrend records ordered Sunday (0) to Saturday (6). Weekdays with
        no samples have zero averages and zero confidence.
    """
    frame = series_to_frame(series)
    grouped = None

    if not frame.empty:
        frame['day_of_week'] = (frame['date'].dt.dayofweek + 1) % DAYS_PER_WEEK
        grouped = frame.groupby('day_of_week').agg(
            averageAttendances=('attendances', 'mean'),
            averageConversion=('conversion_rate', 'mean'),
            averageResponseTime=('responseTime', 'mean'),
            samples=('attendances', 'size'),
        )

    trends: List[DailyTrend] = []
    for day in range(DAYS_PER_WEEK):
        if grouped is None or day not in grouped.index:
            trends.append(
                DailyTrend(
                    dayOfWeek=day,
                    averageAttendances=0.0,
                    averageConversion=0.0,
                    averageResponseTime=0.0,
                    confidence=0.0,
                )
            )
            continue

        row = grouped.loc[day]
        trends.append(
            DailyTrend(
                dayOfWeek=day,
                averageAttendances=float(row['averageAttendances']),
                averageConversion=float(row['averageConversion']),
                averageResponseTime=float(row['averageResponseTime']),
                confidence=_grouping_confidence(int(row['samples'])),
            )
        )

    return trends
