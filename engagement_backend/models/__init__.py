"""
Package initialization file for backend models.

This module exports all Pydantic schemas and enumerations from schemas.py and enums.py,
making them importable from engagement_backend.models directly.

Usage:
    from engagement_backend.models import (
        HistoricalDataPoint,
        PredictiveAnalytics,
        PredictiveAlert,
        Severity,
        # ... etc
    )
"""

# =============================================================================
# Enums
# =============================================================================

from engagement_backend.models.enums import (
    Trend,
    ResponseTimeTrend,
    AlertType,
    Severity,
    Timeframe,
    RecommendationType,
    Impact,
    Priority,
    SentimentLabel,
    IntentCategory,
    InsightKind,
    DataSource,
)


# =============================================================================
# Schemas
# =============================================================================

from engagement_backend.models.schemas import (
    # Historical data
    HistoricalDataPoint,
    # Forecasts
    AttendancePrediction,
    ConversionPrediction,
    ResponseTimePrediction,
    # Alerts and recommendations
    PredictiveAlert,
    MLRecommendation,
    # Temporal patterns
    HourlyTrend,
    DailyTrend,
    WeeklyTrend,
    SeasonalPattern,
    TemporalPatterns,
    # Sentiment
    IntentPrediction,
    SentimentAnalysis,
    SentimentRequest,
    SentimentResult,
    # Root aggregate
    PredictiveAnalytics,
    # API wrappers
    SeriesAnalyticsRequest,
    AlertUpdateRequest,
    AlertStateResponse,
    RecommendationApplyResponse,
    SummaryInsight,
    PredictiveSummaryResponse,
)


__all__ = [
    # Enums
    'Trend',
    'ResponseTimeTrend',
    'AlertType',
    'Severity',
    'Timeframe',
    'RecommendationType',
    'Impact',
    'Priority',
    'SentimentLabel',
    'IntentCategory',
    'InsightKind',
    'DataSource',
    # Schemas
    'HistoricalDataPoint',
    'AttendancePrediction',
    'ConversionPrediction',
    'ResponseTimePrediction',
    'PredictiveAlert',
    'MLRecommendation',
    'HourlyTrend',
    'DailyTrend',
    'WeeklyTrend',
    'SeasonalPattern',
    'TemporalPatterns',
    'IntentPrediction',
    'SentimentAnalysis',
    'SentimentRequest',
    'SentimentResult',
    'PredictiveAnalytics',
    'SeriesAnalyticsRequest',
    'AlertUpdateRequest',
    'AlertStateResponse',
    'RecommendationApplyResponse',
    'SummaryInsight',
    'PredictiveSummaryResponse',
]
