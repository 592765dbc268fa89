"""
Backend Services Module

This module contains the business logic of the Engagement Analytics backend.
Statistical services are pure functions over a historical series; the
orchestrator, providers, cache and state stores hold configuration and
injected collaborators only.

Services:
- statistics: Linear regression, weighted moving average, seasonality scan
- sentiment: Keyword sentiment classifier and period sentiment summary
- temporal_patterns: Hourly and day-of-week aggregates
- forecasting: Attendance, conversion and response-time forecasters
- alerts: Threshold alerts over the trailing window
- recommendations: Heuristic action recommendations
- predictive_engine: Pipeline orchestration into PredictiveAnalytics
- data_provider: Database and synthetic historical series sources
- insight_summary: Dashboard filters, roll-ups and insight cards
- analytics_cache: Per-user TTL cache of computed aggregates
- action_state: Alert state and recommendation application persistence

All services are designed to be consumed by the API layer (engagement_backend/api/).
"""

# =============================================================================
# Statistical Primitives
# =============================================================================

from engagement_backend.services.statistics import (
    RegressionResult,
    linear_regression,
    weighted_moving_average,
    detect_seasonality,
    mean,
)

# =============================================================================
# Sentiment
# =============================================================================

from engagement_backend.services.sentiment import (
    analyze_sentiment,
    classify_score,
    summarize_sentiment,
    POSITIVE_WORDS,
    NEGATIVE_WORDS,
)

# =============================================================================
# Temporal Patterns
# =============================================================================

from engagement_backend.services.temporal_patterns import (
    analyze_hourly_patterns,
    analyze_daily_patterns,
    group_daily_patterns,
    series_to_frame,
)

# =============================================================================
# Forecasting
# =============================================================================

from engagement_backend.services.forecasting import (
    predict_attendances,
    predict_conversion,
    predict_response_time,
    placeholder_response_time_forecast,
    classify_trend,
    clamp_confidence,
    daily_conversion_rates,
)

# =============================================================================
# Alerts and Recommendations
# =============================================================================

from engagement_backend.services.thresholds import EngineThresholds, DEFAULT_THRESHOLDS
from engagement_backend.services.alerts import generate_predictive_alerts
from engagement_backend.services.recommendations import generate_ml_recommendations, peak_hours

# =============================================================================
# Orchestration
# =============================================================================

from engagement_backend.services.errors import (
    PredictiveAnalyticsError,
    AuthenticationMissingError,
    UpstreamUnavailableError,
)
from engagement_backend.services.data_provider import (
    HistoricalDataProvider,
    DatabaseHistoricalDataProvider,
    SyntheticHistoricalDataProvider,
)
from engagement_backend.services.predictive_engine import (
    PredictiveAnalyticsEngine,
    build_engine,
    validate_series,
)

# =============================================================================
# Dashboard Support
# =============================================================================

from engagement_backend.services.insight_summary import (
    get_active_alerts,
    get_critical_alerts,
    get_recommendations_by_priority,
    get_recommendations_by_type,
    get_overall_confidence,
    get_overall_trend,
    get_summary_insights,
    build_summary,
    apply_alert_states,
)
from engagement_backend.services.analytics_cache import AnalyticsCache
from engagement_backend.services.action_state import ActionStateStore, InMemoryActionStateStore


__all__ = [
    # Statistics
    'RegressionResult',
    'linear_regression',
    'weighted_moving_average',
    'detect_seasonality',
    'mean',
    # Sentiment
    'analyze_sentiment',
    'classify_score',
    'summarize_sentiment',
    'POSITIVE_WORDS',
    'NEGATIVE_WORDS',
    # Temporal patterns
    'analyze_hourly_patterns',
    'analyze_daily_patterns',
    'group_daily_patterns',
    'series_to_frame',
    # Forecasting
    'predict_attendances',
    'predict_conversion',
    'predict_response_time',
    'placeholder_response_time_forecast',
    'classify_trend',
    'clamp_confidence',
    'daily_conversion_rates',
    # Alerts and recommendations
    'EngineThresholds',
    'DEFAULT_THRESHOLDS',
    'generate_predictive_alerts',
    'generate_ml_recommendations',
    'peak_hours',
    # Orchestration
    'PredictiveAnalyticsError',
    'AuthenticationMissingError',
    'UpstreamUnavailableError',
    'HistoricalDataProvider',
    'DatabaseHistoricalDataProvider',
    'SyntheticHistoricalDataProvider',
    'PredictiveAnalyticsEngine',
    'build_engine',
    'validate_series',
    # Dashboard support
    'get_active_alerts',
    'get_critical_alerts',
    'get_recommendations_by_priority',
    'get_recommendations_by_type',
    'get_overall_confidence',
    'get_overall_trend',
    'get_summary_insights',
    'build_summary',
    'apply_alert_states',
    'AnalyticsCache',
    'ActionStateStore',
    'InMemoryActionStateStore',
]
