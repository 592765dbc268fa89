"""
Predictive Analytics Engine - orchestration of the statistical pipeline.

This module composes the forecasters, alert generator, temporal aggregators,
recommendation generator and sentiment summary into the single
PredictiveAnalytics aggregate consumed by the dashboard.

Key Components:
- validate_series(): ordering/uniqueness check for a historical series
- PredictiveAnalyticsEngine: holds configuration and injected capabilities
    - analyze_series(): pure pipeline over a given series
    - generate_predictive_analytics(): fetch the user's series and analyse it
- build_engine(): construct an engine from application Settings

Pipeline (per run):
    series -> attendance / conversion / response-time forecasts
           -> alerts over the trailing window
           -> hourly and daily temporal aggregates
           -> recommendations (using the same hourly aggregates)
           -> sentiment summary
           -> PredictiveAnalytics

Determinism:
    The synthetic temporal model needs randomness. Each run gets a fresh
    numpy Generator seeded from the configured seed, or from a digest of the
    series content when no seed is configured, so two runs over the same
    series produce the same aggregate apart from ids and timestamps.

Usage:
    from engagement_backend.services.predictive_engine import build_engine

    engine = build_engine(get_settings())
    analytics = await engine.generate_predictive_analytics(user_id)
"""

import hashlib
import logging
from typing import List, Optional, Sequence

import numpy as np

from engagement_backend.core.config import Settings
from engagement_backend.models.schemas import (
    HistoricalDataPoint,
    PredictiveAnalytics,
    TemporalPatterns,
)
from engagement_backend.services.alerts import generate_predictive_alerts
from engagement_backend.services.clock import Clock, IdFactory, generate_id, utc_now
from engagement_backend.services.data_provider import (
    DatabaseHistoricalDataProvider,
    HistoricalDataProvider,
    SyntheticHistoricalDataProvider,
)
from engagement_backend.services.errors import (
    AuthenticationMissingError,
    UpstreamUnavailableError,
)
from engagement_backend.services.forecasting import (
    placeholder_response_time_forecast,
    predict_attendances,
    predict_conversion,
    predict_response_time,
)
from engagement_backend.services.recommendations import generate_ml_recommendations
from engagement_backend.services.sentiment import summarize_sentiment
from engagement_backend.services.temporal_patterns import (
    analyze_daily_patterns,
    analyze_hourly_patterns,
    group_daily_patterns,
)
from engagement_backend.services.thresholds import DEFAULT_THRESHOLDS, EngineThresholds


logger = logging.getLogger(__name__)


TEMPORAL_SOURCE_SYNTHETIC = 'synthetic'
TEMPORAL_SOURCE_SERIES = 'series'

RESPONSE_TIME_REGRESSION = 'regression'
RESPONSE_TIME_PLACEHOLDER = 'placeholder'


# =============================================================================
# Validation
# =============================================================================


def validate_series(series: Sequence[HistoricalDataPoint]) -> None:
    """
    Check that a series is strictly ascending by date.

    Raises:
        ValueError: If two samples share a date or a sample precedes the
            one before it.
    """
    for previous, current in zip(series, series[1:]):
        if current.date == previous.date:
            raise ValueError(f"Duplicate date in series: {current.date.isoformat()}")
        if current.date < previous.date:
            raise ValueError(
                f"Series is not ordered by date: {current.date.isoformat()} "
                f"follows {previous.date.isoformat()}"
            )


def series_seed(series: Sequence[HistoricalDataPoint]) -> int:
    """Stable 64-bit seed derived from the series content."""
    digest = hashlib.sha256()
    for point in series:
        digest.update(point.model_dump_json().encode('utf-8'))
    return int.from_bytes(digest.digest()[:8], 'big')


# =============================================================================
# Engine
# =============================================================================


class PredictiveAnalyticsEngine:
    """
    Stateless orchestrator of the predictive pipeline.

    Args:
        data_provider: Source of historical series for
            generate_predictive_analytics(). Not needed for analyze_series().
        thresholds: Numeric cut-offs for forecasts, alerts and recommendations.
        history_days: Number of trailing days requested from the provider.
        temporal_source: 'synthetic' or 'series' daily aggregation.
        response_time_mode: 'regression' or 'placeholder'.
        random_seed: Seed for the synthetic temporal model; derived from the
            series when None.
        id_factory: Identifier generator for alerts and recommendations.
        clock: Timestamp source for alerts and generatedAt.
    """

    def __init__(
        self,
        data_provider: Optional[HistoricalDataProvider] = None,
        thresholds: EngineThresholds = DEFAULT_THRESHOLDS,
        history_days: int = 30,
        temporal_source: str = TEMPORAL_SOURCE_SYNTHETIC,
        response_time_mode: str = RESPONSE_TIME_REGRESSION,
        random_seed: Optional[int] = None,
        id_factory: Optional[IdFactory] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        if temporal_source not in (TEMPORAL_SOURCE_SYNTHETIC, TEMPORAL_SOURCE_SERIES):
            raise ValueError(f"Unknown temporal source: {temporal_source}")
        if response_time_mode not in (RESPONSE_TIME_REGRESSION, RESPONSE_TIME_PLACEHOLDER):
            raise ValueError(f"Unknown response time mode: {response_time_mode}")

        self.data_provider = data_provider
        self.thresholds = thresholds
        self.history_days = history_days
        self.temporal_source = temporal_source
        self.response_time_mode = response_time_mode
        self.random_seed = random_seed
        self.id_factory = id_factory or generate_id
        self.clock = clock or utc_now

    def _rng_for(self, series: Sequence[HistoricalDataPoint]) -> np.random.Generator:
        seed = self.random_seed if self.random_seed is not None else series_seed(series)
        return np.random.default_rng(seed)

    def analyze_series(
        self,
        series: List[HistoricalDataPoint],
        user_id: Optional[str] = None,
    ) -> PredictiveAnalytics:
        """
        Run the full pipeline over a historical series.

        Args:
            series: Daily samples ordered by date ascending.
            user_id: Owner of the series, echoed in the aggregate.

        Returns:
            PredictiveAnalytics. An empty series is valid and yields zero
            forecasts, no alerts and the default sentiment summary.

        Raises:
            ValueError: If the series is unordered, has duplicate dates, or its
                metrics overflow when aggregated.
        """
        validate_series(series)
        thresholds = self.thresholds
        rng = self._rng_for(series)

        attendance = predict_attendances(series, thresholds.attendance_trend)
        conversion = predict_conversion(series, thresholds.conversion_trend)
        if self.response_time_mode == RESPONSE_TIME_PLACEHOLDER:
            response_time = placeholder_response_time_forecast()
        else:
            response_time = predict_response_time(series, thresholds.response_time_trend)

        alerts = generate_predictive_alerts(
            series,
            thresholds=thresholds,
            id_factory=self.id_factory,
            clock=self.clock,
        )

        hourly_trends = analyze_hourly_patterns(series, rng)
        if self.temporal_source == TEMPORAL_SOURCE_SERIES:
            daily_trends = group_daily_patterns(series)
        else:
            daily_trends = analyze_daily_patterns(series, rng)

        recommendations = generate_ml_recommendations(
            series,
            hourly_trends,
            thresholds=thresholds,
            id_factory=self.id_factory,
        )

        sentiment = summarize_sentiment(series)

        logger.debug(
            f"Analysed {len(series)} samples: {len(alerts)} alerts, "
            f"{len(recommendations)} recommendations"
        )

        return PredictiveAnalytics(
            userId=user_id,
            generatedAt=self.clock(),
            attendancePrediction=attendance,
            conversionPrediction=conversion,
            responseTimePrediction=response_time,
            predictiveAlerts=alerts,
            temporalPatterns=TemporalPatterns(
                hourlyTrends=hourly_trends,
                dailyTrends=daily_trends,
                weeklyTrends=[],
                seasonalPatterns=[],
            ),
            mlRecommendations=recommendations,
            sentimentAnalysis=sentiment,
        )

    async def generate_predictive_analytics(self, user_id: Optional[str]) -> PredictiveAnalytics:
        """
        Fetch the user's trailing series and analyse it.

        Raises:
            AuthenticationMissingError: user_id is missing or blank.
            UpstreamUnavailableError: No data provider is configured or the
                provider failed.
        """
        if not user_id or not user_id.strip():
            raise AuthenticationMissingError()

        if self.data_provider is None:
            raise UpstreamUnavailableError("No historical data provider configured")

        logger.info(f"Generating predictive analytics for user {user_id}")

        try:
            series = await self.data_provider.fetch_historical_series(user_id, self.history_days)
        except UpstreamUnavailableError:
            raise
        except Exception as e:
            logger.error(f"Historical data provider failed for user {user_id}: {e}", exc_info=True)
            raise UpstreamUnavailableError(f"Historical data unavailable: {e}") from e

        try:
            return self.analyze_series(series, user_id=user_id)
        except ValueError as e:
            # Provider data is expected to be ordered; treat violations as upstream faults
            logger.error(f"Invalid series returned for user {user_id}: {e}", exc_info=True)
            raise UpstreamUnavailableError(f"Invalid historical data: {e}") from e


# =============================================================================
# Factory
# =============================================================================


def build_engine(
    settings: Settings,
    id_factory: Optional[IdFactory] = None,
    clock: Optional[Clock] = None,
) -> PredictiveAnalyticsEngine:
    """
    Build an engine wired to the data source selected in settings.

    DATA_SOURCE=database reads engagement_daily_metrics through asyncpg;
    DATA_SOURCE=synthetic generates demo series (seeded by RANDOM_SEED).
    """
    if settings.data_source == 'database':
        provider: HistoricalDataProvider = DatabaseHistoricalDataProvider()
    else:
        provider = SyntheticHistoricalDataProvider(rng=np.random.default_rng(settings.random_seed))

    return PredictiveAnalyticsEngine(
        data_provider=provider,
        thresholds=EngineThresholds.from_settings(settings),
        history_days=settings.history_days,
        temporal_source=settings.temporal_source,
        response_time_mode=settings.response_time_mode,
        random_seed=settings.random_seed,
        id_factory=id_factory,
        clock=clock,
    )
