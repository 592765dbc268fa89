"""
FastAPI router module for predictive analytics.

This module exposes the predictive analytics engine to the dashboard. The
caller's identity arrives in the X-User-Id header (set by the dashboard
proxy after authentication).

Key Endpoints:
- GET  /predictive-analytics                      - Full aggregate (cached per user)
- GET  /predictive-analytics/summary              - Header summary and insight cards
- GET  /predictive-analytics/alerts               - Alerts, filterable by state and severity
- GET  /predictive-analytics/recommendations      - Recommendations, filterable by priority and type
- PATCH /predictive-analytics/alerts/{alert_id}   - Activate or dismiss an alert
- POST /predictive-analytics/recommendations/{recommendation_id}/apply - Mark as applied
- POST /predictive-analytics/analyze              - Run the pipeline on a posted series
- POST /predictive-analytics/sentiment            - Classify free text

Caching:
    Aggregates are cached per user for CACHE_TTL_SECONDS (10 minutes by
    default). ?refresh=true recomputes. Alert and recommendation ids are
    generated per computation, so stored alert states are overlaid on the
    cached aggregate the ids came from.

Error Mapping:
    AuthenticationMissingError -> 401
    UpstreamUnavailableError   -> 503
    Invalid series (ordering, duplicates, field validation) -> 422

Dependencies:
- engagement_backend/core/dependencies.py: SettingsDep, CurrentUserIdDep
- engagement_backend/services/predictive_engine.py: PredictiveAnalyticsEngine
- engagement_backend/services/analytics_cache.py: AnalyticsCache
- engagement_backend/services/action_state.py: alert/recommendation state stores
- engagement_backend/services/insight_summary.py: filters and summary
"""

import logging
from typing import Annotated, List, Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Query

from engagement_backend.core.dependencies import CurrentUserIdDep, SettingsDep
from engagement_backend.models.enums import Priority, RecommendationType, Severity
from engagement_backend.models.schemas import (
    AlertStateResponse,
    AlertUpdateRequest,
    MLRecommendation,
    PredictiveAlert,
    PredictiveAnalytics,
    PredictiveSummaryResponse,
    RecommendationApplyResponse,
    SentimentRequest,
    SentimentResult,
    SeriesAnalyticsRequest,
)
from engagement_backend.services.action_state import ActionStateStore, InMemoryActionStateStore
from engagement_backend.services.analytics_cache import AnalyticsCache
from engagement_backend.services.errors import (
    AuthenticationMissingError,
    UpstreamUnavailableError,
)
from engagement_backend.services.insight_summary import (
    apply_alert_states,
    build_summary,
    get_active_alerts,
    get_recommendations_by_priority,
    get_recommendations_by_type,
)
from engagement_backend.services.predictive_engine import PredictiveAnalyticsEngine, build_engine
from engagement_backend.services.sentiment import analyze_sentiment


# =============================================================================
# Module Configuration
# =============================================================================

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/predictive-analytics", tags=["predictive-analytics"])

StateStore = Union[ActionStateStore, InMemoryActionStateStore]

# Process-wide singletons, created on first use
_engine: Optional[PredictiveAnalyticsEngine] = None
_cache: Optional[AnalyticsCache] = None
_state_store: Optional[StateStore] = None


# =============================================================================
# Dependencies
# =============================================================================


def get_engine(settings: SettingsDep) -> PredictiveAnalyticsEngine:
    """Return the engine built from settings."""
    global _engine
    if _engine is None:
        _engine = build_engine(settings)
    return _engine


def get_analytics_cache(settings: SettingsDep) -> AnalyticsCache:
    """Return the per-user aggregate cache."""
    global _cache
    if _cache is None:
        _cache = AnalyticsCache(
            ttl_seconds=settings.cache_ttl_seconds,
            max_entries=settings.cache_max_entries,
        )
    return _cache


def get_action_state_store(settings: SettingsDep) -> StateStore:
    """Return the PostgreSQL store when a database is configured, else the in-memory store."""
    global _state_store
    if _state_store is None:
        if settings.database_url:
            _state_store = ActionStateStore()
        else:
            logger.warning("DATABASE_URL not set; alert and recommendation state kept in memory")
            _state_store = InMemoryActionStateStore()
    return _state_store


def reset_singletons() -> None:
    """Drop the process-wide engine, cache and state store (used on shutdown and in tests)."""
    global _engine, _cache, _state_store
    _engine = None
    _cache = None
    _state_store = None


EngineDep = Annotated[PredictiveAnalyticsEngine, Depends(get_engine)]
CacheDep = Annotated[AnalyticsCache, Depends(get_analytics_cache)]
StateStoreDep = Annotated[StateStore, Depends(get_action_state_store)]


# =============================================================================
# Helper Functions
# =============================================================================


def _require_user(user_id: Optional[str]) -> str:
    if not user_id:
        logger.warning("Predictive analytics request rejected: missing user identity")
        raise HTTPException(status_code=401, detail="User identity is required")
    return user_id


async def _load_analytics(
    user_id: Optional[str],
    engine: PredictiveAnalyticsEngine,
    cache: AnalyticsCache,
    store: StateStore,
    refresh: bool = False,
) -> PredictiveAnalytics:
    """
    Return the user's aggregate with stored alert states applied.

    Raises:
        HTTPException 401: No user identity.
        HTTPException 503: Data source or state store unavailable.
    """
    user = _require_user(user_id)

    try:
        analytics = None if refresh else cache.get(user)
        if analytics is None:
            analytics = await engine.generate_predictive_analytics(user)
            cache.set(user, analytics)

        states = await store.get_alert_states(
            user, [alert.id for alert in analytics.predictiveAlerts]
        )
    except AuthenticationMissingError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except UpstreamUnavailableError as e:
        logger.error(f"Predictive analytics unavailable for user {user}: {e}", exc_info=True)
        raise HTTPException(
            status_code=503,
            detail="Predictive analytics temporarily unavailable"
        )

    return apply_alert_states(analytics, states)


# =============================================================================
# Aggregate Endpoints
# =============================================================================


@router.get("", response_model=PredictiveAnalytics)
async def get_predictive_analytics(
    engine: EngineDep,
    cache: CacheDep,
    store: StateStoreDep,
    user_id: CurrentUserIdDep,
    refresh: bool = Query(False, description="Recompute instead of using the cached aggregate"),
) -> PredictiveAnalytics:
    """
    Get the full predictive analytics aggregate for the caller.

    Returns:
        PredictiveAnalytics with forecasts, alerts, temporal patterns,
        recommendations and sentiment summary.

    Raises:
        HTTPException 401: Missing X-User-Id header
        HTTPException 503: Historical data source unavailable
    """
    return await _load_analytics(user_id, engine, cache, store, refresh=refresh)


@router.get("/summary", response_model=PredictiveSummaryResponse)
async def get_predictive_summary(
    engine: EngineDep,
    cache: CacheDep,
    store: StateStoreDep,
    user_id: CurrentUserIdDep,
) -> PredictiveSummaryResponse:
    """
    Get overall confidence, overall trend, alert counts and insight cards.
    """
    analytics = await _load_analytics(user_id, engine, cache, store)
    return build_summary(analytics)


@router.get("/alerts", response_model=List[PredictiveAlert])
async def list_alerts(
    engine: EngineDep,
    cache: CacheDep,
    store: StateStoreDep,
    user_id: CurrentUserIdDep,
    active_only: bool = Query(False, description="Only return active alerts"),
    severity: Optional[Severity] = Query(None, description="Filter by severity"),
) -> List[PredictiveAlert]:
    """
    List alerts from the caller's aggregate.
    """
    analytics = await _load_analytics(user_id, engine, cache, store)

    alerts = get_active_alerts(analytics) if active_only else list(analytics.predictiveAlerts)
    if severity is not None:
        alerts = [alert for alert in alerts if alert.severity == severity]
    return alerts


@router.get("/recommendations", response_model=List[MLRecommendation])
async def list_recommendations(
    engine: EngineDep,
    cache: CacheDep,
    store: StateStoreDep,
    user_id: CurrentUserIdDep,
    priority: Optional[Priority] = Query(None, description="Filter by priority"),
    recommendation_type: Optional[RecommendationType] = Query(
        None, alias="type", description="Filter by recommendation type"
    ),
) -> List[MLRecommendation]:
    """
    List recommendations from the caller's aggregate.
    """
    analytics = await _load_analytics(user_id, engine, cache, store)

    recommendations = list(analytics.mlRecommendations)
    if priority is not None:
        recommendations = get_recommendations_by_priority(analytics, priority)
    if recommendation_type is not None:
        by_type = {rec.id for rec in get_recommendations_by_type(analytics, recommendation_type)}
        recommendations = [rec for rec in recommendations if rec.id in by_type]
    return recommendations


# =============================================================================
# Action Endpoints
# =============================================================================


@router.patch("/alerts/{alert_id}", response_model=AlertStateResponse)
async def update_alert(
    alert_id: str,
    request: AlertUpdateRequest,
    store: StateStoreDep,
    user_id: CurrentUserIdDep,
) -> AlertStateResponse:
    """
    Activate or dismiss an alert.

    The state is stored per user and alert id and applied to every later
    read of the aggregate that contains the alert.

    Example Request:
        PATCH /predictive-analytics/alerts/alert_3f2a...
        { "isActive": false }
    """
    user = _require_user(user_id)

    try:
        return await store.set_alert_state(user, alert_id, request.isActive)
    except UpstreamUnavailableError as e:
        logger.error(f"Error updating alert {alert_id}: {e}", exc_info=True)
        raise HTTPException(status_code=503, detail="Alert state store unavailable")


@router.post(
    "/recommendations/{recommendation_id}/apply",
    response_model=RecommendationApplyResponse,
)
async def apply_recommendation(
    recommendation_id: str,
    store: StateStoreDep,
    user_id: CurrentUserIdDep,
) -> RecommendationApplyResponse:
    """
    Record that the caller applied a recommendation.
    """
    user = _require_user(user_id)

    try:
        return await store.record_recommendation_applied(user, recommendation_id)
    except UpstreamUnavailableError as e:
        logger.error(f"Error applying recommendation {recommendation_id}: {e}", exc_info=True)
        raise HTTPException(status_code=503, detail="Recommendation store unavailable")


# =============================================================================
# On-demand Analysis
# =============================================================================


@router.post("/analyze", response_model=PredictiveAnalytics)
async def analyze_series(
    request: SeriesAnalyticsRequest,
    engine: EngineDep,
    user_id: CurrentUserIdDep,
) -> PredictiveAnalytics:
    """
    Run the predictive pipeline on a posted series.

    The result is not cached and does not touch the data source.

    Raises:
        HTTPException 401: Missing X-User-Id header
        HTTPException 422: Series unordered or containing duplicate dates
    """
    user = _require_user(user_id)

    try:
        return engine.analyze_series(request.series, user_id=user)
    except ValueError as e:
        logger.warning(f"Rejected series from user {user}: {e}")
        raise HTTPException(status_code=422, detail=str(e))


@router.post("/sentiment", response_model=SentimentResult)
async def classify_sentiment(request: SentimentRequest) -> SentimentResult:
    """
    Classify free text with the keyword sentiment classifier.

    Example Response:
        { "sentiment": "positive", "score": 1.0 }
    """
    return analyze_sentiment(request.text)
