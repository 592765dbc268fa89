"""
Dashboard summaries derived from a PredictiveAnalytics aggregate.

Filters and roll-ups used by the dashboard header and cards: active and
critical alerts, recommendation filters, overall confidence and trend, and
short Portuguese insight cards. All functions are pure and read only the
aggregate they are given.
"""

from typing import Dict, List, Optional

from engagement_backend.models.enums import (
    InsightKind,
    Priority,
    RecommendationType,
    ResponseTimeTrend,
    Severity,
    Trend,
)
from engagement_backend.models.schemas import (
    MLRecommendation,
    PredictiveAlert,
    PredictiveAnalytics,
    PredictiveSummaryResponse,
    SummaryInsight,
)
from engagement_backend.services.forecasting import round_half_up


CRITICAL_ALERT_INSIGHT_CONFIDENCE: float = 1.0


# =============================================================================
# Filters
# =============================================================================


def get_active_alerts(analytics: PredictiveAnalytics) -> List[PredictiveAlert]:
    return [alert for alert in analytics.predictiveAlerts if alert.isActive]


def get_critical_alerts(analytics: PredictiveAnalytics) -> List[PredictiveAlert]:
    return [
        alert for alert in analytics.predictiveAlerts
        if alert.isActive and alert.severity == Severity.CRITICAL
    ]


def get_recommendations_by_priority(
    analytics: PredictiveAnalytics,
    priority: Priority,
) -> List[MLRecommendation]:
    return [rec for rec in analytics.mlRecommendations if rec.priority == priority]


def get_recommendations_by_type(
    analytics: PredictiveAnalytics,
    recommendation_type: RecommendationType,
) -> List[MLRecommendation]:
    return [rec for rec in analytics.mlRecommendations if rec.type == recommendation_type]


# =============================================================================
# Roll-ups
# =============================================================================


def get_overall_confidence(analytics: PredictiveAnalytics) -> float:
    """Mean of the three forecast confidences."""
    confidences = [
        analytics.attendancePrediction.confidence,
        analytics.conversionPrediction.confidence,
        analytics.responseTimePrediction.confidence,
    ]
    return sum(confidences) / len(confidences)


def get_overall_trend(analytics: PredictiveAnalytics) -> Trend:
    """
    Majority direction over the three forecast trends.

    Only literal increasing/decreasing labels are counted, so the response
    time trend (improving/worsening) never tips the balance. Ties are stable.
    """
    trends = [
        analytics.attendancePrediction.trend.value,
        analytics.conversionPrediction.trend.value,
        analytics.responseTimePrediction.trend.value,
    ]
    increasing = trends.count(Trend.INCREASING.value)
    decreasing = trends.count(Trend.DECREASING.value)

    if increasing > decreasing:
        return Trend.INCREASING
    if decreasing > increasing:
        return Trend.DECREASING
    return Trend.STABLE


def get_summary_insights(analytics: PredictiveAnalytics) -> List[SummaryInsight]:
    """
    Build the insight cards shown above the forecasts.

    Cards, in order (each only when its condition holds):
        - growing attendance forecast
        - improving conversion forecast
        - improving response time forecast
        - active critical alerts (confidence 1.0)
    """
    insights: List[SummaryInsight] = []

    attendance = analytics.attendancePrediction
    if attendance.trend == Trend.INCREASING:
        insights.append(
            SummaryInsight(
                type=InsightKind.POSITIVE,
                title='Crescimento de Atendimentos',
                description=f"Previsão de {attendance.nextDay} atendimentos amanhã",
                confidence=attendance.confidence,
            )
        )

    conversion = analytics.conversionPrediction
    if conversion.trend == Trend.INCREASING:
        insights.append(
            SummaryInsight(
                type=InsightKind.POSITIVE,
                title='Melhoria na Conversão',
                description=f"Taxa de conversão prevista: {conversion.nextDay:.1f}%",
                confidence=conversion.confidence,
            )
        )

    response_time = analytics.responseTimePrediction
    if response_time.trend == ResponseTimeTrend.IMPROVING:
        insights.append(
            SummaryInsight(
                type=InsightKind.POSITIVE,
                title='Tempo de Resposta Melhorando',
                description=f"Previsão: {round_half_up(response_time.nextDay / 60)}min",
                confidence=response_time.confidence,
            )
        )

    critical = get_critical_alerts(analytics)
    if critical:
        insights.append(
            SummaryInsight(
                type=InsightKind.WARNING,
                title=f"{len(critical)} Alerta(s) Crítico(s)",
                description='Ação imediata necessária',
                confidence=CRITICAL_ALERT_INSIGHT_CONFIDENCE,
            )
        )

    return insights


def build_summary(analytics: PredictiveAnalytics) -> PredictiveSummaryResponse:
    """Assemble the dashboard header summary."""
    return PredictiveSummaryResponse(
        overallConfidence=get_overall_confidence(analytics),
        overallTrend=get_overall_trend(analytics),
        activeAlerts=len(get_active_alerts(analytics)),
        criticalAlerts=len(get_critical_alerts(analytics)),
        insights=get_summary_insights(analytics),
    )


# =============================================================================
# State Overlay
# =============================================================================


def apply_alert_states(
    analytics: PredictiveAnalytics,
    states: Optional[Dict[str, bool]],
) -> PredictiveAnalytics:
    """
    Return a copy of the aggregate with stored isActive flags applied.

    Alerts without a stored state keep the engine's value (active).
    """
    if not states:
        return analytics

    alerts = [
        alert.model_copy(update={'isActive': states[alert.id]}) if alert.id in states else alert
        for alert in analytics.predictiveAlerts
    ]
    return analytics.model_copy(update={'predictiveAlerts': alerts})
