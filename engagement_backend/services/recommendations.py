"""
Recommendation generator.

Threshold heuristics over whole-series averages and the hourly aggregates.
Independent of the alert generator, so a condition may surface both as an
alert and as a recommendation.

Rules (defaults):
    - avg response time > 180s         -> automation (chatbot), priority high
    - any hour with avg attendances > 10 -> timing (staff peak hours), priority medium
    - avg conversion < 0.20            -> process (sales training), priority high

Identifiers are generated fresh on every run; there is no deduplication
across runs.
"""

from typing import List, Optional, Sequence

from engagement_backend.models.enums import Impact, Priority, RecommendationType
from engagement_backend.models.schemas import HistoricalDataPoint, HourlyTrend, MLRecommendation
from engagement_backend.services.clock import IdFactory, generate_id
from engagement_backend.services.forecasting import daily_conversion_rates
from engagement_backend.services.statistics import mean
from engagement_backend.services.thresholds import DEFAULT_THRESHOLDS, EngineThresholds


RECOMMENDATION_ID_PREFIX = 'rec'


def peak_hours(hourly_trends: Sequence[HourlyTrend], threshold: float) -> List[int]:
    """Hours whose average attendances exceed the threshold, in hour order."""
    return [trend.hour for trend in hourly_trends if trend.averageAttendances > threshold]


def generate_ml_recommendations(
    series: Sequence[HistoricalDataPoint],
    hourly_trends: Sequence[HourlyTrend],
    thresholds: EngineThresholds = DEFAULT_THRESHOLDS,
    id_factory: Optional[IdFactory] = None,
) -> List[MLRecommendation]:
    """
    Emit prioritized action recommendations.

    Args:
        series: Historical samples ordered by date (averaged in full).
        hourly_trends: Hourly aggregates used to find peak hours.
        thresholds: Recommendation cut-offs.
        id_factory: Identifier generator (defaults to random ids).

    Returns:
        Recommendations in rule order: automation, timing, process.
        An empty series only yields the timing rule (if peak hours exist).
    """
    make_id = id_factory or generate_id
    recommendations: List[MLRecommendation] = []

    avg_response_time = mean([point.responseTime for point in series])
    avg_conversion = mean(daily_conversion_rates(series))

    if series and avg_response_time > thresholds.automation_response_time:
        recommendations.append(
            MLRecommendation(
                id=make_id(RECOMMENDATION_ID_PREFIX),
                type=RecommendationType.AUTOMATION,
                title='Implementar Chatbot Inteligente',
                description='Automatizar respostas comuns para reduzir tempo de resposta',
                impact=Impact.HIGH,
                confidence=0.85,
                implementationTime='2-3 semanas',
                expectedROI=0.25,
                priority=Priority.HIGH,
                category='Eficiência',
                tags=['automação', 'tempo-resposta', 'chatbot'],
            )
        )

    hours = peak_hours(hourly_trends, thresholds.peak_hour_attendances)
    if hours:
        hour_labels = ', '.join(f"{hour}h" for hour in hours)
        recommendations.append(
            MLRecommendation(
                id=make_id(RECOMMENDATION_ID_PREFIX),
                type=RecommendationType.TIMING,
                title='Otimizar Horários de Atendimento',
                description=f"Aumentar equipe nos horários de pico ({hour_labels})",
                impact=Impact.MEDIUM,
                confidence=0.8,
                implementationTime='1 semana',
                expectedROI=0.15,
                priority=Priority.MEDIUM,
                category='Operacional',
                tags=['horários', 'equipe', 'pico'],
            )
        )

    if series and avg_conversion < thresholds.training_conversion:
        recommendations.append(
            MLRecommendation(
                id=make_id(RECOMMENDATION_ID_PREFIX),
                type=RecommendationType.PROCESS,
                title='Treinamento em Técnicas de Venda',
                description='Capacitar equipe em técnicas avançadas de conversão',
                impact=Impact.HIGH,
                confidence=0.9,
                implementationTime='1 mês',
                expectedROI=0.3,
                priority=Priority.HIGH,
                category='Vendas',
                tags=['treinamento', 'vendas', 'conversão'],
            )
        )

    return recommendations
