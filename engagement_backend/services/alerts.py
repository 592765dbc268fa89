"""
Predictive alert generator.

Applies fixed thresholds to averages over the trailing window of the series
(last 7 days by default) and emits severity-graded alerts. The three checks
are independent, so several alerts may be raised in the same run.

Threshold table (defaults):

    | Condition                          | Severity | Type               |
    |------------------------------------|----------|--------------------|
    | avg conversion < 0.10              | critical | low_conversion     |
    | 0.10 <= avg conversion < 0.15      | high     | low_conversion     |
    | avg response time > 600s           | critical | high_response_time |
    | 300s < avg response time <= 600s   | high     | high_response_time |
    | avg quality < 3.0                  | critical | quality_drop       |
    | 3.0 <= avg quality < 3.5           | medium   | quality_drop       |

Each alert type carries a fixed probability (0.85 / 0.9 / 0.75), a message
template, a recommended action and an estimated impact, all in Portuguese to
match the dashboard. Alerts are always created active; dismissals are stored
by the action state store.
"""

import logging
from typing import List, Optional, Sequence

from engagement_backend.models.enums import AlertType, Severity, Timeframe
from engagement_backend.models.schemas import HistoricalDataPoint, PredictiveAlert
from engagement_backend.services.clock import Clock, IdFactory, generate_id, utc_now
from engagement_backend.services.forecasting import daily_conversion_rates, round_half_up
from engagement_backend.services.statistics import mean
from engagement_backend.services.thresholds import DEFAULT_THRESHOLDS, EngineThresholds


logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

LOW_CONVERSION_PROBABILITY: float = 0.85
HIGH_RESPONSE_TIME_PROBABILITY: float = 0.9
QUALITY_DROP_PROBABILITY: float = 0.75

ALERT_ID_PREFIX = 'alert'


# =============================================================================
# Alert Generation
# =============================================================================


def generate_predictive_alerts(
    series: Sequence[HistoricalDataPoint],
    thresholds: EngineThresholds = DEFAULT_THRESHOLDS,
    id_factory: Optional[IdFactory] = None,
    clock: Optional[Clock] = None,
) -> List[PredictiveAlert]:
    """
    Raise alerts from the trailing window of a historical series.

    Args:
        series: Historical samples ordered by date.
        thresholds: Alert cut-offs and window size.
        id_factory: Identifier generator (defaults to random ids).
        clock: Timestamp source for createdAt (defaults to UTC now).

    Returns:
        Alerts in check order: conversion, response time, quality.
        Empty when no threshold is crossed or the series is empty.

    Raises:
        ValueError: The response-time average is not finite.

    Edge Cases:
        - Series shorter than the window: the whole series is averaged
        - Days with zero attendances contribute a conversion rate of 0
        - avg response time exactly 300s: no alert (strictly greater)
    """
    make_id = id_factory or generate_id
    now = clock or utc_now

    window = list(series[-thresholds.alert_window_days:]) if thresholds.alert_window_days > 0 else []
    if not window:
        return []

    avg_conversion = mean(daily_conversion_rates(window))
    avg_response_time = mean([point.responseTime for point in window])
    avg_quality = mean([point.qualityScore for point in window])

    logger.debug(
        f"Alert window of {len(window)} days: conversion={avg_conversion:.3f}, "
        f"response_time={avg_response_time:.1f}s, quality={avg_quality:.2f}"
    )

    alerts: List[PredictiveAlert] = []

    # Low conversion
    if avg_conversion < thresholds.conversion_warning:
        severity = (
            Severity.CRITICAL
            if avg_conversion < thresholds.conversion_critical
            else Severity.HIGH
        )
        alerts.append(
            PredictiveAlert(
                id=make_id(ALERT_ID_PREFIX),
                type=AlertType.LOW_CONVERSION,
                severity=severity,
                probability=LOW_CONVERSION_PROBABILITY,
                message=f"Taxa de conversão baixa detectada ({avg_conversion * 100:.1f}%)",
                recommendedAction='Revisar funil de vendas e treinar equipe',
                estimatedImpact='Redução de 20-30% na receita',
                timeframe=Timeframe.IMMEDIATE,
                createdAt=now(),
                isActive=True,
            )
        )

    # High response time
    if avg_response_time > thresholds.response_time_warning:
        severity = (
            Severity.CRITICAL
            if avg_response_time > thresholds.response_time_critical
            else Severity.HIGH
        )
        alerts.append(
            PredictiveAlert(
                id=make_id(ALERT_ID_PREFIX),
                type=AlertType.HIGH_RESPONSE_TIME,
                severity=severity,
                probability=HIGH_RESPONSE_TIME_PROBABILITY,
                message=f"Tempo de resposta alto ({round_half_up(avg_response_time / 60)}min)",
                recommendedAction='Implementar automações e aumentar equipe',
                estimatedImpact='Perda de 15-25% dos clientes',
                timeframe=Timeframe.HOURS_24,
                createdAt=now(),
                isActive=True,
            )
        )

    # Quality drop
    if avg_quality < thresholds.quality_warning:
        severity = (
            Severity.CRITICAL
            if avg_quality < thresholds.quality_critical
            else Severity.MEDIUM
        )
        alerts.append(
            PredictiveAlert(
                id=make_id(ALERT_ID_PREFIX),
                type=AlertType.QUALITY_DROP,
                severity=severity,
                probability=QUALITY_DROP_PROBABILITY,
                message=f"Qualidade do atendimento em declínio ({avg_quality:.1f}/5)",
                recommendedAction='Treinamento da equipe e revisão de processos',
                estimatedImpact='Redução na satisfação do cliente',
                timeframe=Timeframe.WEEK,
                createdAt=now(),
                isActive=True,
            )
        )

    return alerts
