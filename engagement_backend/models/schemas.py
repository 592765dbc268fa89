"""
Pydantic request/response models for the Engagement Analytics backend.

This module provides type-safe data validation and serialization for the
predictive analytics contract consumed by the dashboard: historical daily
samples, per-metric forecasts, alerts, recommendations, temporal patterns,
sentiment summaries and the API request/response wrappers around them.

Field names are camelCase to keep the JSON contract the frontend already
renders (attendancePrediction, predictiveAlerts, mlRecommendations, ...).

All models use Pydantic v2 syntax with proper field validation and examples.
"""

import math
from datetime import datetime, date as DateType
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, ConfigDict, field_validator

from engagement_backend.models.enums import (
    AlertType,
    Impact,
    InsightKind,
    IntentCategory,
    Priority,
    RecommendationType,
    ResponseTimeTrend,
    SentimentLabel,
    Severity,
    Timeframe,
    Trend,
)


# =============================================================================
# Historical Data
# =============================================================================

# Upper bounds keep every aggregate finite in float64
MAX_DAILY_COUNT: int = 1_000_000_000
MAX_RESPONSE_TIME_SECONDS: float = 86_400.0

INTENT_KEYS = frozenset(category.value for category in IntentCategory)


class HistoricalDataPoint(BaseModel):
    """
    One calendar day of operational metrics for a user's WhatsApp instance.

    conversions <= attendances is assumed by consumers but not enforced,
    matching how the daily rollup is produced upstream.
    """
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "date": "2026-10-01",
                "attendances": 120,
                "conversions": 24,
                "responseTime": 185.5,
                "qualityScore": 4.2,
                "sentiment": 0.72,
                "intents": {
                    "purchase": 0.42,
                    "support": 0.31,
                    "complaint": 0.08,
                    "inquiry": 0.19
                }
            }
        }
    )

    date: DateType = Field(
        ...,
        description="Calendar date of the sample (unique within a series)"
    )
    attendances: int = Field(
        ...,
        ge=0,
        le=MAX_DAILY_COUNT,
        description="Number of conversations handled that day"
    )
    conversions: int = Field(
        ...,
        ge=0,
        le=MAX_DAILY_COUNT,
        description="Number of conversations that converted"
    )
    responseTime: float = Field(
        ...,
        gt=0,
        le=MAX_RESPONSE_TIME_SECONDS,
        allow_inf_nan=False,
        description="Mean response latency in seconds (at most one day)"
    )
    qualityScore: float = Field(
        ...,
        ge=1,
        le=5,
        description="Mean quality rating (1-5)"
    )
    sentiment: float = Field(
        default=0.5,
        ge=0,
        le=1,
        description="Mean sentiment score (0-1)"
    )
    intents: Dict[str, float] = Field(
        default_factory=dict,
        description="Intent category -> proportion (purchase, support, complaint, inquiry)"
    )

    @field_validator("intents")
    @classmethod
    def validate_intents(cls, v: Dict[str, float]) -> Dict[str, float]:
        """Only known intent categories, each with a finite non-negative weight."""
        unknown = sorted(set(v) - INTENT_KEYS)
        if unknown:
            raise ValueError(f"Unknown intent categories: {', '.join(unknown)}")

        for key, value in v.items():
            if not math.isfinite(value) or value < 0:
                raise ValueError(f"Intent '{key}' must be a finite non-negative number, got {value}")

        return v


# =============================================================================
# Forecasts
# =============================================================================


class AttendancePrediction(BaseModel):
    """
    Projected conversation volume.
    """
    nextDay: int = Field(..., ge=0, description="Projected attendances tomorrow")
    nextWeek: int = Field(..., ge=0, description="Projected attendances in 7 days")
    nextMonth: int = Field(..., ge=0, description="Projected attendances in 30 days")
    confidence: float = Field(..., ge=0, le=1, description="Clamped R² of the fit")
    trend: Trend = Field(..., description="Direction derived from the slope")
    factors: List[str] = Field(default_factory=list, description="Contributing factors")


class ConversionPrediction(BaseModel):
    """
    Projected conversion rate, expressed as a percentage (0-100).
    """
    nextDay: float = Field(..., ge=0, le=100, description="Projected conversion % tomorrow")
    nextWeek: float = Field(..., ge=0, le=100, description="Projected conversion % in 7 days")
    confidence: float = Field(..., ge=0, le=1, description="Clamped R² of the fit")
    trend: Trend = Field(..., description="Direction derived from the slope")
    factors: List[str] = Field(default_factory=list, description="Contributing factors")


class ResponseTimePrediction(BaseModel):
    """
    Projected mean response time in seconds.
    """
    nextDay: float = Field(..., ge=0, description="Projected seconds tomorrow")
    nextWeek: float = Field(..., ge=0, description="Projected seconds in 7 days")
    confidence: float = Field(..., ge=0, le=1, description="Forecast confidence")
    trend: ResponseTimeTrend = Field(..., description="improving when latency falls")
    factors: List[str] = Field(default_factory=list, description="Contributing factors")


# =============================================================================
# Alerts and Recommendations
# =============================================================================


class PredictiveAlert(BaseModel):
    """
    Threshold alert raised from the trailing window of the series.

    The engine always creates alerts with isActive=True; deactivation is
    persisted by the state store, not by the engine.
    """
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "alert_1760860800000_2",
                "type": "high_response_time",
                "severity": "high",
                "probability": 0.9,
                "message": "Tempo de resposta alto (6min)",
                "recommendedAction": "Implementar automações e aumentar equipe",
                "estimatedImpact": "Perda de 15-25% dos clientes",
                "timeframe": "24h",
                "createdAt": "2026-10-19T08:00:00Z",
                "isActive": True
            }
        }
    )

    id: str = Field(..., description="Identifier, unique per run")
    type: AlertType = Field(..., description="Alert kind")
    severity: Severity = Field(..., description="Alert urgency")
    probability: float = Field(..., ge=0, le=1, description="Fixed per-type probability")
    message: str = Field(..., description="Human readable alert message")
    recommendedAction: str = Field(..., description="Suggested action")
    estimatedImpact: str = Field(..., description="Expected impact if ignored")
    timeframe: Timeframe = Field(..., description="How soon to act")
    createdAt: datetime = Field(..., description="Creation timestamp")
    isActive: bool = Field(default=True, description="Whether the alert is active")


class MLRecommendation(BaseModel):
    """
    Heuristic action recommendation.
    """
    id: str = Field(..., description="Identifier, unique per run")
    type: RecommendationType = Field(..., description="Recommendation kind")
    title: str = Field(..., description="Short title")
    description: str = Field(..., description="What to do")
    impact: Impact = Field(..., description="Expected impact")
    confidence: float = Field(..., ge=0, le=1, description="Heuristic confidence")
    implementationTime: str = Field(..., description="Free-text implementation estimate")
    expectedROI: float = Field(..., description="Expected return as a fraction")
    priority: Priority = Field(..., description="Recommendation priority")
    category: str = Field(..., description="Business category")
    tags: List[str] = Field(default_factory=list, description="Free-form tags")


# =============================================================================
# Temporal Patterns
# =============================================================================


class HourlyTrend(BaseModel):
    """
    Aggregate for one hour of the day.
    """
    hour: int = Field(..., ge=0, le=23, description="Hour of day (0-23)")
    averageAttendances: float = Field(..., ge=0)
    averageConversion: float = Field(..., ge=0)
    averageResponseTime: float = Field(..., ge=0)
    confidence: float = Field(..., ge=0, le=1)


class DailyTrend(BaseModel):
    """
    Aggregate for one day of the week (0=Sunday .. 6=Saturday).
    """
    dayOfWeek: int = Field(..., ge=0, le=6, description="Day of week, 0=Sunday")
    averageAttendances: float = Field(..., ge=0)
    averageConversion: float = Field(..., ge=0)
    averageResponseTime: float = Field(..., ge=0)
    confidence: float = Field(..., ge=0, le=1)


class WeeklyTrend(BaseModel):
    """
    Aggregate for one ISO week.
    """
    weekNumber: int
    totalAttendances: int
    averageConversion: float
    averageResponseTime: float
    trend: str = Field(..., description="up, down or stable")


class SeasonalPattern(BaseModel):
    """
    Aggregate for one season.
    """
    season: str = Field(..., description="spring, summer, autumn or winter")
    averageAttendances: float
    averageConversion: float
    confidence: float


class TemporalPatterns(BaseModel):
    """
    Temporal aggregates grouped by granularity.
    """
    hourlyTrends: List[HourlyTrend] = Field(default_factory=list)
    dailyTrends: List[DailyTrend] = Field(default_factory=list)
    weeklyTrends: List[WeeklyTrend] = Field(default_factory=list)
    seasonalPatterns: List[SeasonalPattern] = Field(default_factory=list)


# =============================================================================
# Sentiment
# =============================================================================


class IntentPrediction(BaseModel):
    """
    Expected share of each intent category.
    """
    purchase: float = Field(..., ge=0)
    support: float = Field(..., ge=0)
    complaint: float = Field(..., ge=0)
    inquiry: float = Field(..., ge=0)


class SentimentAnalysis(BaseModel):
    """
    Sentiment and intent summary for the analysed period.
    """
    overallSentiment: SentimentLabel
    sentimentScore: float = Field(..., ge=0, le=1)
    intentPrediction: IntentPrediction


class SentimentRequest(BaseModel):
    """
    Free text to classify.
    """
    text: str = Field(..., description="Message text (Portuguese)")


class SentimentResult(BaseModel):
    """
    Keyword classifier output.
    """
    sentiment: SentimentLabel
    score: float = Field(..., ge=0, le=1)


# =============================================================================
# Root Aggregate
# =============================================================================


class PredictiveAnalytics(BaseModel):
    """
    Complete predictive analytics result for one user and one run.

    A value object recomputed on every request; callers cache it for a
    fixed staleness window.
    """
    userId: Optional[str] = Field(default=None, description="User the series belongs to")
    generatedAt: datetime = Field(..., description="When the aggregate was computed")
    attendancePrediction: AttendancePrediction
    conversionPrediction: ConversionPrediction
    responseTimePrediction: ResponseTimePrediction
    predictiveAlerts: List[PredictiveAlert] = Field(default_factory=list)
    temporalPatterns: TemporalPatterns
    mlRecommendations: List[MLRecommendation] = Field(default_factory=list)
    sentimentAnalysis: SentimentAnalysis


# =============================================================================
# API Wrappers
# =============================================================================


class SeriesAnalyticsRequest(BaseModel):
    """
    Historical series posted for on-demand analysis.
    """
    series: List[HistoricalDataPoint] = Field(
        ...,
        description="Daily samples ordered by date ascending, no duplicate dates"
    )


class AlertUpdateRequest(BaseModel):
    """
    Activate or dismiss an alert.
    """
    isActive: bool = Field(..., description="New active flag")


class AlertStateResponse(BaseModel):
    """
    Persisted alert state.
    """
    alertId: str
    userId: str
    isActive: bool
    updatedAt: datetime


class RecommendationApplyResponse(BaseModel):
    """
    Persisted recommendation application.
    """
    recommendationId: str
    userId: str
    appliedAt: datetime


class SummaryInsight(BaseModel):
    """
    Short insight card derived from the aggregate.
    """
    type: InsightKind
    title: str
    description: str
    confidence: float = Field(..., ge=0, le=1)


class PredictiveSummaryResponse(BaseModel):
    """
    Dashboard header summary.
    """
    overallConfidence: float = Field(..., ge=0, le=1)
    overallTrend: Trend
    activeAlerts: int = Field(..., ge=0)
    criticalAlerts: int = Field(..., ge=0)
    insights: List[SummaryInsight] = Field(default_factory=list)
