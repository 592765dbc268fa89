"""
Enumeration definitions for the Engagement Analytics backend.

These values match the string unions used by the dashboard's predictive
analytics types, so API payloads stay compatible with the existing frontend.

All enums inherit from both `str` and `Enum` to ensure JSON serialization compatibility
with Pydantic models, enabling automatic serialization/deserialization in API responses.
"""

from enum import Enum


class Trend(str, Enum):
    """
    Direction of a volume/rate forecast.

    Derived from a regression slope compared against a fixed threshold.
    """
    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


class ResponseTimeTrend(str, Enum):
    """
    Direction of the response-time forecast.

    A falling response time is an improvement, so the labels are inverted
    relative to Trend.
    """
    IMPROVING = "improving"
    WORSENING = "worsening"
    STABLE = "stable"


class AlertType(str, Enum):
    """
    Kinds of predictive alert.

    Only low_conversion, high_response_time and quality_drop are emitted by
    the alert generator; customer_churn and peak_demand are part of the
    dashboard contract.
    """
    LOW_CONVERSION = "low_conversion"
    HIGH_RESPONSE_TIME = "high_response_time"
    CUSTOMER_CHURN = "customer_churn"
    PEAK_DEMAND = "peak_demand"
    QUALITY_DROP = "quality_drop"


class Severity(str, Enum):
    """
    Ordinal alert urgency: low < medium < high < critical.
    """
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class Timeframe(str, Enum):
    """
    How soon an alert should be acted on.
    """
    IMMEDIATE = "immediate"
    HOURS_24 = "24h"
    WEEK = "week"
    MONTH = "month"


class RecommendationType(str, Enum):
    """
    Recommendation categories shown in the dashboard.
    """
    AUTOMATION = "automation"
    STAFFING = "staffing"
    TIMING = "timing"
    CONTENT = "content"
    PROCESS = "process"


class Impact(str, Enum):
    """
    Expected business impact of a recommendation.
    """
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Priority(str, Enum):
    """
    Recommendation priority (same scale as Severity).
    """
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class SentimentLabel(str, Enum):
    """
    Three-way sentiment classification.
    """
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


class IntentCategory(str, Enum):
    """
    Customer intent categories tracked per day.
    """
    PURCHASE = "purchase"
    SUPPORT = "support"
    COMPLAINT = "complaint"
    INQUIRY = "inquiry"


class InsightKind(str, Enum):
    """
    Tone of a summary insight card.
    """
    POSITIVE = "positive"
    WARNING = "warning"


class DataSource(str, Enum):
    """
    Origin of historical series.
    """
    DATABASE = "database"
    SYNTHETIC = "synthetic"
