"""
Threshold configuration for the forecasters, alert generator and
recommendation generator.

EngineThresholds collects every numeric cut-off in one immutable object so an
engine can be built with overridden values (tests, per-tenant tuning) without
touching module constants. Defaults are the dashboard's standard alerting rules.
"""

from dataclasses import dataclass

from engagement_backend.core.config import Settings


@dataclass(frozen=True)
class EngineThresholds:
    """
    Numeric cut-offs used across the predictive pipeline.

    Attributes:
        attendance_trend: Attendance slope (per day) for increasing/decreasing.
        conversion_trend: Conversion-ratio slope (per day) for increasing/decreasing.
        response_time_trend: Response-time slope (seconds per day) for improving/worsening.
        alert_window_days: Trailing samples averaged by the alert generator.
        conversion_critical: avg conversion below this -> critical alert.
        conversion_warning: avg conversion below this -> high alert.
        response_time_critical: avg response time above this -> critical alert.
        response_time_warning: avg response time above this -> high alert.
        quality_critical: avg quality below this -> critical alert.
        quality_warning: avg quality below this -> medium alert.
        automation_response_time: avg response time above this -> chatbot recommendation.
        peak_hour_attendances: hourly average above this marks a peak hour.
        training_conversion: avg conversion below this -> sales training recommendation.
    """
    attendance_trend: float = 5.0
    conversion_trend: float = 0.01
    response_time_trend: float = 1.0

    alert_window_days: int = 7
    conversion_critical: float = 0.10
    conversion_warning: float = 0.15
    response_time_critical: float = 600.0
    response_time_warning: float = 300.0
    quality_critical: float = 3.0
    quality_warning: float = 3.5

    automation_response_time: float = 180.0
    peak_hour_attendances: float = 10.0
    training_conversion: float = 0.20

    @classmethod
    def from_settings(cls, settings: Settings) -> "EngineThresholds":
        """Build thresholds from application settings."""
        return cls(
            attendance_trend=settings.attendance_trend_threshold,
            conversion_trend=settings.conversion_trend_threshold,
            response_time_trend=settings.response_time_trend_threshold,
            alert_window_days=settings.alert_window_days,
            conversion_critical=settings.conversion_critical,
            conversion_warning=settings.conversion_warning,
            response_time_critical=settings.response_time_critical,
            response_time_warning=settings.response_time_warning,
            quality_critical=settings.quality_critical,
            quality_warning=settings.quality_warning,
            automation_response_time=settings.automation_response_time,
            peak_hour_attendances=settings.peak_hour_attendances,
            training_conversion=settings.training_conversion,
        )


DEFAULT_THRESHOLDS = EngineThresholds()
