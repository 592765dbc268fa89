"""
Pytest test module for the recommendation generator.
"""

from typing import List

from engagement_backend.models.enums import Impact, Priority, RecommendationType
from engagement_backend.models.schemas import HourlyTrend
from engagement_backend.services.recommendations import generate_ml_recommendations, peak_hours
from engagement_backend.services.thresholds import EngineThresholds
from engagement_backend.tests.factories import make_series


def _hourly(peaks: dict) -> List[HourlyTrend]:
    """24 quiet hours, with the given hour -> attendances overrides."""
    return [
        HourlyTrend(
            hour=hour,
            averageAttendances=peaks.get(hour, 5.0),
            averageConversion=0.25,
            averageResponseTime=150.0,
            confidence=0.8,
        )
        for hour in range(24)
    ]


class TestPeakHours:

    def test_strictly_above_threshold(self) -> None:
        hourly = _hourly({9: 12.0, 10: 10.0, 14: 10.5})
        assert peak_hours(hourly, 10.0) == [9, 14]


class TestGenerateRecommendations:

    def test_healthy_series_without_peaks_yields_nothing(self, healthy_series) -> None:
        assert generate_ml_recommendations(healthy_series, _hourly({})) == []

    def test_slow_responses_recommend_chatbot(self) -> None:
        series = make_series(10, response_time=lambda i: 240.0)
        recommendations = generate_ml_recommendations(series, _hourly({}))

        assert len(recommendations) == 1
        rec = recommendations[0]
        assert rec.type == RecommendationType.AUTOMATION
        assert rec.title == 'Implementar Chatbot Inteligente'
        assert rec.impact == Impact.HIGH
        assert rec.priority == Priority.HIGH
        assert rec.confidence == 0.85
        assert rec.expectedROI == 0.25
        assert rec.implementationTime == '2-3 semanas'
        assert rec.category == 'Eficiência'
        assert rec.tags == ['automação', 'tempo-resposta', 'chatbot']

    def test_peak_hours_recommend_staffing_schedule(self, healthy_series) -> None:
        recommendations = generate_ml_recommendations(healthy_series, _hourly({9: 18.0, 10: 16.0}))

        assert len(recommendations) == 1
        rec = recommendations[0]
        assert rec.type == RecommendationType.TIMING
        assert rec.description == "Aumentar equipe nos horários de pico (9h, 10h)"
        assert rec.priority == Priority.MEDIUM
        assert rec.impact == Impact.MEDIUM
        assert rec.expectedROI == 0.15

    def test_low_conversion_recommends_training(self) -> None:
        series = make_series(10, attendances=lambda i: 100, conversions=lambda i: 15)
        recommendations = generate_ml_recommendations(series, _hourly({}))

        assert [r.type for r in recommendations] == [RecommendationType.PROCESS]
        assert recommendations[0].title == 'Treinamento em Técnicas de Venda'
        assert recommendations[0].confidence == 0.9
        assert recommendations[0].implementationTime == '1 mês'

    def test_conversion_at_training_threshold_does_not_recommend_training(self) -> None:
        series = make_series(10, attendances=lambda i: 100, conversions=lambda i: 25)
        thresholds = EngineThresholds(training_conversion=0.25)
        assert generate_ml_recommendations(series, _hourly({}), thresholds=thresholds) == []

    def test_all_rules_in_order(self, struggling_series, sequential_ids) -> None:
        recommendations = generate_ml_recommendations(
            struggling_series,
            _hourly({11: 20.0}),
            id_factory=sequential_ids,
        )
        assert [r.type for r in recommendations] == [
            RecommendationType.AUTOMATION,
            RecommendationType.TIMING,
            RecommendationType.PROCESS,
        ]
        assert [r.id for r in recommendations] == ['rec_1', 'rec_2', 'rec_3']

    def test_empty_series_only_considers_peak_hours(self) -> None:
        recommendations = generate_ml_recommendations([], _hourly({9: 15.0}))
        assert [r.type for r in recommendations] == [RecommendationType.TIMING]

    def test_custom_thresholds(self, healthy_series) -> None:
        thresholds = EngineThresholds(automation_response_time=100.0, training_conversion=0.30)
        recommendations = generate_ml_recommendations(
            healthy_series, _hourly({}), thresholds=thresholds
        )
        assert [r.type for r in recommendations] == [
            RecommendationType.AUTOMATION,
            RecommendationType.PROCESS,
        ]
