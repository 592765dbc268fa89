"""
Engagement Analytics Backend Test Suite

Test Modules:
-------------
- test_statistics.py: OLS fit, weighted moving average, seasonality scan
- test_sentiment.py: keyword classifier and period sentiment summary
- test_temporal_patterns.py: hourly/daily baselines and day-of-week grouping
- test_forecasting.py: attendance, conversion and response-time forecasts
- test_alerts.py: threshold table and trailing window
- test_recommendations.py: recommendation rules and peak hours
- test_predictive_engine.py: orchestration, determinism, error wrapping
- test_data_provider.py: synthetic and database historical series
- test_schemas.py: input bounds on daily samples
- test_insight_summary.py: dashboard filters, roll-ups and insight cards
- test_analytics_cache.py: per-user TTL cache
- test_action_state.py: alert state and recommendation persistence
- test_api.py: HTTP endpoints through TestClient

Running Tests:
--------------
    pip install -e ".[test]"
    pytest -v

Configuration:
--------------
See conftest.py for shared fixtures and factories.py for series builders.
"""

# Tests live in the individual test_*.py modules
# This file enables pytest discovery of the tests directory

__all__ = []
