"""
SQL Query Module for the Engagement Analytics backend.

Provides parameterized SQL queries for:
- Daily engagement history per user (engagement_queries)
- Alert state and recommendation application persistence (engagement_queries)

Follows Repository Pattern for clean separation between
business logic and data access.

Example usage:
    from engagement_backend.sql import get_historical_series_query

    rows = await conn.fetch(get_historical_series_query(), user_id, start_date, end_date)
"""

from engagement_backend.sql.engagement_queries import (
    get_historical_series_query,
    get_alert_state_upsert_query,
    get_alert_states_query,
    get_recommendation_apply_query,
)

__all__ = [
    'get_historical_series_query',
    'get_alert_state_upsert_query',
    'get_alert_states_query',
    'get_recommendation_apply_query',
]
