"""
Engagement Queries Module for the Engagement Analytics backend.

Provides parameterized PostgreSQL queries for:
- Daily engagement history per user (input to the predictive engine)
- Alert activation state (updateAlert)
- Recommendation application log (applyRecommendation)

All queries use asyncpg positional placeholders ($1, $2, ...) and never
interpolate values into the SQL text.

Table Schemas:

    engagement_daily_metrics
        user_id TEXT NOT NULL
        metric_date DATE NOT NULL
        attendances INTEGER NOT NULL
        conversions INTEGER NOT NULL
        avg_response_time_seconds NUMERIC NOT NULL
        avg_quality_score NUMERIC NOT NULL
        avg_sentiment NUMERIC
        intent_purchase, intent_support, intent_complaint, intent_inquiry NUMERIC
        PRIMARY KEY (user_id, metric_date)

    predictive_alert_state
        user_id TEXT NOT NULL
        alert_id TEXT NOT NULL
        is_active BOOLEAN NOT NULL
        updated_at TIMESTAMPTZ NOT NULL
        PRIMARY KEY (user_id, alert_id)

    recommendation_application
        user_id TEXT NOT NULL
        recommendation_id TEXT NOT NULL
        applied_at TIMESTAMPTZ NOT NULL
        PRIMARY KEY (user_id, recommendation_id)
"""


# =============================================================================
# HISTORICAL SERIES
# =============================================================================

def get_historical_series_query() -> str:
    """
    Query daily engagement metrics for one user over a trailing window.

    Parameters:
        $1: user_id
        $2: first date to include (inclusive)
        $3: end date (exclusive); the caller passes today, whose row is partial

    Note:
        - Results ordered by metric_date ASC for chronological time series
    """
    return """
        SELECT
            metric_date,
            attendances,
            conversions,
            avg_response_time_seconds,
            avg_quality_score,
            COALESCE(avg_sentiment, 0.5) AS avg_sentiment,
            COALESCE(intent_purchase, 0) AS intent_purchase,
            COALESCE(intent_support, 0) AS intent_support,
            COALESCE(intent_complaint, 0) AS intent_complaint,
            COALESCE(intent_inquiry, 0) AS intent_inquiry
        FROM engagement_daily_metrics
        WHERE user_id = $1
          AND metric_date >= $2
          AND metric_date < $3
        ORDER BY metric_date ASC
    """


# =============================================================================
# ALERT STATE
# =============================================================================

def get_alert_state_upsert_query() -> str:
    """
    Upsert the active flag of an alert for a user.

    Parameters:
        $1: user_id
        $2: alert_id
        $3: is_active
        $4: updated_at
    """
    return """
        INSERT INTO predictive_alert_state (user_id, alert_id, is_active, updated_at)
        VALUES ($1, $2, $3, $4)
        ON CONFLICT (user_id, alert_id)
        DO UPDATE SET
            is_active = EXCLUDED.is_active,
            updated_at = EXCLUDED.updated_at
        RETURNING user_id, alert_id, is_active, updated_at
    """


def get_alert_states_query() -> str:
    """
    Fetch stored alert states for a user, restricted to a set of alert ids.

    Parameters:
        $1: user_id
        $2: alert_ids (TEXT[])
    """
    return """
        SELECT alert_id, is_active
        FROM predictive_alert_state
        WHERE user_id = $1
          AND alert_id = ANY($2::text[])
    """


# =============================================================================
# RECOMMENDATION APPLICATION
# =============================================================================

def get_recommendation_apply_query() -> str:
    """
    Record that a user applied a recommendation (re-applying refreshes the time).

    Parameters:
        $1: user_id
        $2: recommendation_id
        $3: applied_at
    """
    return """
        INSERT INTO recommendation_application (user_id, recommendation_id, applied_at)
        VALUES ($1, $2, $3)
        ON CONFLICT (user_id, recommendation_id)
        DO UPDATE SET applied_at = EXCLUDED.applied_at
        RETURNING user_id, recommendation_id, applied_at
    """
