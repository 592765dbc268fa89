"""
Persistence of user actions on alerts and recommendations.

The engine always emits alerts as active. When a user dismisses (or
re-activates) an alert, or marks a recommendation as applied, the action is
stored here and overlaid on later reads of the aggregate.

Stores:
    ActionStateStore: PostgreSQL through the asyncpg pool
        (predictive_alert_state, recommendation_application tables).
    InMemoryActionStateStore: process-local dictionaries, used when no
        DATABASE_URL is configured (development, synthetic demos, tests).

Both expose the same async interface:
    set_alert_state(user_id, alert_id, is_active) -> AlertStateResponse
    get_alert_states(user_id, alert_ids) -> Dict[alert_id, is_active]
    record_recommendation_applied(user_id, recommendation_id) -> RecommendationApplyResponse

Database failures are raised as UpstreamUnavailableError.
"""

import logging
from typing import Dict, List, Optional, Sequence, Tuple

import asyncpg

from engagement_backend.core.database import get_db_pool
from engagement_backend.models.schemas import AlertStateResponse, RecommendationApplyResponse
from engagement_backend.services.clock import Clock, utc_now
from engagement_backend.services.errors import UpstreamUnavailableError
from engagement_backend.sql import (
    get_alert_state_upsert_query,
    get_alert_states_query,
    get_recommendation_apply_query,
)


logger = logging.getLogger(__name__)


# =============================================================================
# PostgreSQL Store
# =============================================================================


class ActionStateStore:
    """
    asyncpg-backed store.

    Args:
        clock: Timestamp source for updated_at / applied_at.
    """

    def __init__(self, clock: Optional[Clock] = None) -> None:
        self._clock = clock or utc_now

    async def set_alert_state(self, user_id: str, alert_id: str, is_active: bool) -> AlertStateResponse:
        """Upsert the active flag of an alert."""
        try:
            pool = await get_db_pool()
            async with pool.acquire() as conn:
                row = await conn.fetchrow(
                    get_alert_state_upsert_query(),
                    user_id,
                    alert_id,
                    is_active,
                    self._clock(),
                )
        except (asyncpg.PostgresError, OSError, RuntimeError) as e:
            logger.error(f"Failed to store state of alert {alert_id}: {e}", exc_info=True)
            raise UpstreamUnavailableError(f"Alert state store unavailable: {e}") from e

        logger.info(f"Alert {alert_id} set to is_active={is_active} for user {user_id}")
        return AlertStateResponse(
            alertId=row['alert_id'],
            userId=row['user_id'],
            isActive=row['is_active'],
            updatedAt=row['updated_at'],
        )

    async def get_alert_states(self, user_id: str, alert_ids: Sequence[str]) -> Dict[str, bool]:
        """Stored flags for the given alert ids; ids never updated are absent."""
        if not alert_ids:
            return {}

        try:
            pool = await get_db_pool()
            async with pool.acquire() as conn:
                rows = await conn.fetch(get_alert_states_query(), user_id, list(alert_ids))
        except (asyncpg.PostgresError, OSError, RuntimeError) as e:
            logger.error(f"Failed to read alert states for user {user_id}: {e}", exc_info=True)
            raise UpstreamUnavailableError(f"Alert state store unavailable: {e}") from e

        return {row['alert_id']: row['is_active'] for row in rows}

    async def record_recommendation_applied(
        self,
        user_id: str,
        recommendation_id: str,
    ) -> RecommendationApplyResponse:
        """Record (or refresh) the application time of a recommendation."""
        try:
            pool = await get_db_pool()
            async with pool.acquire() as conn:
                row = await conn.fetchrow(
                    get_recommendation_apply_query(),
                    user_id,
                    recommendation_id,
                    self._clock(),
                )
        except (asyncpg.PostgresError, OSError, RuntimeError) as e:
            logger.error(f"Failed to record recommendation {recommendation_id}: {e}", exc_info=True)
            raise UpstreamUnavailableError(f"Recommendation store unavailable: {e}") from e

        logger.info(f"Recommendation {recommendation_id} applied by user {user_id}")
        return RecommendationApplyResponse(
            recommendationId=row['recommendation_id'],
            userId=row['user_id'],
            appliedAt=row['applied_at'],
        )


# =============================================================================
# In-Memory Store
# =============================================================================


class InMemoryActionStateStore:
    """Process-local store with the same interface as ActionStateStore."""

    def __init__(self, clock: Optional[Clock] = None) -> None:
        self._clock = clock or utc_now
        self._alert_states: Dict[Tuple[str, str], bool] = {}
        self._applied: Dict[Tuple[str, str], RecommendationApplyResponse] = {}

    async def set_alert_state(self, user_id: str, alert_id: str, is_active: bool) -> AlertStateResponse:
        self._alert_states[(user_id, alert_id)] = is_active
        return AlertStateResponse(
            alertId=alert_id,
            userId=user_id,
            isActive=is_active,
            updatedAt=self._clock(),
        )

    async def get_alert_states(self, user_id: str, alert_ids: Sequence[str]) -> Dict[str, bool]:
        return {
            alert_id: self._alert_states[(user_id, alert_id)]
            for alert_id in alert_ids
            if (user_id, alert_id) in self._alert_states
        }

    async def record_recommendation_applied(
        self,
        user_id: str,
        recommendation_id: str,
    ) -> RecommendationApplyResponse:
        response = RecommendationApplyResponse(
            recommendationId=recommendation_id,
            userId=user_id,
            appliedAt=self._clock(),
        )
        self._applied[(user_id, recommendation_id)] = response
        return response

    def applied_recommendations(self, user_id: str) -> List[str]:
        return [rec_id for (owner, rec_id) in self._applied if owner == user_id]
