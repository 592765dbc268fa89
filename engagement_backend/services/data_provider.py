"""
Historical data providers for the predictive analytics engine.

A provider returns the trailing daily series for one user, ordered by date
ascending and ending yesterday (today is partial and excluded).

Providers:
    DatabaseHistoricalDataProvider:
        Reads engagement_daily_metrics through the asyncpg pool. Connection
        and query failures are raised as UpstreamUnavailableError.

    SyntheticHistoricalDataProvider:
        Generates a plausible series for demos and development: weekday
        volume above weekends, a slowly growing trend with noise, and
        conversion/response/quality values drawn from fixed ranges. Uses an
        injected numpy Generator, so a seeded provider is reproducible.

Dependencies:
    - asyncpg: database access (through core.database)
    - numpy: random Generator for synthetic series
"""

import logging
from datetime import date, timedelta
from typing import Callable, List, Optional, Protocol

import asyncpg
import numpy as np

from engagement_backend.core.database import get_db_pool
from engagement_backend.models.enums import IntentCategory
from engagement_backend.models.schemas import HistoricalDataPoint
from engagement_backend.services.errors import UpstreamUnavailableError
from engagement_backend.sql import get_historical_series_query


logger = logging.getLogger(__name__)


# =============================================================================
# Protocol
# =============================================================================


class HistoricalDataProvider(Protocol):
    """Source of per-user daily engagement series."""

    async def fetch_historical_series(self, user_id: str, days: int) -> List[HistoricalDataPoint]:
        ...


# =============================================================================
# Database Provider
# =============================================================================


def _row_to_point(row) -> HistoricalDataPoint:
    return HistoricalDataPoint(
        date=row['metric_date'],
        attendances=int(row['attendances']),
        conversions=int(row['conversions']),
        responseTime=float(row['avg_response_time_seconds']),
        qualityScore=float(row['avg_quality_score']),
        sentiment=float(row['avg_sentiment']),
        intents={
            IntentCategory.PURCHASE.value: float(row['intent_purchase']),
            IntentCategory.SUPPORT.value: float(row['intent_support']),
            IntentCategory.COMPLAINT.value: float(row['intent_complaint']),
            IntentCategory.INQUIRY.value: float(row['intent_inquiry']),
        },
    )


class DatabaseHistoricalDataProvider:
    """
    Fetch daily metrics from PostgreSQL.

    Args:
        today: Callable returning the current date; the window is
            [today - days, today). Defaults to date.today.
    """

    def __init__(self, today: Optional[Callable[[], date]] = None) -> None:
        self._today = today or date.today

    async def fetch_historical_series(self, user_id: str, days: int) -> List[HistoricalDataPoint]:
        """
        Fetch up to `days` daily samples for a user.

        Returns:
            Samples ordered by date ascending. Days without a row are simply
            absent; an unknown user yields an empty list.

        Raises:
            UpstreamUnavailableError: The pool could not be obtained or the
                query failed.
        """
        end_date = self._today()
        start_date = end_date - timedelta(days=days)

        try:
            pool = await get_db_pool()
            async with pool.acquire() as conn:
                rows = await conn.fetch(get_historical_series_query(), user_id, start_date, end_date)
        except (asyncpg.PostgresError, OSError, RuntimeError) as e:
            logger.error(f"Failed to fetch historical series for user {user_id}: {e}", exc_info=True)
            raise UpstreamUnavailableError(f"Historical data unavailable: {e}") from e

        logger.info(f"Fetched {len(rows)} daily samples for user {user_id}")
        return [_row_to_point(row) for row in rows]


# =============================================================================
# Synthetic Provider
# =============================================================================

WEEKEND_FACTOR: float = 0.6
TREND_GROWTH_PER_DAY: float = 0.02
TREND_NOISE: float = 0.3


class SyntheticHistoricalDataProvider:
    """
    Generate a demo series with weekly seasonality and mild growth.

    Per day i (0 = oldest):
        weekend   = 0.6 on Saturday/Sunday, else 1.0
        trend     = 1 + 0.02·i + (U - 0.5)·0.3
        attendances = round((50 + U·100) · weekend · trend)
        conversions = round(attendances · (0.15 + U·0.2))
        responseTime = 60 + U·300 seconds
        qualityScore = 3.5 + U·1.5
        sentiment    = 0.4 + U·0.6
        intents: purchase 0.3-0.7, support 0.2-0.5, complaint 0.05-0.2,
                 inquiry 0.1-0.3

    Args:
        rng: Random generator; a fresh unseeded generator when omitted.
        today: Callable returning the current date (defaults to date.today).
    """

    def __init__(
        self,
        rng: Optional[np.random.Generator] = None,
        today: Optional[Callable[[], date]] = None,
    ) -> None:
        self._rng = rng if rng is not None else np.random.default_rng()
        self._today = today or date.today

    async def fetch_historical_series(self, user_id: str, days: int) -> List[HistoricalDataPoint]:
        return self.generate(days)

    def generate(self, days: int) -> List[HistoricalDataPoint]:
        """Generate `days` samples ending yesterday."""
        rng = self._rng
        start_date = self._today() - timedelta(days=days)
        series: List[HistoricalDataPoint] = []

        for i in range(max(0, days)):
            day = start_date + timedelta(days=i)
            # Python weekday(): Monday=0 .. Sunday=6
            weekend_factor = WEEKEND_FACTOR if day.weekday() >= 5 else 1.0
            trend_factor = 1 + i * TREND_GROWTH_PER_DAY + (rng.random() - 0.5) * TREND_NOISE

            attendances = max(0, int(round((50 + rng.random() * 100) * weekend_factor * trend_factor)))
            conversion_rate = 0.15 + rng.random() * 0.2
            conversions = int(round(attendances * conversion_rate))

            series.append(
                HistoricalDataPoint(
                    date=day,
                    attendances=attendances,
                    conversions=conversions,
                    responseTime=60 + rng.random() * 300,
                    qualityScore=3.5 + rng.random() * 1.5,
                    sentiment=0.4 + rng.random() * 0.6,
                    intents={
                        IntentCategory.PURCHASE.value: 0.3 + rng.random() * 0.4,
                        IntentCategory.SUPPORT.value: 0.2 + rng.random() * 0.3,
                        IntentCategory.COMPLAINT.value: 0.05 + rng.random() * 0.15,
                        IntentCategory.INQUIRY.value: 0.1 + rng.random() * 0.2,
                    },
                )
            )

        return series
