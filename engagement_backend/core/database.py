"""
asyncpg pool for the engagement metrics database.

One pool per process, created lazily or from the FastAPI lifespan when
DATABASE_URL is set. Two consumers share it:

- DatabaseHistoricalDataProvider (engagement_daily_metrics reads)
- ActionStateStore (predictive_alert_state / recommendation_application upserts)

Without DATABASE_URL the service still runs on synthetic history with an
in-memory state store; get_db_pool() then raises RuntimeError, which the
consumers report as UpstreamUnavailableError.

Pool sizing comes from Settings (DB_POOL_MIN_SIZE, DB_POOL_MAX_SIZE,
DB_COMMAND_TIMEOUT).

Usage:
    pool = await get_db_pool()
    async with pool.acquire() as conn:
        rows = await conn.fetch(get_historical_series_query(), user_id, start_date, end_date)
"""

import logging
from typing import Optional

import asyncpg
from asyncpg import Pool

from engagement_backend.core.config import get_settings


logger = logging.getLogger(__name__)


# None until the first init_db() call, and again after close_db()
_pool: Optional[Pool] = None


async def init_db() -> Pool:
    """
    Create the pool if it does not exist yet.

    Raises:
        RuntimeError: DATABASE_URL is not configured.
        asyncpg.PostgresError / OSError: The server rejected or could not be
            reached for the initial connections.
    """
    global _pool

    if _pool is not None:
        return _pool

    settings = get_settings()
    if not settings.database_url:
        raise RuntimeError("DATABASE_URL is not configured")

    _pool = await asyncpg.create_pool(
        dsn=settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
        command_timeout=settings.db_command_timeout,
    )
    logger.info(
        f"Created asyncpg pool (min={settings.db_pool_min_size}, "
        f"max={settings.db_pool_max_size})"
    )
    return _pool


async def get_db_pool() -> Pool:
    """Return the process pool, creating it on first use."""
    if _pool is None:
        return await init_db()
    return _pool


async def close_db() -> None:
    """Close the pool; a no-op when none was created."""
    global _pool

    if _pool is None:
        return

    await _pool.close()
    _pool = None
