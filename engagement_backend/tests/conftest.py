"""
Pytest Configuration and Shared Fixtures for Engagement Analytics Backend Tests.

This module provides fixtures and configuration for all backend tests, supporting:
- Async test execution with pytest-asyncio
- Mock database pool fixtures for testing services without real database connections
- Historical series builders with controlled metrics
- Deterministic id factory and frozen clock for comparing engine runs

Dependencies:
- pytest
- pytest-asyncio
- numpy
"""

from datetime import datetime
from typing import Callable, List
from unittest.mock import AsyncMock, Mock

import numpy as np
import pytest

from engagement_backend.models.schemas import HistoricalDataPoint
from engagement_backend.tests.factories import (
    FROZEN_NOW,
    SequentialIds,
    make_point,
    make_series,
)


# ============================================================
# PYTEST HOOKS
# ============================================================

def pytest_configure(config) -> None:
    """
    Configure custom pytest markers for test organization.

    Custom markers defined:
    - slow: Marks tests as slow (deselect with -m "not slow")
    - integration: Marks integration tests requiring external services
    """
    config.addinivalue_line(
        'markers',
        'slow: marks tests as slow (deselect with -m "not slow")'
    )
    config.addinivalue_line(
        'markers',
        'integration: marks tests requiring external service connectivity'
    )


# ============================================================
# SERIES FIXTURES
# ============================================================

@pytest.fixture
def healthy_series() -> List[HistoricalDataPoint]:
    """
    30 days of healthy metrics: 25% conversion, 150s response, quality 4.2.

    Crosses no alert threshold and no automation/training recommendation rule.
    """
    return make_series(30)


@pytest.fixture
def linear_growth_series() -> List[HistoricalDataPoint]:
    """10 days with attendances = 50 + 3 * day (slope 3, perfect fit)."""
    return make_series(10, attendances=lambda i: 50 + 3 * i, conversions=lambda i: 10)


@pytest.fixture
def struggling_series() -> List[HistoricalDataPoint]:
    """
    14 days with 5% conversion, 700s response time and quality 2.5.

    Every alert check fires at critical severity.
    """
    return make_series(
        14,
        attendances=lambda i: 100,
        conversions=lambda i: 5,
        response_time=lambda i: 700.0,
        quality=lambda i: 2.5,
        sentiment=lambda i: 0.3,
    )


@pytest.fixture
def noisy_series() -> List[HistoricalDataPoint]:
    """30 days of seeded random metrics for determinism checks."""
    rng = np.random.default_rng(1234)
    attendances = [int(60 + rng.integers(0, 80)) for _ in range(30)]
    rates = [0.1 + float(rng.random()) * 0.2 for _ in range(30)]
    return [
        make_point(
            i,
            attendances=attendances[i],
            conversions=int(round(attendances[i] * rates[i])),
            response_time=100 + float(rng.random()) * 300,
            quality=3 + float(rng.random()) * 2,
            sentiment=float(rng.random()),
        )
        for i in range(30)
    ]


# ============================================================
# DETERMINISM FIXTURES
# ============================================================

@pytest.fixture
def sequential_ids() -> SequentialIds:
    return SequentialIds()


@pytest.fixture
def frozen_clock() -> Callable[[], datetime]:
    return lambda: FROZEN_NOW


# ============================================================
# DATABASE MOCK FIXTURES
# ============================================================

@pytest.fixture
def mock_db_pool() -> AsyncMock:
    """
    Create a mock asyncpg connection pool for testing database operations.

    Returns:
        AsyncMock: Mocked asyncpg pool whose acquire() context manager
        yields a connection with execute/fetch/fetchrow/fetchval mocks.

    Usage:
        async def test_query(mock_db_pool):
            conn = mock_db_pool.acquire.return_value.__aenter__.return_value
            conn.fetch.return_value = [{'alert_id': 'alert_1', 'is_active': False}]
    """
    pool = AsyncMock()

    conn = AsyncMock()
    conn.execute = AsyncMock(return_value=None)
    conn.fetch = AsyncMock(return_value=[])
    conn.fetchrow = AsyncMock(return_value=None)
    conn.fetchval = AsyncMock(return_value=None)

    # acquire() returns an async context manager yielding the mock connection
    acquire_context = AsyncMock()
    acquire_context.__aenter__ = AsyncMock(return_value=conn)
    acquire_context.__aexit__ = AsyncMock(return_value=None)
    pool.acquire = Mock(return_value=acquire_context)

    pool.release = AsyncMock(return_value=None)
    pool.close = AsyncMock(return_value=None)

    return pool


@pytest.fixture
def mock_connection(mock_db_pool: AsyncMock) -> AsyncMock:
    """The connection yielded by mock_db_pool.acquire()."""
    return mock_db_pool.acquire.return_value.__aenter__.return_value
