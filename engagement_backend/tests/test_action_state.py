"""
Pytest test module for alert and recommendation state persistence.

Test Categories:
- TestActionStateStore: asyncpg-backed store against a mocked pool
- TestInMemoryActionStateStore: process-local store
"""

from unittest.mock import AsyncMock, patch

import pytest

from engagement_backend.services.action_state import ActionStateStore, InMemoryActionStateStore
from engagement_backend.services.errors import UpstreamUnavailableError
from engagement_backend.sql import (
    get_alert_state_upsert_query,
    get_alert_states_query,
    get_recommendation_apply_query,
)
from engagement_backend.tests.factories import FROZEN_NOW


pytestmark = pytest.mark.asyncio

POOL_PATH = 'engagement_backend.services.action_state.get_db_pool'


class TestActionStateStore:

    async def test_set_alert_state_upserts(self, mock_db_pool, mock_connection, frozen_clock) -> None:
        mock_connection.fetchrow.return_value = {
            'user_id': 'user-1',
            'alert_id': 'alert_1',
            'is_active': False,
            'updated_at': FROZEN_NOW,
        }
        store = ActionStateStore(clock=frozen_clock)

        with patch(POOL_PATH, new=AsyncMock(return_value=mock_db_pool)):
            response = await store.set_alert_state('user-1', 'alert_1', False)

        mock_connection.fetchrow.assert_awaited_once_with(
            get_alert_state_upsert_query(), 'user-1', 'alert_1', False, FROZEN_NOW
        )
        assert response.alertId == 'alert_1'
        assert response.isActive is False
        assert response.updatedAt == FROZEN_NOW

    async def test_get_alert_states(self, mock_db_pool, mock_connection) -> None:
        mock_connection.fetch.return_value = [
            {'alert_id': 'alert_1', 'is_active': False},
            {'alert_id': 'alert_3', 'is_active': True},
        ]
        store = ActionStateStore()

        with patch(POOL_PATH, new=AsyncMock(return_value=mock_db_pool)):
            states = await store.get_alert_states('user-1', ('alert_1', 'alert_2', 'alert_3'))

        mock_connection.fetch.assert_awaited_once_with(
            get_alert_states_query(), 'user-1', ['alert_1', 'alert_2', 'alert_3']
        )
        assert states == {'alert_1': False, 'alert_3': True}

    async def test_no_alert_ids_skips_database(self) -> None:
        pool_factory = AsyncMock()
        with patch(POOL_PATH, new=pool_factory):
            assert await ActionStateStore().get_alert_states('user-1', []) == {}
        pool_factory.assert_not_called()

    async def test_record_recommendation_applied(self, mock_db_pool, mock_connection, frozen_clock) -> None:
        mock_connection.fetchrow.return_value = {
            'user_id': 'user-1',
            'recommendation_id': 'rec_1',
            'applied_at': FROZEN_NOW,
        }
        store = ActionStateStore(clock=frozen_clock)

        with patch(POOL_PATH, new=AsyncMock(return_value=mock_db_pool)):
            response = await store.record_recommendation_applied('user-1', 'rec_1')

        mock_connection.fetchrow.assert_awaited_once_with(
            get_recommendation_apply_query(), 'user-1', 'rec_1', FROZEN_NOW
        )
        assert response.recommendationId == 'rec_1'
        assert response.appliedAt == FROZEN_NOW

    async def test_pool_failure_is_wrapped(self) -> None:
        store = ActionStateStore()

        with patch(POOL_PATH, new=AsyncMock(side_effect=RuntimeError("pool not initialised"))):
            with pytest.raises(UpstreamUnavailableError):
                await store.set_alert_state('user-1', 'alert_1', False)
            with pytest.raises(UpstreamUnavailableError):
                await store.get_alert_states('user-1', ['alert_1'])
            with pytest.raises(UpstreamUnavailableError):
                await store.record_recommendation_applied('user-1', 'rec_1')


class TestInMemoryActionStateStore:

    async def test_round_trip_per_user(self, frozen_clock) -> None:
        store = InMemoryActionStateStore(clock=frozen_clock)

        response = await store.set_alert_state('user-1', 'alert_1', False)

        assert response.updatedAt == FROZEN_NOW
        assert await store.get_alert_states('user-1', ['alert_1', 'alert_2']) == {'alert_1': False}
        assert await store.get_alert_states('user-2', ['alert_1']) == {}

    async def test_latest_state_wins(self) -> None:
        store = InMemoryActionStateStore()

        await store.set_alert_state('user-1', 'alert_1', False)
        await store.set_alert_state('user-1', 'alert_1', True)

        assert await store.get_alert_states('user-1', ['alert_1']) == {'alert_1': True}

    async def test_applied_recommendations(self, frozen_clock) -> None:
        store = InMemoryActionStateStore(clock=frozen_clock)

        response = await store.record_recommendation_applied('user-1', 'rec_1')
        await store.record_recommendation_applied('user-2', 'rec_2')

        assert response.appliedAt == FROZEN_NOW
        assert store.applied_recommendations('user-1') == ['rec_1']
