"""
In-process per-user cache for computed PredictiveAnalytics aggregates.

The dashboard treats an aggregate as fresh for ten minutes. Entries expire
after ttl_seconds; a read drops its own stale entry and every write sweeps
all stale entries. At most max_entries users are kept, evicting the least
recently used first. Alert updates do not touch the cache: stored alert
state is overlaid on every read, and alert ids only stay valid for as long
as the cached aggregate does.
"""

import logging
import time
from collections import OrderedDict
from typing import Callable, Optional, Tuple

from engagement_backend.models.schemas import PredictiveAnalytics


logger = logging.getLogger(__name__)


DEFAULT_TTL_SECONDS: int = 600
DEFAULT_MAX_ENTRIES: int = 1024


class AnalyticsCache:
    """
    Bounded TTL cache keyed by user id.

    Args:
        ttl_seconds: Staleness window; 0 or less disables caching.
        max_entries: Capacity; the least recently used user is evicted
            when a new one would exceed it.
        clock: Monotonic seconds source (time.monotonic by default).
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_entries < 1:
            raise ValueError(f"max_entries must be at least 1, got {max_entries}")

        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: "OrderedDict[str, Tuple[float, PredictiveAnalytics]]" = OrderedDict()

    def get(self, user_id: str) -> Optional[PredictiveAnalytics]:
        entry = self._entries.get(user_id)
        if entry is None:
            return None

        stored_at, analytics = entry
        if self._clock() - stored_at >= self.ttl_seconds:
            del self._entries[user_id]
            logger.debug(f"Cached analytics expired for user {user_id}")
            return None

        self._entries.move_to_end(user_id)
        return analytics

    def set(self, user_id: str, analytics: PredictiveAnalytics) -> None:
        if self.ttl_seconds <= 0:
            return

        now = self._clock()
        self._evict_expired(now)

        self._entries[user_id] = (now, analytics)
        self._entries.move_to_end(user_id)

        while len(self._entries) > self.max_entries:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug(f"Evicted cached analytics for user {evicted} (capacity {self.max_entries})")

    def invalidate(self, user_id: str) -> None:
        self._entries.pop(user_id, None)

    def clear(self) -> None:
        self._entries.clear()

    def _evict_expired(self, now: float) -> None:
        expired = [
            user_id
            for user_id, (stored_at, _) in self._entries.items()
            if now - stored_at >= self.ttl_seconds
        ]
        for user_id in expired:
            del self._entries[user_id]

        if expired:
            logger.debug(f"Swept {len(expired)} expired cache entries")

    def __len__(self) -> int:
        return len(self._entries)
