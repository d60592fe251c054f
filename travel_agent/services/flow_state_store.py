"""
Flow State Store - bounded per-user flow state with observable eviction
"""

import logging
import threading
import time
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from cachetools import TTLCache

from ..config.settings import AGENT_SETTINGS
from ..models.state import PerUserFlowState

logger = logging.getLogger(__name__)

# (user_id, state, reason) with reason "capacity" or "expired"
EvictionListener = Callable[[str, PerUserFlowState, str], None]


class EvictingTTLCache(TTLCache):
    """TTLCache that reports every entry it drops on its own"""

    def __init__(self, maxsize, ttl, timer=time.monotonic, on_evict=None):
        super().__init__(maxsize, ttl, timer=timer)
        self._on_evict = on_evict

    def popitem(self):
        key, value = super().popitem()
        self._notify(key, value, "capacity")
        return key, value

    def expire(self, time=None):
        expired = super().expire(time)
        for key, value in expired:
            self._notify(key, value, "expired")
        return expired

    def _notify(self, key, value, reason):
        if self._on_evict is not None:
            self._on_evict(key, value, reason)


class FlowStateStore:
    """Per-user flow state in an LRU cache with per-entry expiry.

    Entries live for flow_state_ttl_seconds after their last save; the
    least recently used entry is dropped when capacity is reached.
    """

    def __init__(
        self,
        max_users: Optional[int] = None,
        ttl_seconds: Optional[float] = None,
        timer: Callable[[], float] = time.monotonic,
    ):
        self.max_users = max_users or AGENT_SETTINGS["flow_state_max_users"]
        self.ttl_seconds = ttl_seconds or AGENT_SETTINGS["flow_state_ttl_seconds"]
        self.lock = threading.RLock()
        self.listeners: List[EvictionListener] = []
        self.stats = {
            'created': 0,
            'accessed': 0,
            'expired': 0,
            'evicted': 0,
        }
        self._cache = EvictingTTLCache(
            maxsize=self.max_users,
            ttl=self.ttl_seconds,
            timer=timer,
            on_evict=self._handle_eviction,
        )
        logger.info(f"FlowStateStore initialized: TTL={self.ttl_seconds}s, Max={self.max_users}")

    def add_listener(self, listener: EvictionListener) -> None:
        self.listeners.append(listener)

    def get(self, user_id: str) -> PerUserFlowState:
        """State for user, created on first access"""
        with self.lock:
            self._cache.expire()
            state = self._cache.get(user_id)
            if state is None:
                state = PerUserFlowState()
                self._cache[user_id] = state
                self.stats['created'] += 1
                logger.debug(f"Created flow state for {user_id}")
            else:
                self.stats['accessed'] += 1
            return state

    def peek(self, user_id: str) -> Optional[PerUserFlowState]:
        """State for user without creating one"""
        with self.lock:
            self._cache.expire()
            return self._cache.get(user_id)

    def save(self, user_id: str, state: PerUserFlowState) -> None:
        """Store state and restart its expiry"""
        with self.lock:
            state.updated_at = datetime.utcnow()
            self._cache[user_id] = state

    def clear(self, user_id: str) -> bool:
        with self.lock:
            return self._cache.pop(user_id, None) is not None

    def __len__(self) -> int:
        with self.lock:
            self._cache.expire()
            return len(self._cache)

    def __contains__(self, user_id: str) -> bool:
        with self.lock:
            return user_id in self._cache

    def get_stats(self) -> Dict[str, Any]:
        with self.lock:
            return {
                **self.stats,
                'active_users': len(self._cache),
                'max_users': self.max_users,
                'ttl_seconds': self.ttl_seconds,
            }

    def _handle_eviction(self, user_id: str, state: PerUserFlowState, reason: str) -> None:
        self.stats['expired' if reason == 'expired' else 'evicted'] += 1
        logger.info(f"🧹 Flow state for {user_id} dropped ({reason})")
        for listener in self.listeners:
            try:
                listener(user_id, state, reason)
            except Exception as e:
                logger.error(f"❌ Eviction listener failed: {e}", exc_info=True)
