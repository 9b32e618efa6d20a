### Description ###
# SmartStay-Dashboard - Guest Portal Administration
# - FastAPI Dependencies -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
FastAPI Dependencies

Provides dependency injection for:
- Durable store client (SQLAlchemy, shared)
- The caller's EntityStore (one editor session per tenant)
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import UTC, datetime

from fastapi import Depends

from dashboard.config import get_api_settings
from dashboard.middleware.auth import get_current_user, reset_auth_client
from dashboard.schemas.entities import User
from dashboard.services.entity_store import EntityStore
from dashboard.services.store_client import SQLAlchemyStoreClient, StoreClient

logger = logging.getLogger(__name__)


# Service instance (created on first request, reused)
_store_client: StoreClient | None = None


@dataclass
class SessionEntry:
    """A loaded editor session"""

    store: EntityStore
    last_used: datetime


class StoreRegistry:
    """
    Per-user EntityStore sessions.

    A tenant's store is loaded from the durable store on first use and
    reused for later requests, so optimistic state lives across calls.
    Sessions idle longer than ttl_minutes are reloaded; beyond
    max_entries the least recently used session is dropped.
    """

    def __init__(self, ttl_minutes: int = 30, max_entries: int = 500):
        self.ttl_minutes = ttl_minutes
        self.max_entries = max_entries
        self._sessions: dict[str, SessionEntry] = {}
        # One load lock per user; loads for different tenants run concurrently
        self._loading: dict[str, asyncio.Lock] = {}

    @classmethod
    def from_settings(cls) -> "StoreRegistry":
        settings = get_api_settings()
        return cls(ttl_minutes=settings.session_idle_minutes, max_entries=settings.max_sessions)

    def _cached(self, user_id: str) -> EntityStore | None:
        """Session store if present and not idle too long (touches it)"""
        entry = self._sessions.get(user_id)
        if entry is None:
            return None

        now = datetime.now(UTC)
        if (now - entry.last_used).total_seconds() > self.ttl_minutes * 60:
            del self._sessions[user_id]
            logger.info(f"Editor session for user {user_id} expired after idling")
            return None

        entry.last_used = now
        return entry.store

    def _evict_oldest(self) -> None:
        """Drop the least recently used session"""
        if not self._sessions:
            return

        oldest = min(self._sessions, key=lambda user_id: self._sessions[user_id].last_used)
        del self._sessions[oldest]
        logger.debug(f"Evicted editor session for user {oldest}")

    async def get(self, client: StoreClient, user: User) -> EntityStore:
        store = self._cached(user.id)
        if store is not None:
            return store

        lock = self._loading.setdefault(user.id, asyncio.Lock())
        async with lock:
            store = self._cached(user.id)
            if store is None:
                store = await EntityStore.load(client, user)
                if len(self._sessions) >= self.max_entries:
                    self._evict_oldest()
                self._sessions[user.id] = SessionEntry(store=store, last_used=datetime.now(UTC))

        if not lock.locked():
            self._loading.pop(user.id, None)
        return store

    def drop(self, user_id: str) -> bool:
        """Forget a user's session (next request reloads it)"""
        return self._sessions.pop(user_id, None) is not None

    def clear(self) -> None:
        self._sessions.clear()

    def __len__(self) -> int:
        return len(self._sessions)


_registry: StoreRegistry | None = None


def get_store_client() -> StoreClient:
    """Dependency that provides the shared durable store client"""
    global _store_client
    if _store_client is None:
        _store_client = SQLAlchemyStoreClient()
    return _store_client


def get_store_registry() -> StoreRegistry:
    """Dependency that provides the editor session registry"""
    global _registry
    if _registry is None:
        _registry = StoreRegistry.from_settings()
    return _registry


async def get_entity_store(
    user: User = Depends(get_current_user),
    client: StoreClient = Depends(get_store_client),
    registry: StoreRegistry = Depends(get_store_registry),
) -> EntityStore:
    """
    Dependency that provides the caller's EntityStore.

    Raises:
        AuthRequiredError: Via get_current_user when no valid token is sent
        PersistenceError: If the tenant's data cannot be loaded
    """
    return await registry.get(client, user)


def reset_dependencies() -> None:
    """Drop cached clients and sessions (tests and shutdown)"""
    global _store_client, _registry
    _store_client = None
    _registry = None
    reset_auth_client()
