"""FastAPI dependency injection: record store, clock, SarService."""

import logging
from typing import Annotated, AsyncIterator

from fastapi import Depends

from sar_api.application.query_engine import QueryEngine
from sar_api.application.record_store import RecordStore
from sar_api.application.sar_service import SarService
from sar_api.config.settings import get_settings
from sar_api.core.clock import Clock, SystemClock
from sar_api.infrastructure.cache.redis_client import RedisClient
from sar_api.infrastructure.store.memory_store import InMemoryRecordStore

_redis_client: RedisClient | None = None
_memory_store: InMemoryRecordStore | None = None


def get_redis_client() -> RedisClient:
    """Return singleton Redis client."""
    global _redis_client
    if _redis_client is None:
        _redis_client = RedisClient()
    return _redis_client


def get_memory_store() -> InMemoryRecordStore:
    """Return the process-wide in-memory store."""
    global _memory_store
    if _memory_store is None:
        _memory_store = InMemoryRecordStore(batch_size=get_settings().scan_batch_size)
    return _memory_store


def get_clock() -> Clock:
    return SystemClock()


async def get_record_store() -> AsyncIterator[RecordStore]:
    """Select the RecordStore for the configured backend. Database sessions are request-scoped."""
    settings = get_settings()
    if settings.store_backend == "database":
        from sar_api.infrastructure.database.session import get_session_factory
        from sar_api.infrastructure.store.db_store import DbRecordStore

        async with get_session_factory()() as session:
            yield DbRecordStore(
                session,
                batch_size=settings.scan_batch_size,
                timeout_seconds=settings.store_timeout_seconds,
            )
        return
    if settings.store_backend == "redis":
        from sar_api.infrastructure.store.redis_store import RedisRecordStore

        yield RedisRecordStore(get_redis_client(), scan_count=settings.scan_batch_size)
        return
    yield get_memory_store()


async def get_sar_service(
    store: Annotated[RecordStore, Depends(get_record_store)],
    clock: Annotated[Clock, Depends(get_clock)],
) -> SarService:
    """Build SarService with injected store, clock, query engine and logger."""
    settings = get_settings()
    return SarService(
        store=store,
        clock=clock,
        logger=logging.getLogger("sar_api.application.sar_service"),
        query_engine=QueryEngine(store, max_limit=settings.list_max_limit),
    )
