"""Redis-backed record store. One JSON document per SAR under sar:{id}."""

import asyncio
from typing import AsyncIterator, Optional

from redis.exceptions import RedisError

from sar_api.application.exceptions import StoreUnavailableError
from sar_api.application.record_store import ScanPredicates
from sar_api.domain.models.sar import SuspiciousActivityReport
from sar_api.infrastructure.cache.redis_client import RedisClient
from sar_api.infrastructure.serialization import sar_from_json, sar_to_json

SAR_KEY_PREFIX = "sar:"
DEFAULT_SCAN_COUNT = 100

_STORE_ERRORS = (RedisError, OSError, asyncio.TimeoutError)


def _key(sar_id: str) -> str:
    return f"{SAR_KEY_PREFIX}{sar_id}"


class RedisRecordStore:
    """
    Implements RecordStore on Redis. Redis has no secondary indexes here, so predicates are
    evaluated per SCAN batch before the batch is yielded.
    """

    def __init__(self, redis_client: RedisClient, scan_count: int = DEFAULT_SCAN_COUNT) -> None:
        self._redis = redis_client
        self._scan_count = scan_count

    async def save(self, sar: SuspiciousActivityReport) -> None:
        try:
            await self._redis.set(_key(sar.id), sar_to_json(sar))
        except _STORE_ERRORS as e:
            raise StoreUnavailableError(f"Redis save failed: {e}") from e

    async def load(self, sar_id: str) -> Optional[SuspiciousActivityReport]:
        try:
            raw = await self._redis.get(_key(sar_id))
        except _STORE_ERRORS as e:
            raise StoreUnavailableError(f"Redis load failed: {e}") from e
        if not raw:
            return None
        return sar_from_json(raw)

    async def delete(self, sar_id: str) -> bool:
        try:
            return await self._redis.delete_key(_key(sar_id))
        except _STORE_ERRORS as e:
            raise StoreUnavailableError(f"Redis delete failed: {e}") from e

    async def scan(self, predicates: ScanPredicates) -> AsyncIterator[list[SuspiciousActivityReport]]:
        cursor = 0
        # SCAN may return a key more than once during one full iteration.
        seen: set[str] = set()
        while True:
            try:
                cursor, keys = await self._redis.scan_keys(cursor, f"{SAR_KEY_PREFIX}*", self._scan_count)
                keys = [k for k in dict.fromkeys(keys) if k not in seen]
                seen.update(keys)
                values = await self._redis.mget(keys)
            except _STORE_ERRORS as e:
                raise StoreUnavailableError(f"Redis scan failed: {e}") from e
            # A key deleted between SCAN and MGET comes back as None.
            records = (sar_from_json(raw) for raw in values if raw)
            yield [sar for sar in records if predicates.matches(sar)]
            if cursor == 0:
                return
