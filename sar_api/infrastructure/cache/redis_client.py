# sar_api/infrastructure/cache/redis_client.py

import redis.asyncio as redis

from sar_api.config.settings import settings


class RedisClient:
    def __init__(self, url: str | None = None, timeout_seconds: float | None = None):
        timeout = timeout_seconds if timeout_seconds is not None else settings.store_timeout_seconds
        self.client = redis.from_url(
            url or settings.redis_url,
            decode_responses=True,
            socket_timeout=timeout,
            socket_connect_timeout=timeout,
        )

    async def set(self, key: str, value: str) -> None:
        """Set key to value with no expiry."""
        await self.client.set(key, value)

    async def get(self, key: str) -> str | None:
        """Get value for key. Returns None if key does not exist."""
        return await self.client.get(key)

    async def mget(self, keys: list[str]) -> list[str | None]:
        """Get values for several keys in one round trip; missing keys come back as None."""
        if not keys:
            return []
        return await self.client.mget(keys)

    async def delete_key(self, key: str) -> bool:
        """Delete a key. Returns True if it existed."""
        return bool(await self.client.delete(key))

    async def scan_keys(self, cursor: int, match: str, count: int) -> tuple[int, list[str]]:
        """One SCAN step. Returns (next_cursor, keys); next_cursor 0 means the scan is complete."""
        next_cursor, keys = await self.client.scan(cursor=cursor, match=match, count=count)
        return int(next_cursor), list(keys)

    async def close(self) -> None:
        await self.client.aclose()
