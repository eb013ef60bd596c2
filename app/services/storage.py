"""
Key-Value Store
String-keyed blob persistence backed by Redis
"""
import logging
from typing import Optional, Protocol
import redis.asyncio as redis
from app.core.config import settings

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Minimal persistence contract used by the addon registry"""

    async def get(self, key: str) -> Optional[str]: ...

    async def set(self, key: str, value: str) -> None: ...

    async def remove(self, key: str) -> None: ...


class RedisKeyValueStore:
    """Redis implementation of KeyValueStore

    Unlike a cache, errors are not swallowed here: the registry decides
    whether a failed read or write is surfaced to its caller.
    """

    def __init__(self, client: Optional[redis.Redis] = None, url: Optional[str] = None):
        self._redis_client = client
        self.url = url or settings.REDIS_URL

    async def get_client(self) -> redis.Redis:
        """Get or create Redis client"""
        if self._redis_client is None:
            self._redis_client = redis.from_url(
                self.url,
                encoding="utf-8",
                decode_responses=True
            )
        return self._redis_client

    async def get(self, key: str) -> Optional[str]:
        client = await self.get_client()
        value = await client.get(key)
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return value

    async def set(self, key: str, value: str) -> None:
        client = await self.get_client()
        await client.set(key, value)
        logger.debug(f"Stored {len(value)} bytes under {key}")

    async def remove(self, key: str) -> None:
        client = await self.get_client()
        await client.delete(key)

    async def close(self):
        """Close Redis connection"""
        if self._redis_client:
            await self._redis_client.aclose()
            self._redis_client = None
