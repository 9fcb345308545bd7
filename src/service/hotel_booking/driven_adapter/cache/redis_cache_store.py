from typing import Any, Callable, Optional

import orjson
from redis.asyncio import Redis

from src.platform.config.core_setting import settings
from src.service.hotel_booking.app.interface.i_cache_store import ICacheStore


class RedisCacheStore(ICacheStore):
    """
    ICacheStore over Redis; values are JSON documents (orjson)

    Errors from Redis propagate, BookingCachePolicy turns them into misses/skips.
    """

    def __init__(
        self,
        *,
        client_factory: Callable[[], Redis],
        key_prefix: str = '',
        scan_count: int = 200,
    ) -> None:
        self.client_factory = client_factory
        self.key_prefix = key_prefix
        self.scan_count = scan_count

    @classmethod
    def from_settings(cls, *, client_factory: Callable[[], Redis]) -> 'RedisCacheStore':
        return cls(
            client_factory=client_factory,
            key_prefix=settings.REDIS_KEY_PREFIX,
            scan_count=settings.CACHE_SCAN_COUNT,
        )

    def _key(self, key: str) -> str:
        return f'{self.key_prefix}{key}'

    async def get(self, *, key: str) -> Optional[Any]:
        raw = await self.client_factory().get(self._key(key))
        if raw is None:
            return None
        return orjson.loads(raw)

    async def set(self, *, key: str, value: Any, ttl_seconds: int) -> None:
        await self.client_factory().set(self._key(key), orjson.dumps(value), ex=ttl_seconds)

    async def delete(self, *, key: str) -> None:
        await self.client_factory().delete(self._key(key))

    async def incr(self, *, key: str) -> int:
        return await self.client_factory().incr(self._key(key))

    async def delete_by_pattern(self, *, pattern: str) -> int:
        client = self.client_factory()
        keys = [key async for key in client.scan_iter(match=self._key(pattern), count=self.scan_count)]
        if not keys:
            return 0
        return await client.unlink(*keys)
