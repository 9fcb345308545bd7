"""
Read-through caching for booking lists

Keys (each list is stored under its current generation):
- user:{user_id}:bookings:v{n}   one user's bookings, generation in user:{user_id}:bookings:gen
- bookings:all:v{n}              every booking (admin view), generation in bookings:gen

Every mutation bumps the owner's generation and the global one, then drops the
superseded entries. A reader captures the generation before loading from the store
and writes only under that generation, so a fill that raced a mutation lands on a key
no later reader looks at.

Cache failures are logged and counted, never raised: a failed read is a miss,
a failed write or invalidation is skipped.
"""

from typing import Awaitable, Callable, List, Optional

from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.hotel_booking.app.dto.booking_list_result import BookingListResult
from src.service.hotel_booking.app.interface.i_cache_store import ICacheStore


ALL_BOOKINGS_KEY = 'bookings:all'
GLOBAL_BOOKINGS_PATTERN = 'bookings:*'
GLOBAL_GENERATION_KEY = 'bookings:gen'


def user_bookings_key(user_id: int) -> str:
    return f'user:{user_id}:bookings'


def user_generation_key(user_id: int) -> str:
    return f'{user_bookings_key(user_id)}:gen'


def versioned_key(key: str, generation: int) -> str:
    return f'{key}:v{generation}'


class BookingCachePolicy:
    def __init__(self, *, cache_store: ICacheStore, ttl_seconds: int) -> None:
        self.cache_store = cache_store
        self.ttl_seconds = ttl_seconds

    async def read_through(
        self,
        *,
        key: str,
        generation_key: str,
        scope: str,
        loader: Callable[[], Awaitable[List[dict]]],
    ) -> BookingListResult:
        generation = await self._safe_generation(key=generation_key, scope=scope)
        if generation is None:
            # Cache unreachable: serve from the store, skip the fill
            return BookingListResult(items=await loader(), source='database')

        entry_key = versioned_key(key, generation)
        cached = await self._safe_get(key=entry_key, scope=scope)
        if cached is not None:
            metrics.record_cache_lookup(scope=scope, result='hit')
            return BookingListResult(items=cached, source='cache')

        items = await loader()
        await self._safe_set(key=entry_key, value=items)
        return BookingListResult(items=items, source='database')

    async def invalidate_after_mutation(self, *, user_id: int) -> None:
        user_generation = await self._safe_bump(key=user_generation_key(user_id))
        if user_generation is not None:
            await self._safe_invalidate(
                self.cache_store.delete(
                    key=versioned_key(user_bookings_key(user_id), user_generation - 1)
                )
            )

        global_generation = await self._safe_bump(key=GLOBAL_GENERATION_KEY)
        if global_generation is not None:
            await self._safe_invalidate(
                self.cache_store.delete_by_pattern(
                    pattern=versioned_key(GLOBAL_BOOKINGS_PATTERN, global_generation - 1)
                )
            )

    async def _safe_bump(self, *, key: str) -> Optional[int]:
        try:
            return await self.cache_store.incr(key=key)
        except Exception as e:
            metrics.record_invalidation_error()
            Logger.base.warning(f'⚠️ [CACHE] Generation bump failed for {key}: {e}')
            return None

    async def _safe_invalidate(self, operation: Awaitable) -> None:
        try:
            await operation
        except Exception as e:
            # Superseded entries are unreachable already, they only wait for their TTL
            Logger.base.warning(f'⚠️ [CACHE] Cleanup of superseded entries failed: {e}')

    async def _safe_generation(self, *, key: str, scope: str) -> Optional[int]:
        try:
            value = await self.cache_store.get(key=key)
        except Exception as e:
            metrics.record_cache_lookup(scope=scope, result='error')
            Logger.base.warning(
                f'⚠️ [CACHE] Read failed for {key}, falling back to database: {e}'
            )
            return None

        if value is None:
            return 0
        if not isinstance(value, int) or isinstance(value, bool):
            metrics.record_cache_lookup(scope=scope, result='error')
            Logger.base.warning(f'⚠️ [CACHE] Unexpected generation under {key}, ignoring cache')
            return None
        return value

    async def _safe_get(self, *, key: str, scope: str) -> List[dict] | None:
        try:
            value = await self.cache_store.get(key=key)
        except Exception as e:
            metrics.record_cache_lookup(scope=scope, result='error')
            Logger.base.warning(
                f'⚠️ [CACHE] Read failed for {key}, falling back to database: {e}'
            )
            return None

        if value is None:
            metrics.record_cache_lookup(scope=scope, result='miss')
            return None
        if not isinstance(value, list):
            metrics.record_cache_lookup(scope=scope, result='error')
            Logger.base.warning(f'⚠️ [CACHE] Unexpected payload under {key}, ignoring')
            return None
        return value

    async def _safe_set(self, *, key: str, value: List[dict]) -> None:
        try:
            await self.cache_store.set(key=key, value=value, ttl_seconds=self.ttl_seconds)
        except Exception as e:
            Logger.base.warning(f'⚠️ [CACHE] Write failed for {key}: {e}')
