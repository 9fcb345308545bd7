from abc import ABC, abstractmethod
from typing import Any, Optional


class ICacheStore(ABC):
    """
    Key/value cache with TTL

    Implementations raise on backend failure; callers decide whether a failure matters.
    """

    @abstractmethod
    async def get(self, *, key: str) -> Optional[Any]:
        """Return decoded value, or None on miss"""
        pass

    @abstractmethod
    async def set(self, *, key: str, value: Any, ttl_seconds: int) -> None:
        pass

    @abstractmethod
    async def delete(self, *, key: str) -> None:
        pass

    @abstractmethod
    async def incr(self, *, key: str) -> int:
        """Atomically increment an integer counter (missing counts as 0), returns the new value"""
        pass

    @abstractmethod
    async def delete_by_pattern(self, *, pattern: str) -> int:
        """Delete every key matching a glob pattern, returns number of deleted keys"""
        pass
