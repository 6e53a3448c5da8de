"""Cache port: region-scoped key/value cache with TTL and explicit eviction."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Final


class _Miss:
    """Sentinel type for a cache miss (cached values may be falsy)."""

    _instance: "_Miss | None" = None

    def __new__(cls) -> "_Miss":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISS"


MISS: Final = _Miss()


class CacheRegion(str, Enum):
    """Independently configured cache regions."""

    ANIMALS_BY_ID = "animals_by_id"
    ROOMS_BY_ID = "rooms_by_id"
    FAVORITE_COUNTS = "favorite_counts"


@dataclass(frozen=True)
class RegionPolicy:
    """Capacity bound and expire-after-write TTL (seconds) for one region."""

    max_entries: int
    ttl_seconds: float


class CacheBackend(ABC):
    """Port for the cache layer, with in-process and shared implementations.

    Implementations must behave identically apart from availability:
    read-through callers see a value or ``MISS``, entries expire
    ``ttl_seconds`` after they were written, and eviction is immediate.
    ``put`` stores a snapshot and ``get`` returns an independent copy, so
    mutating a returned value never changes what the cache holds.

    Every ``evict``/``evict_all`` bumps the region's generation. A loader reads
    the generation before it loads and hands it to ``put``; the write is
    dropped if the region was invalidated in between, so a slow read can
    never re-cache a value older than the eviction.
    """

    @abstractmethod
    async def generation(self, region: CacheRegion) -> int:
        """Current invalidation counter of ``region``."""
        ...

    @abstractmethod
    async def get(self, region: CacheRegion, key: str) -> Any:
        """Return the cached value or ``MISS``."""
        ...

    @abstractmethod
    async def put(
        self,
        region: CacheRegion,
        key: str,
        value: Any,
        generation: int | None = None,
    ) -> bool:
        """Store ``value`` under ``key`` with the region's TTL.

        With ``generation``, store only if the region is still at that
        generation. Returns whether the value was stored.
        """
        ...

    @abstractmethod
    async def evict(self, region: CacheRegion, key: str) -> None:
        """Drop one key from a region (no-op if absent) and bump its generation."""
        ...

    @abstractmethod
    async def evict_all(self, region: CacheRegion) -> None:
        """Drop every key of a region and bump its generation."""
        ...

    async def close(self) -> None:
        """Release backend resources (connections). Default: nothing to do."""
        return None
