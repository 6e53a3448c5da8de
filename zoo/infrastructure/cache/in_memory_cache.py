"""Process-local cache backend: bounded LRU with expire-after-write per region."""

import copy
import logging
import threading
import time
from collections import OrderedDict
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from zoo.application.interfaces import MISS, CacheBackend, CacheRegion, RegionPolicy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _CacheEntry:
    value: Any
    expires_at: float


class _RegionStore:
    """One region: TTL + LRU eviction guarded by a lock."""

    def __init__(self, policy: RegionPolicy, timer: Callable[[], float]):
        if policy.max_entries <= 0:
            raise ValueError(f"max_entries must be > 0, got {policy.max_entries}")
        self.policy = policy
        self._timer = timer
        self._lock = threading.Lock()
        self._data: OrderedDict[str, _CacheEntry] = OrderedDict()
        self._generation = 0

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    def get(self, key: str) -> Any:
        now = self._timer()
        with self._lock:
            entry = self._data.get(key)
            if entry is None:
                return MISS
            if entry.expires_at <= now:
                del self._data[key]
                return MISS
            self._data.move_to_end(key)
            return entry.value

    def put(self, key: str, value: Any, generation: int | None = None) -> bool:
        expires_at = self._timer() + self.policy.ttl_seconds
        with self._lock:
            if generation is not None and generation != self._generation:
                return False
            self._data[key] = _CacheEntry(value=value, expires_at=expires_at)
            self._data.move_to_end(key)
            while len(self._data) > self.policy.max_entries:
                self._data.popitem(last=False)
            return True

    def evict(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)
            self._generation += 1

    def clear(self) -> None:
        with self._lock:
            self._data.clear()
            self._generation += 1

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)


class InMemoryCacheBackend(CacheBackend):
    """Single-instance cache; values are deep-copied in and out.

    Copying gives the same isolation a serializing shared cache has, so a
    caller mutating an entity it read can never alter the cached snapshot.
    """

    def __init__(
        self,
        policies: Mapping[CacheRegion, RegionPolicy],
        timer: Callable[[], float] = time.monotonic,
    ):
        self._regions = {region: _RegionStore(policy, timer) for region, policy in policies.items()}

    def _region(self, region: CacheRegion) -> _RegionStore:
        try:
            return self._regions[region]
        except KeyError:
            raise ValueError(f"Cache region '{region.value}' is not configured") from None

    async def get(self, region: CacheRegion, key: str) -> Any:
        value = self._region(region).get(key)
        if value is MISS:
            return MISS
        return copy.deepcopy(value)

    async def generation(self, region: CacheRegion) -> int:
        return self._region(region).generation

    async def put(
        self,
        region: CacheRegion,
        key: str,
        value: Any,
        generation: int | None = None,
    ) -> bool:
        stored = self._region(region).put(key, copy.deepcopy(value), generation)
        if not stored:
            logger.debug("Dropped stale write to %s key=%s", region.value, key)
        return stored

    async def evict(self, region: CacheRegion, key: str) -> None:
        self._region(region).evict(key)

    async def evict_all(self, region: CacheRegion) -> None:
        self._region(region).clear()
        logger.debug("Cleared cache region %s", region.value)

    def size(self, region: CacheRegion) -> int:
        return len(self._region(region))
