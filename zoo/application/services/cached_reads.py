"""Read-through helper shared by the single-entity lookups."""

from collections.abc import Awaitable, Callable
from typing import TypeVar

from zoo.application.interfaces import MISS, CacheBackend, CacheRegion

T = TypeVar("T")


async def read_through(
    cache: CacheBackend,
    region: CacheRegion,
    key: str,
    loader: Callable[[], Awaitable[T | None]],
) -> T | None:
    """Serve ``key`` from ``region``; on a miss load it and cache a hit.

    Absent entities are not cached, so a create becomes visible on the
    next read without an explicit eviction. A value loaded while the region
    was being invalidated is returned but not cached.
    """
    generation = await cache.generation(region)
    cached = await cache.get(region, key)
    if cached is not MISS:
        return cached
    value = await loader()
    if value is not None:
        await cache.put(region, key, value, generation=generation)
    return value
