"""Cache backends and their construction from settings."""

import logging

from zoo.application.interfaces import CacheBackend, CacheRegion, RegionPolicy
from zoo.config import Settings

from .in_memory_cache import InMemoryCacheBackend
from .redis_cache import RedisCacheBackend

logger = logging.getLogger(__name__)


def region_policies(settings: Settings) -> dict[CacheRegion, RegionPolicy]:
    """Per-region capacity and TTL from settings."""
    return {
        CacheRegion.ANIMALS_BY_ID: RegionPolicy(
            max_entries=settings.cache_animals_max_entries,
            ttl_seconds=settings.cache_animals_ttl_seconds,
        ),
        CacheRegion.ROOMS_BY_ID: RegionPolicy(
            max_entries=settings.cache_rooms_max_entries,
            ttl_seconds=settings.cache_rooms_ttl_seconds,
        ),
        CacheRegion.FAVORITE_COUNTS: RegionPolicy(
            max_entries=settings.cache_favorites_max_entries,
            ttl_seconds=settings.cache_favorites_ttl_seconds,
        ),
    }


def build_cache_backend(settings: Settings) -> CacheBackend:
    """Select the configured backend (``memory`` or ``redis``)."""
    policies = region_policies(settings)
    if settings.cache_backend == "redis":
        logger.info("Using Redis cache backend at %s", settings.redis_url)
        return RedisCacheBackend.from_url(
            settings.redis_url,
            policies,
            key_prefix=settings.redis_key_prefix,
            socket_timeout=settings.redis_socket_timeout,
        )
    logger.info("Using in-memory cache backend")
    return InMemoryCacheBackend(policies)


__all__ = [
    "InMemoryCacheBackend",
    "RedisCacheBackend",
    "build_cache_backend",
    "region_policies",
]
